# backend/reliefmap/services/image/intake.py
import asyncio
import logging
from dataclasses import dataclass
from typing import List, Sequence

from reliefmap.core.exceptions import NonImageFileError
from reliefmap.schemas.exif import ExifRecord
from reliefmap.services.exif.reader import extract
from reliefmap.services.image.compress import DEFAULT_MAX_DIMENSION, DEFAULT_MAX_SIZE_MB, compress_async
from reliefmap.services.image.files import ImageFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntakeResult:
    file: ImageFile  # possibly compressed copy, for storage
    exif: ExifRecord  # read from the original bytes


async def _process_one(file: ImageFile, max_size_mb: float, max_dimension: int) -> IntakeResult:
    # EXIF first, from the uploaded bytes; compression may drop or rewrite them
    exif = await extract(file)
    compressed = await compress_async(file, max_size_mb, max_dimension)
    return IntakeResult(file=compressed, exif=exif)


async def process_images(
    files: Sequence[ImageFile],
    max_size_mb: float = DEFAULT_MAX_SIZE_MB,
    max_dimension: int = DEFAULT_MAX_DIMENSION,
) -> List[IntakeResult]:
    """Extract metadata and compress every file of a batch concurrently.

    All or nothing: a single non-image file raises NonImageFileError before
    any work starts. The result keeps the input order.
    """
    for f in files:
        if not f.is_image:
            raise NonImageFileError(f.filename)

    results = await asyncio.gather(*(_process_one(f, max_size_mb, max_dimension) for f in files))
    logger.info(
        "processed %d photo(s), %d with GPS",
        len(results), sum(1 for r in results if r.exif.has_location),
    )
    return list(results)
