# backend/reliefmap/services/submission.py
import asyncio
import logging
from datetime import datetime, timezone
from functools import partial
from typing import List, Optional, Sequence

from sqlalchemy.orm import Session

from reliefmap.core.config import Settings, get_settings
from reliefmap.core.exceptions import FileValidationError
from reliefmap.models.help_request import HelpRequest
from reliefmap.schemas.exif import ExifRecord
from reliefmap.schemas.request import RequestIn
from reliefmap.services.image.files import ImageFile
from reliefmap.services.image.intake import IntakeResult, process_images
from reliefmap.services.image.validate import validate_image_files
from reliefmap.services.location import LocationCandidate, resolve_location, user_location
from reliefmap.services.requests import create_request
from reliefmap.services.storage import LocalObjectStorage, StorageError, photo_object_path

logger = logging.getLogger(__name__)


def first_capture_time(records: Sequence[ExifRecord]) -> Optional[str]:
    for r in records:
        if r.capture_time:
            return r.capture_time
    return None


async def _upload_all(storage: LocalObjectStorage, results: Sequence[IntakeResult], user_id: str) -> List[str]:
    """Store every processed photo in upload order; all or nothing."""
    loop = asyncio.get_running_loop()
    now = datetime.now(timezone.utc)
    stored: List[str] = []
    urls: List[str] = []
    try:
        for index, result in enumerate(results):
            path = photo_object_path(user_id, index, result.file.filename, now)
            urls.append(await loop.run_in_executor(None, storage.upload, path, result.file.data))
            stored.append(path)
    except StorageError:
        for path in stored:
            try:
                await loop.run_in_executor(None, storage.delete, path)
            except StorageError as e:
                logger.warning("could not remove partial upload %s: %s", path, e)
        raise
    return urls


async def submit_request(
    db: Session,
    storage: LocalObjectStorage,
    payload: RequestIn,
    files: Sequence[ImageFile],
    user_id: str,
    settings: Optional[Settings] = None,
) -> HelpRequest:
    """Report-a-need flow: validate photos, read their metadata, store them, save the request.

    Raises FileValidationError (all broken rules) or NonImageFileError; metadata
    and compression problems never block the submission.
    """
    settings = settings or get_settings()
    photo_urls: List[str] = []
    exif_records: List[ExifRecord] = []
    location: Optional[LocationCandidate] = None

    if files:
        errors = validate_image_files(files, settings.MAX_FILES, settings.max_file_size_bytes)
        if errors:
            raise FileValidationError(errors)

        results = await process_images(files, settings.COMPRESS_MAX_SIZE_MB, settings.COMPRESS_MAX_DIMENSION)
        photo_urls = await _upload_all(storage, results, user_id)
        exif_records = [r.exif for r in results]
        location = resolve_location(exif_records, payload.gps_lat, payload.gps_lng)
    else:
        location = user_location(payload.gps_lat, payload.gps_lng)

    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        None,
        partial(
            create_request,
            db,
            payload,
            created_by=user_id,
            photo_urls=photo_urls,
            exif_records=exif_records,
            location=location,
            photo_taken_time=first_capture_time(exif_records),
        ),
    )
