# backend/reliefmap/services/image/compress.py
import asyncio
import io
import logging
from functools import partial

from PIL import Image

from reliefmap.services.image.files import ImageFile

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE_MB = 5.0
DEFAULT_MAX_DIMENSION = 1920  # longest edge, 1080p screens

LOSSY_FORMATS = {"JPEG", "WEBP"}
# tried in order until the encoded file fits the budget
QUALITY_STEPS = (85, 75, 65, 55, 45, 40)


def _encode(img: Image.Image, fmt: str, **params) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format=fmt, **{k: v for k, v in params.items() if v is not None})
    return buf.getvalue()


def compress(file: ImageFile, max_size_mb: float = DEFAULT_MAX_SIZE_MB, max_dimension: int = DEFAULT_MAX_DIMENSION) -> ImageFile:
    """Downscale and re-encode a photo for storage.

    The EXIF segment is copied over byte for byte. The result is never larger
    than the input, and any failure hands back the original file untouched.
    Metadata must be read from the original before calling this.
    """
    budget = int(max_size_mb * 1024 * 1024)
    try:
        with Image.open(io.BytesIO(file.data)) as img:
            fmt = img.format
            if fmt == "MPO":
                # multi-picture JPEG (gain map, depth): keep the primary image
                img.seek(0)
                fmt = "JPEG"
            elif fmt is None or getattr(img, "n_frames", 1) > 1:
                # unknown container or animation: store as uploaded
                return file
            exif = img.info.get("exif")
            icc = img.info.get("icc_profile")
            img.load()
            work = img.copy()

        work.thumbnail((max_dimension, max_dimension), Image.Resampling.LANCZOS)

        if fmt in LOSSY_FORMATS:
            if fmt == "JPEG" and work.mode not in ("RGB", "L", "CMYK"):
                work = work.convert("RGB")
            for quality in QUALITY_STEPS:
                out = _encode(work, fmt, quality=quality, exif=exif, icc_profile=icc)
                if len(out) <= budget:
                    break
        else:
            out = _encode(work, fmt, optimize=True, exif=exif, icc_profile=icc)
    except Exception as e:
        logger.warning("compression failed for %s, keeping original: %s", file.filename, e)
        return file

    if len(out) >= file.size:
        return file
    logger.debug("compressed %s: %d -> %d bytes", file.filename, file.size, len(out))
    return file.with_data(out)


async def compress_async(file: ImageFile, max_size_mb: float = DEFAULT_MAX_SIZE_MB, max_dimension: int = DEFAULT_MAX_DIMENSION) -> ImageFile:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(compress, file, max_size_mb, max_dimension))
