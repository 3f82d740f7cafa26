# backend/reliefmap/services/exif/reader.py
import asyncio
import io
import logging
import math
from typing import Optional, Tuple

import exifread
from PIL import Image

from reliefmap.schemas.exif import ExifRecord
from reliefmap.services.exif.geo import dms_from_rationals, to_decimal_degrees
from reliefmap.services.image.files import ImageFile

logger = logging.getLogger(__name__)

# original capture first, generic modification time as fallback
CAPTURE_TIME_KEYS = ["EXIF DateTimeOriginal", "Image DateTime"]
CAMERA_KEY = "Image Model"
# binary blobs, useless as diagnostics
SKIP_KEYS = {"JPEGThumbnail", "TIFFThumbnail", "EXIF MakerNote"}

GPS_IFD = 0x8825
GPS_LAT_REF, GPS_LAT, GPS_LNG_REF, GPS_LNG = 1, 2, 3, 4

LatLng = Tuple[Optional[float], Optional[float]]


def _ref(value) -> str:
    if isinstance(value, bytes):
        value = value.decode("ascii", errors="ignore")
    return str(value).strip().rstrip("\x00").upper()


def _to_lat_lng(lat, lat_ref, lng, lng_ref) -> LatLng:
    # all four tags or nothing
    if not (lat and lat_ref and lng and lng_ref):
        return None, None
    latitude = to_decimal_degrees(dms_from_rationals(lat), _ref(lat_ref))
    longitude = to_decimal_degrees(dms_from_rationals(lng), _ref(lng_ref))
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return None, None
    return latitude, longitude


def _gps_from_pillow(data: bytes) -> LatLng:
    with Image.open(io.BytesIO(data)) as img:
        gps = img.getexif().get_ifd(GPS_IFD)
    if not gps:
        return None, None
    return _to_lat_lng(gps.get(GPS_LAT), gps.get(GPS_LAT_REF), gps.get(GPS_LNG), gps.get(GPS_LNG_REF))


def _gps_from_exifread(raw: dict) -> LatLng:
    def values(key):
        tag = raw.get(key)
        return tag.values if tag is not None else None

    def printable(key):
        tag = raw.get(key)
        return tag.printable if tag is not None else None

    return _to_lat_lng(
        values("GPS GPSLatitude"), printable("GPS GPSLatitudeRef"),
        values("GPS GPSLongitude"), printable("GPS GPSLongitudeRef"),
    )


def parse_exif(data: bytes) -> ExifRecord:
    """Read GPS, capture time and camera model from image bytes.

    Never raises: a file without an EXIF segment, or one that cannot be
    parsed, gives an empty record so the submission can still go through.
    """
    try:
        raw = exifread.process_file(io.BytesIO(data), details=False)
        tags = {k: str(v) for k, v in raw.items() if k not in SKIP_KEYS}

        # GPS via Pillow; ExifRead covers containers Pillow cannot open
        try:
            lat, lng = _gps_from_pillow(data)
        except (OSError, ValueError, ZeroDivisionError, TypeError) as e:
            logger.debug("pillow could not read GPS IFD: %s", e)
            lat, lng = None, None
        if lat is None:
            try:
                lat, lng = _gps_from_exifread(raw)
            except (ZeroDivisionError, ValueError, TypeError) as e:
                # malformed rationals cost the location, not the other tags
                logger.debug("unusable GPS tags: %s", e)
                lat, lng = None, None

        capture_time = None
        for k in CAPTURE_TIME_KEYS:
            v = tags.get(k, "").strip()
            if v:
                capture_time = v
                break

        camera = tags.get(CAMERA_KEY, "").strip() or None

        return ExifRecord(latitude=lat, longitude=lng, capture_time=capture_time, camera=camera, tags=tags)
    except Exception as e:
        logger.debug("exif extraction failed, using empty record: %s", e)
        return ExifRecord()


async def extract(file: ImageFile) -> ExifRecord:
    # parsing is CPU bound; keep concurrent extractions off the event loop
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, parse_exif, file.data)
