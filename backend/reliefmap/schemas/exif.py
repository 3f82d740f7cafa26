# backend/reliefmap/schemas/exif.py
from pydantic import BaseModel, model_validator
from typing import Dict, Optional


class ExifRecord(BaseModel):
    """Metadata read from one photo.

    The promoted fields are typed; `tags` holds every other tag ExifRead
    recognised, stringified, for diagnostics only. `capture_time` is the raw
    camera string and is never parsed.
    """

    latitude: Optional[float] = None
    longitude: Optional[float] = None
    capture_time: Optional[str] = None
    camera: Optional[str] = None
    tags: Dict[str, str] = {}

    @model_validator(mode="after")
    def _pair_coordinates(self) -> "ExifRecord":
        # a lone latitude or longitude counts as no location
        if self.latitude is None or self.longitude is None:
            self.latitude = None
            self.longitude = None
        return self

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def is_empty(self) -> bool:
        return not (self.has_location or self.capture_time or self.camera or self.tags)
