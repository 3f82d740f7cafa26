# backend/reliefmap/schemas/zone.py
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Any, Optional

from .commons import ZoneType


class ZoneIn(BaseModel):
    type: ZoneType = "Other"
    description: Optional[str] = None
    gps_lat: Optional[float] = Field(default=None, ge=-90, le=90)
    gps_lng: Optional[float] = Field(default=None, ge=-180, le=180)
    polygon: Optional[Any] = None  # GeoJSON Polygon geometry
    contact_info: Optional[str] = None


class ZoneOut(ZoneIn):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    created_by: Optional[str] = None
