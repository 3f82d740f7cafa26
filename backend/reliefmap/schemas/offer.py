# backend/reliefmap/schemas/offer.py
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional


class OfferIn(BaseModel):
    description: str = Field(min_length=1)
    category: Optional[str] = None
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    gps_lat: Optional[float] = Field(default=None, ge=-90, le=90)
    gps_lng: Optional[float] = Field(default=None, ge=-180, le=180)


class OfferOut(OfferIn):
    model_config = ConfigDict(from_attributes=True)

    id: str
    created_at: datetime
    created_by: Optional[str] = None
