# backend/reliefmap/schemas/request.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import Any, List, Optional

from .commons import Category, Status, Urgency


def blank_to_none(v):
    if isinstance(v, str):
        return v.strip() or None
    return v


class RequestIn(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    category: Category = "Other"
    urgency: Urgency = "Low"
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    is_contact_shared: bool = True
    gps_lat: Optional[float] = Field(default=None, ge=-90, le=90)
    gps_lng: Optional[float] = Field(default=None, ge=-180, le=180)

    @field_validator("title")
    @classmethod
    def _strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("description", "contact_name", "contact_phone", mode="before")
    @classmethod
    def _blank_optional(cls, v):
        return blank_to_none(v)


class RequestOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: Optional[str] = None
    category: Category
    urgency: Urgency
    status: Status
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    is_contact_shared: bool
    photo_urls: Optional[List[str]] = None
    exif_data: Optional[List[dict[str, Any]]] = None
    gps_lat: Optional[float] = None
    gps_lng: Optional[float] = None
    photo_taken_time: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    created_by: Optional[str] = None
    claimed_by: Optional[str] = None


class ClaimIn(BaseModel):
    claimed_by: Optional[str] = None  # defaults to the acting user
