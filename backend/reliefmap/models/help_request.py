# backend/reliefmap/models/help_request.py
from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, JSON, String, Text
from .base import Base, new_id, utcnow


class HelpRequest(Base):
    __tablename__ = "requests"
    id = Column(String, primary_key=True, default=new_id)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=False, default="Other")
    urgency = Column(String, nullable=False, default="Low")
    status = Column(String, nullable=False, default="Open")  # Open|Claimed|Fulfilled
    contact_name = Column(String, nullable=True)
    contact_phone = Column(String, nullable=True)
    is_contact_shared = Column(Boolean, nullable=False, default=True)
    photo_urls = Column(JSON, nullable=True)  # list[str]
    exif_data = Column(JSON, nullable=True)  # list[ExifRecord dump], same order as photo_urls
    gps_lat = Column(Float, nullable=True)
    gps_lng = Column(Float, nullable=True)
    photo_taken_time = Column(String, nullable=True)  # raw camera string
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    created_by = Column(String, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
    claimed_by = Column(String, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
