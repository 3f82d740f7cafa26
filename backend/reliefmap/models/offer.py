# backend/reliefmap/models/offer.py
from sqlalchemy import Column, DateTime, Float, ForeignKey, String, Text
from .base import Base, new_id, utcnow


class Offer(Base):
    __tablename__ = "offers"
    id = Column(String, primary_key=True, default=new_id)
    description = Column(Text, nullable=False)
    category = Column(String, nullable=True)
    contact_name = Column(String, nullable=True)
    contact_phone = Column(String, nullable=True)
    gps_lat = Column(Float, nullable=True)
    gps_lng = Column(Float, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    created_by = Column(String, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
