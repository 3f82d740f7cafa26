# backend/reliefmap/models/zone.py
from sqlalchemy import Column, DateTime, Float, ForeignKey, JSON, String, Text
from .base import Base, new_id, utcnow


class Zone(Base):
    __tablename__ = "zones"
    id = Column(String, primary_key=True, default=new_id)
    type = Column(String, nullable=False, default="Other")  # Starlink|WiFi|Church|Shelter|Fuel|Other
    description = Column(Text, nullable=True)
    gps_lat = Column(Float, nullable=True)
    gps_lng = Column(Float, nullable=True)
    polygon = Column(JSON, nullable=True)  # GeoJSON Polygon (EPSG:4326)
    contact_info = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
    created_by = Column(String, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True)
