# backend/reliefmap/models/profile.py
from sqlalchemy import Column, DateTime, String
from .base import Base, utcnow


class Profile(Base):
    __tablename__ = "profiles"
    id = Column(String, primary_key=True)  # auth user id
    name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    role = Column(String, nullable=False, default="victim")  # victim|volunteer|org_admin|admin
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
