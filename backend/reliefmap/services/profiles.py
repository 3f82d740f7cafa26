# backend/reliefmap/services/profiles.py
from sqlalchemy.orm import Session

from reliefmap.models.profile import Profile


def ensure_profile(db: Session, user_id: str) -> Profile:
    """Profile row for an authenticated user id, created on first sight."""
    profile = db.get(Profile, user_id)
    if profile is None:
        profile = Profile(id=user_id)
        db.add(profile)
        db.commit()
        db.refresh(profile)
    return profile
