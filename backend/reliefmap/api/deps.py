# backend/reliefmap/api/deps.py
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from reliefmap.core.config import get_settings
from reliefmap.db import get_db
from reliefmap.services.profiles import ensure_profile
from reliefmap.services.storage import LocalObjectStorage


def get_current_user_id(
    x_user_id: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> str:
    # sign-in happens upstream; we only get the resulting user id
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="You must be logged in")
    ensure_profile(db, user_id)
    return user_id


def get_storage() -> LocalObjectStorage:
    settings = get_settings()
    return LocalObjectStorage(root=settings.DATA_DIR, base_url=settings.PUBLIC_DATA_URL)
