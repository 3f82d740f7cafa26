# backend/reliefmap/api/routers/zones.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional

from reliefmap.api.deps import get_current_user_id
from reliefmap.db import get_db
from reliefmap.models.zone import Zone
from reliefmap.schemas.commons import ZoneType
from reliefmap.schemas.zone import ZoneIn, ZoneOut

router = APIRouter()


@router.get("")
@router.get("/")
def list_zones(
    type: Optional[ZoneType] = None,
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
) -> list[ZoneOut]:
    q = db.query(Zone)
    if type:
        q = q.filter(Zone.type == type)
    rows = q.order_by(Zone.created_at.desc()).limit(limit).all()
    return [ZoneOut.model_validate(z) for z in rows]


@router.post("", status_code=201)
@router.post("/", status_code=201)
def create_zone(
    payload: ZoneIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> ZoneOut:
    geom = payload.polygon
    if geom is not None and (not isinstance(geom, dict) or geom.get("type") != "Polygon"):
        raise HTTPException(status_code=400, detail="polygon must be a GeoJSON Polygon")
    obj = Zone(**payload.model_dump(), created_by=user_id)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return ZoneOut.model_validate(obj)


@router.get("/{zone_id}")
def get_zone(zone_id: str, db: Session = Depends(get_db)) -> ZoneOut:
    obj = db.get(Zone, zone_id)
    if not obj:
        raise HTTPException(status_code=404, detail="zone not found")
    return ZoneOut.model_validate(obj)
