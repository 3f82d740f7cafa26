# backend/reliefmap/api/routers/offers.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import Optional

from reliefmap.api.deps import get_current_user_id
from reliefmap.db import get_db
from reliefmap.models.offer import Offer
from reliefmap.schemas.offer import OfferIn, OfferOut

router = APIRouter()


@router.get("")
@router.get("/")
def list_offers(
    category: Optional[str] = None,
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
) -> list[OfferOut]:
    q = db.query(Offer)
    if category:
        q = q.filter(Offer.category == category)
    rows = q.order_by(Offer.created_at.desc()).limit(limit).all()
    return [OfferOut.model_validate(o) for o in rows]


@router.post("", status_code=201)
@router.post("/", status_code=201)
def create_offer(
    payload: OfferIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> OfferOut:
    obj = Offer(**payload.model_dump(), created_by=user_id)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return OfferOut.model_validate(obj)


@router.get("/{offer_id}")
def get_offer(offer_id: str, db: Session = Depends(get_db)) -> OfferOut:
    obj = db.get(Offer, offer_id)
    if not obj:
        raise HTTPException(status_code=404, detail="offer not found")
    return OfferOut.model_validate(obj)
