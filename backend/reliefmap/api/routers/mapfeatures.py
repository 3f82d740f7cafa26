# backend/reliefmap/api/routers/mapfeatures.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import Optional

from reliefmap.db import get_db
from reliefmap.models.help_request import HelpRequest
from reliefmap.models.offer import Offer
from reliefmap.models.zone import Zone
from reliefmap.schemas.commons import FeatureCollection, Status
from reliefmap.services.mapping.features import feature_collection

router = APIRouter()

KINDS = {"requests", "offers", "zones"}


@router.get("/features")
def list_features(
    kinds: str = "requests,offers,zones",
    status: Optional[Status] = None,
    db: Session = Depends(get_db),
) -> FeatureCollection:
    """
    Everything with coordinates as one GeoJSON FeatureCollection.
    - kinds: CSV of requests / offers / zones
    - status: only requests in this status
    - request features carry an urgency `weight` for the heatmap layer
    """
    wanted = {k.strip() for k in kinds.split(",") if k.strip()}
    unknown = wanted - KINDS
    if unknown:
        raise HTTPException(status_code=400, detail=f"unknown kinds: {','.join(sorted(unknown))}")

    requests, offers, zones = [], [], []
    if "requests" in wanted:
        q = db.query(HelpRequest).filter(HelpRequest.gps_lat.isnot(None), HelpRequest.gps_lng.isnot(None))
        if status:
            q = q.filter(HelpRequest.status == status)
        requests = q.all()
    if "offers" in wanted:
        offers = db.query(Offer).filter(Offer.gps_lat.isnot(None), Offer.gps_lng.isnot(None)).all()
    if "zones" in wanted:
        zones = db.query(Zone).all()

    return feature_collection(requests, offers, zones)
