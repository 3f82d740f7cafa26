# backend/reliefmap/services/requests.py
import logging
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from reliefmap.core.exceptions import RequestNotFoundError, RequestStatusConflictError
from reliefmap.models.base import utcnow
from reliefmap.models.help_request import HelpRequest
from reliefmap.schemas.exif import ExifRecord
from reliefmap.schemas.request import RequestIn
from reliefmap.services.location import LocationCandidate

logger = logging.getLogger(__name__)


def create_request(
    db: Session,
    payload: RequestIn,
    created_by: Optional[str],
    photo_urls: Optional[List[str]] = None,
    exif_records: Optional[List[ExifRecord]] = None,
    location: Optional[LocationCandidate] = None,
    photo_taken_time: Optional[str] = None,
) -> HelpRequest:
    """Store a new request; it always starts Open."""
    obj = HelpRequest(
        title=payload.title,
        description=payload.description,
        category=payload.category,
        urgency=payload.urgency,
        status="Open",
        contact_name=payload.contact_name,
        contact_phone=payload.contact_phone,
        is_contact_shared=payload.is_contact_shared,
        photo_urls=photo_urls or None,
        exif_data=[r.model_dump() for r in exif_records] if exif_records else None,
        gps_lat=location.lat if location else None,
        gps_lng=location.lng if location else None,
        photo_taken_time=photo_taken_time,
        created_by=created_by,
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)
    logger.info(
        "request %s created by %s (%s/%s, location=%s)",
        obj.id, created_by, obj.category, obj.urgency, location.provenance if location else None,
    )
    return obj


def _transition(db: Session, request_id: str, from_status: str, values: dict) -> HelpRequest:
    # conditional UPDATE: of two concurrent claimers only one matches the row
    result = db.execute(
        update(HelpRequest)
        .where(HelpRequest.id == request_id, HelpRequest.status == from_status)
        .values(updated_at=utcnow(), **values)
    )
    if result.rowcount == 0:
        db.rollback()
        current = db.get(HelpRequest, request_id)
        if current is None:
            raise RequestNotFoundError(request_id)
        raise RequestStatusConflictError(request_id, current.status)
    db.commit()
    obj = db.get(HelpRequest, request_id)
    db.refresh(obj)
    return obj


def claim_request(db: Session, request_id: str, claimer_id: str) -> HelpRequest:
    """Open -> Claimed. Anything else is a conflict."""
    obj = _transition(db, request_id, "Open", {"status": "Claimed", "claimed_by": claimer_id})
    logger.info("request %s claimed by %s", request_id, claimer_id)
    return obj


def fulfill_request(db: Session, request_id: str) -> HelpRequest:
    obj = _transition(db, request_id, "Claimed", {"status": "Fulfilled"})
    logger.info("request %s fulfilled", request_id)
    return obj
