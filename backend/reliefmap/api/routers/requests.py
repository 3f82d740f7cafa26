# backend/reliefmap/api/routers/requests.py
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from pydantic import ValidationError
from sqlalchemy.orm import Session
from typing import List, Optional

from reliefmap.api.deps import get_current_user_id, get_storage
from reliefmap.core.exceptions import (
    FileValidationError,
    NonImageFileError,
    RequestNotFoundError,
    RequestStatusConflictError,
)
from reliefmap.db import get_db
from reliefmap.models.help_request import HelpRequest
from reliefmap.schemas.commons import Category, Status, Urgency
from reliefmap.schemas.request import ClaimIn, RequestIn, RequestOut
from reliefmap.services.image.files import ImageFile
from reliefmap.services.location import user_location
from reliefmap.services.profiles import ensure_profile
from reliefmap.services.requests import claim_request, create_request, fulfill_request
from reliefmap.services.storage import LocalObjectStorage, StorageError
from reliefmap.services.submission import submit_request

router = APIRouter()


@router.get("")
@router.get("/")
def list_requests(
    category: Optional[Category] = None,
    urgency: Optional[Urgency] = None,
    status: Optional[Status] = None,
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
) -> list[RequestOut]:
    q = db.query(HelpRequest)
    if category:
        q = q.filter(HelpRequest.category == category)
    if urgency:
        q = q.filter(HelpRequest.urgency == urgency)
    if status:
        q = q.filter(HelpRequest.status == status)
    rows = q.order_by(HelpRequest.created_at.desc()).limit(limit).all()
    return [RequestOut.model_validate(r) for r in rows]


@router.post("", status_code=201)
@router.post("/", status_code=201)
def create(
    payload: RequestIn,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> RequestOut:
    obj = create_request(db, payload, created_by=user_id, location=user_location(payload.gps_lat, payload.gps_lng))
    return RequestOut.model_validate(obj)


@router.post("/submit", status_code=201)
async def submit(
    title: str = Form(...),
    description: Optional[str] = Form(None),
    category: str = Form("Other"),
    urgency: str = Form("Low"),
    contact_name: Optional[str] = Form(None),
    contact_phone: Optional[str] = Form(None),
    is_contact_shared: bool = Form(True),
    gps_lat: Optional[float] = Form(None),
    gps_lng: Optional[float] = Form(None),
    photos: Optional[List[UploadFile]] = File(None),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    storage: LocalObjectStorage = Depends(get_storage),
) -> RequestOut:
    """Report a need with up to 5 photos; the location may come from their GPS tags."""
    try:
        payload = RequestIn(
            title=title,
            description=description,
            category=category,
            urgency=urgency,
            contact_name=contact_name,
            contact_phone=contact_phone,
            is_contact_shared=is_contact_shared,
            gps_lat=gps_lat,
            gps_lng=gps_lng,
        )
    except ValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": [err["msg"] for err in e.errors()]})

    files = [
        ImageFile(filename=p.filename or "photo", content_type=p.content_type or "", data=await p.read())
        for p in (photos or [])
    ]

    try:
        obj = await submit_request(db, storage, payload, files, user_id)
    except FileValidationError as e:
        raise HTTPException(status_code=422, detail={"errors": e.errors})
    except NonImageFileError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError:
        raise HTTPException(status_code=500, detail="Failed to upload images")
    return RequestOut.model_validate(obj)


@router.get("/{request_id}")
def get_request(request_id: str, db: Session = Depends(get_db)) -> RequestOut:
    obj = db.get(HelpRequest, request_id)
    if not obj:
        raise HTTPException(status_code=404, detail="Request not found")
    return RequestOut.model_validate(obj)


@router.patch("/{request_id}/claim")
def claim(
    request_id: str,
    payload: Optional[ClaimIn] = None,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> RequestOut:
    claimer = (payload.claimed_by if payload else None) or user_id
    if claimer != user_id:
        ensure_profile(db, claimer)
    try:
        obj = claim_request(db, request_id, claimer)
    except RequestNotFoundError:
        raise HTTPException(status_code=404, detail="Request not found")
    except RequestStatusConflictError:
        raise HTTPException(status_code=409, detail="Request is no longer available")
    return RequestOut.model_validate(obj)


@router.patch("/{request_id}/fulfill")
def fulfill(
    request_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> RequestOut:
    try:
        obj = fulfill_request(db, request_id)
    except RequestNotFoundError:
        raise HTTPException(status_code=404, detail="Request not found")
    except RequestStatusConflictError as e:
        raise HTTPException(status_code=409, detail=f"Request is {e.current}, not Claimed")
    return RequestOut.model_validate(obj)
