# backend/reliefmap/services/mapping/features.py
from typing import Iterable, List, Optional

from shapely.errors import ShapelyError
from shapely.geometry import Point, mapping, shape

from reliefmap.models.help_request import HelpRequest
from reliefmap.models.offer import Offer
from reliefmap.models.zone import Zone

URGENCY_WEIGHTS = {"High": 1.0, "Medium": 0.6, "Low": 0.3}


def urgency_weight(urgency: str) -> float:
    """Heatmap intensity for a request; anything outside the enum counts as Low."""
    return URGENCY_WEIGHTS.get(urgency, URGENCY_WEIGHTS["Low"])


def _point(lat: Optional[float], lng: Optional[float]) -> Optional[dict]:
    if lat is None or lng is None:
        return None
    # GeoJSON order is (lon, lat)
    return mapping(Point(lng, lat))


def request_feature(req: HelpRequest) -> Optional[dict]:
    geom = _point(req.gps_lat, req.gps_lng)
    if geom is None:
        return None
    return {
        "type": "Feature",
        "geometry": geom,
        "properties": {
            "kind": "request",
            "id": req.id,
            "title": req.title,
            "category": req.category,
            "urgency": req.urgency,
            "status": req.status,
            "weight": urgency_weight(req.urgency),
            "created_at": req.created_at.isoformat() if req.created_at else None,
        },
    }


def offer_feature(offer: Offer) -> Optional[dict]:
    geom = _point(offer.gps_lat, offer.gps_lng)
    if geom is None:
        return None
    return {
        "type": "Feature",
        "geometry": geom,
        "properties": {
            "kind": "offer",
            "id": offer.id,
            "category": offer.category,
            "description": offer.description,
        },
    }


def zone_feature(zone: Zone) -> Optional[dict]:
    # outline when one was drawn, otherwise the marker point
    if zone.polygon:
        try:
            geom = mapping(shape(zone.polygon))
        except (ShapelyError, ValueError, TypeError, KeyError, AttributeError):
            geom = _point(zone.gps_lat, zone.gps_lng)
    else:
        geom = _point(zone.gps_lat, zone.gps_lng)
    if geom is None:
        return None
    return {
        "type": "Feature",
        "geometry": geom,
        "properties": {
            "kind": "zone",
            "id": zone.id,
            "type": zone.type,
            "description": zone.description,
        },
    }


def feature_collection(
    requests: Iterable[HelpRequest] = (),
    offers: Iterable[Offer] = (),
    zones: Iterable[Zone] = (),
) -> dict:
    """Everything plottable as one FeatureCollection; rows without coordinates are left out."""
    feats: List[dict] = []
    for builder, rows in ((request_feature, requests), (offer_feature, offers), (zone_feature, zones)):
        for row in rows:
            feat = builder(row)
            if feat is not None:
                feats.append(feat)
    return {"type": "FeatureCollection", "features": feats}
