# backend/reliefmap/services/location.py
from dataclasses import dataclass
from typing import Literal, Optional, Sequence

from reliefmap.schemas.exif import ExifRecord

Provenance = Literal["user", "exif"]


@dataclass(frozen=True)
class LocationCandidate:
    lat: float
    lng: float
    provenance: Provenance


def resolve_location(
    records: Sequence[ExifRecord],
    user_lat: Optional[float] = None,
    user_lng: Optional[float] = None,
) -> Optional[LocationCandidate]:
    """Pick the one location a submission is plotted at.

    Coordinates typed in by the user win over photo metadata, then the first
    photo (in upload order) carrying GPS. No merging or averaging. None means
    the location is unknown, which is a valid outcome.
    """
    # 0 and None both mean "not entered"
    if user_lat and user_lng:
        return LocationCandidate(lat=user_lat, lng=user_lng, provenance="user")

    for record in records:
        if record.has_location:
            return LocationCandidate(lat=record.latitude, lng=record.longitude, provenance="exif")

    return None


def user_location(user_lat: Optional[float], user_lng: Optional[float]) -> Optional[LocationCandidate]:
    """Typed-in coordinates alone, used when no photos were attached."""
    if user_lat is None or user_lng is None:
        return None
    return LocationCandidate(lat=user_lat, lng=user_lng, provenance="user")
