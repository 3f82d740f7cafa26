# backend/reliefmap/services/exif/geo.py
from typing import Iterable, Tuple

# (degrees, minutes, seconds)
DMS = Tuple[float, float, float]


def to_decimal_degrees(dms: DMS, ref: str) -> float:
    """Sexagesimal GPS value -> signed decimal degrees (negative for S/W). No range check."""
    deg, minutes, seconds = dms
    decimal = deg + minutes / 60 + seconds / 3600
    if ref in ("S", "W"):
        decimal = -decimal
    return decimal


def rational_to_float(value) -> float:
    # Pillow IFDRational, exifread Ratio, plain number or a legacy (num, den) pair
    if isinstance(value, tuple):
        num, den = value
        return num / den
    return float(value)


def dms_from_rationals(values: Iterable) -> DMS:
    deg, minutes, seconds = (rational_to_float(v) for v in values)
    return (deg, minutes, seconds)
