# backend/reliefmap/schemas/commons.py
from pydantic import BaseModel
from typing import List, Literal

Category = Literal["Meals", "Water", "Equipment", "Shelter", "Medical", "Other"]
Urgency = Literal["Low", "Medium", "High"]
Status = Literal["Open", "Claimed", "Fulfilled"]
ZoneType = Literal["Starlink", "WiFi", "Church", "Shelter", "Fuel", "Other"]


class GeoJSONFeature(BaseModel):
    type: Literal["Feature"] = "Feature"
    geometry: dict
    properties: dict


class FeatureCollection(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[GeoJSONFeature] = []
