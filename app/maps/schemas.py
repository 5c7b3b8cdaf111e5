from typing import Any

from pydantic import BaseModel


class GeocodeResultResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    address: str
    lat: float | None
    lng: float | None


class GeocodeResponse(BaseModel):
    results: list[GeocodeResultResponse]


class RouteResponse(BaseModel):
    distance: float
    duration: float
    # GeoJSON LineString, coordinates as [lng, lat]
    geometry: dict[str, Any]
    distance_text: str
    duration_text: str
