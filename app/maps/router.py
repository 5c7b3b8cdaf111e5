from fastapi import APIRouter

from app.core.dependencies import Mapbox
from app.maps import service as maps_service
from app.maps.formatting import format_distance, format_duration
from app.maps.schemas import GeocodeResponse, GeocodeResultResponse, RouteResponse

router = APIRouter(prefix="/api", tags=["maps"])


@router.get("/geocode", response_model=GeocodeResponse)
async def geocode(client: Mapbox, q: str | None = None) -> GeocodeResponse:
    results = await maps_service.geocode(client, q)
    return GeocodeResponse(
        results=[GeocodeResultResponse.model_validate(r) for r in results]
    )


@router.get("/route", response_model=RouteResponse)
async def route(
    client: Mapbox,
    startLat: float | None = None,
    startLng: float | None = None,
    endLat: float | None = None,
    endLng: float | None = None,
) -> RouteResponse:
    result = await maps_service.route(client, startLat, startLng, endLat, endLng)
    return RouteResponse(
        distance=result.distance,
        duration=result.duration,
        geometry=result.geometry,
        distance_text=format_distance(result.distance),
        duration_text=format_duration(result.duration),
    )
