import math

from app.core.exceptions import InvalidInputError
from app.maps.client import GeocodeResult, MapboxClient, RouteResult


async def geocode(client: MapboxClient, query: str | None) -> list[GeocodeResult]:
    # Minimum query length is the caller's business; only presence is checked.
    if query is None or not query.strip():
        raise InvalidInputError("Query parameter 'q' is required")
    return await client.geocode(query)


async def route(
    client: MapboxClient,
    start_lat: float | None,
    start_lng: float | None,
    end_lat: float | None,
    end_lng: float | None,
) -> RouteResult:
    coords = (start_lat, start_lng, end_lat, end_lng)
    if any(c is None or not math.isfinite(c) for c in coords):
        raise InvalidInputError("startLat, startLng, endLat, endLng are required")
    return await client.route(start_lat, start_lng, end_lat, end_lng)
