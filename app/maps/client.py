"""Mapbox geocoding and directions via httpx.

Axis order differs between the two calls and both are kept as-is:
  - geocode results are flattened to separate lat / lng fields
  - route geometry stays GeoJSON, i.e. [lng, lat] pairs
"""
import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx

from app.config import settings
from app.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeocodeResult:
    id: str
    address: str
    lat: float | None
    lng: float | None


@dataclass(frozen=True)
class RouteResult:
    distance: float  # meters
    duration: float  # seconds
    geometry: dict[str, Any]


def _center_to_lat_lng(center: Any) -> tuple[float | None, float | None]:
    # Mapbox centers are [lng, lat].
    if (
        isinstance(center, list)
        and len(center) == 2
        and all(isinstance(c, (int, float)) and not isinstance(c, bool) for c in center)
    ):
        return center[1], center[0]
    return None, None


class MapboxClient:
    def __init__(
        self,
        access_token: str,
        base_url: str = "https://api.mapbox.com",
        timeout: float = 10.0,
        geocode_limit: int = 5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._access_token = access_token
        self._geocode_limit = geocode_limit
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    @property
    def configured(self) -> bool:
        return bool(self._access_token)

    async def _get(self, path: str, params: dict[str, Any], what: str) -> dict[str, Any]:
        if not self.configured:
            raise UpstreamError("Mapbox token not configured")
        try:
            response = await self._client.get(
                path, params={**params, "access_token": self._access_token}
            )
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Mapbox %s request failed: %s", what, exc.__class__.__name__)
            raise UpstreamError(f"{what.capitalize()} failed") from exc
        if not isinstance(data, dict):
            logger.warning("Mapbox %s returned a non-object body", what)
            raise UpstreamError(f"{what.capitalize()} failed")
        return data

    async def geocode(self, query: str) -> list[GeocodeResult]:
        data = await self._get(
            f"/geocoding/v5/mapbox.places/{quote(query, safe='')}.json",
            {"limit": self._geocode_limit},
            "geocoding",
        )
        features = data.get("features")
        if not isinstance(features, list):
            return []

        results: list[GeocodeResult] = []
        for feature in features[: self._geocode_limit]:
            if not isinstance(feature, dict):
                continue
            place_name = feature.get("place_name")
            lat, lng = _center_to_lat_lng(feature.get("center"))
            results.append(
                GeocodeResult(
                    id=str(feature.get("id", "")),
                    address=place_name if isinstance(place_name, str) else "",
                    lat=lat,
                    lng=lng,
                )
            )
        return results

    async def route(
        self, start_lat: float, start_lng: float, end_lat: float, end_lng: float
    ) -> RouteResult:
        # Directions coordinates are lng,lat;lng,lat
        coords = f"{start_lng},{start_lat};{end_lng},{end_lat}"
        data = await self._get(
            f"/directions/v5/mapbox/driving/{coords}",
            {"geometries": "geojson", "overview": "full"},
            "routing",
        )
        routes = data.get("routes")
        if not isinstance(routes, list) or not routes:
            logger.warning("Mapbox returned no routes for %s", coords)
            raise UpstreamError("Routing failed")

        # First route is the default/fastest; alternates are dropped.
        first = routes[0]
        try:
            return RouteResult(
                distance=float(first["distance"]),
                duration=float(first["duration"]),
                geometry=first["geometry"],
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Mapbox returned a malformed route: %s", exc)
            raise UpstreamError("Routing failed") from exc

    async def close(self) -> None:
        await self._client.aclose()


_client: MapboxClient | None = None


def get_mapbox_client() -> MapboxClient:
    """Process-wide client built from settings on first use."""
    global _client
    if _client is None:
        _client = MapboxClient(
            access_token=settings.mapbox_access_token,
            base_url=settings.mapbox_base_url,
            timeout=settings.mapbox_timeout_seconds,
            geocode_limit=settings.geocode_limit,
        )
    return _client


async def close_mapbox_client() -> None:
    global _client
    if _client is not None:
        await _client.close()
        _client = None
