"""N2YO HTTP client with validation, caching and rate limiting.

Every network operation follows the same pipeline: validate the
arguments, look up the response cache, pass the request through the
rate limiter, execute it, store the raw payload and return a normalized
typed response.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from n2yo._cache import CacheConfig, CacheStats, ResponseCache, normalize_key
from n2yo._catalog import SATELLITE_CATEGORIES, lookup_satellite_id
from n2yo._errors import InvalidParameterError, RemoteError
from n2yo._http import execute_request
from n2yo._rate_limiter import RateLimitConfig, RateLimiter, RateLimitStatus
from n2yo._responses import (
    AboveResponse,
    PositionsResponse,
    RadioPassesResponse,
    TleResponse,
    VisualPassesResponse,
)
from n2yo._time import format_timestamp
from n2yo._types import Endpoint
from n2yo._validation import validate

logger = logging.getLogger(__name__)

T = TypeVar("T")

_DEFAULT_BASE_URL = "https://api.n2yo.com/rest/v1/satellite"

# Seconds. Elements change slowly, live positions quickly.
DEFAULT_ENDPOINT_TTLS: dict[Endpoint, float] = {
    Endpoint.TLE: 1800.0,
    Endpoint.POSITIONS: 120.0,
    Endpoint.VISUAL_PASSES: 600.0,
    Endpoint.RADIO_PASSES: 900.0,
    Endpoint.ABOVE: 60.0,
}


class N2YOClient:
    """N2YO API client.

    Requests are validated before any I/O, served from an in-memory cache
    when fresh, and throttled by a sliding-window rate limiter that
    queues excess requests by default.

    Use as an async context manager, or call :meth:`aclose` when done.

    Args:
        api_key: N2YO API key.
        base_url: Custom base URL for testing.
        cache: Response cache configuration.
        rate_limit: Rate limit configuration.
        endpoint_ttls: Per-endpoint cache lifetimes in seconds, merged
            over :data:`DEFAULT_ENDPOINT_TTLS`.
        debug_log: Diagnostic hook receiving debug messages. Defaults to
            the ``n2yo`` loggers.
        timeout: HTTP timeout in seconds.
        transport: Custom httpx transport, e.g. ``httpx.MockTransport``.

    Raises:
        InvalidParameterError: If *api_key* is empty.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        *,
        cache: CacheConfig | None = None,
        rate_limit: RateLimitConfig | None = None,
        endpoint_ttls: dict[Endpoint, float] | None = None,
        debug_log: Callable[[str], None] | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not isinstance(api_key, str) or not api_key.strip():
            raise InvalidParameterError("api_key", api_key, "API key is required")
        self._api_key = api_key.strip()
        self._base_url = (base_url or _DEFAULT_BASE_URL).rstrip("/")
        self._log = debug_log if debug_log is not None else logger.debug
        self._ttls = {**DEFAULT_ENDPOINT_TTLS, **(endpoint_ttls or {})}
        self._cache = ResponseCache(cache, log=debug_log)
        self._rate_limiter = RateLimiter(rate_limit, log=debug_log)
        self._client = httpx.AsyncClient(
            timeout=timeout, follow_redirects=True, transport=transport
        )

    async def __aenter__(self) -> N2YOClient:
        self._cache.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client and stop background tasks."""
        self._cache.destroy()
        self._rate_limiter.close()
        await self._client.aclose()

    # ========================================
    # Orbital elements
    # ========================================

    async def get_tle(self, id: int) -> TleResponse:
        """Retrieve the latest two-line element set for a satellite.

        Args:
            id: NORAD catalog number (e.g. ``25544`` for the ISS).

        Returns:
            The TLE response.
        """
        p = validate("get_tle", id=id)
        endpoint = Endpoint.TLE.build_path(p["id"])
        return await self._request(
            Endpoint.TLE, endpoint, TleResponse.from_json_dict
        )

    async def get_tle_by_name(self, name: str) -> TleResponse:
        """Retrieve a TLE by common satellite name (e.g. ``"ISS"``).

        Args:
            name: Name from :data:`~n2yo.COMMON_SATELLITES`, any case.

        Returns:
            The TLE response.

        Raises:
            InvalidParameterError: If the name is empty or unknown.
        """
        p = validate("get_tle_by_name", name=name)
        sat_id = lookup_satellite_id(p["name"])
        if sat_id is None:
            raise InvalidParameterError("name", name, "Unknown satellite name")
        self._log(f"Resolved satellite {p['name']!r} to NORAD ID {sat_id}")
        return await self.get_tle(sat_id)

    # ========================================
    # Predictions
    # ========================================

    async def get_positions(
        self,
        id: int,
        observer_lat: float,
        observer_lng: float,
        observer_alt: float,
        seconds: int,
    ) -> PositionsResponse:
        """Predict future positions of a satellite.

        Args:
            id: NORAD catalog number.
            observer_lat: Observer latitude in *deg* (-90 to 90).
            observer_lng: Observer longitude in *deg* (-180 to 180).
            observer_alt: Observer altitude above sea level in *m*.
            seconds: Number of one-second positions to return (1 to 300).

        Returns:
            Positions response; ``positions`` is empty when the API
            returned none.
        """
        p = validate(
            "get_positions",
            id=id,
            observer_lat=observer_lat,
            observer_lng=observer_lng,
            observer_alt=observer_alt,
            seconds=seconds,
        )
        endpoint = Endpoint.POSITIONS.build_path(
            p["id"], p["observer_lat"], p["observer_lng"], p["observer_alt"], p["seconds"]
        )
        return await self._request(
            Endpoint.POSITIONS, endpoint, PositionsResponse.from_json_dict
        )

    async def get_visual_passes(
        self,
        id: int,
        observer_lat: float,
        observer_lng: float,
        observer_alt: float,
        days: int,
        min_visibility: float,
    ) -> VisualPassesResponse:
        """Predict optically visible passes of a satellite.

        Args:
            id: NORAD catalog number.
            observer_lat: Observer latitude in *deg*.
            observer_lng: Observer longitude in *deg*.
            observer_alt: Observer altitude above sea level in *m*.
            days: Prediction window in days (1 to 10).
            min_visibility: Minimum visible duration of a pass in *s*.

        Returns:
            Visual passes response.
        """
        p = validate(
            "get_visual_passes",
            id=id,
            observer_lat=observer_lat,
            observer_lng=observer_lng,
            observer_alt=observer_alt,
            days=days,
            min_visibility=min_visibility,
        )
        endpoint = Endpoint.VISUAL_PASSES.build_path(
            p["id"],
            p["observer_lat"],
            p["observer_lng"],
            p["observer_alt"],
            p["days"],
            p["min_visibility"],
        )
        return await self._request(
            Endpoint.VISUAL_PASSES, endpoint, VisualPassesResponse.from_json_dict
        )

    async def get_radio_passes(
        self,
        id: int,
        observer_lat: float,
        observer_lng: float,
        observer_alt: float,
        days: int,
        min_elevation: float,
    ) -> RadioPassesResponse:
        """Predict radio passes of a satellite.

        Args:
            id: NORAD catalog number.
            observer_lat: Observer latitude in *deg*.
            observer_lng: Observer longitude in *deg*.
            observer_alt: Observer altitude above sea level in *m*.
            days: Prediction window in days (1 to 10).
            min_elevation: Minimum peak elevation of a pass in *deg*.

        Returns:
            Radio passes response.
        """
        p = validate(
            "get_radio_passes",
            id=id,
            observer_lat=observer_lat,
            observer_lng=observer_lng,
            observer_alt=observer_alt,
            days=days,
            min_elevation=min_elevation,
        )
        endpoint = Endpoint.RADIO_PASSES.build_path(
            p["id"],
            p["observer_lat"],
            p["observer_lng"],
            p["observer_alt"],
            p["days"],
            p["min_elevation"],
        )
        return await self._request(
            Endpoint.RADIO_PASSES, endpoint, RadioPassesResponse.from_json_dict
        )

    async def get_above(
        self,
        observer_lat: float,
        observer_lng: float,
        observer_alt: float,
        search_radius: float,
        category_id: int = 0,
    ) -> AboveResponse:
        """List catalogued objects within a radius of the observer's zenith.

        Args:
            observer_lat: Observer latitude in *deg*.
            observer_lng: Observer longitude in *deg*.
            observer_alt: Observer altitude above sea level in *m*.
            search_radius: Search radius in *deg* (0 to 90).
            category_id: Category filter; ``0`` for all categories.

        Returns:
            Above response; ``above`` is empty when nothing was found.
        """
        p = validate(
            "get_above",
            observer_lat=observer_lat,
            observer_lng=observer_lng,
            observer_alt=observer_alt,
            search_radius=search_radius,
            category_id=category_id,
        )
        endpoint = Endpoint.ABOVE.build_path(
            p["observer_lat"],
            p["observer_lng"],
            p["observer_alt"],
            p["search_radius"],
            p["category_id"],
        )
        return await self._request(
            Endpoint.ABOVE,
            endpoint,
            lambda d: AboveResponse.from_json_dict(d, p["category_id"]),
        )

    # ========================================
    # Local helpers
    # ========================================

    def get_category_name(self, category_id: int) -> str | None:
        """Return the category name for *category_id*, or ``None``."""
        p = validate("get_category_name", category_id=category_id)
        return SATELLITE_CATEGORIES.get(p["category_id"])

    def utc_to_local(self, utc_timestamp: float, time_zone: str = "UTC") -> str:
        """Format a Unix timestamp in the given IANA time zone.

        Unknown zones are formatted as UTC and reported through the
        diagnostic hook instead of raising.

        Args:
            utc_timestamp: Seconds since the Unix epoch.
            time_zone: IANA zone name.

        Returns:
            Time formatted as ``YYYY-MM-DD HH:MM:SS``.

        Raises:
            InvalidParameterError: If the timestamp is not finite or
                representable as a date, or the zone name is empty.
        """
        p = validate("utc_to_local", utc_timestamp=utc_timestamp, time_zone=time_zone)
        try:
            return format_timestamp(p["utc_timestamp"], p["time_zone"], self._log)
        except (OverflowError, ValueError, OSError) as e:
            raise InvalidParameterError(
                "utc_timestamp", utc_timestamp, "Timestamp is outside the supported date range"
            ) from e

    def cache_stats(self) -> CacheStats:
        """Return entry counts for the response cache."""
        return self._cache.stats()

    def clear_cache(self) -> None:
        """Drop every cached response."""
        self._cache.clear()

    def rate_limit_status(self) -> RateLimitStatus:
        """Return the rate limiter's current window usage and queue depth."""
        return self._rate_limiter.status()

    # ========================================
    # Request pipeline
    # ========================================

    async def _request(
        self,
        kind: Endpoint,
        endpoint: str,
        factory: Callable[[dict[str, Any]], T],
    ) -> T:
        """Serve *endpoint* from cache or fetch it through the rate limiter.

        The raw payload is cached only after it normalized successfully.
        """
        key = normalize_key(endpoint)
        cached = self._cache.get(key)
        if cached is not None:
            return _normalize(factory, cached)

        self._cache.start()

        async def _fetch() -> dict[str, Any]:
            return await execute_request(
                self._client, self._base_url, self._api_key, endpoint, self._log
            )

        data = await self._rate_limiter.submit(_fetch)
        result = _normalize(factory, data)
        self._cache.set(key, data, self._ttls[kind])
        return result


def _normalize(factory: Callable[[dict[str, Any]], T], data: dict[str, Any]) -> T:
    """Build a typed response, mapping shape errors to RemoteError."""
    try:
        return factory(data)
    except (KeyError, TypeError, AttributeError) as e:
        raise RemoteError(f"Malformed response: {e!r}") from e
