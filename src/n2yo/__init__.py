"""
n2yo is an asynchronous client for the N2YO satellite tracking REST API, with
parameter validation, an in-memory response cache and client-side rate limiting.
"""

from n2yo._cache import CacheConfig, CacheStats, ResponseCache, normalize_key
from n2yo._catalog import (
    ALL_CATEGORIES,
    COMMON_SATELLITES,
    SATELLITE_CATEGORIES,
    get_all_categories,
)
from n2yo._client import DEFAULT_ENDPOINT_TTLS, N2YOClient
from n2yo._errors import (
    InvalidParameterError,
    N2YOError,
    RateLimitError,
    RemoteError,
)
from n2yo._geo import calculate_distance
from n2yo._rate_limiter import RateLimitConfig, RateLimiter, RateLimitStatus
from n2yo._responses import (
    AboveResponse,
    PositionsResponse,
    RadioPassesResponse,
    ResponseInfo,
    SatelliteAbove,
    SatellitePass,
    SatellitePosition,
    TleResponse,
    VisualPassesResponse,
)
from n2yo._time import split_tle, timestamp_to_datetime
from n2yo._types import Endpoint


def create_client(api_key: str, **kwargs) -> N2YOClient:
    """Create an :class:`N2YOClient`.

    Args:
        api_key: N2YO API key.
        **kwargs: Forwarded to :class:`N2YOClient`.

    Returns:
        A new client instance.
    """
    return N2YOClient(api_key, **kwargs)


__all__ = [
    # Client
    "N2YOClient",
    "create_client",
    "DEFAULT_ENDPOINT_TTLS",
    "Endpoint",
    # Errors
    "N2YOError",
    "InvalidParameterError",
    "RateLimitError",
    "RemoteError",
    # Caching
    "CacheConfig",
    "CacheStats",
    "ResponseCache",
    "normalize_key",
    # Rate limiting
    "RateLimitConfig",
    "RateLimiter",
    "RateLimitStatus",
    # Response types
    "ResponseInfo",
    "TleResponse",
    "SatellitePosition",
    "PositionsResponse",
    "SatellitePass",
    "VisualPassesResponse",
    "RadioPassesResponse",
    "SatelliteAbove",
    "AboveResponse",
    # Lookup tables
    "ALL_CATEGORIES",
    "COMMON_SATELLITES",
    "SATELLITE_CATEGORIES",
    "get_all_categories",
    # Helpers
    "calculate_distance",
    "split_tle",
    "timestamp_to_datetime",
]
