"""Great-circle distance between observer and sub-satellite points.

Uses the Haversine formula on a spherical Earth of mean radius
6371 km, which is adequate for display purposes.
"""

from __future__ import annotations

import math

R_EARTH_KM = 6371.0


def calculate_distance(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Return the Haversine surface distance between two points.

    Args:
        lat1: Latitude of the first point in *deg*.
        lng1: Longitude of the first point in *deg*.
        lat2: Latitude of the second point in *deg*.
        lng2: Longitude of the second point in *deg*.

    Returns:
        float: Distance along the surface in *km*.

    Example:
        >>> round(calculate_distance(0.0, 0.0, 0.0, 90.0))
        10008
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlmb = math.radians(lng2 - lng1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    return 2.0 * R_EARTH_KM * math.asin(min(1.0, math.sqrt(a)))
