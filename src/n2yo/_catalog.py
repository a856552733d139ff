"""Static lookup tables for satellite categories and common satellites.

Category identifiers follow the N2YO "above" endpoint. Category ``0``
requests all categories and has no entry in the table.
"""

from __future__ import annotations

ALL_CATEGORIES = 0

SATELLITE_CATEGORIES: dict[int, str] = {
    1: "Brightest",
    2: "ISS",
    3: "Weather",
    4: "NOAA",
    5: "GOES",
    6: "Earth resources",
    7: "Search & rescue",
    8: "Disaster monitoring",
    9: "Tracking and Data Relay Satellite System",
    10: "Geostationary",
    11: "Intelsat",
    12: "Gorizont",
    13: "Raduga",
    14: "Molniya",
    15: "Iridium",
    16: "Orbcomm",
    17: "Globalstar",
    18: "Amateur radio",
    19: "Experimental",
    20: "Global Positioning System (GPS) Operational",
    21: "Glonass Operational",
    22: "Galileo",
    23: "Satellite-Based Augmentation System",
    24: "Navy Navigation Satellite System",
    25: "Russian LEO Navigation",
    26: "Space & Earth Science",
    27: "Geodetic",
    28: "Engineering",
    29: "Education",
    30: "Military",
    31: "Radar Calibration",
    32: "CubeSats",
    33: "XM and Sirius",
    34: "TV",
    35: "Beidou Navigation System",
    36: "Yaogan",
    37: "Westford Needles",
    38: "Parus",
    39: "Strela",
    40: "Gonets",
    41: "Tsiklon",
    42: "Tsikada",
    43: "O3B Networks",
    44: "Tselina",
    45: "Celestis",
    46: "IRNSS",
    47: "QZSS",
    48: "Flock",
    49: "Lemur",
    50: "Global Positioning System (GPS) Constellation",
    51: "Glonass Constellation",
    52: "Starlink",
    53: "OneWeb",
    54: "Chinese Space Station",
    55: "Qianfan",
    56: "Kuiper",
}

# Upper-case common names to NORAD catalog numbers.
COMMON_SATELLITES: dict[str, int] = {
    "ISS": 25544,
    "HUBBLE": 20580,
    "HST": 20580,
    "TIANGONG": 48274,
    "CSS": 48274,
    "NOAA 15": 25338,
    "NOAA 18": 28654,
    "NOAA 19": 33591,
    "TERRA": 25994,
    "AQUA": 27424,
    "AURA": 28376,
    "SUOMI NPP": 37849,
    "LANDSAT 8": 39084,
    "LANDSAT 9": 49260,
    "SENTINEL-2A": 40697,
    "SENTINEL-2B": 42063,
    "METOP-B": 38771,
    "METOP-C": 43689,
    "GOES 16": 41866,
    "GOES 18": 51850,
    "ENVISAT": 27386,
    "AO-91": 43017,
    "SO-50": 27607,
}


def get_all_categories() -> list[tuple[int, str]]:
    """Return every known category as ``(id, name)`` pairs in id order.

    Returns:
        List of category id and name tuples.
    """
    return sorted(SATELLITE_CATEGORIES.items())


def lookup_satellite_id(name: str) -> int | None:
    """Return the catalog number for a common satellite name, if known."""
    return COMMON_SATELLITES.get(name.strip().upper())
