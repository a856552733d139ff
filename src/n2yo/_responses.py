"""Typed response classes for N2YO API responses.

Each response carries the ``info`` metadata block plus the endpoint's
payload. ``from_json_dict`` builds a new object from the raw JSON dict
without mutating it, and normalizes absent payload lists to empty ones.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from n2yo._catalog import ALL_CATEGORIES, SATELLITE_CATEGORIES
from n2yo._time import split_tle


@dataclass
class ResponseInfo:
    """Transaction and satellite metadata returned with every response."""

    satid: int | None = None
    satname: str | None = None
    transactionscount: int = 0
    category: str | None = None
    satcount: int | None = None
    passescount: int | None = None

    @classmethod
    def from_json_dict(cls, d: dict | None) -> ResponseInfo:
        """Create a ResponseInfo from the ``info`` object of a response.

        Args:
            d: The ``info`` dict, or ``None`` if it was absent.

        Returns:
            A new ResponseInfo instance.
        """
        d = d or {}
        return cls(
            satid=d.get("satid"),
            satname=d.get("satname"),
            transactionscount=d.get("transactionscount") or 0,
            category=d.get("category"),
            satcount=d.get("satcount"),
            passescount=d.get("passescount"),
        )


@dataclass
class TleResponse:
    """Two-line element set for one satellite."""

    info: ResponseInfo
    tle: str

    @classmethod
    def from_json_dict(cls, d: dict) -> TleResponse:
        return cls(info=ResponseInfo.from_json_dict(d.get("info")), tle=d.get("tle") or "")

    def lines(self) -> tuple[str, str]:
        """Split the TLE into its two lines.

        Raises:
            ValueError: If the TLE is not two CRLF-separated lines.
        """
        return split_tle(self.tle)

    def __str__(self) -> str:
        return f"TleResponse(satname={self.info.satname!r}, satid={self.info.satid!r})"


@dataclass
class SatellitePosition:
    """Predicted sub-satellite point and observer look angles."""

    satlatitude: float
    satlongitude: float
    sataltitude: float
    azimuth: float
    elevation: float
    ra: float
    dec: float
    timestamp: int

    @classmethod
    def from_json_dict(cls, d: dict) -> SatellitePosition:
        return cls(
            satlatitude=d["satlatitude"],
            satlongitude=d["satlongitude"],
            sataltitude=d["sataltitude"],
            azimuth=d["azimuth"],
            elevation=d["elevation"],
            ra=d["ra"],
            dec=d["dec"],
            timestamp=d["timestamp"],
        )


@dataclass
class PositionsResponse:
    """Future positions of a satellite."""

    info: ResponseInfo
    positions: list[SatellitePosition] = field(default_factory=list)

    @classmethod
    def from_json_dict(cls, d: dict) -> PositionsResponse:
        return cls(
            info=ResponseInfo.from_json_dict(d.get("info")),
            positions=[SatellitePosition.from_json_dict(p) for p in d.get("positions") or []],
        )


@dataclass
class SatellitePass:
    """A single pass over the observer.

    ``start_el``, ``end_el``, ``mag`` and ``duration`` are only reported
    for visual passes.
    """

    start_az: float
    start_az_compass: str
    start_utc: int
    max_az: float
    max_az_compass: str
    max_el: float
    max_utc: int
    end_az: float
    end_az_compass: str
    end_utc: int
    start_el: float | None = None
    end_el: float | None = None
    mag: float | None = None
    duration: int | None = None

    @classmethod
    def from_json_dict(cls, d: dict) -> SatellitePass:
        """Create a SatellitePass from a camelCase JSON dict."""
        return cls(
            start_az=d["startAz"],
            start_az_compass=d["startAzCompass"],
            start_utc=d["startUTC"],
            max_az=d["maxAz"],
            max_az_compass=d["maxAzCompass"],
            max_el=d["maxEl"],
            max_utc=d["maxUTC"],
            end_az=d["endAz"],
            end_az_compass=d["endAzCompass"],
            end_utc=d["endUTC"],
            start_el=d.get("startEl"),
            end_el=d.get("endEl"),
            mag=d.get("mag"),
            duration=d.get("duration"),
        )


def _passes_from_json(d: dict) -> tuple[ResponseInfo, list[SatellitePass]]:
    info = ResponseInfo.from_json_dict(d.get("info"))
    raw = d.get("passes")
    if not raw:
        info.passescount = 0
        return info, []
    return info, [SatellitePass.from_json_dict(p) for p in raw]


@dataclass
class VisualPassesResponse:
    """Optically visible passes of a satellite."""

    info: ResponseInfo
    passes: list[SatellitePass] = field(default_factory=list)

    @classmethod
    def from_json_dict(cls, d: dict) -> VisualPassesResponse:
        info, passes = _passes_from_json(d)
        return cls(info=info, passes=passes)


@dataclass
class RadioPassesResponse:
    """Passes of a satellite above a minimum elevation, lit or not."""

    info: ResponseInfo
    passes: list[SatellitePass] = field(default_factory=list)

    @classmethod
    def from_json_dict(cls, d: dict) -> RadioPassesResponse:
        info, passes = _passes_from_json(d)
        return cls(info=info, passes=passes)


@dataclass
class SatelliteAbove:
    """An object currently within the search radius of the observer."""

    satid: int
    satname: str
    int_designator: str | None
    launch_date: str | None
    satlat: float
    satlng: float
    satalt: float

    @classmethod
    def from_json_dict(cls, d: dict) -> SatelliteAbove:
        return cls(
            satid=d["satid"],
            satname=d["satname"],
            int_designator=d.get("intDesignator"),
            launch_date=d.get("launchDate"),
            satlat=d["satlat"],
            satlng=d["satlng"],
            satalt=d["satalt"],
        )


@dataclass
class AboveResponse:
    """Objects above an observer location."""

    info: ResponseInfo
    above: list[SatelliteAbove] = field(default_factory=list)

    @classmethod
    def from_json_dict(cls, d: dict, category_id: int = ALL_CATEGORIES) -> AboveResponse:
        """Create an AboveResponse, filling in a missing category.

        Args:
            d: Raw response dict.
            category_id: Category the query was made for; used to resolve
                the category name when the response lacks one.

        Returns:
            A new AboveResponse instance.
        """
        info = ResponseInfo.from_json_dict(d.get("info"))
        if not info.category:
            info.category = SATELLITE_CATEGORIES.get(category_id, "All")
        raw: Any = d.get("above")
        if not raw:
            info.satcount = 0
            return cls(info=info, above=[])
        return cls(info=info, above=[SatelliteAbove.from_json_dict(s) for s in raw])
