"""N2YO endpoint enum.

Defines the REST endpoints exposed by the client and the URL path
segment each one uses.
"""

from enum import Enum


class Endpoint(Enum):
    """N2YO REST API endpoint.

    Each member maps to the first path segment of a request URL.
    """

    TLE = "tle"
    POSITIONS = "positions"
    VISUAL_PASSES = "visualpasses"
    RADIO_PASSES = "radiopasses"
    ABOVE = "above"

    def as_str(self) -> str:
        """Return the URL path segment for this endpoint."""
        return self.value

    def build_path(self, *segments: object) -> str:
        """Join the endpoint with its positional path segments.

        Floats with an integral value are written without a decimal part,
        so ``40.0`` and ``40`` produce the same path.

        Args:
            *segments: Path values in API order.

        Returns:
            Relative endpoint path, e.g. ``"tle/25544"``.
        """
        return "/".join([self.value, *(_format_segment(s) for s in segments)])

    def __str__(self) -> str:
        return _ENDPOINT_DISPLAY[self]

    def __repr__(self) -> str:
        return f"Endpoint.{_ENDPOINT_DISPLAY[self]}"


_ENDPOINT_DISPLAY = {
    Endpoint.TLE: "TLE",
    Endpoint.POSITIONS: "Positions",
    Endpoint.VISUAL_PASSES: "VisualPasses",
    Endpoint.RADIO_PASSES: "RadioPasses",
    Endpoint.ABOVE: "Above",
}


def _format_segment(value: object) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
