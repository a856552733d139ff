"""Parameter validation for N2YO client operations.

Each operation declares an ordered tuple of ``(parameter, rules)`` pairs
in :data:`SCHEMAS`. :func:`validate` checks the arguments before any
cache lookup, rate limiting or network I/O and raises
:class:`~n2yo.InvalidParameterError` on the first violated rule.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from n2yo._errors import InvalidParameterError


@dataclass(frozen=True)
class ValidationRule:
    """A named constraint on a single parameter value.

    Args:
        name: Short identifier of the constraint (e.g. ``"range"``).
        check: Predicate returning ``True`` when the value is acceptable.
        reason: Message reported when the predicate fails.
        normalize: Optional transform applied to accepted values.
    """

    name: str
    check: Callable[[Any], bool]
    reason: str
    normalize: Callable[[Any], Any] | None = None


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def _is_integral(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def number(label: str) -> ValidationRule:
    """Value must be a finite int or float."""
    return ValidationRule("number", _is_number, f"{label} must be a number")


def finite(label: str) -> ValidationRule:
    """Value must be a finite number (rejects NaN and infinities)."""
    return ValidationRule("finite", _is_number, f"{label} must be a finite number")


def integer(label: str) -> ValidationRule:
    """Value must be integral; accepted values are coerced to ``int``."""
    return ValidationRule(
        "integer", _is_integral, f"{label} must be an integer", normalize=int
    )


def in_range(lo: float, hi: float, message: str) -> ValidationRule:
    """Value must lie in the closed interval ``[lo, hi]``."""
    return ValidationRule("range", lambda v: lo <= v <= hi, message)


def positive(message: str) -> ValidationRule:
    """Value must be strictly greater than zero."""
    return ValidationRule("positive", lambda v: v > 0, message)


def non_negative(message: str) -> ValidationRule:
    """Value must be greater than or equal to zero."""
    return ValidationRule("non_negative", lambda v: v >= 0, message)


def non_empty_string(message: str, *, upper: bool = False) -> ValidationRule:
    """Value must be a string with non-whitespace content.

    Args:
        message: Failure reason.
        upper: Upper-case the accepted value.
    """

    def _normalize(v: str) -> str:
        v = v.strip()
        return v.upper() if upper else v

    return ValidationRule(
        "non_empty",
        lambda v: isinstance(v, str) and bool(v.strip()),
        message,
        normalize=_normalize,
    )


# ========================================
# Shared parameter rules
# ========================================

_ID = (integer("NORAD ID"), positive("NORAD ID must be positive"))
_LAT = (
    number("Latitude"),
    in_range(-90, 90, "Latitude must be between -90 and 90 degrees"),
)
_LNG = (
    number("Longitude"),
    in_range(-180, 180, "Longitude must be between -180 and 180 degrees"),
)
_ALT = (
    number("Altitude"),
    in_range(-1000, 10000, "Altitude must be between -1000 and 10000 meters"),
)
_DAYS = (integer("Days"), in_range(1, 10, "Days must be between 1 and 10"))

SCHEMAS: dict[str, tuple[tuple[str, tuple[ValidationRule, ...]], ...]] = {
    "get_tle": (("id", _ID),),
    "get_tle_by_name": (
        (
            "name",
            (non_empty_string("Satellite name must not be empty", upper=True),),
        ),
    ),
    "get_positions": (
        ("id", _ID),
        ("observer_lat", _LAT),
        ("observer_lng", _LNG),
        ("observer_alt", _ALT),
        (
            "seconds",
            (
                integer("Seconds"),
                in_range(1, 300, "Seconds must be between 1 and 300"),
            ),
        ),
    ),
    "get_visual_passes": (
        ("id", _ID),
        ("observer_lat", _LAT),
        ("observer_lng", _LNG),
        ("observer_alt", _ALT),
        ("days", _DAYS),
        (
            "min_visibility",
            (
                number("Minimum visibility"),
                positive("Minimum visibility must be positive"),
            ),
        ),
    ),
    "get_radio_passes": (
        ("id", _ID),
        ("observer_lat", _LAT),
        ("observer_lng", _LNG),
        ("observer_alt", _ALT),
        ("days", _DAYS),
        (
            "min_elevation",
            (
                number("Minimum elevation"),
                non_negative("Minimum elevation must be non-negative"),
            ),
        ),
    ),
    "get_above": (
        ("observer_lat", _LAT),
        ("observer_lng", _LNG),
        ("observer_alt", _ALT),
        (
            "search_radius",
            (
                number("Search radius"),
                in_range(0, 90, "Search radius must be between 0 and 90 degrees"),
            ),
        ),
        (
            "category_id",
            (
                integer("Category ID"),
                non_negative("Category ID must be non-negative"),
            ),
        ),
    ),
    "get_category_name": (
        (
            "category_id",
            (
                integer("Category ID"),
                non_negative("Category ID must be non-negative"),
            ),
        ),
    ),
    "utc_to_local": (
        ("utc_timestamp", (finite("Timestamp"),)),
        ("time_zone", (non_empty_string("Time zone must not be empty"),)),
    ),
}


def validate(operation: str, **params: Any) -> dict[str, Any]:
    """Validate and normalize the arguments of *operation*.

    Parameters are checked in schema order and all rules of a parameter
    run before moving to the next one.

    Args:
        operation: Key into :data:`SCHEMAS` (the client method name).
        **params: Argument bundle.

    Returns:
        A new dict with the normalized argument values.

    Raises:
        KeyError: If *operation* has no schema.
        InvalidParameterError: On the first violated rule.
    """
    schema = SCHEMAS[operation]
    validated = dict(params)
    for param, rules in schema:
        value = params.get(param)
        for rule in rules:
            if not rule.check(value):
                raise InvalidParameterError(param, value, rule.reason)
            if rule.normalize is not None:
                value = rule.normalize(value)
        validated[param] = value
    return validated
