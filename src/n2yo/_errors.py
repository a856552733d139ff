"""Exception hierarchy for N2YO client failures.

Every public client operation either returns a normalized response or
raises exactly one subclass of :class:`N2YOError`.
"""

from __future__ import annotations

from typing import Any


class N2YOError(Exception):
    """Base class for all N2YO client errors."""


class InvalidParameterError(N2YOError):
    """A caller-supplied argument failed validation or lookup.

    Args:
        param: Name of the offending parameter.
        value: The rejected value.
        reason: Human-readable explanation.
    """

    def __init__(self, param: str, value: Any, reason: str) -> None:
        self.param = param
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid parameter {param}: {value!r}. {reason}")


class RateLimitError(N2YOError):
    """The request ceiling was reached locally or reported by the API."""

    def __init__(self, message: str = "API rate limit exceeded") -> None:
        super().__init__(message)


class RemoteError(N2YOError):
    """The API call failed or returned an unusable response.

    Args:
        message: Best available diagnostic message.
        status_code: HTTP status code, if a response was received.
        network: ``True`` when no response was received at all.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        *,
        network: bool = False,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.network = network
        super().__init__(message)

    def __repr__(self) -> str:
        return (
            f"RemoteError(message={self.message!r}, "
            f"status_code={self.status_code!r}, network={self.network!r})"
        )
