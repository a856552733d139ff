"""Single-request execution and outcome classification.

Performs one GET against the N2YO API and maps every failure onto the
client's exception hierarchy.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

import httpx

from n2yo._errors import InvalidParameterError, RateLimitError, RemoteError

logger = logging.getLogger(__name__)

_INVALID_KEY_MARKER = "invalid api key"


def build_url(base_url: str, endpoint: str, api_key: str) -> str:
    """Build the request URL with the credential appended.

    The API expects the key as a trailing ``&apiKey=`` segment directly
    after the path.

    Args:
        base_url: API root without trailing slash.
        endpoint: Relative endpoint path.
        api_key: N2YO API key.

    Returns:
        The full request URL.
    """
    return f"{base_url}/{endpoint}&apiKey={api_key}"


def mask_key(api_key: str) -> str:
    """Return *api_key* with all but the last four characters hidden."""
    if len(api_key) <= 4:
        return "*" * len(api_key)
    return "*" * (len(api_key) - 4) + api_key[-4:]


def _error_message(response: httpx.Response) -> str | None:
    """Extract the ``error`` field from a JSON body, if any."""
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return None


def _raise_body_error(message: str, status_code: int, api_key: str) -> None:
    """Classify an error object returned with a success status."""
    if _INVALID_KEY_MARKER in message.lower():
        raise InvalidParameterError("api_key", mask_key(api_key), message)
    raise RemoteError(f"API request failed: {message}", status_code)


async def execute_request(
    client: httpx.AsyncClient,
    base_url: str,
    api_key: str,
    endpoint: str,
    log: Callable[[str], None] | None = None,
) -> dict[str, Any]:
    """Perform one GET request and classify the outcome.

    Args:
        client: HTTP client used for the request.
        base_url: API root without trailing slash.
        api_key: N2YO API key.
        endpoint: Relative endpoint path.
        log: Diagnostic hook. Defaults to this module's logger.

    Returns:
        The decoded JSON object.

    Raises:
        RemoteError: On transport failure (``network=True``), redirect
            loops, non-2xx status, API-reported error or malformed body.
        RateLimitError: On HTTP 429.
        InvalidParameterError: If the API rejects the key.
    """
    log = log if log is not None else logger.debug
    url = build_url(base_url, endpoint, api_key)
    log(f"[HTTP] GET {build_url(base_url, endpoint, mask_key(api_key))}")

    try:
        response = await client.get(url)
    except httpx.TransportError as e:
        log(f"[HTTP] Network error: {e!r}")
        raise RemoteError(f"Network error: {e}", network=True) from e
    except httpx.DecodingError as e:
        raise RemoteError(f"Malformed response: body could not be decoded ({e})") from e
    except httpx.RequestError as e:
        log(f"[HTTP] Request error: {e!r}")
        raise RemoteError(f"Request failed: {e}") from e

    log(f"[HTTP] Response status: {response.status_code}")

    if response.status_code == 429:
        raise RateLimitError()

    if not response.is_success:
        message = _error_message(response) or response.reason_phrase
        raise RemoteError(f"API request failed: {message}", response.status_code)

    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RemoteError(
            "Malformed response: body is not valid JSON", response.status_code
        ) from e

    if not isinstance(body, dict):
        raise RemoteError(
            "Malformed response: expected a JSON object", response.status_code
        )

    if body.get("error"):
        _raise_body_error(str(body["error"]), response.status_code, api_key)

    return body
