"""API key resolution for the command line interface.

The key is taken from, in order: an explicit value, the ``N2YO_API_KEY``
environment variable, then ``config.json`` in the n2yo configuration
directory.

The configuration directory is determined by the ``N2YO_CONFIG_DIR``
environment variable. If unset, it defaults to ``~/.n2yo``.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "N2YO_API_KEY"
_CONFIG_DIR_ENV_VAR = "N2YO_CONFIG_DIR"
_DEFAULT_SUBDIR = ".n2yo"
_CONFIG_FILENAME = "config.json"


def get_config_dir() -> Path:
    """Return the n2yo configuration directory.

    The directory is not created; a missing directory simply means no
    configuration file.

    Returns:
        Resolved :class:`~pathlib.Path` to the configuration directory.
    """
    env = os.environ.get(_CONFIG_DIR_ENV_VAR)
    if env is not None:
        return Path(env)
    return Path.home() / _DEFAULT_SUBDIR


def get_config_path() -> Path:
    """Return the path of ``config.json`` (``<config>/config.json``)."""
    return get_config_dir() / _CONFIG_FILENAME


def read_config_api_key(path: str | Path | None = None) -> str | None:
    """Read ``apiKey`` from a JSON configuration file.

    Unreadable or malformed files are logged and treated as absent.

    Args:
        path: File to read. Defaults to :func:`get_config_path`.

    Returns:
        The key, or ``None`` if the file is missing or has no key.
    """
    path = Path(path) if path is not None else get_config_path()
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Failed to read or parse config file %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: expected a JSON object", path)
        return None
    key = data.get("apiKey")
    return key if isinstance(key, str) and key else None


def resolve_api_key(explicit: str | None = None) -> str | None:
    """Resolve the API key without prompting.

    Args:
        explicit: Key given on the command line.

    Returns:
        The first key found, or ``None`` so the caller can prompt.
    """
    if explicit:
        logger.debug("Using API key from command-line options")
        return explicit

    env = os.environ.get(API_KEY_ENV_VAR)
    if env:
        logger.debug("Using API key from %s environment variable", API_KEY_ENV_VAR)
        return env

    key = read_config_api_key()
    if key:
        logger.debug("Using API key from config file %s", get_config_path())
    return key
