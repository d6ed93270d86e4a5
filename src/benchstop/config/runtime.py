from __future__ import annotations

"""Runtime helpers for working with environment-backed configuration."""


import os
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigurationError

_TRUE_VALUES = {"1", "true", "t", "yes", "y", "on"}
_FALSE_VALUES = {"0", "false", "f", "no", "n", "off"}


def load_default_values(bench_dir: Path) -> dict[str, str]:
    """Load fallback values from the ``.env`` file at the bench root, if any."""
    from .runtime_helpers import DotenvLoader

    return DotenvLoader.load_from_file(bench_dir / ".env")


def _normalize(value: str | None, *, strip: bool) -> str | None:
    if value is None:
        return None
    return value.strip() if strip else value


def env_str(
    name: str,
    or_value: str | None = None,
    *,
    required: bool = False,
    strip: bool = True,
    allow_blank: bool = False,
    defaults: Optional[Mapping[str, str]] = None,
) -> str | None:
    """Fetch an environment variable as a string with validation.

    Values present in the process environment win over *defaults*, which
    typically come from :func:`load_default_values`.
    """

    value = _normalize(os.getenv(name), strip=strip)

    if value is None or (not allow_blank and value == ""):
        if defaults is not None and name in defaults:
            value = _normalize(defaults[name], strip=strip)

    if value is None or (not allow_blank and value == ""):
        if required:
            raise ConfigurationError(f"Required environment variable {name!r} is not set")
        return or_value
    return value


def env_float(
    name: str,
    or_value: float | None = None,
    *,
    required: bool = False,
    defaults: Optional[Mapping[str, str]] = None,
) -> float | None:
    """Fetch an environment variable and coerce it to ``float``."""

    raw = env_str(name, strip=True, allow_blank=False, defaults=defaults)
    if raw is None:
        if required and or_value is None:
            raise ConfigurationError(f"Required environment variable {name!r} is not set")
        return or_value
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Environment variable {name!r} must be a float (got {raw!r})") from exc


def env_bool(
    name: str,
    or_value: bool | None = None,
    *,
    required: bool = False,
    defaults: Optional[Mapping[str, str]] = None,
) -> bool | None:
    """Fetch an environment variable and coerce it to ``bool``."""

    raw = env_str(name, strip=True, allow_blank=False, defaults=defaults)
    if raw is None:
        if required and or_value is None:
            raise ConfigurationError(f"Required environment variable {name!r} is not set")
        return or_value

    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Environment variable {name!r} must be a boolean (allowed: {_TRUE_VALUES | _FALSE_VALUES}, got {raw!r})")


def env_seconds(
    name: str,
    or_value: float | None = None,
    *,
    required: bool = False,
    defaults: Optional[Mapping[str, str]] = None,
) -> float | None:
    """Convenience wrapper for fetching non-negative durations stored as seconds."""

    value = env_float(name, or_value=or_value, required=required, defaults=defaults)
    if value is None:
        return None
    if value < 0:
        raise ConfigurationError(f"Environment variable {name!r} must be non-negative (got {value})")
    return value


__all__ = [
    "ConfigurationError",
    "env_bool",
    "env_float",
    "env_seconds",
    "env_str",
    "load_default_values",
]
