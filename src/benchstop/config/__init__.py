"""Shared configuration helpers and dataclasses."""

from .bench import BenchSettings, load_bench_settings
from .errors import ConfigurationError
from .runtime import (
    env_bool,
    env_float,
    env_seconds,
    env_str,
    load_default_values,
)

__all__ = [
    "BenchSettings",
    "ConfigurationError",
    "env_bool",
    "env_float",
    "env_seconds",
    "env_str",
    "load_bench_settings",
    "load_default_values",
]
