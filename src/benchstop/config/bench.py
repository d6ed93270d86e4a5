from __future__ import annotations

"""Bench settings shared by the resolver, terminator and orchestrator."""


from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError
from .runtime import env_bool, env_seconds, env_str, load_default_values

DEFAULT_APP_TIMEOUT_SECONDS = 10.0
DEFAULT_STORE_TIMEOUT_SECONDS = 5.0
DEFAULT_POLL_INTERVAL_SECONDS = 1.0
DEFAULT_KILL_GRACE_SECONDS = 1.0

PROCFILE_NAME = "Procfile"
CONFIG_DIR_NAME = "config"
SITES_DIR_NAME = "sites"
PIDS_DIR_NAME = "pids"
COMMON_SITE_CONFIG_NAME = "common_site_config.json"


@dataclass(frozen=True)
class BenchSettings:
    bench_dir: Path
    app_timeout_seconds: float = DEFAULT_APP_TIMEOUT_SECONDS
    store_timeout_seconds: float = DEFAULT_STORE_TIMEOUT_SECONDS
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    kill_grace_seconds: float = DEFAULT_KILL_GRACE_SECONDS
    quiet: bool = False

    @property
    def procfile(self) -> Path:
        return self.bench_dir / PROCFILE_NAME

    @property
    def config_dir(self) -> Path:
        return self.bench_dir / CONFIG_DIR_NAME

    @property
    def sites_dir(self) -> Path:
        return self.bench_dir / SITES_DIR_NAME

    @property
    def pids_dir(self) -> Path:
        return self.config_dir / PIDS_DIR_NAME

    @property
    def common_site_config(self) -> Path:
        return self.sites_dir / COMMON_SITE_CONFIG_NAME


def load_bench_settings(bench_dir: Optional[Path] = None) -> BenchSettings:
    """Build settings from the environment and the bench ``.env`` file.

    The bench directory comes from *bench_dir*, then ``BENCHSTOP_BENCH_DIR``,
    then the current working directory.

    Raises:
        ConfigurationError: If an override is malformed or negative, or the poll
            interval is zero. Zero role timeouts are allowed.
    """
    if bench_dir is None:
        configured = env_str("BENCHSTOP_BENCH_DIR")
        bench_dir = Path(configured) if configured else Path.cwd()
    resolved_dir = bench_dir.expanduser().resolve()

    defaults = load_default_values(resolved_dir)
    app_timeout = env_seconds("BENCHSTOP_APP_TIMEOUT_SECONDS", or_value=DEFAULT_APP_TIMEOUT_SECONDS, defaults=defaults)
    store_timeout = env_seconds("BENCHSTOP_STORE_TIMEOUT_SECONDS", or_value=DEFAULT_STORE_TIMEOUT_SECONDS, defaults=defaults)
    poll_interval = env_seconds("BENCHSTOP_POLL_INTERVAL_SECONDS", or_value=DEFAULT_POLL_INTERVAL_SECONDS, defaults=defaults)
    kill_grace = env_seconds("BENCHSTOP_KILL_GRACE_SECONDS", or_value=DEFAULT_KILL_GRACE_SECONDS, defaults=defaults)
    quiet = env_bool("BENCHSTOP_QUIET", or_value=False, defaults=defaults)

    if not poll_interval:
        raise ConfigurationError.invalid_value("BENCHSTOP_POLL_INTERVAL_SECONDS", poll_interval, "must be greater than zero")

    return BenchSettings(
        bench_dir=resolved_dir,
        app_timeout_seconds=float(app_timeout),
        store_timeout_seconds=float(store_timeout),
        poll_interval_seconds=float(poll_interval),
        kill_grace_seconds=float(kill_grace),
        quiet=bool(quiet),
    )


__all__ = ["BenchSettings", "load_bench_settings"]
