"""
Role definitions and the fixed bench shutdown order.

Roles are stopped in reverse startup dependency order: the background
worker first so it can finish its current job, the Redis stores last so
nothing that depends on them loses its connection mid-shutdown.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from .config import BenchSettings
from .config_readers import read_json_port, read_redis_port

BENCH_HELPER = "frappe.utils.bench_helper frappe"
REDIS_STORES = ("cache", "queue", "socketio")


@dataclass(frozen=True)
class RedisConfPort:
    """Port declared by a ``port <number>`` line in a Redis config file."""

    path: Path

    def read(self) -> Optional[int]:
        return read_redis_port(self.path)

    def describe(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class JsonConfigPort:
    """Port stored under a (possibly dotted) key of a JSON config file."""

    path: Path
    key: str

    def read(self) -> Optional[int]:
        return read_json_port(self.path, self.key)

    def describe(self) -> str:
        return f"{self.path}:{self.key}"


PortSource = Union[RedisConfPort, JsonConfigPort]


@dataclass(frozen=True)
class Role:
    """A logical process category and the hints used to find its pid."""

    name: str
    timeout_seconds: float
    pid_file: Optional[Path] = None
    port_sources: Tuple[PortSource, ...] = field(default_factory=tuple)
    patterns: Tuple[str, ...] = field(default_factory=tuple)


def _app_role(name: str, pattern: str, timeout: float, port_sources: Sequence[PortSource] = ()) -> Role:
    return Role(name=name, timeout_seconds=timeout, port_sources=tuple(port_sources), patterns=(pattern,))


def redis_role(settings: BenchSettings, store: str) -> Role:
    """Role for one of the bench Redis daemons (``cache``, ``queue`` or ``socketio``)."""
    return Role(
        name=f"Redis ({store})",
        timeout_seconds=settings.store_timeout_seconds,
        pid_file=settings.pids_dir / f"redis_{store}.pid",
        port_sources=(
            RedisConfPort(settings.config_dir / f"redis_{store}.conf"),
            JsonConfigPort(settings.common_site_config, f"redis_{store}"),
        ),
    )


def default_bench_roles(settings: BenchSettings) -> List[Role]:
    """Return every bench role in shutdown order."""
    app_timeout = settings.app_timeout_seconds
    aux_timeout = settings.store_timeout_seconds
    site_config = settings.common_site_config
    roles = [
        _app_role("Bench Worker", f"{BENCH_HELPER} worker", app_timeout),
        _app_role("Bench Schedule", f"{BENCH_HELPER} schedule", app_timeout),
        _app_role("Bench Watch", f"{BENCH_HELPER} watch", app_timeout),
        _app_role("Esbuild Watch", "esbuild --watch", aux_timeout),
        _app_role("Yarn Watch", "yarn run watch", aux_timeout),
        _app_role(
            "Bench Serve",
            f"{BENCH_HELPER} serve",
            app_timeout,
            port_sources=(JsonConfigPort(site_config, "webserver_port"),),
        ),
        _app_role(
            "Socket.io",
            "socketio.js",
            aux_timeout,
            port_sources=(JsonConfigPort(site_config, "socketio_port"),),
        ),
    ]
    roles.extend(redis_role(settings, store) for store in REDIS_STORES)
    return roles


def select_roles(roles: Sequence[Role], names: Optional[Sequence[str]]) -> List[Role]:
    """Keep roles whose name matches one of *names* (case-insensitive), preserving order.

    Raises:
        ValueError: If a requested name matches no role.
    """
    if not names:
        return list(roles)
    wanted = {name.strip().lower() for name in names if name.strip()}
    known = {role.name.lower() for role in roles}
    unknown = sorted(wanted - known)
    if unknown:
        raise ValueError(f"Unknown role(s): {', '.join(unknown)}. Known roles: {', '.join(role.name for role in roles)}")
    return [role for role in roles if role.name.lower() in wanted]


__all__ = [
    "JsonConfigPort",
    "PortSource",
    "RedisConfPort",
    "Role",
    "default_bench_roles",
    "redis_role",
    "select_roles",
]
