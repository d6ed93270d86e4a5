"""Port lookup through ``psutil.net_connections``."""

from __future__ import annotations

import logging
from typing import List

import psutil

from .base import PortBackendUnavailable

logger = logging.getLogger(__name__)


class PsutilBackend:
    name = "psutil"

    def is_available(self) -> bool:
        return hasattr(psutil, "net_connections")

    def find_listening_pids(self, port: int) -> List[int]:
        try:
            connections = psutil.net_connections(kind="tcp")
        except psutil.AccessDenied as exc:
            # macOS requires root for a system-wide connection listing
            raise PortBackendUnavailable("psutil cannot list connections without elevated privileges") from exc
        except (psutil.Error, OSError) as exc:
            raise PortBackendUnavailable(f"psutil connection listing failed: {exc}") from exc

        pids = set()
        for conn in connections:
            if conn.status != psutil.CONN_LISTEN or not conn.laddr or conn.pid is None:
                continue
            if conn.laddr.port == port and conn.pid > 0:
                pids.add(conn.pid)
        return sorted(pids)
