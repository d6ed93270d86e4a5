"""
Port-to-process lookup with capability-based backend selection.

psutil is the primary backend. When it cannot see the connection table
(typically macOS without root) the lookup falls back to ``lsof``, then
``ss``, then ``netstat``, using whichever of them exist on the host.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .port_lookup_helpers import (
    LsofBackend,
    NetstatBackend,
    PortBackendUnavailable,
    PortLookupBackend,
    PsutilBackend,
    SsBackend,
)

logger = logging.getLogger(__name__)


def default_backends() -> List[PortLookupBackend]:
    return [PsutilBackend(), LsofBackend(), SsBackend(), NetstatBackend()]


def detect_backends(candidates: Optional[Sequence[PortLookupBackend]] = None) -> List[PortLookupBackend]:
    """Return the candidate backends usable on this host, in priority order."""
    pool = default_backends() if candidates is None else list(candidates)
    available = [backend for backend in pool if backend.is_available()]
    logger.debug("Port lookup backends available: %s", ", ".join(b.name for b in available) or "none")
    return available


class PortLookup:
    """Ask each available backend in turn for the process listening on a port."""

    def __init__(self, backends: Optional[Sequence[PortLookupBackend]] = None):
        self._backends = list(backends) if backends is not None else detect_backends()

    def find_pid(self, port: int) -> Optional[int]:
        """Return the lowest pid listening on *port*, or ``None``."""
        if port <= 0:
            return None
        for backend in self._backends:
            try:
                pids = backend.find_listening_pids(port)
            except PortBackendUnavailable as exc:
                logger.debug("Port backend %s unavailable: %s", backend.name, exc)
                continue
            if pids:
                pid = min(pids)
                logger.debug("Port %s is held by PID %s (via %s)", port, pid, backend.name)
                return pid
        return None


__all__ = ["PortLookup", "default_backends", "detect_backends"]
