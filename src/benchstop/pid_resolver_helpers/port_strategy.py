"""Listening-port lookup."""

from __future__ import annotations

import logging
from typing import List

from ..models import ResolutionSource
from ..port_lookup import PortLookup
from ..roles import Role

logger = logging.getLogger(__name__)


class PortStrategy:
    source = ResolutionSource.PORT

    def __init__(self, port_lookup: PortLookup):
        self._port_lookup = port_lookup

    def candidates(self, role: Role) -> List[int]:
        pids: List[int] = []
        for port_source in role.port_sources:
            port = port_source.read()
            if port is None:
                logger.debug("%s: no port in %s", role.name, port_source.describe())
                continue
            pid = self._port_lookup.find_pid(port)
            if pid is None:
                logger.debug("%s: nothing listening on port %s", role.name, port)
                continue
            if pid not in pids:
                pids.append(pid)
        return pids
