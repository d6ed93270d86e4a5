"""Recorded pid-file lookup."""

from __future__ import annotations

import logging
from typing import List

from ..config_readers import read_pid_file
from ..models import ResolutionSource
from ..roles import Role

logger = logging.getLogger(__name__)


class PidFileStrategy:
    source = ResolutionSource.PID_FILE

    def candidates(self, role: Role) -> List[int]:
        if role.pid_file is None:
            return []
        pid = read_pid_file(role.pid_file)
        if pid is None:
            return []
        logger.debug("%s: pid file %s records PID %s", role.name, role.pid_file, pid)
        return [pid]
