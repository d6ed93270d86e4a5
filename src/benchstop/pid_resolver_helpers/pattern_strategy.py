"""Command-line pattern lookup."""

from __future__ import annotations

import logging
import os
from typing import List, Optional

from ..models import ResolutionSource
from ..process_table import ProcessTable, filter_processes_by_pid, find_by_pattern
from ..roles import Role

logger = logging.getLogger(__name__)


class PatternStrategy:
    source = ResolutionSource.PATTERN

    def __init__(self, process_table: ProcessTable, exclude_pid: Optional[int] = None):
        self._process_table = process_table
        self._exclude_pid = os.getpid() if exclude_pid is None else exclude_pid

    def candidates(self, role: Role) -> List[int]:
        if not role.patterns:
            return []
        processes = filter_processes_by_pid(self._process_table.list_processes(), self._exclude_pid)
        pids: List[int] = []
        for pattern in role.patterns:
            matches = find_by_pattern(processes, pattern)
            if len(matches) > 1:
                logger.debug(
                    "%s: pattern %r matched %d processes; using lowest PID %s",
                    role.name,
                    pattern,
                    len(matches),
                    matches[0].pid,
                )
            pids.extend(match.pid for match in matches if match.pid not in pids)
        return pids
