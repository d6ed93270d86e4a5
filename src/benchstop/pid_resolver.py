"""
PID resolution for bench roles.

Strategies run in priority order (pid file, listening port, command-line
pattern). Every candidate is re-probed before it is accepted, so a stale
pid file or a port entry for a process that just exited falls through to
the next strategy instead of being trusted.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence, Tuple

from .models import ResolutionSource
from .pid_resolver_helpers import PatternStrategy, PidFileStrategy, PortStrategy
from .port_lookup import PortLookup
from .process_table import ProcessTable, PsutilProcessTable
from .roles import Role
from .signaller import ProcessSignaller

logger = logging.getLogger(__name__)


class ResolutionStrategy(Protocol):
    source: ResolutionSource

    def candidates(self, role: Role) -> List[int]: ...


class PidResolver:
    """Map a Role to the single live pid currently embodying it."""

    def __init__(self, signaller: ProcessSignaller, strategies: Sequence[ResolutionStrategy]):
        self._signaller = signaller
        self._strategies = list(strategies)

    @classmethod
    def create(
        cls,
        signaller: ProcessSignaller,
        *,
        port_lookup: Optional[PortLookup] = None,
        process_table: Optional[ProcessTable] = None,
        exclude_pid: Optional[int] = None,
    ) -> "PidResolver":
        """Build a resolver with the standard strategy chain."""
        strategies: List[ResolutionStrategy] = [
            PidFileStrategy(),
            PortStrategy(port_lookup or PortLookup()),
            PatternStrategy(process_table or PsutilProcessTable(), exclude_pid=exclude_pid),
        ]
        return cls(signaller, strategies)

    def resolve_with_source(self, role: Role) -> Tuple[Optional[int], Optional[ResolutionSource]]:
        for strategy in self._strategies:
            for pid in strategy.candidates(role):
                if pid <= 0:
                    continue
                if self._signaller.is_alive(pid):
                    logger.debug("%s: resolved PID %s via %s", role.name, pid, strategy.source.value)
                    return pid, strategy.source
                logger.debug("%s: ignoring stale PID %s from %s", role.name, pid, strategy.source.value)
        return None, None

    def resolve(self, role: Role) -> Optional[int]:
        pid, _ = self.resolve_with_source(role)
        return pid


__all__ = ["PidResolver", "ResolutionStrategy"]
