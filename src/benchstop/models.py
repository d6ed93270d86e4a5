from __future__ import annotations

"""Result types for a shutdown run."""


from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .errors import EnvironmentInvalidError

EXIT_OK = 0
EXIT_KILL_FAILED = 1
EXIT_ENVIRONMENT_INVALID = 2


class TerminationOutcome(Enum):
    """Terminal states of the termination protocol."""

    NOT_RUNNING = "not-running"
    STOPPED_GRACEFULLY = "stopped-gracefully"
    FORCE_KILLED = "force-killed"
    KILL_FAILED = "kill-failed"

    @property
    def is_failure(self) -> bool:
        return self is TerminationOutcome.KILL_FAILED


class ResolutionSource(Enum):
    """Which strategy located the pid for a role."""

    PID_FILE = "pidfile"
    PORT = "port"
    PATTERN = "pattern"


@dataclass(frozen=True)
class RoleResult:
    role_name: str
    outcome: TerminationOutcome
    pid: Optional[int] = None
    source: Optional[ResolutionSource] = None


@dataclass
class ShutdownSummary:
    """Ordered per-role results of a single run."""

    results: List[RoleResult] = field(default_factory=list)
    environment_error: Optional[EnvironmentInvalidError] = None

    def record(self, result: RoleResult) -> None:
        self.results.append(result)

    @property
    def failed_roles(self) -> List[str]:
        return [result.role_name for result in self.results if result.outcome.is_failure]

    @property
    def succeeded(self) -> bool:
        return self.environment_error is None and not self.failed_roles

    @property
    def exit_code(self) -> int:
        if self.environment_error is not None:
            return EXIT_ENVIRONMENT_INVALID
        if self.failed_roles:
            return EXIT_KILL_FAILED
        return EXIT_OK

    def counts(self) -> Dict[TerminationOutcome, int]:
        tally = Counter(result.outcome for result in self.results)
        return {outcome: tally.get(outcome, 0) for outcome in TerminationOutcome}

    def describe(self) -> str:
        """One-line human summary."""
        if self.environment_error is not None:
            return f"Aborted: {self.environment_error}"
        parts = [f"{count} {outcome.value}" for outcome, count in self.counts().items() if count]
        detail = ", ".join(parts) if parts else "no roles processed"
        if self.failed_roles:
            return f"Completed with failures ({detail}); manual intervention needed for: " + ", ".join(self.failed_roles)
        return f"All bench processes stopped ({detail})"


__all__ = [
    "EXIT_ENVIRONMENT_INVALID",
    "EXIT_KILL_FAILED",
    "EXIT_OK",
    "ResolutionSource",
    "RoleResult",
    "ShutdownSummary",
    "TerminationOutcome",
]
