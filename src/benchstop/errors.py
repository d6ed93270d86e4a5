"""Exception types raised while stopping bench processes."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class BenchStopError(RuntimeError):
    """Base class for shutdown failures."""


class EnvironmentInvalidError(BenchStopError):
    """Raised when the target directory does not look like a bench root."""

    def __init__(self, bench_dir: Path, missing: Sequence[str]) -> None:
        self.bench_dir = bench_dir
        self.missing = tuple(missing)
        super().__init__(
            f"{bench_dir} is not a bench directory (missing: {', '.join(self.missing)}); "
            "run from the bench root or pass --bench-dir"
        )


class SignalDeliveryError(BenchStopError):
    """Raised when a signal could not be delivered to a process."""

    def __init__(self, pid: int, signal_name: str, reason: str) -> None:
        self.pid = pid
        self.signal_name = signal_name
        super().__init__(f"Could not send {signal_name} to PID {pid}: {reason}")


class SignalPermissionDeniedError(SignalDeliveryError):
    """The caller is not allowed to signal the process."""

    def __init__(self, pid: int, signal_name: str) -> None:
        super().__init__(pid, signal_name, "permission denied")


class SignalTargetVanishedError(SignalDeliveryError):
    """The process exited (or its pid was recycled) before the signal was sent."""

    def __init__(self, pid: int, signal_name: str) -> None:
        super().__init__(pid, signal_name, "process no longer exists")


__all__ = [
    "BenchStopError",
    "EnvironmentInvalidError",
    "SignalDeliveryError",
    "SignalPermissionDeniedError",
    "SignalTargetVanishedError",
]
