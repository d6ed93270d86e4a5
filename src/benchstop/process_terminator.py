"""
Graceful-then-forceful termination of a single resolved process.

Protocol:
    1. Probe the pid. A dead or empty pid is ``not-running``.
    2. Send SIGTERM, then poll once per interval for up to ``timeout_seconds``
       polls. The first poll that finds the process gone is
       ``stopped-gracefully``.
    3. Otherwise send SIGKILL once, wait the kill grace interval and probe
       again: ``force-killed`` if gone, ``kill-failed`` if still alive.

Signal errors never propagate; they are logged and mapped to an outcome.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Callable, Optional

from .config.bench import DEFAULT_KILL_GRACE_SECONDS, DEFAULT_POLL_INTERVAL_SECONDS
from .errors import SignalPermissionDeniedError, SignalTargetVanishedError
from .models import TerminationOutcome
from .signaller import ProcessSignaller

logger = logging.getLogger(__name__)

Sleeper = Callable[[float], None]


class ProcessTerminator:
    """Drive one pid through the termination protocol."""

    def __init__(
        self,
        signaller: ProcessSignaller,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
        kill_grace: float = DEFAULT_KILL_GRACE_SECONDS,
        sleep: Sleeper = time.sleep,
    ):
        self._signaller = signaller
        self._poll_interval = poll_interval
        self._kill_grace = kill_grace
        self._sleep = sleep

    def _poll_budget(self, timeout_seconds: float) -> int:
        if timeout_seconds <= 0:
            return 0
        return max(1, math.ceil(timeout_seconds / self._poll_interval))

    def terminate(self, pid: Optional[int], role_name: str, timeout_seconds: float) -> TerminationOutcome:
        if pid is None or pid <= 0 or not self._signaller.is_alive(pid):
            logger.warning("%s: Process not running (PID: %s)", role_name, pid if pid else "none")
            return TerminationOutcome.NOT_RUNNING

        logger.info("%s: Stopping gracefully (PID: %s)...", role_name, pid)
        try:
            self._signaller.terminate(pid)
        except SignalTargetVanishedError:
            logger.warning("%s: Process exited before SIGTERM was delivered (PID: %s)", role_name, pid)
            return TerminationOutcome.NOT_RUNNING
        except SignalPermissionDeniedError as exc:
            logger.error("%s: %s", role_name, exc)
            return TerminationOutcome.KILL_FAILED

        if self._wait_for_exit(pid, role_name, timeout_seconds):
            logger.info("%s: Stopped successfully", role_name)
            return TerminationOutcome.STOPPED_GRACEFULLY

        return self._escalate(pid, role_name, timeout_seconds)

    def _wait_for_exit(self, pid: int, role_name: str, timeout_seconds: float) -> bool:
        polls = self._poll_budget(timeout_seconds)
        for attempt in range(1, polls + 1):
            self._sleep(self._poll_interval)
            if not self._signaller.is_alive(pid):
                return True
            logger.debug("%s: PID %s still alive after poll %d/%d", role_name, pid, attempt, polls)
        # A zero budget still gets one immediate check before escalating
        return polls == 0 and not self._signaller.is_alive(pid)

    def _escalate(self, pid: int, role_name: str, timeout_seconds: float) -> TerminationOutcome:
        logger.warning("%s: Still running after %ss, forcing shutdown...", role_name, _format_seconds(timeout_seconds))
        try:
            self._signaller.kill(pid)
        except SignalTargetVanishedError:
            logger.info("%s: Stopped successfully", role_name)
            return TerminationOutcome.STOPPED_GRACEFULLY
        except SignalPermissionDeniedError as exc:
            logger.error("%s: Failed to kill process (PID: %s): %s", role_name, pid, exc)
            return TerminationOutcome.KILL_FAILED

        self._sleep(self._kill_grace)
        if self._signaller.is_alive(pid):
            logger.error("%s: Failed to kill process (PID: %s)", role_name, pid)
            return TerminationOutcome.KILL_FAILED
        logger.warning("%s: Force killed (PID: %s)", role_name, pid)
        return TerminationOutcome.FORCE_KILLED


def _format_seconds(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


__all__ = ["ProcessTerminator"]
