"""Signal delivery and liveness probing for resolved pids."""

from __future__ import annotations

import logging
import signal
from typing import Dict, Optional, Protocol

import psutil

from .errors import SignalPermissionDeniedError, SignalTargetVanishedError

logger = logging.getLogger(__name__)


class ProcessSignaller(Protocol):
    """Capability interface used by the resolver and the terminator."""

    def is_alive(self, pid: Optional[int]) -> bool: ...

    def terminate(self, pid: int) -> None: ...

    def kill(self, pid: int) -> None: ...


class PsutilSignaller:
    """psutil-backed signaller.

    A ``psutil.Process`` handle is kept per pid for the lifetime of the
    signaller. psutil compares the process creation time before every signal,
    so a pid that the OS recycles mid-run reads as dead and is never signalled.
    """

    def __init__(self) -> None:
        self._handles: Dict[int, psutil.Process] = {}

    def _handle(self, pid: int) -> psutil.Process:
        handle = self._handles.get(pid)
        if handle is None:
            handle = psutil.Process(pid)
            self._handles[pid] = handle
        return handle

    def is_alive(self, pid: Optional[int]) -> bool:
        if pid is None or pid <= 0:
            return False
        if pid not in self._handles and not psutil.pid_exists(pid):
            return False
        try:
            handle = self._handle(pid)
            if not handle.is_running():
                return False
            return handle.status() != psutil.STATUS_ZOMBIE
        except psutil.NoSuchProcess:
            return False
        except psutil.AccessDenied:
            # Exists but belongs to another user; the zero-signal probe still sees it.
            return True

    def _send(self, pid: int, sig: int) -> None:
        signal_name = signal.Signals(sig).name
        try:
            self._handle(pid).send_signal(sig)
        except psutil.NoSuchProcess as exc:
            raise SignalTargetVanishedError(pid, signal_name) from exc
        except psutil.AccessDenied as exc:
            raise SignalPermissionDeniedError(pid, signal_name) from exc
        logger.debug("Sent %s to PID %s", signal_name, pid)

    def terminate(self, pid: int) -> None:
        self._send(pid, signal.SIGTERM)

    def kill(self, pid: int) -> None:
        self._send(pid, signal.SIGKILL)


__all__ = ["ProcessSignaller", "PsutilSignaller"]
