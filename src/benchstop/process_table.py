"""Process table access and command-line pattern lookup."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Protocol, Sequence

import psutil

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessEntry:
    """A running process as seen in the process table."""

    pid: int
    name: str = ""
    cmdline: Sequence[str] = field(default_factory=tuple)

    @property
    def command(self) -> str:
        return " ".join(self.cmdline)


class ProcessTable(Protocol):
    """Minimal contract for listing running processes."""

    def list_processes(self) -> List[ProcessEntry]: ...


class PsutilProcessTable:
    """Process table backed by ``psutil.process_iter``."""

    def list_processes(self) -> List[ProcessEntry]:
        entries: List[ProcessEntry] = []
        for proc in psutil.process_iter(["pid", "name", "cmdline"]):
            try:
                info = proc.info
                cmdline_value = info.get("cmdline")
                cmdline: list[str] = []
                if isinstance(cmdline_value, list):
                    cmdline = [str(arg) for arg in cmdline_value]
                name_value = info.get("name")
                entries.append(ProcessEntry(pid=int(info["pid"]), name="" if name_value is None else str(name_value), cmdline=tuple(cmdline)))
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                continue
        return entries


def filter_processes_by_pid(processes: Iterable[ProcessEntry], exclude_pid: Optional[int]) -> List[ProcessEntry]:
    """Return all processes except those matching the excluded PID."""
    if exclude_pid is None:
        return list(processes)
    return [proc for proc in processes if proc.pid != exclude_pid]


def find_by_pattern(processes: Iterable[ProcessEntry], pattern: str) -> List[ProcessEntry]:
    """Return processes whose joined command line contains *pattern*, lowest pid first."""
    if not pattern:
        return []
    matches = [proc for proc in processes if proc.cmdline and pattern in proc.command]
    return sorted(matches, key=lambda proc: proc.pid)


__all__ = [
    "ProcessEntry",
    "ProcessTable",
    "PsutilProcessTable",
    "filter_processes_by_pid",
    "find_by_pattern",
]
