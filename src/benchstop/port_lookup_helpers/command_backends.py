"""Port lookup through the ``lsof``, ``ss`` and ``netstat`` utilities."""

from __future__ import annotations

import logging
import re
import shutil
import subprocess
from typing import Callable, List, Optional, Sequence

from .base import PortBackendUnavailable

logger = logging.getLogger(__name__)

COMMAND_TIMEOUT_SECONDS = 5.0

CommandRunner = Callable[[Sequence[str]], str]
_PID_FIELD = re.compile(r"pid=(\d+)")
_NETSTAT_PID = re.compile(r"^(\d+)/")


def run_command(argv: Sequence[str]) -> str:
    """Run *argv* and return its stdout; a non-zero exit status is not an error."""
    try:
        result = subprocess.run(
            list(argv),
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            check=False,
            timeout=COMMAND_TIMEOUT_SECONDS,
        )
    except subprocess.TimeoutExpired as exc:
        raise PortBackendUnavailable(f"{argv[0]} timed out after {COMMAND_TIMEOUT_SECONDS}s") from exc
    except OSError as exc:
        raise PortBackendUnavailable(f"{argv[0]} could not be executed: {exc}") from exc
    return result.stdout or ""


def _local_address_matches(address: str, port: int) -> bool:
    return address.rsplit(":", 1)[-1] == str(port)


class _CommandBackend:
    name = ""
    executable = ""

    def __init__(self, runner: Optional[CommandRunner] = None, which: Callable[[str], Optional[str]] = shutil.which):
        self._runner = runner or run_command
        self._which = which

    def is_available(self) -> bool:
        return self._which(self.executable) is not None

    def find_listening_pids(self, port: int) -> List[int]:
        output = self._runner(self.command(port))
        pids = {pid for pid in self.parse(output, port) if pid > 0}
        return sorted(pids)

    def command(self, port: int) -> List[str]:
        raise NotImplementedError

    def parse(self, output: str, port: int) -> List[int]:
        raise NotImplementedError


class LsofBackend(_CommandBackend):
    name = "lsof"
    executable = "lsof"

    def command(self, port: int) -> List[str]:
        return ["lsof", "-nP", f"-iTCP:{port}", "-sTCP:LISTEN", "-t"]

    def parse(self, output: str, port: int) -> List[int]:
        return [int(line.strip()) for line in output.splitlines() if line.strip().isdecimal()]


class SsBackend(_CommandBackend):
    name = "ss"
    executable = "ss"

    def command(self, port: int) -> List[str]:
        return ["ss", "-ltnp"]

    def parse(self, output: str, port: int) -> List[int]:
        pids: List[int] = []
        for line in output.splitlines():
            fields = line.split()
            # State Recv-Q Send-Q Local Peer Process
            if len(fields) < 6 or not _local_address_matches(fields[3], port):
                continue
            pids.extend(int(match) for match in _PID_FIELD.findall(line))
        return pids


class NetstatBackend(_CommandBackend):
    name = "netstat"
    executable = "netstat"

    def command(self, port: int) -> List[str]:
        return ["netstat", "-ltnp"]

    def parse(self, output: str, port: int) -> List[int]:
        pids: List[int] = []
        for line in output.splitlines():
            fields = line.split()
            # Proto Recv-Q Send-Q Local Foreign State PID/Program
            if len(fields) < 7 or fields[5] != "LISTEN" or not _local_address_matches(fields[3], port):
                continue
            match = _NETSTAT_PID.match(fields[6])
            if match:
                pids.append(int(match.group(1)))
        return pids
