from __future__ import annotations

from typing import List, Protocol


class PortBackendUnavailable(RuntimeError):
    """Raised when a backend cannot introspect ports on this host."""


class PortLookupBackend(Protocol):
    """Contract shared by every port-to-pid backend."""

    name: str

    def is_available(self) -> bool: ...

    def find_listening_pids(self, port: int) -> List[int]:
        """Return pids listening on *port*; raise PortBackendUnavailable if the host refuses."""
        ...
