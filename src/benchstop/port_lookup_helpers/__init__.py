"""Backends that map a listening TCP port to the owning pid."""

from .base import PortBackendUnavailable, PortLookupBackend
from .command_backends import LsofBackend, NetstatBackend, SsBackend
from .psutil_backend import PsutilBackend

__all__ = [
    "LsofBackend",
    "NetstatBackend",
    "PortBackendUnavailable",
    "PortLookupBackend",
    "PsutilBackend",
    "SsBackend",
]
