"""Graceful, dependency-ordered shutdown of Frappe bench processes."""

from .config import BenchSettings, ConfigurationError, load_bench_settings
from .errors import (
    BenchStopError,
    EnvironmentInvalidError,
    SignalPermissionDeniedError,
    SignalTargetVanishedError,
)
from .models import ResolutionSource, RoleResult, ShutdownSummary, TerminationOutcome
from .orchestrator import Orchestrator, check_environment, run_shutdown
from .pid_resolver import PidResolver
from .process_terminator import ProcessTerminator
from .roles import Role, default_bench_roles

__all__ = [
    "BenchSettings",
    "BenchStopError",
    "ConfigurationError",
    "EnvironmentInvalidError",
    "Orchestrator",
    "PidResolver",
    "ProcessTerminator",
    "ResolutionSource",
    "Role",
    "RoleResult",
    "ShutdownSummary",
    "SignalPermissionDeniedError",
    "SignalTargetVanishedError",
    "TerminationOutcome",
    "check_environment",
    "default_bench_roles",
    "load_bench_settings",
    "run_shutdown",
]
