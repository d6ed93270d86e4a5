"""
Best-effort, ordered shutdown of every bench role.

Each role is resolved and terminated in declared order. A failure for one
role is recorded in the summary and never stops the remaining roles; only
an invalid bench directory aborts the run, and it does so before any
signal is sent.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

import psutil

from .config import BenchSettings
from .errors import EnvironmentInvalidError
from .models import RoleResult, ShutdownSummary, TerminationOutcome
from .pid_resolver import PidResolver
from .process_terminator import ProcessTerminator
from .roles import Role, default_bench_roles
from .signaller import ProcessSignaller, PsutilSignaller

logger = logging.getLogger(__name__)

ROLE_ERRORS = (psutil.Error, OSError, RuntimeError, ValueError)


def check_environment(settings: BenchSettings) -> None:
    """Raise EnvironmentInvalidError unless the bench root markers are present."""
    missing: List[str] = []
    if not settings.procfile.is_file():
        missing.append(settings.procfile.name)
    if not settings.config_dir.is_dir():
        missing.append(f"{settings.config_dir.name}/")
    if not settings.sites_dir.is_dir():
        missing.append(f"{settings.sites_dir.name}/")
    if missing:
        raise EnvironmentInvalidError(settings.bench_dir, missing)


class Orchestrator:
    """Run the resolver and terminator over an ordered list of roles."""

    def __init__(self, settings: BenchSettings, resolver: PidResolver, terminator: ProcessTerminator):
        self._settings = settings
        self._resolver = resolver
        self._terminator = terminator

    @classmethod
    def create(cls, settings: BenchSettings, *, signaller: Optional[ProcessSignaller] = None) -> "Orchestrator":
        """Wire the production resolver and terminator around one shared signaller."""
        shared = signaller or PsutilSignaller()
        resolver = PidResolver.create(shared)
        terminator = ProcessTerminator(
            shared,
            poll_interval=settings.poll_interval_seconds,
            kill_grace=settings.kill_grace_seconds,
        )
        return cls(settings, resolver, terminator)

    def run_shutdown(self, roles: Optional[Sequence[Role]] = None) -> ShutdownSummary:
        summary = ShutdownSummary()
        logger.info("=== Stopping Frappe Bench ===")
        logger.info("Bench directory: %s", self._settings.bench_dir)

        try:
            check_environment(self._settings)
        except EnvironmentInvalidError as exc:
            logger.error("%s", exc)
            summary.environment_error = exc
            return summary

        ordered = list(roles) if roles is not None else default_bench_roles(self._settings)
        for role in ordered:
            summary.record(self._stop_role(role))

        self._log_summary(summary)
        return summary

    def _stop_role(self, role: Role) -> RoleResult:
        pid, source = None, None
        try:
            pid, source = self._resolver.resolve_with_source(role)
            if pid is None:
                logger.warning("%s: Not running", role.name)
                return RoleResult(role_name=role.name, outcome=TerminationOutcome.NOT_RUNNING)
            outcome = self._terminator.terminate(pid, role.name, role.timeout_seconds)
        except ROLE_ERRORS as exc:
            logger.exception("%s: Unexpected error while stopping: %s", role.name, exc)
            return RoleResult(role_name=role.name, outcome=TerminationOutcome.KILL_FAILED, pid=pid, source=source)
        return RoleResult(role_name=role.name, outcome=outcome, pid=pid, source=source)

    @staticmethod
    def _log_summary(summary: ShutdownSummary) -> None:
        if summary.failed_roles:
            logger.error("=== %s ===", summary.describe())
        else:
            logger.info("=== %s ===", summary.describe())


def run_shutdown(
    settings: BenchSettings,
    roles: Optional[Sequence[Role]] = None,
    *,
    signaller: Optional[ProcessSignaller] = None,
) -> ShutdownSummary:
    """Stop *roles* (the full bench role list by default) and return the summary."""
    return Orchestrator.create(settings, signaller=signaller).run_shutdown(roles)


__all__ = ["Orchestrator", "check_environment", "run_shutdown"]
