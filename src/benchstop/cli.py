"""Command-line entry point: ``bench-stop`` / ``python -m benchstop``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .config import BenchSettings, ConfigurationError, load_bench_settings
from .logging_config import setup_logging
from .models import EXIT_ENVIRONMENT_INVALID
from .orchestrator import run_shutdown
from .roles import Role, default_bench_roles, select_roles

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bench-stop",
        description="Gracefully stop every process of a Frappe bench in dependency order.",
    )
    parser.add_argument(
        "--bench-dir",
        type=Path,
        default=None,
        help="Bench root (default: $BENCHSTOP_BENCH_DIR or the current directory)",
    )
    parser.add_argument(
        "--only",
        action="append",
        metavar="ROLE",
        help="Stop only the named role; repeat for several (e.g. --only 'Redis (cache)')",
    )
    parser.add_argument("--list-roles", action="store_true", help="Print the shutdown order and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show resolution details")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write a detailed log to this file")
    return parser


def _describe_role(index: int, role: Role) -> str:
    hints: List[str] = []
    if role.pid_file is not None:
        hints.append(f"pidfile={role.pid_file}")
    hints.extend(f"port={source.describe()}" for source in role.port_sources)
    hints.extend(f"pattern={pattern!r}" for pattern in role.patterns)
    timeout = f"{role.timeout_seconds:g}s"
    return f"{index:2d}. {role.name} (timeout {timeout}): " + "; ".join(hints)


def _print_roles(roles: Sequence[Role]) -> None:
    for index, role in enumerate(roles, start=1):
        print(_describe_role(index, role))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings: BenchSettings = load_bench_settings(args.bench_dir)
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_ENVIRONMENT_INVALID

    setup_logging(verbose=args.verbose, quiet=settings.quiet, log_file=args.log_file)

    try:
        roles = select_roles(default_bench_roles(settings), args.only)
    except ValueError as exc:
        parser.error(str(exc))

    if args.list_roles:
        _print_roles(roles)
        return 0

    try:
        summary = run_shutdown(settings, roles)
    except KeyboardInterrupt:
        logger.error("Interrupted; remaining roles were not processed")
        return EXIT_INTERRUPTED
    return summary.exit_code


if __name__ == "__main__":
    sys.exit(main())
