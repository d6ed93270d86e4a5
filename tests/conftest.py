"""Root pytest configuration and shared fixtures."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from benchstop.config import BenchSettings
from tests.helpers.fakes import FakeClock, FakeSignaller


@pytest.fixture(autouse=True)
def _isolate_benchstop_env(monkeypatch):
    """Keep the developer's BENCHSTOP_* variables out of every test."""
    for name in list(os.environ):
        if name.startswith("BENCHSTOP_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def bench_dir(tmp_path: Path) -> Path:
    """A minimal bench root: Procfile, config/pids/ and sites/."""
    root = tmp_path / "frappe-bench"
    (root / "config" / "pids").mkdir(parents=True)
    (root / "sites").mkdir()
    (root / "Procfile").write_text("web: bench serve --port 8000\n")
    return root


@pytest.fixture
def settings(bench_dir: Path) -> BenchSettings:
    return BenchSettings(bench_dir=bench_dir)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def signaller(clock: FakeClock) -> FakeSignaller:
    return FakeSignaller(clock=clock)
