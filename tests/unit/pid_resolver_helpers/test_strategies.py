from __future__ import annotations

from pathlib import Path

from benchstop.pid_resolver_helpers import PatternStrategy, PidFileStrategy, PortStrategy
from benchstop.port_lookup import PortLookup
from benchstop.process_table import ProcessEntry
from benchstop.roles import JsonConfigPort, RedisConfPort, Role
from tests.helpers.fakes import FakePortBackend


class _StaticTable:
    def __init__(self, entries):
        self.entries = entries

    def list_processes(self):
        return list(self.entries)


def test_pidfile_strategy_without_pid_file():
    role = Role(name="Bench Worker", timeout_seconds=10, patterns=("worker",))
    assert PidFileStrategy().candidates(role) == []


def test_pidfile_strategy_reads_value(tmp_path: Path):
    pid_file = tmp_path / "redis_cache.pid"
    pid_file.write_text(" 321 \n")
    role = Role(name="Redis (cache)", timeout_seconds=5, pid_file=pid_file)

    assert PidFileStrategy().candidates(role) == [321]


def test_port_strategy_tries_sources_in_order(tmp_path: Path):
    conf = tmp_path / "redis_cache.conf"
    conf.write_text("port 13000\n")
    site_config = tmp_path / "common_site_config.json"
    site_config.write_text('{"redis_cache": "redis://localhost:13001"}')
    backend = FakePortBackend(listeners={13000: [10], 13001: [11]})
    role = Role(
        name="Redis (cache)",
        timeout_seconds=5,
        port_sources=(RedisConfPort(conf), JsonConfigPort(site_config, "redis_cache")),
    )

    assert PortStrategy(PortLookup([backend])).candidates(role) == [10, 11]
    assert backend.queries == [13000, 13001]


def test_port_strategy_skips_missing_config(tmp_path: Path):
    backend = FakePortBackend(listeners={13000: [10]})
    role = Role(name="Redis (cache)", timeout_seconds=5, port_sources=(RedisConfPort(tmp_path / "absent.conf"),))

    assert PortStrategy(PortLookup([backend])).candidates(role) == []
    assert backend.queries == []


def test_pattern_strategy_orders_by_pid_and_excludes_self():
    table = _StaticTable(
        [
            ProcessEntry(pid=30, cmdline=("node", "socketio.js")),
            ProcessEntry(pid=7, cmdline=("node", "/bench/apps/frappe/socketio.js")),
            ProcessEntry(pid=99, cmdline=("bench-stop", "socketio.js")),
            ProcessEntry(pid=12, cmdline=("redis-server",)),
        ]
    )
    role = Role(name="Socket.io", timeout_seconds=5, patterns=("socketio.js",))

    assert PatternStrategy(table, exclude_pid=99).candidates(role) == [7, 30]


def test_pattern_strategy_is_case_sensitive():
    table = _StaticTable([ProcessEntry(pid=5, cmdline=("Yarn", "Run", "Watch"))])
    role = Role(name="Yarn Watch", timeout_seconds=5, patterns=("yarn run watch",))

    assert PatternStrategy(table, exclude_pid=1).candidates(role) == []
