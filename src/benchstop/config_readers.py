"""
Readers for the scalar values the resolver needs from bench configuration.

Every reader is read-only and forgiving: a missing file, an unreadable file
or an absent key yields ``None`` so callers can treat the source as
inapplicable rather than as a failure.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

_REDIS_PORT_LINE = re.compile(r"^port\s+(\d+)\s*$")
_URL_PORT = re.compile(r":(\d+)(?:/[^:]*)?\s*$")
_MAX_PORT = 65535


def parse_pid(raw: Optional[str]) -> Optional[int]:
    """Return a positive pid from *raw*, or ``None`` for empty, zero or garbage."""
    if raw is None:
        return None
    text = "".join(raw.split())
    if not text.isdecimal():
        return None
    pid = int(text)
    return pid if pid > 0 else None


def _coerce_port(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        port = value
    elif isinstance(value, str):
        stripped = value.strip()
        if stripped.isdecimal():
            port = int(stripped)
        else:
            match = _URL_PORT.search(stripped)
            if not match:
                return None
            port = int(match.group(1))
    else:
        return None
    if 0 < port <= _MAX_PORT:
        return port
    return None


def _read_text(path: Path) -> Optional[str]:
    if not path.is_file():
        return None
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.debug("Could not read %s: %s", path, exc)
        return None


def read_pid_file(path: Path) -> Optional[int]:
    """Read a recorded pid; absent, empty or malformed files give ``None``."""
    content = _read_text(path)
    if content is None:
        return None
    pid = parse_pid(content)
    if pid is None:
        logger.debug("Ignoring pid file %s with unusable content %r", path, content[:32])
    return pid


def read_redis_port(path: Path) -> Optional[int]:
    """Return the value of the first ``port <number>`` line of a Redis config."""
    content = _read_text(path)
    if content is None:
        return None
    for line in content.splitlines():
        match = _REDIS_PORT_LINE.match(line.strip())
        if match:
            return _coerce_port(match.group(1))
    return None


def _lookup_key(payload: Any, key: str) -> Any:
    if isinstance(payload, dict) and key in payload:
        return payload[key]
    node = payload
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def _scan_json_text(content: str, key: str) -> Optional[int]:
    """Fallback for files that are not strict JSON: find ``"key": value`` on a line."""
    leaf = key.rsplit(".", 1)[-1]
    pattern = re.compile(r'"' + re.escape(leaf) + r'"\s*:\s*"?([^",}]*)')
    for line in content.splitlines():
        match = pattern.search(line)
        if match:
            return _coerce_port(match.group(1))
    return None


def read_json_port(path: Path, key: str) -> Optional[int]:
    """Return a port stored under *key* in a JSON config file.

    *key* may be a dotted path into nested objects. The value may be a number,
    a numeric string or a URL carrying ``:<port>``, optionally followed by a
    database path, such as ``redis://127.0.0.1:13000/0``.
    """
    content = _read_text(path)
    if content is None:
        return None
    try:
        payload = json.loads(content)
    except json.JSONDecodeError:
        logger.debug("%s is not valid JSON; scanning lines for %r", path, key)
        return _scan_json_text(content, key)
    return _coerce_port(_lookup_key(payload, key))


__all__ = ["parse_pid", "read_json_port", "read_pid_file", "read_redis_port"]
