from __future__ import annotations

import pytest

from benchstop.config import ConfigurationError, env_bool, env_float, env_seconds, env_str, load_default_values


def test_env_str_prefers_environment_over_defaults(monkeypatch):
    monkeypatch.setenv("BENCHSTOP_SAMPLE", "from-env")

    assert env_str("BENCHSTOP_SAMPLE", defaults={"BENCHSTOP_SAMPLE": "from-file"}) == "from-env"


def test_env_str_uses_defaults_then_fallback(monkeypatch):
    monkeypatch.delenv("BENCHSTOP_SAMPLE", raising=False)

    assert env_str("BENCHSTOP_SAMPLE", defaults={"BENCHSTOP_SAMPLE": "from-file"}) == "from-file"
    assert env_str("BENCHSTOP_SAMPLE", or_value="fallback") == "fallback"


def test_env_str_required(monkeypatch):
    monkeypatch.delenv("BENCHSTOP_SAMPLE", raising=False)

    with pytest.raises(ConfigurationError, match="is not set"):
        env_str("BENCHSTOP_SAMPLE", required=True)


def test_env_float_parses(monkeypatch):
    monkeypatch.setenv("BENCHSTOP_SAMPLE", "2.5")
    assert env_float("BENCHSTOP_SAMPLE") == 2.5


def test_env_float_rejects_garbage(monkeypatch):
    monkeypatch.setenv("BENCHSTOP_SAMPLE", "ten")

    with pytest.raises(ConfigurationError, match="must be a float"):
        env_float("BENCHSTOP_SAMPLE")


@pytest.mark.parametrize(("raw", "expected"), [("yes", True), ("0", False), ("On", True)])
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("BENCHSTOP_SAMPLE", raw)
    assert env_bool("BENCHSTOP_SAMPLE") is expected


def test_env_bool_rejects_unknown(monkeypatch):
    monkeypatch.setenv("BENCHSTOP_SAMPLE", "maybe")

    with pytest.raises(ConfigurationError):
        env_bool("BENCHSTOP_SAMPLE")


def test_env_seconds_rejects_negative(monkeypatch):
    monkeypatch.setenv("BENCHSTOP_SAMPLE", "-1")

    with pytest.raises(ConfigurationError, match="non-negative"):
        env_seconds("BENCHSTOP_SAMPLE")


def test_load_default_values_reads_dotenv(tmp_path):
    (tmp_path / ".env").write_text("# bench overrides\nexport BENCHSTOP_APP_TIMEOUT_SECONDS=15\nBENCHSTOP_QUIET='true'\nnot a pair\n")

    assert load_default_values(tmp_path) == {
        "BENCHSTOP_APP_TIMEOUT_SECONDS": "15",
        "BENCHSTOP_QUIET": "true",
    }


def test_load_default_values_without_file(tmp_path):
    assert load_default_values(tmp_path) == {}
