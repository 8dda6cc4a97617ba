"""Fixtures for CLI integration tests.

Commands run through click's CliRunner against a StubSession; no mpv
process is launched.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, temp_dir: Path):
    """Ignore the user's config file and environment; skip settle delays."""
    for var in (
        "MPV_PROBE_MPV_PATH",
        "MPV_PROBE_STARTUP_TIMEOUT_MS",
        "MPV_PROBE_REQUEST_TIMEOUT_MS",
        "MPV_PROBE_LOAD_TIMEOUT_MS",
        "MPV_PROBE_PAUSE_ON_START",
        "MPV_PROBE_EXTENSIONS",
        "MPV_PROBE_RULES_PATH",
        "MPV_PROBE_LOG_LEVEL",
        "MPV_PROBE_DATA_DIR",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("MPV_PROBE_CONFIG_PATH", str(temp_dir / "no-config.toml"))
    monkeypatch.setenv("MPV_PROBE_SETTLE_DELAY_MS", "0")


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Leave the root logger to pytest."""
    with patch("mpv_probe.cli._configure_logging"):
        yield


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()
