"""Shared test fixtures for monitorkey.

Provides reusable fixtures for isolated config environments, fixed
credentials, managing output state, and running CLI commands. These
fixtures are automatically discovered by pytest.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from monitorkey.models import Credential
from monitorkey.output import OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test, the cached references go stale once the test finishes.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Credential fixtures
# ---------------------------------------------------------------------------


class FixedGenerator:
    """Credential source that always returns the same credential."""

    def __init__(self, credential: Credential) -> None:
        self.credential = credential
        self.calls = 0

    def generate(self) -> Credential:
        self.calls += 1
        return self.credential


@pytest.fixture
def credential() -> Credential:
    """A credential with short, distinctive values."""
    return Credential(token="xyz789", subject="abc123", public_key="deadbeef")


@pytest.fixture
def fixed_generator(credential: Credential) -> FixedGenerator:
    """Generator returning :func:`credential` on every call."""
    return FixedGenerator(credential)


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Forces the XDG layout, points XDG_CONFIG_HOME and XDG_DATA_HOME at
    subdirectories of tmp_path, clears MONITORKEY_* environment variables,
    and changes the working directory to tmp_path.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setattr("monitorkey.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))

    for var in ["MONITORKEY_FORMAT", "MONITORKEY_EXPIRATION"]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet, colourless OutputManager for the test."""
    output = OutputManager(no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
