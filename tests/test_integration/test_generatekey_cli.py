"""Integration tests for the ``generatekey`` and ``config`` commands.

These tests drive the real Typer application through ``CliRunner`` with a
fixed credential source, and exercise the console-script entry point's
exit-code mapping.
"""

from __future__ import annotations

import importlib
import json
import runpy
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from monitorkey import app as app_module
from monitorkey.app import app, main
from monitorkey.formats import OutputFormat
from monitorkey.keys import verify

SHELL_BLOCK = (
    "Generated ApiKey for dotnet-monitor; use the following header for authorization:\n"
    "\n"
    "Authorization: Bearer xyz789\n"
    "\n"
    "Settings in Shell format:\n"
    "\n"
    'export Authentication:MonitorApiKey:Subject="abc123"\n'
    'export Authentication:MonitorApiKey:PublicKey="deadbeef"\n'
    "\n"
)


@pytest.fixture
def expirations(monkeypatch: pytest.MonkeyPatch, fixed_generator) -> list:
    """Replace the real generator with the fixed one, recording expirations."""
    seen: list = []

    def _factory(expiration=None):
        seen.append(expiration)
        return fixed_generator

    monkeypatch.setattr("monitorkey.commands.generatekey.KeyMaterialGenerator", _factory)
    return seen


class TestGenerateKey:
    def test_shell_output(
        self, cli_runner: CliRunner, isolated_config: Path, expirations: list
    ) -> None:
        result = cli_runner.invoke(app, ["--no-color", "generatekey", "--output", "Shell"])

        assert result.exit_code == 0, result.output
        assert result.stdout == SHELL_BLOCK

    def test_default_format_is_json(
        self, cli_runner: CliRunner, isolated_config: Path, expirations: list
    ) -> None:
        result = cli_runner.invoke(app, ["--no-color", "generatekey"])

        assert result.exit_code == 0, result.output
        assert "Settings in Json format:" in result.stdout
        fragment = result.stdout.split("Settings in Json format:\n\n", 1)[1]
        assert json.loads(fragment) == {
            "Authentication": {
                "MonitorApiKey": {"Subject": "abc123", "PublicKey": "deadbeef"}
            }
        }

    def test_format_is_case_insensitive(
        self, cli_runner: CliRunner, isolated_config: Path, expirations: list
    ) -> None:
        result = cli_runner.invoke(app, ["--no-color", "generatekey", "-o", "powershell"])

        assert result.exit_code == 0, result.output
        assert '$env:Authentication:MonitorApiKey:Subject="abc123"' in result.stdout

    def test_format_from_environment(
        self,
        cli_runner: CliRunner,
        isolated_config: Path,
        expirations: list,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("MONITORKEY_FORMAT", "Cmd")

        result = cli_runner.invoke(app, ["--no-color", "generatekey"])

        assert result.exit_code == 0, result.output
        assert "set Authentication:MonitorApiKey:PublicKey=deadbeef" in result.stdout

    def test_unknown_format_fails_without_output(
        self, cli_runner: CliRunner, isolated_config: Path, expirations: list
    ) -> None:
        result = cli_runner.invoke(app, ["--no-color", "generatekey", "-o", "Yaml"])

        assert result.exit_code == 2
        assert "Unknown output format: Yaml" in result.output
        assert "Authorization" not in result.output
        assert expirations == []

    def test_help_lists_every_format(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("COLUMNS", "200")
        result = cli_runner.invoke(app, ["--no-color", "generatekey", "--help"])

        assert result.exit_code == 0, result.output
        for name in OutputFormat.names():
            assert name in result.output

    def test_expiration_passed_to_generator(
        self, cli_runner: CliRunner, isolated_config: Path, expirations: list
    ) -> None:
        result = cli_runner.invoke(app, ["--no-color", "generatekey", "--expiration", "600"])

        assert result.exit_code == 0, result.output
        assert expirations == [600]

    def test_path_separator_from_config(
        self, cli_runner: CliRunner, isolated_config: Path, expirations: list
    ) -> None:
        (isolated_config / "monitorkey.json").write_text('{"path_separator": "__"}')

        result = cli_runner.invoke(app, ["--no-color", "generatekey", "-o", "Shell"])

        assert result.exit_code == 0, result.output
        assert 'export Authentication__MonitorApiKey__Subject="abc123"' in result.stdout

    def test_output_file(
        self, cli_runner: CliRunner, isolated_config: Path, expirations: list
    ) -> None:
        target = isolated_config / "key.env"

        result = cli_runner.invoke(
            app,
            ["--no-color", "generatekey", "-o", "Shell", "--output-file", str(target)],
        )

        assert result.exit_code == 0, result.output
        assert target.read_text(encoding="utf-8") == SHELL_BLOCK
        assert "xyz789" not in result.stdout

    def test_real_generator_output_verifies(
        self, cli_runner: CliRunner, isolated_config: Path
    ) -> None:
        result = cli_runner.invoke(app, ["--no-color", "generatekey", "-o", "Text"])

        assert result.exit_code == 0, result.output
        lines = result.stdout.splitlines()
        token = lines[2].removeprefix("Authorization: Bearer ")
        subject = next(line for line in lines if line.startswith("Subject: "))[9:]
        public_key = next(line for line in lines if line.startswith("Public Key: "))[12:]

        assert verify(token, subject, public_key)["sub"] == subject


class TestConfigCommands:
    def test_set_and_show(self, cli_runner: CliRunner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["--no-color", "config", "set", "default_format", "shell"])
        assert result.exit_code == 0, result.output

        result = cli_runner.invoke(app, ["--no-color", "config", "show"])
        assert result.exit_code == 0, result.output
        assert '"default_format": "Shell"' in result.stdout

    def test_set_unknown_format(self, cli_runner: CliRunner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["--no-color", "config", "set", "default_format", "Yaml"])

        assert result.exit_code == 2
        assert "Unknown output format: Yaml" in result.output

    def test_set_unknown_key(self, cli_runner: CliRunner, isolated_config: Path) -> None:
        result = cli_runner.invoke(app, ["--no-color", "config", "set", "colour", "blue"])

        assert result.exit_code == 2

    def test_set_expiration_and_clear(self, cli_runner: CliRunner, isolated_config: Path) -> None:
        from monitorkey.config import load_global_config

        cli_runner.invoke(app, ["config", "set", "expiration_seconds", "3600"])
        assert load_global_config().expiration_seconds == 3600

        cli_runner.invoke(app, ["config", "set", "expiration_seconds", "none"])
        assert load_global_config().expiration_seconds is None

    def test_reset_force(self, cli_runner: CliRunner, isolated_config: Path) -> None:
        from monitorkey.config import load_global_config

        cli_runner.invoke(app, ["config", "set", "default_format", "Cmd"])
        result = cli_runner.invoke(app, ["--no-color", "config", "reset", "--force"])

        assert result.exit_code == 0, result.output
        assert load_global_config().default_format == "Json"


class TestMain:
    @pytest.fixture(autouse=True)
    def _no_signal_handlers(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(app_module, "_setup_signal_handlers", lambda: None)

    def test_import_does_not_run(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list = []
        monkeypatch.setattr(app_module, "main", lambda: calls.append(True))

        importlib.import_module("monitorkey.__main__")
        runpy.run_module("monitorkey.__main__", run_name="monitorkey.__main__")
        assert calls == []

        runpy.run_module("monitorkey", run_name="__main__")
        assert calls == [True]

    def test_version(self, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        monkeypatch.setattr(sys, "argv", ["monitorkey", "--version"])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("monitorkey ")

    def test_unknown_format_exit_code(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch, capsys
    ) -> None:
        monkeypatch.setattr(
            sys, "argv", ["monitorkey", "--no-color", "generatekey", "-o", "Yaml"]
        )

        with pytest.raises(SystemExit) as exc_info:
            main()

        captured = capsys.readouterr()
        assert exc_info.value.code == 2
        assert captured.out == ""
        assert "Unknown output format: Yaml" in captured.err

    def test_unexpected_error_writes_crash_log(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch, capsys
    ) -> None:
        def _boom(*args, **kwargs) -> str:
            raise RuntimeError("entropy source unavailable")

        monkeypatch.setattr("monitorkey.commands.generatekey.generate_api_key_text", _boom)
        monkeypatch.setattr(sys, "argv", ["monitorkey", "--no-color", "generatekey"])

        with pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
        assert "Unexpected error" in capsys.readouterr().err
        logs = list((isolated_config / "data" / "monitorkey" / "logs").glob("crash-*.log"))
        assert len(logs) == 1
        assert "entropy source unavailable" in logs[0].read_text()
