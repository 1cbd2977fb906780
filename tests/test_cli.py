"""Tests for the top-level aios-core command dispatcher."""

from __future__ import annotations

import pytest
import yaml

from aios_core import __version__
from aios_core.cli.main import COMMANDS, CommandSpec, build_cli, run

BROKEN = CommandSpec("broken", "aios_core.cli.no_such_module", "broken_cmd")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("AIOS_DEBUG", raising=False)
    monkeypatch.delenv("AIOS_PACKAGE_MANAGER", raising=False)


class TestBuildCli:
    def test_registers_all_commands(self):
        cli = build_cli()
        assert sorted(cli.commands) == sorted(spec.name for spec in COMMANDS)

    def test_broken_command_is_left_out(self, capsys):
        cli = build_cli([*COMMANDS, BROKEN])

        assert "broken" not in cli.commands
        assert "install" in cli.commands
        assert capsys.readouterr().err == ""

    def test_broken_command_warning_in_debug(self, capsys):
        build_cli([BROKEN], debug=True)

        err = capsys.readouterr().err
        assert 'Warning: Failed to load "broken" command:' in err

    def test_non_command_attribute(self):
        spec = CommandSpec("odd", "aios_core.cli.main", "PROG_NAME")
        assert spec.load() is None


class TestRun:
    def test_help(self, capsys):
        assert run(["--help"]) == 0

        out = capsys.readouterr().out
        assert "AIOS-FullStack" in out
        assert "Commands:" in out
        assert "$ aios-core install --force" in out

    def test_no_arguments_prints_help(self, capsys):
        assert run([]) == 1

        captured = capsys.readouterr()
        assert "Usage: aios-core" in captured.out
        assert "Commands:" in captured.out
        assert "Error:" not in captured.err

    def test_version(self, capsys):
        assert run(["--version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_unknown_command(self, capsys):
        assert run(["bogus"]) == 1
        assert "Error: No such command 'bogus'." in capsys.readouterr().err

    def test_invalid_settings(self, monkeypatch, capsys):
        monkeypatch.setenv("AIOS_PACKAGE_MANAGER", "npm")

        assert run(["--help"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_update_without_install(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)

        assert run(["update"]) == 1
        assert "No .aios-core/ found" in capsys.readouterr().out
        assert list(tmp_path.iterdir()) == []

    def test_sync_outside_hub(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert run(["sync"]) == 1

    def test_install_then_update(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert run(["install", "--skip-deps"]) == 0
        framework = tmp_path / ".aios-core"
        assert (framework / "package.yaml").is_file()
        assert (tmp_path / ".claude" / "CLAUDE.md").is_file()
        assert not (framework / "claude-config").exists()

        assert run(["install"]) == 1

        assert run(["update"]) == 0
        manifest = yaml.safe_load((framework / "install-manifest.yaml").read_text())
        assert manifest["version"] == __version__
        assert manifest["previous_version"] == __version__
