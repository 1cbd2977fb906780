"""
Shared test fixtures for aios-core tests.

Provides a fake package root (so tests control the version and the files
being installed), an empty target project, and CLI helpers.
"""

from __future__ import annotations

import io
from pathlib import Path

import pytest
from click.testing import CliRunner
from rich.console import Console

from aios_core.config import AiosSettings, CommandContext

PACKAGE_VERSION = "1.2.0"

# Files of the fake package root, relative to it
PACKAGE_FILES: dict[str, str] = {
    "package.yaml": f"name: aios-core\nversion: {PACKAGE_VERSION}\n",
    "core-config.yaml": "project:\n  name: template\n",
    "agents/dev.md": "# dev\n",
    "agents/qa.md": "# qa\n",
    "templates/story-tmpl.md": "# Story\n",
    "__pycache__/package.cpython-312.pyc": "compiled",
    "agents/__pycache__/junk.pyc": "compiled",
    ".DS_Store": "finder",
    "uv.lock": "lock",
    "claude-config/CLAUDE.md": "# Template CLAUDE.md\n",
    "claude-config/settings.json": '{"hooks": {}}\n',
    "claude-config/settings.local.json": '{"secret": true}\n',
    "claude-config/commands/AIOS/agents/dev.md": "# /dev\n",
    "claude-config/rules/authority.md": "# Authority\n",
    "claude-config/hooks/prompt.sh": "#!/bin/sh\n",
}


def write_files(root: Path, files: dict[str, str]) -> None:
    """Create files (and parent directories) under root."""
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


def tree_snapshot(root: Path) -> dict[str, bytes]:
    """Map every file under root to its contents."""
    return {
        str(p.relative_to(root)): p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()
    }


def console_output(context: CommandContext) -> str:
    """Text printed to a context created by make_context."""
    return context.console.file.getvalue()


# ============================================================================
# Project Fixtures
# ============================================================================


@pytest.fixture
def package_root(tmp_path: Path) -> Path:
    """A fake aios_core package root at version PACKAGE_VERSION."""
    root = tmp_path / "site-packages" / "aios_core"
    write_files(root, PACKAGE_FILES)
    return root


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An empty target project directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project


@pytest.fixture
def make_context(project_dir: Path, package_root: Path):
    """
    Factory for CommandContext objects pointing at the fake package.

    Output goes to an in-memory console; read it with console_output().
    """

    def _make(cwd: Path | None = None, root: Path | None = None, **settings) -> CommandContext:
        return CommandContext(
            cwd=cwd or project_dir,
            package_root=root or package_root,
            settings=AiosSettings(**settings),
            console=Console(file=io.StringIO(), width=200),
        )

    return _make


@pytest.fixture
def context(make_context) -> CommandContext:
    return make_context()


# ============================================================================
# CLI Testing Fixtures
# ============================================================================


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


def invoke_cli(runner: CliRunner, cmd, args: list[str], **kwargs):
    """Invoke a command; exceptions other than exits propagate to the test."""
    return runner.invoke(cmd, args, catch_exceptions=False, **kwargs)


def assert_cli_success(result) -> None:
    assert result.exit_code == 0, f"exit code {result.exit_code}\n{result.output}"


def assert_cli_failure(result, expected_code: int) -> None:
    assert result.exit_code == expected_code, f"exit code {result.exit_code}, wanted {expected_code}"


def assert_output_contains(result, text: str) -> None:
    assert text in result.output, f"{text!r} not in output:\n{result.output}"
