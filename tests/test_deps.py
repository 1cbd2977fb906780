"""Tests for the dependency install step."""

import subprocess
from unittest.mock import patch

from aios_core.deps import install_dependencies


def test_skipped_without_requirements(tmp_path):
    with patch("aios_core.deps.subprocess.run") as mock_run:
        result = install_dependencies(tmp_path, ["pip", "install"])

    assert result.ok
    assert result.skipped
    mock_run.assert_not_called()


def test_runs_in_framework_dir(tmp_path):
    (tmp_path / "requirements.txt").write_text("rich\n")

    with patch("aios_core.deps.subprocess.run") as mock_run:
        result = install_dependencies(tmp_path, ["pip", "install", "-r", "requirements.txt"])

    assert result.ok
    assert not result.skipped
    mock_run.assert_called_once()
    args, kwargs = mock_run.call_args
    assert args[0] == ["pip", "install", "-r", "requirements.txt"]
    assert kwargs["cwd"] == tmp_path
    assert kwargs["check"] is True


def test_failure_is_soft(tmp_path):
    (tmp_path / "requirements.txt").write_text("rich\n")
    error = subprocess.CalledProcessError(1, ["pip"], stderr=b"Collecting rich\nERROR: no network\n")

    with patch("aios_core.deps.subprocess.run", side_effect=error):
        result = install_dependencies(tmp_path, ["pip", "install"])

    assert not result.ok
    assert result.error == "ERROR: no network"


def test_missing_executable_is_soft(tmp_path):
    (tmp_path / "requirements.txt").write_text("rich\n")

    with patch("aios_core.deps.subprocess.run", side_effect=FileNotFoundError()):
        result = install_dependencies(tmp_path, ["uv", "pip", "install"])

    assert not result.ok
    assert result.error == "uv not found"
