"""Tests for the install manifest."""

from datetime import datetime, timezone
from pathlib import Path

import yaml

from aios_core.manifest import (
    UNKNOWN_VERSION,
    build_install_manifest,
    build_update_manifest,
    format_timestamp,
    load_manifest,
    parse_manifest,
    read_installed_version,
    write_manifest,
)

NOW = "2025-03-01T12:00:00.000Z"
EARLIER = "2024-01-15T10:30:00.000Z"


class TestBuildManifest:
    """Test building install and update manifests."""

    def test_install_manifest(self):
        manifest = build_install_manifest("1.2.0", Path("/pkg"), force=True, now=NOW)

        assert manifest.to_dict() == {
            "installed_at": NOW,
            "version": "1.2.0",
            "source": "/pkg",
            "force": True,
            "skip_deps": False,
        }

    def test_update_carries_installed_at(self):
        previous = yaml.safe_dump({"installed_at": EARLIER, "version": "1.0.0", "source": "/old"}).encode()

        manifest = build_update_manifest(
            "1.2.0",
            Path("/pkg"),
            previous_manifest=previous,
            previous_version="1.0.0",
            now=NOW,
        )

        assert manifest.to_dict() == {
            "installed_at": EARLIER,
            "updated_at": NOW,
            "version": "1.2.0",
            "previous_version": "1.0.0",
            "source": "/pkg",
        }

    def test_update_without_previous_manifest(self):
        manifest = build_update_manifest("1.2.0", Path("/pkg"), now=NOW)

        assert manifest.installed_at == NOW
        assert manifest.updated_at == NOW
        assert manifest.previous_version == UNKNOWN_VERSION

    def test_update_with_corrupt_previous_manifest(self):
        manifest = build_update_manifest(
            "1.2.0", Path("/pkg"), previous_manifest=b"installed_at: [unclosed\n", now=NOW
        )
        assert manifest.installed_at == NOW


class TestPersistence:
    """Test writing and reading manifest files."""

    def test_write_overwrites(self, tmp_path):
        path = tmp_path / ".aios-core" / "install-manifest.yaml"
        path.parent.mkdir()
        path.write_text("stale: true\nextra: lines\n" * 10)

        write_manifest(path, build_install_manifest("1.2.0", Path("/pkg"), now=NOW))

        data = yaml.safe_load(path.read_text())
        assert "stale" not in data
        assert data["installed_at"] == NOW
        assert list(data) == ["installed_at", "version", "source", "force", "skip_deps"]

    def test_load_roundtrip(self, tmp_path):
        path = tmp_path / "install-manifest.yaml"
        original = build_update_manifest("1.2.0", Path("/pkg"), previous_version="1.0.0", now=NOW)
        write_manifest(path, original)

        assert load_manifest(path) == original

    def test_load_missing(self, tmp_path):
        assert load_manifest(tmp_path / "missing.yaml") is None

    def test_parse_unquoted_timestamp(self):
        manifest = parse_manifest("installed_at: 2024-01-15T10:30:00Z\nversion: 1.0.0\nsource: /pkg\n")
        assert manifest is not None
        assert manifest.installed_at == "2024-01-15T10:30:00.000Z"

    def test_parse_invalid(self):
        assert parse_manifest("- a\n- b\n") is None
        assert parse_manifest("version: 1.0.0\n") is None  # missing required fields


class TestReadInstalledVersion:
    def test_reads_version(self, tmp_path):
        path = tmp_path / "install-manifest.yaml"
        path.write_text("version: 1.0.0\n")
        assert read_installed_version(path) == "1.0.0"

    def test_missing(self, tmp_path):
        assert read_installed_version(tmp_path / "missing.yaml") == UNKNOWN_VERSION

    def test_unreadable(self, tmp_path):
        path = tmp_path / "install-manifest.yaml"
        path.write_text("version: [broken\n")
        assert read_installed_version(path) == UNKNOWN_VERSION

    def test_no_version(self, tmp_path):
        path = tmp_path / "install-manifest.yaml"
        path.write_text("source: /pkg\n")
        assert read_installed_version(path) == UNKNOWN_VERSION


def test_format_timestamp():
    moment = datetime(2024, 1, 15, 10, 30, 0, 123456, tzinfo=timezone.utc)
    assert format_timestamp(moment) == "2024-01-15T10:30:00.123Z"
