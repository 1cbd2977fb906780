"""Install manifest: provenance of an aios-core installation.

Stored as .aios-core/install-manifest.yaml. Written on install, fully
rewritten on update.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ValidationError, field_validator

logger = logging.getLogger(__name__)

UNKNOWN_VERSION = "unknown"


class InstallManifest(BaseModel):
    """Installation metadata. Unset optional fields are left out of the file."""

    installed_at: str
    updated_at: Optional[str] = None
    version: str
    previous_version: Optional[str] = None
    source: str
    force: Optional[bool] = None
    skip_deps: Optional[bool] = None

    model_config = {"extra": "ignore"}

    @field_validator("installed_at", "updated_at", mode="before")
    @classmethod
    def validate_timestamp(cls, v: Any) -> Any:
        # yaml.safe_load turns unquoted ISO timestamps into datetimes
        if isinstance(v, datetime):
            return format_timestamp(v)
        return v

    @field_validator("version", "previous_version", mode="before")
    @classmethod
    def validate_version(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with milliseconds, e.g. 2024-01-15T10:30:00.000Z."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def utc_now() -> str:
    return format_timestamp(datetime.now(timezone.utc))


def build_install_manifest(
    version: str,
    source: Path,
    *,
    force: bool = False,
    skip_deps: bool = False,
    now: str | None = None,
) -> InstallManifest:
    """Manifest for a fresh install."""
    return InstallManifest(
        installed_at=now or utc_now(),
        version=version,
        source=str(source),
        force=force,
        skip_deps=skip_deps,
    )


def build_update_manifest(
    version: str,
    source: Path,
    *,
    previous_manifest: bytes | None = None,
    previous_version: str = UNKNOWN_VERSION,
    now: str | None = None,
) -> InstallManifest:
    """
    Manifest for an update.

    Args:
        version: Version being installed
        source: Package root the files came from
        previous_manifest: Raw manifest contents captured before the update
        previous_version: Version that was installed before the update
        now: Timestamp to use (defaults to current UTC time)

    Returns:
        Manifest with installed_at carried forward when the previous manifest
        has one, and updated_at set to now
    """
    now = now or utc_now()

    installed_at = None
    if previous_manifest is not None:
        previous = parse_manifest(previous_manifest)
        if previous is not None:
            installed_at = previous.installed_at

    return InstallManifest(
        installed_at=installed_at or now,
        updated_at=now,
        version=version,
        previous_version=previous_version,
        source=str(source),
    )


def parse_manifest(content: bytes | str) -> InstallManifest | None:
    """Parse manifest contents. Returns None if they are not a valid manifest."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        logger.debug("Invalid manifest YAML: %s", e)
        return None

    if not isinstance(data, dict):
        return None

    try:
        return InstallManifest(**data)
    except ValidationError as e:
        logger.debug("Invalid manifest: %s", e)
        return None


def load_manifest(path: Path) -> InstallManifest | None:
    """Load the manifest at path, or None if absent or unreadable."""
    try:
        content = path.read_bytes()
    except OSError:
        return None
    return parse_manifest(content)


def read_installed_version(path: Path) -> str:
    """
    Version recorded in an existing manifest.

    Only the version key is required, so a damaged manifest that still names
    its version is honoured. Returns UNKNOWN_VERSION otherwise.
    """
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return UNKNOWN_VERSION

    if isinstance(data, dict) and data.get("version"):
        return str(data["version"])
    return UNKNOWN_VERSION


def write_manifest(path: Path, manifest: InstallManifest) -> None:
    """Serialize the manifest to path, replacing any previous file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        yaml.safe_dump(manifest.to_dict(), f, sort_keys=False, width=120)
