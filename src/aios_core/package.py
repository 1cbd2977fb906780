"""Locate the installed aios-core package and read its declared version."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from aios_core.errors import PackageNotFoundError

logger = logging.getLogger(__name__)

PACKAGE_MANIFEST_NAME = "package.yaml"
DEFAULT_VERSION = "0.0.0"


class PackageInfo(BaseModel):
    """Contents of the package's own package.yaml."""

    name: str = "aios-core"
    version: str = DEFAULT_VERSION
    description: str = ""

    model_config = {"extra": "allow"}


def find_package_root(entry_point: Path) -> Path:
    """
    Find the package root for a running entry point.

    Walks upward from the entry point and returns the first directory whose
    immediate child is package.yaml.

    Args:
        entry_point: Absolute path of the running module or script

    Returns:
        The package root directory

    Raises:
        PackageNotFoundError: If no ancestor holds package.yaml
    """
    start = Path(entry_point)
    if not start.is_dir():
        start = start.parent

    for candidate in (start, *start.parents):
        if (candidate / PACKAGE_MANIFEST_NAME).is_file():
            return candidate

    raise PackageNotFoundError(
        f"{PACKAGE_MANIFEST_NAME} not found above {entry_point} (corrupted installation?)"
    )


def get_package_root() -> Path:
    """Get the root of the installed aios_core package."""
    return find_package_root(Path(__file__).resolve())


def load_package_info(package_root: Path) -> PackageInfo:
    """Parse package.yaml. Raises on I/O, YAML or validation errors."""
    with open(package_root / PACKAGE_MANIFEST_NAME) as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{PACKAGE_MANIFEST_NAME} must contain a YAML mapping")

    # Unquoted versions like 4.0 load as floats
    if "version" in data and data["version"] is not None:
        data["version"] = str(data["version"])

    return PackageInfo(**data)


def read_package_version(package_root: Path) -> str:
    """
    Read the version declared in the package's package.yaml.

    Version display is informational only, so any failure falls back to
    DEFAULT_VERSION instead of raising.
    """
    try:
        info = load_package_info(package_root)
    except (OSError, yaml.YAMLError, ValueError, ValidationError) as e:
        logger.debug("Could not read package version from %s: %s", package_root, e)
        return DEFAULT_VERSION

    return info.version or DEFAULT_VERSION
