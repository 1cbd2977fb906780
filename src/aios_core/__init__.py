"""AIOS Core: installer and updater for the AIOS agent framework.

Installs the framework tree (.aios-core/) and its Claude Code configuration
(.claude/) into a project, and keeps them up to date without losing local
customizations.
"""

from aios_core.errors import PackageNotFoundError
from aios_core.package import DEFAULT_VERSION, get_package_root, read_package_version

try:
    __version__ = read_package_version(get_package_root())
except PackageNotFoundError:
    __version__ = DEFAULT_VERSION

__all__ = ["__version__", "get_package_root", "read_package_version"]
