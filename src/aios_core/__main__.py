"""Allow `python -m aios_core`."""

from aios_core.cli.main import main

main()
