"""Command-line interface for aios-core."""
