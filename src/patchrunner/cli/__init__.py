"""Command-line interface for patchrunner."""
