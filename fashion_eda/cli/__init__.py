"""Command line entry points."""

from fashion_eda.cli.run_pipeline import main

__all__ = ["main"]
