"""Execution modes built on top of the optimizer."""

from treeseed.modes.compare import run_compare

__all__ = ["run_compare"]
