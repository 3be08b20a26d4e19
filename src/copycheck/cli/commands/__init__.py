"""CLI commands for copycheck."""

from . import compare

__all__ = ["compare"]
