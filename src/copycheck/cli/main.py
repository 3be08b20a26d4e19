"""Main CLI entry point for copycheck."""  # pragma: no cover

from copycheck.cli.app import app  # pragma: no cover

# Register commands
from copycheck.cli.commands import compare  # pragma: no cover

__all__ = ["app", "compare"]  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    app()
