"""copycheck - verify that every source file exists, by content, under a destination tree."""

__version__ = "0.1.0"
