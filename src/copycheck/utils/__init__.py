"""Utility functions for copycheck."""

import os
import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

KIB = 1024
SIZE_UNITS = (
    (KIB**4, "TiB"),
    (KIB**3, "GiB"),
    (KIB**2, "MiB"),
    (KIB, "KiB"),
)


def setup_logging(level: str = "INFO", log_file: Optional[Union[str, Path]] = None) -> None:
    """
    Configure loguru sinks:
    - stderr gets bare messages so scan errors read as one line each
    - an optional log file gets timestamps and levels
    """
    logger.remove()
    logger.add(sys.stderr, level=level, format="{message}", colorize=False)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path,
            level="DEBUG",
            format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} - {message}",
            encoding="utf-8",
        )


def format_size(size: float) -> str:
    """Render a byte count using binary units, e.g. '1.50 MiB' or '512 B'."""
    for threshold, unit in SIZE_UNITS:
        if size > threshold:
            return f"{size / threshold:0.2f} {unit}"
    return f"{size:0.0f} B"


def format_rate(size: float, seconds: float) -> str:
    """Render bytes per second, or 'n/a' when no time elapsed."""
    if seconds <= 0:
        return "n/a"
    return f"{format_size(size / seconds)}/s"


def format_duration(seconds: float) -> str:
    minutes, secs = divmod(seconds, 60)
    if minutes >= 1:
        return f"{int(minutes)}m {secs:0.3f}s"
    return f"{secs:0.3f}s"


def display_path(path: Union[str, Path]) -> str:
    """Printable form of a path; undecodable name bytes are shown as \\xNN escapes."""
    try:
        raw = os.fsencode(path)
    except UnicodeEncodeError:
        # surrogates that did not come from a file name
        return os.fspath(path).encode("utf-8", "backslashreplace").decode("utf-8")
    return raw.decode("utf-8", "backslashreplace")
