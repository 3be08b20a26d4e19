"""Utilities for file operations."""

import os
from pathlib import Path
from typing import Iterable, Union

import xxhash
from loguru import logger

from copycheck.config import DEFAULT_CHUNK_SIZE


class FileError(Exception):
    """Base exception for file operations."""

    pass


class FileReadError(FileError):
    """Raised when a file cannot be opened or read."""

    def __init__(self, path: Union[str, Path], cause: OSError):
        self.path = str(path)
        self.cause = cause
        super().__init__(f"Reading file '{path}' - {cause}")


class FileWriteError(FileError):
    """Raised when file operations fail."""

    pass


def hash_bytes(data: bytes) -> int:
    """64-bit xxHash of an in-memory buffer."""
    return xxhash.xxh64(data).intdigest()


def hash_file(path: Union[str, Path], chunk_size: int = DEFAULT_CHUNK_SIZE) -> int:
    """
    Compute the 64-bit xxHash of a file's full content.

    The file is streamed in chunks, so memory use is bounded by chunk_size,
    and the result equals hash_bytes() over the whole file.

    Args:
        path: File to hash
        chunk_size: Bytes read per call

    Returns:
        Unsigned 64-bit integer digest

    Raises:
        FileReadError: If the file cannot be opened or read
    """
    hasher = xxhash.xxh64()
    try:
        with open(path, "rb") as f:
            for chunk in iter(lambda: f.read(chunk_size), b""):
                hasher.update(chunk)
    except OSError as e:
        raise FileReadError(path, e) from e
    return hasher.intdigest()


def write_lines(path: Path, lines: Iterable[str]) -> None:
    """
    Write one line per entry, newline-terminated, replacing any existing file.

    Paths holding undecodable file name bytes are written back as those bytes.

    Args:
        path: Target file path
        lines: Lines to write, without trailing newlines

    Raises:
        FileWriteError: If write operation fails
    """
    temp_path = path.with_name(f".{path.name}.tmp")
    try:
        with open(temp_path, "w", encoding="utf-8", errors="surrogateescape", newline="\n") as f:
            for line in lines:
                f.write(f"{line}\n")
        os.replace(temp_path, path)
    except (OSError, UnicodeError) as e:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError:
            logger.debug(f"Could not remove temp file {temp_path}")
        raise FileWriteError(f"Failed to write file {path}: {e}") from e
