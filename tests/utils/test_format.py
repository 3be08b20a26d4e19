"""Tests for size and time formatting."""

import os
import sys
from pathlib import Path

import pytest

from copycheck.utils import display_path, format_duration, format_rate, format_size


@pytest.mark.parametrize(
    "size,expected",
    [
        (0, "0 B"),
        (512, "512 B"),
        (1024, "1024 B"),
        (1025, "1.00 KiB"),
        (1536, "1.50 KiB"),
        (5 * 1024**2, "5.00 MiB"),
        (3 * 1024**3 + 1024**3 // 4, "3.25 GiB"),
        (2 * 1024**4, "2.00 TiB"),
        (2048 * 1024**4, "2048.00 TiB"),
    ],
)
def test_format_size(size, expected):
    assert format_size(size) == expected


def test_format_rate():
    assert format_rate(2048, 1.0) == "2.00 KiB/s"
    assert format_rate(10, 2.0) == "5 B/s"


def test_format_rate_without_elapsed_time():
    assert format_rate(2048, 0) == "n/a"


def test_format_duration():
    assert format_duration(1.5) == "1.500s"
    assert format_duration(125.25) == "2m 5.250s"


def test_display_path_plain():
    assert display_path("src/a b/ü.txt") == "src/a b/ü.txt"
    assert display_path(Path("src") / ":smile:") == str(Path("src") / ":smile:")


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX file name bytes")
def test_display_path_undecodable_bytes():
    assert display_path(os.fsdecode(b"src/bad\xff.txt")) == "src/bad\\xff.txt"


def test_display_path_stray_surrogate():
    assert display_path("x\ud800") == "x\\ud800"
