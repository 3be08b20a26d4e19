"""Common test fixtures."""

import os
from pathlib import Path
from typing import Callable, Dict, Union

import pytest
from loguru import logger

from copycheck.scanner import TreeIndexer

Content = Union[str, bytes]


def create_test_file(path: Path, content: Content = "test content") -> Path:
    """Create a test file with given content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, str):
        content = content.encode("utf-8")
    path.write_bytes(content)
    return path


@pytest.fixture
def make_tree() -> Callable[[Path, Dict[str, Content]], Path]:
    """Build a directory tree from a {relative path: content} mapping."""

    def _make_tree(root: Path, files: Dict[str, Content]) -> Path:
        root.mkdir(parents=True, exist_ok=True)
        for rel_path, content in files.items():
            create_test_file(root / rel_path, content)
        return root

    return _make_tree


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    path = tmp_path / "source"
    path.mkdir()
    return path


@pytest.fixture
def dest_dir(tmp_path: Path) -> Path:
    path = tmp_path / "dest"
    path.mkdir()
    return path


@pytest.fixture
def visited() -> list:
    """Directories reported by an indexer."""
    return []


@pytest.fixture
def indexer(visited) -> TreeIndexer:
    # tiny chunks so multi-chunk streaming is exercised
    return TreeIndexer(chunk_size=4, on_directory=visited.append)


@pytest.fixture
def log_messages():
    """Capture loguru messages."""
    messages = []
    handler_id = logger.add(messages.append, format="{level}: {message}", level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep COPYCHECK_* variables and stray .env files out of tests."""
    for key in list(os.environ):
        if key.startswith("COPYCHECK_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
