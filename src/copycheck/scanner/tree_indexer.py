"""Build content-hash indexes of directory trees."""

import itertools
import os
import stat
import time
from os import PathLike
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from loguru import logger

from copycheck.config import DEFAULT_CHUNK_SIZE
from copycheck.scanner.file_index import Entry, FileIndex, ScanError
from copycheck.utils import display_path
from copycheck.utils.file_utils import FileReadError, hash_file

StrPath = Union[str, "PathLike[str]"]


def describe_error(error: OSError) -> str:
    """OS error text without the repeated file name."""
    return error.strerror or str(error)


def _is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        # let the indexer report it when it tries to stat the path
        return False


def walk_entries(root: StrPath) -> Iterator[Entry]:
    """
    Lazily walk a tree depth-first, children in lexical order.

    The root is yielded first. Symlinked directories are yielded as plain
    entries and not descended into. Paths that cannot be stat'ed or listed
    are yielded with their error set, and the walk carries on.
    """
    root = os.fspath(root)
    try:
        st = os.stat(root)
    except OSError as e:
        yield Entry(root, error=e)
        return

    stack: List[Tuple[str, bool]] = [(root, stat.S_ISDIR(st.st_mode))]
    while stack:
        path, is_dir = stack.pop()
        if not is_dir:
            yield Entry(path)
            continue

        yield Entry(path, is_dir=True)
        try:
            with os.scandir(path) as it:
                children = sorted(it, key=lambda e: e.name)
        except OSError as e:
            yield Entry(path, is_dir=True, error=e)
            continue

        # pushed in reverse so the smallest name is popped first
        for child in reversed(children):
            stack.append((child.path, _is_dir(child)))


class TreeIndexer:
    """
    Folds a sequence of walk entries into a FileIndex.

    Each regular file is stat'ed, hashed with xxHash64 and stored under its
    hash. A later file with the same hash replaces the earlier path. Errors
    are logged and collected; they never stop the walk.
    """

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        count_failed_reads: bool = True,
        on_directory: Optional[Callable[[str], None]] = None,
    ):
        self.chunk_size = chunk_size
        self.count_failed_reads = count_failed_reads
        self.on_directory = on_directory

    def _visit_directory(self, path: str) -> None:
        if self.on_directory is not None:
            self.on_directory(path)
        else:
            logger.debug(f"Scanning directory: {display_path(path)}")

    def index_entries(self, entries: Iterable[Entry]) -> FileIndex:
        """
        Build an index from walk entries.

        Args:
            entries: Entries in traversal order, as produced by walk_entries

        Returns:
            FileIndex with one path per distinct content hash
        """
        files = {}
        total_bytes = 0
        errors: List[ScanError] = []

        def record(path: str, cause: str) -> None:
            errors.append(ScanError(path=path, cause=cause))
            logger.error(f"Error: {display_path(path)}: {cause}")

        for entry in entries:
            if entry.error is not None:
                record(entry.path, describe_error(entry.error))
                continue

            if entry.is_dir:
                self._visit_directory(entry.path)
                continue

            try:
                size = os.stat(entry.path).st_size
            except OSError as e:
                record(entry.path, f"getting file info - {describe_error(e)}")
                continue

            if self.count_failed_reads:
                total_bytes += size

            try:
                content_hash = hash_file(entry.path, self.chunk_size)
            except FileReadError as e:
                record(entry.path, f"reading file - {describe_error(e.cause)}")
                continue

            if not self.count_failed_reads:
                total_bytes += size

            logger.debug(f"{display_path(entry.path)} ({content_hash:016x})")
            files[content_hash] = entry.path

        if errors:
            logger.warning(f"Encountered {len(errors)} errors while scanning")

        return FileIndex(files=files, total_bytes=total_bytes, errors=tuple(errors))

    def build_index(self, roots: Sequence[StrPath]) -> Tuple[FileIndex, float]:
        """
        Index one or more roots into a single FileIndex.

        Roots are walked in the order given and share one mapping and one byte
        total, so on a hash collision the later root wins.

        Returns:
            The index and the elapsed wall-clock seconds
        """
        start = time.perf_counter()
        entries = itertools.chain.from_iterable(walk_entries(root) for root in roots)
        index = self.index_entries(entries)
        elapsed = time.perf_counter() - start
        logger.debug(f"Indexed {len(index)} files from {len(roots)} root(s) in {elapsed:0.3f}s")
        return index, elapsed


def build_index(
    roots: Sequence[StrPath],
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    count_failed_reads: bool = True,
    on_directory: Optional[Callable[[str], None]] = None,
) -> Tuple[FileIndex, float]:
    """Index roots with a one-off TreeIndexer."""
    indexer = TreeIndexer(
        chunk_size=chunk_size,
        count_failed_reads=count_failed_reads,
        on_directory=on_directory,
    )
    return indexer.build_index(roots)
