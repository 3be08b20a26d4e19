"""Walk directory trees and index their files by content hash."""

from copycheck.scanner.file_index import Entry, FileIndex, ScanError
from copycheck.scanner.tree_indexer import TreeIndexer, build_index, walk_entries

__all__ = ["Entry", "FileIndex", "ScanError", "TreeIndexer", "build_index", "walk_entries"]
