"""Service for comparing a source index against destination indexes."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from copycheck.config import REPORT_NAME
from copycheck.scanner import FileIndex, ScanError, TreeIndexer
from copycheck.scanner.tree_indexer import StrPath
from copycheck.utils import display_path
from copycheck.utils.file_utils import FileWriteError, write_lines


@dataclass
class ScanSummary:
    """An index together with the time it took to build."""

    index: FileIndex
    elapsed: float

    @property
    def file_count(self) -> int:
        return len(self.index)

    @property
    def total_bytes(self) -> int:
        return self.index.total_bytes

    @property
    def throughput(self) -> Optional[float]:
        """Bytes read per second, None when the scan took no measurable time."""
        if self.elapsed <= 0:
            return None
        return self.total_bytes / self.elapsed


@dataclass
class CompareReport:
    """Result of comparing a source tree against destination trees.

    Attributes:
        source: Source scan
        dest: Merged destination scan
        missing: Source paths with no matching content in any destination, sorted
        report_path: Where the missing list was written, if it was
        report_error: Why the missing list could not be written, if it failed
    """

    source: ScanSummary
    dest: ScanSummary
    missing: List[str] = field(default_factory=list)
    report_path: Optional[Path] = None
    report_error: Optional[str] = None

    @property
    def total_elapsed(self) -> float:
        return self.source.elapsed + self.dest.elapsed

    @property
    def errors(self) -> Tuple[ScanError, ...]:
        return self.source.index.errors + self.dest.index.errors

    @property
    def error_count(self) -> int:
        return len(self.errors) + (1 if self.report_error else 0)

    @property
    def partial(self) -> bool:
        """True when some files or roots could not be scanned."""
        return bool(self.errors)


def find_missing(source: FileIndex, dest: FileIndex) -> List[str]:
    """Paths of source files whose content hash is not in dest, sorted."""
    return sorted(path for content_hash, path in source.files.items() if content_hash not in dest)


def write_missing_report(
    source_root: StrPath, missing: Sequence[str], report_name: str = REPORT_NAME
) -> Path:
    """
    Write the missing paths, one per line, inside the source root.

    Returns:
        Path of the written report

    Raises:
        FileWriteError: If the report cannot be written
    """
    report_path = Path(source_root) / report_name
    write_lines(report_path, missing)
    return report_path


class ReportService:
    """
    Compares one source tree against one or more destination trees.
    Destination roots are merged into a single index.
    """

    def __init__(self, indexer: TreeIndexer, report_name: str = REPORT_NAME):
        self.indexer = indexer
        self.report_name = report_name

    def scan(self, roots: Sequence[StrPath]) -> ScanSummary:
        index, elapsed = self.indexer.build_index(roots)
        return ScanSummary(index=index, elapsed=elapsed)

    def compare(self, source_root: StrPath, dest_roots: Sequence[StrPath]) -> CompareReport:
        """
        Scan source and destinations, then find source content absent from all destinations.

        Args:
            source_root: Tree whose files must all be present
            dest_roots: Trees searched for those files

        Returns:
            CompareReport; the missing list is written inside source_root when non-empty
        """
        logger.debug(f"Scanning source: {source_root}")
        source = self.scan([source_root])
        logger.debug(f"Scanning destinations: {', '.join(str(d) for d in dest_roots)}")
        dest = self.scan(dest_roots)

        missing = find_missing(source.index, dest.index)
        report = CompareReport(source=source, dest=dest, missing=missing)
        logger.debug(f"Missing files: {len(report.missing)}")

        if not report.missing:
            return report

        try:
            report.report_path = write_missing_report(source_root, report.missing, self.report_name)
        except FileWriteError as e:
            logger.error(f"Error: {display_path(str(e))}")
            report.report_error = str(e)

        return report
