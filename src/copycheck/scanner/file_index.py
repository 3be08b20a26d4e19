"""Types produced by walking and indexing directory trees."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class Entry:
    """One item yielded by a tree walk.

    Attributes:
        path: Path as produced by the walk (root joined with child names)
        is_dir: True for directories, which are visited but never indexed
        error: Set when the walk could not stat or list this path
    """

    path: str
    is_dir: bool = False
    error: Optional[OSError] = None


@dataclass(frozen=True)
class ScanError:
    """A non-fatal error recorded while scanning."""

    path: str
    cause: str

    def __str__(self) -> str:
        return f"{self.path}: {self.cause}"


@dataclass(frozen=True)
class FileIndex:
    """Content hash -> representative path, plus the bytes seen while scanning.

    When several files share a hash only the last one walked is kept.
    """

    files: Mapping[int, str] = field(default_factory=dict)
    total_bytes: int = 0
    errors: Tuple[ScanError, ...] = ()

    def __post_init__(self):
        # freeze the mapping handed over by the indexer
        object.__setattr__(self, "files", MappingProxyType(dict(self.files)))

    def __len__(self) -> int:
        return len(self.files)

    def __contains__(self, content_hash: object) -> bool:
        return content_hash in self.files

    @property
    def file_count(self) -> int:
        return len(self.files)
