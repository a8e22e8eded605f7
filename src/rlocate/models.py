"""Core rlocate data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True, slots=True)
class PathEntry:
    """A single filesystem path stored in the catalogue."""

    path: str
    basename: str

    @classmethod
    def from_path(cls, path: str) -> PathEntry:
        return cls(path=path, basename=path.split("/")[-1])


@dataclass(frozen=True, slots=True)
class HighlightedLine:
    """Search hit split around the highlighted segment."""

    entry: PathEntry
    prefix: str
    match: str
    suffix: str = ""

    @property
    def text(self) -> str:
        return f"{self.prefix}{self.match}{self.suffix}"

    @property
    def start(self) -> int:
        return len(self.prefix)

    @property
    def end(self) -> int:
        return len(self.prefix) + len(self.match)


@dataclass(frozen=True, slots=True)
class BatchResult:
    """Outcome of a committed batch insert.

    A batch that failed to commit raises instead of returning a result, so an
    instance always describes persisted rows.
    """

    attempted: int = 0
    inserted: int = 0
    failed: int = 0

    @property
    def complete(self) -> bool:
        return self.failed == 0


class SearchMode(str, Enum):
    SUBSTRING = "substring"
    BASENAME = "basename"
