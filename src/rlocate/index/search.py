"""Substring and basename search over the path catalogue."""

from __future__ import annotations

from typing import Iterable, Iterator, List

from rlocate.index.storage import SQLitePathStore
from rlocate.models import HighlightedLine, PathEntry, SearchMode


def match_substring(catalogue: Iterable[PathEntry], pattern: str) -> Iterator[HighlightedLine]:
    """Yield entries whose path contains ``pattern``, split at its first occurrence."""
    for entry in catalogue:
        start = entry.path.find(pattern)
        if start < 0:
            continue
        end = start + len(pattern)
        yield HighlightedLine(
            entry=entry,
            prefix=entry.path[:start],
            match=entry.path[start:end],
            suffix=entry.path[end:],
        )


def parent_directory(path: str) -> str:
    """Return ``path`` without its last ``/`` segment, keeping a trailing slash."""
    return "/".join(path.split("/")[:-1]) + "/"


def match_basename(catalogue: Iterable[PathEntry], pattern: str) -> Iterator[HighlightedLine]:
    """Yield entries whose basename equals ``pattern`` exactly."""
    for entry in catalogue:
        if entry.basename != pattern:
            continue
        yield HighlightedLine(
            entry=entry,
            prefix=parent_directory(entry.path),
            match=entry.basename,
        )


class Searcher:
    """High-level API to query the path catalogue."""

    def __init__(self, store: SQLitePathStore) -> None:
        self.store = store

    def search(
        self, pattern: str, *, mode: SearchMode = SearchMode.SUBSTRING
    ) -> List[HighlightedLine]:
        catalogue = self.store.retrieve_all()
        if SearchMode(mode) is SearchMode.BASENAME:
            return list(match_basename(catalogue, pattern))
        return list(match_substring(catalogue, pattern))
