"""Filesystem crawler producing catalogue entries."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List

from rlocate.config import DEFAULT_EXCLUDED_PATHS
from rlocate.models import PathEntry

LOGGER = logging.getLogger(__name__)


class PathCrawler:
    """Walk the filesystem below ``root`` and yield every path found.

    Immediate children of ``root`` listed in ``excluded_paths`` are dropped
    before any traversal starts. Symbolic links are reported but never
    followed, so mount loops and link cycles cannot be entered.
    """

    def __init__(
        self,
        root: Path | str = "/",
        *,
        excluded_paths: Iterable[str | Path] = DEFAULT_EXCLUDED_PATHS,
    ) -> None:
        self.root = os.path.abspath(os.fspath(root))
        self.excluded_paths = frozenset(os.path.abspath(os.fspath(p)) for p in excluded_paths)

    def is_excluded(self, path: str) -> bool:
        return os.path.abspath(path) in self.excluded_paths

    def enumerate_top_level(self) -> List[os.DirEntry]:
        """Return the children of the root that are not excluded."""
        try:
            with os.scandir(self.root) as it:
                children = sorted(it, key=lambda entry: entry.name)
        except OSError as exc:
            LOGGER.warning("Cannot list crawl root %s: %s", self.root, exc)
            return []

        top_level = []
        for child in children:
            if self.is_excluded(child.path):
                LOGGER.debug("Skipping excluded path %s", child.path)
                continue
            top_level.append(child)
        return top_level

    def crawl(self) -> Iterator[PathEntry]:
        """Yield every path under the non-excluded top-level entries.

        Each subtree is walked depth-first with siblings in name order. The
        generator re-reads the disk every time it is created.
        """
        for top in self.enumerate_top_level():
            yield from self._walk(top)

    def _walk(self, top: os.DirEntry) -> Iterator[PathEntry]:
        yield PathEntry(path=top.path, basename=top.name)
        if not self._is_traversable(top):
            return

        # Each frame holds the not yet visited children of one directory,
        # reversed so that pop() returns them in name order.
        stack = [self._list_children(top.path)]
        while stack:
            pending = stack[-1]
            if not pending:
                stack.pop()
                continue
            child = pending.pop()
            yield PathEntry(path=child.path, basename=child.name)
            if self._is_traversable(child):
                stack.append(self._list_children(child.path))

    def _is_traversable(self, entry: os.DirEntry) -> bool:
        try:
            return entry.is_dir(follow_symlinks=False)
        except PermissionError:
            return False
        except OSError as exc:
            LOGGER.warning("Unexpected error while inspecting %s: %s", entry.path, exc)
            return False

    def _list_children(self, path: str) -> List[os.DirEntry]:
        try:
            with os.scandir(path) as it:
                return sorted(it, key=lambda entry: entry.name, reverse=True)
        except PermissionError:
            return []
        except OSError as exc:
            LOGGER.warning("Unexpected error while reading %s: %s", path, exc)
            return []
