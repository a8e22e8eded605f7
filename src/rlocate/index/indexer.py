"""Index population pipeline."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from rlocate.crawl.crawler import PathCrawler
from rlocate.index.storage import SQLitePathStore
from rlocate.models import BatchResult

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class IndexStats:
    crawled: int = 0
    inserted: int = 0
    failed: int = 0
    elapsed: float = 0.0

    @classmethod
    def from_batch(cls, result: BatchResult, *, elapsed: float) -> IndexStats:
        return cls(
            crawled=result.attempted,
            inserted=result.inserted,
            failed=result.failed,
            elapsed=elapsed,
        )


class Indexer:
    """Coordinates a crawl and its persistence."""

    def __init__(self, crawler: PathCrawler, store: SQLitePathStore) -> None:
        self.crawler = crawler
        self.store = store

    def index(self) -> IndexStats:
        """Crawl the filesystem and append every entry to the store.

        The full crawl is collected in memory first so that it is written by
        one transaction.
        """
        started = time.perf_counter()
        self.store.initialize()

        LOGGER.info("Crawling %s", self.crawler.root)
        entries = list(self.crawler.crawl())
        LOGGER.info("Found %d entries, writing to %s", len(entries), self.store.db_path)

        result = self.store.append_batch(entries)
        if not result.complete:
            LOGGER.warning("%d entries could not be stored", result.failed)

        stats = IndexStats.from_batch(result, elapsed=time.perf_counter() - started)
        LOGGER.info("Indexing finished in %.2fs", stats.elapsed)
        return stats
