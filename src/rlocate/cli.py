"""Command line interface for rlocate."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from rlocate.config import AppConfig
from rlocate.crawl.crawler import PathCrawler
from rlocate.index.indexer import Indexer
from rlocate.index.search import Searcher
from rlocate.index.storage import SQLitePathStore, StoreError
from rlocate.models import SearchMode
from rlocate.utils.text import highlight_ansi, highlight_text

LOGGER = logging.getLogger(__name__)

console = Console()
app = typer.Typer(help="rlocate - find files by name from a prebuilt index")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _resolve_db(db: Optional[Path]) -> Path:
    config = AppConfig(db_path=db if db is not None else AppConfig().db_path)
    return config.resolve_db_path(Path.cwd())


def _fail(exc: StoreError) -> typer.Exit:
    console.print(f"[red]{escape(str(exc))}[/red]")
    return typer.Exit(code=1)


@app.command()
def update(
    root: Path = typer.Option(AppConfig().root, "--root", help="Directory to crawl"),
    exclude: Optional[List[Path]] = typer.Option(
        None, "--exclude", "-x", help="Top-level path to skip (repeatable)"
    ),
    db: Path = typer.Option(None, "--db", help="Index database path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Crawl the filesystem and append every path to the index."""
    _setup_logging(verbose)
    config = AppConfig(
        db_path=db if db is not None else AppConfig().db_path,
        root=root,
        excluded_paths=tuple(str(p) for p in exclude) if exclude else AppConfig().excluded_paths,
    )
    resolved_db = config.resolve_db_path(Path.cwd())

    crawler = PathCrawler(config.root, excluded_paths=config.excluded_paths)
    root_label = escape(crawler.root)
    db_label = escape(str(resolved_db))
    console.print(f"Indexing [bold]{root_label}[/bold] into [bold]{db_label}[/bold]...")

    with SQLitePathStore(resolved_db) as store:
        try:
            stats = Indexer(crawler, store).index()
        except StoreError as exc:
            raise _fail(exc) from exc

    console.print(
        f"Indexed {stats.inserted} of {stats.crawled} entries (failed: {stats.failed})"
    )


@app.command()
def search(
    pattern: str = typer.Argument(..., help="Text to look for"),
    basename: bool = typer.Option(
        False, "--basename", "-b", help="Match the final path component exactly"
    ),
    plain: bool = typer.Option(False, "--plain", help="Print paths without highlighting"),
    ansi: bool = typer.Option(False, "--ansi", help="Highlight with raw ANSI escapes"),
    db: Path = typer.Option(None, "--db", help="Index database path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search the index for a path substring or an exact file name."""
    _setup_logging(verbose)
    resolved_db = _resolve_db(db)

    if not resolved_db.exists():
        raise typer.BadParameter(f"Index not found: {resolved_db}. Run 'rlocate update' first.")

    mode = SearchMode.BASENAME if basename else SearchMode.SUBSTRING
    started = time.perf_counter()
    with SQLitePathStore(resolved_db) as store:
        try:
            results = Searcher(store).search(pattern, mode=mode)
        except StoreError as exc:
            raise _fail(exc) from exc
    LOGGER.debug("Search finished in %.3fs", time.perf_counter() - started)

    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return

    for line in results:
        if plain:
            typer.echo(line.text)
        elif ansi:
            typer.echo(highlight_ansi(line), color=True)
        else:
            console.print(highlight_text(line), soft_wrap=True)


@app.command()
def dump(
    db: Path = typer.Option(None, "--db", help="Index database path"),
) -> None:
    """Print every entry stored in the index."""
    resolved_db = _resolve_db(db)

    if not resolved_db.exists():
        console.print("[yellow]Index not found, nothing to show.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Path", overflow="fold")
    table.add_column("Basename", overflow="fold")

    with SQLitePathStore(resolved_db) as store:
        try:
            for entry in store.iter_entries():
                table.add_row(Text(entry.path), Text(entry.basename))
            total = store.count()
        except StoreError as exc:
            raise _fail(exc) from exc

    console.print(table)
    console.print(f"{total} entries")


@app.command()
def reset(
    db: Path = typer.Option(None, "--db", help="Index database path"),
) -> None:
    """Delete the index."""
    resolved_db = _resolve_db(db)

    if not resolved_db.exists():
        console.print("[yellow]Index not found, nothing to reset.[/yellow]")
        return

    try:
        SQLitePathStore(resolved_db).reset()
    except StoreError as exc:
        raise _fail(exc) from exc
    console.print(f"Removed index {escape(str(resolved_db))}")
