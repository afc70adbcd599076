# -*- coding: utf-8 -*-
import asyncio
import logging
import tempfile
import typing as t
from pathlib import Path

import click
from rich.console import Console

from planner_feed.config import ConfigError, FeedConfig
from planner_feed.store import DEFAULT_CACHE_FILE, CacheStore
from planner_tui.app import collect, run
from planner_tui.render import render_listing
from planner_tui.terminal import Terminal

DEFAULT_LOG_FILE = Path(tempfile.gettempdir()) / "canvastui.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

console = Console()
err_console = Console(stderr=True)


def configure_logging(log_file: t.Union[str, Path], verbose: bool) -> None:
    """Send log records to a file; the terminal belongs to the UI."""
    logging.basicConfig(
        filename=str(log_file),
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        force=True,
    )
    # httpx logs every request URL at INFO, access token included
    logging.getLogger("httpx").setLevel(logging.WARNING)


async def _run_viewer(config: FeedConfig, store: CacheStore) -> None:
    async with Terminal() as terminal:
        await run(config, store, terminal)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--cache-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_CACHE_FILE,
    show_default=True,
    help="Where the last planner response is kept between runs.",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_LOG_FILE,
    show_default=True,
    help="Log file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--list", "list_only", is_flag=True, help="Print the planner and exit without starting the viewer.")
def main(cache_file: Path, log_file: Path, verbose: bool, list_only: bool) -> None:
    """Browse upcoming Canvas planner items in the terminal.

    Reads CANVAS_URL and CANVAS_ACCESS_TOKEN from the environment.
    Keys: j/k next/previous item, l/h next/previous day, o open, q quit.
    """
    configure_logging(log_file, verbose)

    try:
        config = FeedConfig.from_env()
    except ConfigError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    store = CacheStore(cache_file)

    if list_only:
        state = asyncio.run(collect(config, store))
        if state.calendar.is_empty:
            console.print("[yellow]No planner items available.[/yellow]")
            return
        console.print(render_listing(state.calendar))
        return

    asyncio.run(_run_viewer(config, store))


if __name__ == "__main__":
    main()
