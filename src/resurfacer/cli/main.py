"""
Resurfacer CLI - Main Entry Point

Command-line control panel for the saved-item store.

Usage:
    resurfacer save 1789 --text "worth rereading"   # Save an item
    resurfacer list                                 # All items, soonest due first
    resurfacer due                                  # Items due right now
    resurfacer remember 1789                        # Positive review
    resurfacer review-earlier 1789                  # Halve the remaining wait
    resurfacer clear --force                        # Drop every saved item
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click

from loguru import logger

from resurfacer.core.config import ResurfacerConfig, load_config
from resurfacer.core.constants import RescheduleMode, ReviewOutcome
from resurfacer.core.exceptions import ResurfacerError, ItemNotFoundError
from resurfacer.core.library import SavedItemLibrary
from resurfacer.core.logging_config import configure_logging
from resurfacer.core.review import ReviewScheduler, SavedItem
from resurfacer.storage import JsonFileItemStore

from .formatters import Colors, format_item_detail, format_item_table, item_to_json


# ============================================================================
# Helpers
# ============================================================================

def _library(ctx: click.Context) -> SavedItemLibrary:
    config: ResurfacerConfig = ctx.obj["config"]
    store = JsonFileItemStore(ctx.obj["store_path"], namespace=config.store.namespace)
    return SavedItemLibrary(store, ReviewScheduler(config.scheduling))


def _run(coro):
    """Run a command coroutine, turning resurfacer errors into exit code 1."""
    try:
        return asyncio.run(coro)
    except ResurfacerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _echo_item(item: SavedItem, library: SavedItemLibrary, output_json: bool, heading: str) -> None:
    now = library.scheduler.clock()
    if output_json:
        click.echo(json.dumps(item_to_json(item, now), indent=2, ensure_ascii=False))
    else:
        click.echo(heading)
        click.echo(format_item_detail(item, now))


# ============================================================================
# CLI Group and Main Entry
# ============================================================================

@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True),
    help="Path to config.yaml file",
)
@click.option(
    "--store",
    "-s",
    "store_path",
    type=click.Path(),
    help="Path to the JSON item store (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.pass_context
def cli(ctx, config: Optional[str], store_path: Optional[str], verbose: bool):
    """
    Resurfacer - spaced repetition for saved posts

    Saved items come back on a doubling schedule: remember one and it waits
    twice as long, forget it and it returns in a day.
    """
    ctx.ensure_object(dict)

    try:
        cfg = load_config(Path(config) if config else None)
    except ResurfacerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = cfg
    ctx.obj["store_path"] = Path(store_path or cfg.store.path)

    # Configure logging
    if verbose:
        configure_logging("DEBUG", cfg.observability.json_logs)
    else:
        configure_logging("WARNING", cfg.observability.json_logs)

    logger.debug(f"Using item store {ctx.obj['store_path']}")


# ============================================================================
# CLI Commands
# ============================================================================

@cli.command()
@click.argument("item_id", required=True)
@click.option(
    "--payload",
    "-p",
    help="JSON payload as string",
)
@click.option("--text", "-t", help="Post text")
@click.option("--author", "-a", help="Post author")
@click.option("--url", "-u", help="Post URL")
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output as JSON",
)
@click.pass_context
def save(ctx, item_id: str, payload: Optional[str], text: Optional[str], author: Optional[str], url: Optional[str], output_json: bool):
    """
    Save an item for resurfacing. It is first due one day from now.

    Example:
        resurfacer save 1789 --author @someone --text "worth rereading"
    """
    data = {}
    if payload:
        try:
            parsed = json.loads(payload)
        except json.JSONDecodeError:
            click.echo(f"Error: Invalid JSON payload: {payload}", err=True)
            sys.exit(2)
        if not isinstance(parsed, dict):
            click.echo("Error: payload must be a JSON object", err=True)
            sys.exit(2)
        data.update(parsed)

    for key, value in (("text", text), ("author", author), ("url", url)):
        if value:
            data[key] = value

    async def _save():
        library = _library(ctx)
        item = await library.save(item_id, data)
        _echo_item(item, library, output_json, f"Saved item: {item_id}")

    _run(_save())


@cli.command(name="list")
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output as JSON",
)
@click.pass_context
def list_items(ctx, output_json: bool):
    """
    List all saved items, soonest due first.
    """
    async def _list():
        library = _library(ctx)
        items = await library.list_items()
        now = library.scheduler.clock()
        if output_json:
            click.echo(json.dumps([item_to_json(i, now) for i in items], indent=2, ensure_ascii=False))
        else:
            click.echo(format_item_table(items, now))

    _run(_list())


@cli.command()
@click.option(
    "--json",
    "output_json",
    is_flag=True,
    help="Output as JSON",
)
@click.pass_context
def due(ctx, output_json: bool):
    """
    List items that are due for resurfacing now.
    """
    async def _due():
        library = _library(ctx)
        now = library.scheduler.clock()
        items = await library.due_items(now)
        if output_json:
            click.echo(json.dumps([item_to_json(i, now) for i in items], indent=2, ensure_ascii=False))
        elif not items:
            click.echo("Nothing due.")
        else:
            click.echo(f"{len(items)} item(s) due:")
            click.echo(format_item_table(items, now))

    _run(_due())


@cli.command()
@click.argument("item_id", required=True)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.pass_context
def show(ctx, item_id: str, output_json: bool):
    """
    Show the review state of one item.
    """
    async def _show():
        library = _library(ctx)
        item = await library.get(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        _echo_item(item, library, output_json, f"Item: {item_id}")

    _run(_show())


def _mark_command(outcome: ReviewOutcome, name: str, doc: str):
    @cli.command(name=name, help=doc)
    @click.argument("item_id", required=True)
    @click.option("--json", "output_json", is_flag=True, help="Output as JSON")
    @click.pass_context
    def command(ctx, item_id: str, output_json: bool):
        async def _mark():
            library = _library(ctx)
            item = await library.mark(item_id, outcome)
            if item is None:
                raise ItemNotFoundError(item_id)
            _echo_item(item, library, output_json, Colors.green(f"Marked {item_id} as {outcome.value}"))

        _run(_mark())

    return command


def _reschedule_command(mode: RescheduleMode, name: str, doc: str):
    @cli.command(name=name, help=doc)
    @click.argument("item_id", required=True)
    @click.option("--json", "output_json", is_flag=True, help="Output as JSON")
    @click.pass_context
    def command(ctx, item_id: str, output_json: bool):
        async def _reschedule():
            library = _library(ctx)
            item = await library.reschedule(item_id, mode)
            if item is None:
                raise ItemNotFoundError(item_id)
            _echo_item(item, library, output_json, f"Rescheduled {item_id} ({mode.value})")

        _run(_reschedule())

    return command


remember = _mark_command(
    ReviewOutcome.POSITIVE, "remember",
    "Mark an item as remembered: the interval doubles, up to one year.",
)
forget = _mark_command(
    ReviewOutcome.NEGATIVE, "forget",
    "Mark an item as forgotten: the interval resets to one day.",
)
review_today = _reschedule_command(
    RescheduleMode.TODAY, "review-today",
    "Make an item due immediately.",
)
review_earlier = _reschedule_command(
    RescheduleMode.EARLIER, "review-earlier",
    "Halve the time remaining until an item is due.",
)


@cli.command()
@click.argument("item_id", required=True)
@click.pass_context
def remove(ctx, item_id: str):
    """
    Remove a saved item.

    Example:
        resurfacer remove 1789
    """
    async def _remove():
        library = _library(ctx)
        if not await library.remove(item_id):
            raise ItemNotFoundError(item_id)
        click.echo(f"Removed item: {item_id}")

    _run(_remove())


@cli.command()
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Clear without confirmation",
)
@click.pass_context
def clear(ctx, force: bool):
    """
    Remove every saved item from the store.
    """
    if not force:
        click.confirm("Do you want to remove all saved items?", abort=True)

    async def _clear():
        library = _library(ctx)
        await library.clear()
        click.echo("Cleared all saved items.")

    _run(_clear())


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
