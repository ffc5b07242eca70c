"""
Search command for PlayOn CLI.

Runs the progressive AniList search on a title and reports how many of
its words were needed.
"""
import sys
import click

from rich.markup import escape

from .base import get_app, render_match, echo_json, verbosity
from ..logging import get_logger, console, CatalogSearchError

logger = get_logger(__name__)


@click.command()
@click.argument("title")
@click.option("--json", "as_json", is_flag=True, help="Print the match as JSON.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v: INFO, -vv: DEBUG shows every widening step).")
@click.pass_context
def search(ctx: click.Context, title: str, as_json: bool, verbose: int) -> None:
    """
    Finds the AniList entry for TITLE, widening the query one word at a time.
    """
    app = get_app(ctx)
    logger.info(f"Search command started (title={title})")

    try:
        with verbosity(verbose, app.config), \
                console.status(f"[bold green]Searching AniList for '{escape(title)}'..."):
            result = app.matcher.resolve(title)
    except CatalogSearchError as e:
        logger.error(f"Search failed for '{title}': {e}")
        console.print(f"[red]AniList search failed: {escape(str(e))}[/red]")
        sys.exit(1)

    if as_json:
        echo_json(result.to_dict() if result else {"match": None})
        return

    render_match(result, title)
