"""
Windows command for PlayOn CLI.

Lists visible windows and how each one is classified. Useful when a
player is not being picked up.
"""
import sys
import click

from rich.table import Table
from rich import box
from rich.markup import escape

from ..player import classify
from ..windows import get_all_visible_window_titles
from ..logging import get_logger, console, WindowAccessError

logger = get_logger(__name__)


@click.command("windows")
@click.option("--media-only", is_flag=True, help="Only list windows recognized as media players.")
def list_windows(media_only: bool) -> None:
    """
    Lists visible window titles and the player detected for each.
    """
    try:
        titles = get_all_visible_window_titles()
    except WindowAccessError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    table = Table(title="Visible Windows", box=box.ROUNDED)
    table.add_column("Player", style="cyan", width=20)
    table.add_column("Window Title", style="white")

    shown = 0
    for title in titles:
        player = classify(title)
        if media_only and player is None:
            continue
        table.add_row(player.value if player else "[dim]-[/dim]", escape(title))
        shown += 1

    logger.info(f"Listed {shown} of {len(titles)} visible windows")
    console.print(table)
