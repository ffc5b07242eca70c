"""
Config command for PlayOn CLI.

Shows the effective configuration and writes it to a JSON file that
`playon --config FILE` can load later.
"""
import click
from typing import Optional

from rich.markup import escape

from .base import get_app, echo_json
from ..logging import get_logger, console

logger = get_logger(__name__)


@click.command("config")
@click.option("--save", "save_path", type=click.Path(dir_okay=False), default=None, help="Write the effective configuration to this JSON file.")
@click.pass_context
def show_config(ctx: click.Context, save_path: Optional[str]) -> None:
    """
    Prints the effective configuration (defaults, .env, environment and --config file).
    """
    config = get_app(ctx).config

    if save_path:
        config.save_to_file(save_path)
        logger.info(f"Configuration saved to {save_path}")
        console.print(f"[green]Saved configuration to {escape(save_path)}[/green]")
        return

    echo_json(config.model_dump(mode="json"))
