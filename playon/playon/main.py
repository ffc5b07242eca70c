import sys
import click
from dotenv import load_dotenv, find_dotenv
from pydantic import ValidationError
from rich.markup import escape

# Load environment variables immediately
load_dotenv(find_dotenv(usecwd=True))

from .config import get_config, setup_config
from .logging import setup_logging, set_log_level, console, ConfigError
from .cli.detect import detect
from .cli.parse import parse_title
from .cli.search import search
from .cli.settings import show_config
from .cli.windows import list_windows

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group()
@click.option("--config", "config_file", type=click.Path(exists=True, dir_okay=False), default=None, help="Load settings from a JSON file written by 'playon config --save'.")
@click.option("--log-level", type=click.Choice(LOG_LEVELS, case_sensitive=False), default=None, help="Console log level (default from LOG_CONSOLE_LEVEL).")
def cli(config_file, log_level):
    """PlayOn: recognize the anime playing in your media player."""
    if config_file:
        try:
            setup_config(config_file=config_file)
        except (ConfigError, ValidationError) as e:
            console.print(f"[red]Invalid configuration file: {escape(str(e))}[/red]")
            sys.exit(1)

    log_config = get_config().logging
    setup_logging(log_config.log_file)
    set_log_level(log_config.file_level, "file")
    set_log_level(log_level or log_config.console_level, "console")


cli.add_command(detect)
cli.add_command(parse_title)
cli.add_command(search)
cli.add_command(show_config)
cli.add_command(list_windows)


if __name__ == "__main__":
    cli()
