"""
Parse command for PlayOn CLI.

Runs classification, normalization and parsing on a title without
touching the network.
"""
import click

from .base import render_parsed, echo_json
from ..normalizer import normalize
from ..player import classify
from ..title_parser import parse


@click.command("parse")
@click.argument("window_title")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
def parse_title(window_title: str, as_json: bool) -> None:
    """
    Parses WINDOW_TITLE into title, episode and season.
    """
    player = classify(window_title)
    normalized = normalize(window_title)
    parsed = parse(normalized)

    if as_json:
        echo_json({
            "player": player.value if player else None,
            "normalized": normalized,
            "parsed": parsed.to_dict(),
        })
        return

    render_parsed(window_title, normalized, player, parsed)
