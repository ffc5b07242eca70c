"""
Shared CLI utilities and base functionality.

Builds the long-lived objects (config, cache, catalog client) once per
process and renders pipeline results with rich.
"""
import json
from contextlib import contextmanager
import click
from dataclasses import dataclass
from typing import Any, Dict, Optional

from rich.panel import Panel
from rich.table import Table
from rich import box
from rich.markup import escape

from ..anilist import AniListClient
from ..cache import LookupCache
from ..config import PlayOnConfig, get_config
from ..detector import Detector
from ..matcher import ProgressiveMatcher
from ..models import DetectionResult, MatchResult, ParsedTitle, PlayerKind
from ..windows import DesktopWindowSource
from ..logging import get_logger, console, temporary_log_level

logger = get_logger(__name__)


@dataclass
class AppContext:
    """Objects shared by every command for the lifetime of the process."""
    config: PlayOnConfig
    client: AniListClient
    matcher: ProgressiveMatcher
    cache: Optional[LookupCache]

    def build_detector(self, with_match: bool = True) -> Detector:
        return Detector(
            DesktopWindowSource(),
            matcher=self.matcher if with_match else None,
            cache=self.cache,
        )


def build_app_context(config: Optional[PlayOnConfig] = None) -> AppContext:
    config = config or get_config()
    client = AniListClient(config.anilist)
    cache = LookupCache(ttl_seconds=config.cache.ttl_seconds) if config.cache.enabled else None
    logger.debug(f"App context ready (cache={'on' if cache else 'off'}, api={config.anilist.api_url})")
    return AppContext(
        config=config,
        client=client,
        matcher=ProgressiveMatcher(client.search),
        cache=cache,
    )


def get_app(ctx: click.Context) -> AppContext:
    """Returns the process-wide AppContext, creating it on first use."""
    root = ctx.find_root()
    if not isinstance(root.obj, AppContext):
        root.obj = build_app_context()
    return root.obj


def echo_json(data: Dict[str, Any]) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _fmt(value: Any) -> str:
    return "-" if value is None else str(value)


def render_parsed(window_title: str, normalized: str, player: Optional[PlayerKind], parsed: ParsedTitle) -> None:
    table = Table(box=box.ROUNDED, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Window", escape(window_title))
    table.add_row("Player", player.value if player else "[dim]not a media player[/dim]")
    table.add_row("Normalized", escape(normalized))
    table.add_row("Title", escape(_fmt(parsed.title)))
    table.add_row("Episode", _fmt(parsed.episode))
    table.add_row("Season", _fmt(parsed.season))
    console.print(table)


def render_match(result: Optional[MatchResult], title: str) -> None:
    if result is None:
        console.print(f"[yellow]No AniList match for '{escape(title)}'.[/yellow]")
        return
    console.print(f"[bold green]Found:[/bold green] {escape(result.candidate.display_title)}")
    if result.candidate.anilist_id:
        console.print(f"[dim]AniList ID: {result.candidate.anilist_id}[/dim]")
    console.print(
        f"[dim]Matched with \"{escape(result.matched_query)}\" "
        f"({result.words_used}/{result.total_words} words)[/dim]"
    )


def render_detection(result: DetectionResult) -> None:
    if not result.is_detected:
        message = {
            "no_window": "[dim]No active window[/dim]",
            "not_media_player": "[dim]No media playing[/dim]",
        }[result.status.value]
        console.print(message)
        return

    parsed = result.parsed or ParsedTitle()
    lines = [f"[bold]{result.player.value}[/bold]  [dim]{escape(result.window_title)}[/dim]"]

    if result.match:
        lines.append(f"[bold green]{escape(result.match.display_title)}[/bold green]")
    else:
        lines.append(f"[bold]{escape(parsed.title or 'Unknown Title')}[/bold] [yellow](no AniList match)[/yellow]")

    if parsed.episode is not None:
        episode_line = f"Episode {parsed.episode}"
        if result.match and result.match.episodes:
            episode_line += f" / {result.match.episodes}"
        if parsed.season is not None:
            episode_line += f" • Season {parsed.season}"
        lines.append(episode_line)

    console.print(Panel("\n".join(lines), title="Now Playing", style="magenta", expand=False))


def verbosity_level(verbose: int, config: PlayOnConfig) -> Optional[str]:
    """Console level for -v (INFO) and -vv (DEBUG). PlayOnConfig.verbose counts as -v."""
    if verbose >= 2:
        return "DEBUG"
    if verbose == 1 or config.verbose:
        return "INFO"
    return None


@contextmanager
def verbosity(verbose: int, config: PlayOnConfig):
    """Raises console logging for the duration of a command, if asked to."""
    level = verbosity_level(verbose, config)
    if level is None:
        yield
        return
    with temporary_log_level(level):
        yield
