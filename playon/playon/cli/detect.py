"""
Detect command for PlayOn CLI.

Recognizes the anime playing in the active window, once or continuously.
"""
import sys
import time
import click
from typing import Optional

from rich.markup import escape

from .base import get_app, render_detection, echo_json, verbosity
from ..detector import Detector
from ..models import DetectionResult
from ..logging import get_logger, console, CatalogSearchError, WindowAccessError

logger = get_logger(__name__)


def _run_once(detector: Detector, all_windows: bool) -> DetectionResult:
    return detector.detect_any() if all_windows else detector.detect()


def _show(result: DetectionResult, as_json: bool) -> None:
    if as_json:
        echo_json(result.to_dict())
    else:
        render_detection(result)


def _detect_once(detector: Detector, all_windows: bool, as_json: bool) -> None:
    try:
        result = _run_once(detector, all_windows)
    except WindowAccessError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)
    except CatalogSearchError as e:
        logger.error(f"Catalog search failed during detection: {e}")
        console.print(f"[red]AniList search failed: {escape(str(e))}[/red]")
        sys.exit(1)
    _show(result, as_json)


def _watch(detector: Detector, all_windows: bool, interval: float, as_json: bool) -> None:
    last_key = None
    try:
        while True:
            try:
                result = _run_once(detector, all_windows)
            except WindowAccessError as e:
                console.print(f"[red]Error: {escape(str(e))}[/red]")
                sys.exit(1)
            except CatalogSearchError as e:
                # Keep polling; the next pass retries the lookup since failures are never cached
                logger.warning(f"Catalog search failed, will retry next poll: {e}")
                console.print(f"[red]AniList search failed: {escape(str(e))}[/red]")
            else:
                key = (result.status, result.window_title, result.match)
                if key != last_key:
                    _show(result, as_json)
                    last_key = key
            time.sleep(interval)
    except KeyboardInterrupt:
        console.print("[dim]Stopped watching.[/dim]")


@click.command()
@click.option("--all-windows", is_flag=True, help="Fall back to any visible player window when the active one is not a player.")
@click.option("--watch", is_flag=True, help="Keep polling and report whenever the playing media changes.")
@click.option("--interval", type=click.FloatRange(min=0.1), default=None, help="Seconds between polls in watch mode (at least 0.1).")
@click.option("--no-match", is_flag=True, help="Skip the AniList lookup; only parse the title.")
@click.option("--json", "as_json", is_flag=True, help="Print the detection result as JSON.")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v: INFO, -vv: DEBUG).")
@click.pass_context
def detect(
    ctx: click.Context,
    all_windows: bool,
    watch: bool,
    interval: Optional[float],
    no_match: bool,
    as_json: bool,
    verbose: int
) -> None:
    """
    Shows what is playing in the active window.
    """
    app = get_app(ctx)
    all_windows = all_windows or app.config.detection.scan_all_windows
    if interval is None:
        interval = app.config.detection.poll_interval

    logger.info(f"Detect command started (watch={watch}, all_windows={all_windows}, no_match={no_match})")
    detector = app.build_detector(with_match=not no_match)

    with verbosity(verbose, app.config):
        if watch:
            _watch(detector, all_windows, interval, as_json)
        else:
            _detect_once(detector, all_windows, as_json)
