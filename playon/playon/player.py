"""
Media player detection from window titles.

Only windows whose titles advertise a known player, a known streaming
site, or a video file are tracked. Everything else (editors, file
managers, chat clients) is ignored.
"""

from typing import Optional

from .models import PlayerKind
from .constants import DESKTOP_PLAYER_NAMES, STREAMING_SITE_NAMES, VIDEO_EXTENSIONS


def classify(raw_title: str) -> Optional[PlayerKind]:
    """
    Detects the media player a window title belongs to.

    Rules are tried in a fixed order and the first hit wins: desktop
    player names, then streaming-site brands (classified as BROWSER),
    then a bare video extension (GENERIC).

    Returns:
        The PlayerKind, or None for windows that are not media players.
    """
    title = raw_title.lower()

    for needle, kind in DESKTOP_PLAYER_NAMES:
        if needle in title:
            return PlayerKind[kind]

    if any(site in title for site in STREAMING_SITE_NAMES):
        return PlayerKind.BROWSER

    if any(ext in title for ext in VIDEO_EXTENSIONS):
        return PlayerKind.GENERIC

    return None


def is_media_player(raw_title: str) -> bool:
    return classify(raw_title) is not None
