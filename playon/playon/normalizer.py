"""
Window title normalization.

Removes the chrome players append to their window titles and turns
filename separators into plain spaces so the parser sees words.
"""

import re
from typing import Optional, Tuple

from .constants import PLAYER_SUFFIXES, VIDEO_EXTENSIONS

WHITESPACE_RE = re.compile(r"\s+")


def split_extension(title: str) -> Tuple[str, Optional[str]]:
    """Splits a trailing video extension off a title, if there is one."""
    lowered = title.lower()
    for ext in VIDEO_EXTENSIONS:
        if lowered.endswith(ext):
            cut = len(title) - len(ext)
            return title[:cut], title[cut:]
    return title, None


def strip_player_suffix(title: str) -> str:
    """
    Removes a media player suffix such as " - VLC media player".

    Suffixes are tried in priority order; the right-most occurrence of the
    first one present marks the cut. Only one suffix is ever removed.
    """
    lowered = title.lower()
    for suffix in PLAYER_SUFFIXES:
        pos = lowered.rfind(suffix.lower())
        if pos != -1:
            return title[:pos].strip()
    return title.strip()


def normalize_separators(title: str) -> str:
    """
    Treats '_' and '.' as word separators, leaving a trailing video
    extension untouched.

    "Anime_Title.01.mkv" -> "Anime Title 01.mkv"
    """
    body, ext = split_extension(title)
    body = body.replace("_", " ").replace(".", " ")
    body = WHITESPACE_RE.sub(" ", body)
    if ext:
        body += ext
    return body.strip()


def normalize(raw_title: str) -> str:
    """Strips player chrome and normalizes separators. Never fails."""
    return normalize_separators(strip_player_suffix(raw_title))
