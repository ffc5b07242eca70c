"""
Parses anime titles and episode numbers out of normalized window titles.

Handles the common release naming schemes seen in VLC, mpv, MPC and
browser tabs:

    [SubGroup] Anime Title - 05 [1080p].mkv
    Anime Title S02E05.mkv
    Anime Title Episode 12
    Anime Title - 05.mp4

Parsing is an ordered list of strategies; the first one that matches
decides the result. Adding a format means appending a strategy.
"""

import re
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from .models import ParsedTitle
from .normalizer import normalize, split_extension
from .constants import QUALITY_TAG_TOKENS

logger = logging.getLogger(__name__)

# --- REGEX DEFINITIONS ---

# 1. S02E05 (whitespace allowed around the S/E markers)
SEASON_EPISODE_REGEX = re.compile(r"(.+?)\s*S(\d{1,2})\s*E(\d{1,3})", re.IGNORECASE)

# 2. "Episode 12", "Ep 12", "Ep.12"
EPISODE_KEYWORD_REGEX = re.compile(r"(.+?)\s*(?:Episode|Ep\.?)\s*(\d{1,3})", re.IGNORECASE)

# 3. "Title - 05 [..." / "Title - 05.mkv" / "Title - 05"
DASH_NUMBER_REGEX = re.compile(r'''
    (.+?)\s*-\s*        # Title, then a hyphen
    (\d{1,3})           # Episode number
    (?:                 # Must be followed by one of:
        \s*[\[\(]       #   a bracket or paren (quality tags)
      | \s*\.           #   a period (file extension)
      | \s*$            #   end of string
    )
''', re.IGNORECASE | re.VERBOSE)

# Leading "[SubGroup] " tag
SUBGROUP_REGEX = re.compile(r"^\s*\[[^\]]+\]\s*")

# [1080p], (HEVC), [x264] ...
QUALITY_TAG_REGEX = re.compile(
    r"[\[\(]\s*(?:" + "|".join(QUALITY_TAG_TOKENS) + r")\s*[\]\)]",
    re.IGNORECASE,
)

# Trailing CRC hash like [ABCD1234]
HASH_TAG_REGEX = re.compile(r"\s*\[[A-Fa-f0-9]{8}\]\s*$")


def clean_title(title: str) -> str:
    """
    Removes release noise from a raw title: file extension, quality tags,
    a leading subgroup tag, a trailing CRC hash and dangling hyphens.

    "[SubsPlease] Jujutsu Kaisen [1080p].mkv" -> "Jujutsu Kaisen"
    """
    result, _ = split_extension(title)
    result = QUALITY_TAG_REGEX.sub("", result)
    result = SUBGROUP_REGEX.sub("", result, count=1)
    result = HASH_TAG_REGEX.sub("", result, count=1)
    return result.strip().rstrip("-").strip()


def _title_or_none(raw: str) -> Optional[str]:
    return clean_title(raw) or None


# --- STRATEGIES ---

@dataclass(frozen=True)
class ParseStrategy:
    """A named, pure attempt at parsing a title. Returns None when it does not apply."""
    name: str
    attempt: Callable[[str], Optional[ParsedTitle]]


def parse_season_episode(title: str) -> Optional[ParsedTitle]:
    match = SEASON_EPISODE_REGEX.search(title)
    if not match:
        return None
    return ParsedTitle(
        title=_title_or_none(match.group(1)),
        episode=int(match.group(3)),
        season=int(match.group(2)),
    )


def parse_episode_keyword(title: str) -> Optional[ParsedTitle]:
    match = EPISODE_KEYWORD_REGEX.search(title)
    if not match:
        return None
    return ParsedTitle(title=_title_or_none(match.group(1)), episode=int(match.group(2)))


def parse_dash_number(title: str) -> Optional[ParsedTitle]:
    match = DASH_NUMBER_REGEX.search(title)
    if not match:
        return None
    return ParsedTitle(title=_title_or_none(match.group(1)), episode=int(match.group(2)))


def parse_bracketed(title: str) -> Optional[ParsedTitle]:
    """[SubGroup] Title - ## [quality]: drop the group tag, then dash-number."""
    return parse_dash_number(SUBGROUP_REGEX.sub("", title, count=1))


STRATEGIES: List[ParseStrategy] = [
    ParseStrategy("season_episode", parse_season_episode),
    ParseStrategy("episode_keyword", parse_episode_keyword),
    ParseStrategy("dash_number", parse_dash_number),
    ParseStrategy("bracketed", parse_bracketed),
]


def parse(normalized_title: str, strategies: Optional[List[ParseStrategy]] = None) -> ParsedTitle:
    """
    Runs the strategies in order and returns the first result.

    Falls back to the cleaned title with no episode or season when no
    strategy applies.
    """
    for strategy in strategies if strategies is not None else STRATEGIES:
        result = strategy.attempt(normalized_title)
        if result is not None:
            logger.debug(f"Parsed '{normalized_title}' with {strategy.name}: {result}")
            return result

    logger.debug(f"No strategy matched '{normalized_title}', using cleaned title")
    return ParsedTitle(title=_title_or_none(normalized_title))


def parse_window_title(window_title: str) -> ParsedTitle:
    """Parses a raw window title (player suffix and all)."""
    return parse(normalize(window_title))
