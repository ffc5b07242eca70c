from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional, Dict, Any


class PlayerKind(Enum):
    """Media players and sources recognized from a window title."""
    VLC = "VLC"
    MPV = "MPV"
    MPC = "MPC"
    POTPLAYER = "PotPlayer"
    KMPLAYER = "KMPlayer"
    GOM = "GOM Player"
    WMP = "Windows Media Player"
    BROWSER = "Browser"
    GENERIC = "Generic"


class DetectionStatus(Enum):
    DETECTED = "detected"
    NOT_MEDIA_PLAYER = "not_media_player"
    NO_WINDOW = "no_window"


@dataclass(frozen=True)
class ParsedTitle:
    """Structured fields pulled out of a window title. Every field is optional."""
    title: Optional[str] = None
    episode: Optional[int] = None
    season: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MatchCandidate:
    """
    A catalog record as returned by the catalog search.

    Only `english` and `romaji` are used for validation; the rest is
    carried along for display.
    """
    english: Optional[str] = None
    romaji: Optional[str] = None
    native: Optional[str] = None
    anilist_id: Optional[int] = None
    episodes: Optional[int] = None
    status: Optional[str] = None
    cover_image: Optional[str] = None

    @property
    def display_title(self) -> str:
        return self.english or self.romaji or self.native or "Unknown"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class MatchResult:
    """A validated catalog match and how much of the title it took to find it."""
    candidate: MatchCandidate
    matched_query: str
    words_used: int
    total_words: int

    def __post_init__(self):
        if not 1 <= self.words_used <= self.total_words:
            raise ValueError(
                f"words_used must be within 1..{self.total_words}, got {self.words_used}"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": {
                "english": self.candidate.english,
                "romaji": self.candidate.romaji,
            },
            "candidate": self.candidate.to_dict(),
            "matched_query": self.matched_query,
            "words_used": self.words_used,
            "total_words": self.total_words,
        }


@dataclass(frozen=True)
class CacheEntry:
    value: Optional[MatchCandidate]
    recorded_at: float


@dataclass
class DetectionResult:
    """Outcome of one end-to-end recognition pass over a window title."""
    status: DetectionStatus
    player: Optional[PlayerKind] = None
    window_title: Optional[str] = None
    parsed: Optional[ParsedTitle] = None
    match: Optional[MatchCandidate] = None

    @property
    def is_detected(self) -> bool:
        return self.status is DetectionStatus.DETECTED

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"status": self.status.value}
        if self.player is not None:
            data["player"] = self.player.value
        if self.window_title is not None:
            data["window_title"] = self.window_title
        if self.parsed is not None:
            data["parsed"] = self.parsed.to_dict()
        if self.is_detected:
            data["anilist_match"] = self.match.to_dict() if self.match else None
        return data
