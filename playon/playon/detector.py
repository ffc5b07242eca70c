"""
End-to-end "what is playing" detection.

Ties the window collaborator, player classification, title parsing and
catalog matching together into a single DetectionResult.
"""

from typing import List, Optional, Protocol

from .cache import LookupCache
from .logging import get_logger
from .matcher import ProgressiveMatcher
from .models import DetectionResult, DetectionStatus, MatchCandidate
from .player import classify
from .title_parser import parse_window_title

logger = get_logger(__name__)


class WindowSource(Protocol):
    def get_active_window_title(self) -> Optional[str]: ...

    def get_all_visible_window_titles(self) -> List[str]: ...


class Detector:
    """
    Recognizes the media in the active window.

    The cache is optional and owned by the caller; pass the same instance
    to every detector that should share resolutions.
    """

    def __init__(
        self,
        window_source: WindowSource,
        matcher: Optional[ProgressiveMatcher] = None,
        cache: Optional[LookupCache] = None
    ):
        self.window_source = window_source
        self.matcher = matcher
        self.cache = cache

    def _match(self, title: str) -> Optional[MatchCandidate]:
        if self.matcher is None:
            return None
        if self.cache is None:
            return self.matcher.resolve_candidate(title)
        return self.cache.get_or_resolve(title, lambda: self.matcher.resolve_candidate(title))

    def detect_title(self, window_title: str) -> DetectionResult:
        """
        Runs the pipeline on a known window title.

        Raises:
            CatalogSearchError: If the catalog search fails.
        """
        player = classify(window_title)
        if player is None:
            return DetectionResult(
                status=DetectionStatus.NOT_MEDIA_PLAYER,
                window_title=window_title,
            )

        parsed = parse_window_title(window_title)
        match = self._match(parsed.title) if parsed.title else None

        logger.debug(f"Detected {player.value}: '{window_title}' -> {parsed}")
        return DetectionResult(
            status=DetectionStatus.DETECTED,
            player=player,
            window_title=window_title,
            parsed=parsed,
            match=match,
        )

    def detect(self) -> DetectionResult:
        """Runs the pipeline on the active window."""
        window_title = self.window_source.get_active_window_title()
        if not window_title:
            return DetectionResult(status=DetectionStatus.NO_WINDOW)
        return self.detect_title(window_title)

    def detect_any(self) -> DetectionResult:
        """
        Like detect(), but when the active window is not a media player,
        falls back to the first visible window that is.
        """
        result = self.detect()
        if result.is_detected:
            return result

        for window_title in self.window_source.get_all_visible_window_titles():
            if window_title == result.window_title or classify(window_title) is None:
                continue
            logger.debug(f"Active window is not a player; using background window '{window_title}'")
            return self.detect_title(window_title)

        return result
