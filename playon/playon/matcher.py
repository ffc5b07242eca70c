"""
Progressive catalog matching.

Parsed titles often carry trailing noise the parser could not strip, and
catalog search is sensitive to exact phrasing, so the longest query is not
always the best one. The matcher starts with the first word of the title
and widens one word at a time, accepting a catalog hit only when it
actually contains every word that was searched for.
"""

import logging
from typing import Callable, List, Optional

from .models import MatchCandidate, MatchResult

logger = logging.getLogger(__name__)

# query -> best catalog guess or None; raises CatalogSearchError on failure
SearchFn = Callable[[str], Optional[MatchCandidate]]


def candidate_matches_query(candidate: MatchCandidate, query_words: List[str]) -> bool:
    """
    True if every query word appears (case-insensitively) in the English
    or the romaji title of the candidate.
    """
    english = (candidate.english or "").lower()
    romaji = (candidate.romaji or "").lower()
    for word in query_words:
        word = word.lower()
        if word not in english and word not in romaji:
            return False
    return True


class ProgressiveMatcher:
    """Resolves a parsed title to a catalog record by widening word-prefix searches."""

    def __init__(self, search: SearchFn):
        self.search = search

    def resolve(self, title: str) -> Optional[MatchResult]:
        """
        Searches the catalog with the first 1, 2, ... N words of `title`.

        Issues at most N sequential searches and stops at the first
        candidate that passes validation. Search failures propagate
        immediately; nothing is retried here.

        Returns:
            MatchResult for the first validated candidate, or None if no
            prefix produced one.
        """
        words = title.split()
        total_words = len(words)
        if not total_words:
            return None

        for word_count in range(1, total_words + 1):
            query_words = words[:word_count]
            query = " ".join(query_words)

            candidate = self.search(query)
            if candidate is None:
                logger.debug(f"No catalog result for '{query}' ({word_count}/{total_words} words)")
                continue

            if candidate_matches_query(candidate, query_words):
                logger.info(
                    f"Matched '{title}' to '{candidate.display_title}' "
                    f"using '{query}' ({word_count}/{total_words} words)"
                )
                return MatchResult(
                    candidate=candidate,
                    matched_query=query,
                    words_used=word_count,
                    total_words=total_words,
                )

            logger.debug(
                f"Rejected '{candidate.display_title}' for query '{query}': "
                f"not all query words present"
            )

        logger.info(f"No validated catalog match for '{title}' after {total_words} searches")
        return None

    def resolve_candidate(self, title: str) -> Optional[MatchCandidate]:
        """Like resolve(), but returns only the matched candidate."""
        result = self.resolve(title)
        return result.candidate if result else None
