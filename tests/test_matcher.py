"""
Tests for the progressive catalog matcher.
"""
import pytest
from playon.playon.logging import CatalogSearchError
from playon.playon.matcher import ProgressiveMatcher, candidate_matches_query
from playon.playon.models import MatchCandidate, MatchResult

FRIEREN = MatchCandidate(english="Frieren: Beyond Journey's End", romaji="Sousou no Frieren", anilist_id=154587)
APOTHECARY = MatchCandidate(english="The Apothecary Diaries", romaji="Kusuriya no Hitorigoto")
ATTACK_ON_TITAN = MatchCandidate(english="Attack on Titan", romaji="Shingeki no Kyojin")


class FakeCatalog:
    """Records every query and answers from a fixed table (or a default)."""

    def __init__(self, answers=None, default=None):
        self.answers = answers or {}
        self.default = default
        self.calls = []

    def __call__(self, query):
        self.calls.append(query)
        return self.answers.get(query, self.default)


def test_first_word_match_stops_immediately():
    catalog = FakeCatalog(default=FRIEREN)
    result = ProgressiveMatcher(catalog).resolve("Frieren Beyond Journey's End")

    assert result == MatchResult(candidate=FRIEREN, matched_query="Frieren", words_used=1, total_words=4)
    assert catalog.calls == ["Frieren"]


def test_widens_after_rejected_candidate():
    catalog = FakeCatalog({
        "The": ATTACK_ON_TITAN,  # "the" is in neither title
        "The Apothecary": APOTHECARY,
    })
    result = ProgressiveMatcher(catalog).resolve("The Apothecary Diaries")

    assert result.candidate == APOTHECARY
    assert result.matched_query == "The Apothecary"
    assert result.words_used == 2
    assert result.total_words == 3
    assert catalog.calls == ["The", "The Apothecary"]


def test_widens_after_empty_result():
    catalog = FakeCatalog({"Sousou no": FRIEREN})
    result = ProgressiveMatcher(catalog).resolve("Sousou no Frieren")

    assert result.matched_query == "Sousou no"
    assert catalog.calls == ["Sousou", "Sousou no"]


def test_no_match_after_all_words():
    catalog = FakeCatalog()
    result = ProgressiveMatcher(catalog).resolve("Some Unknown Show")

    assert result is None
    assert catalog.calls == ["Some", "Some Unknown", "Some Unknown Show"]


def test_empty_title_issues_no_searches():
    catalog = FakeCatalog(default=FRIEREN)
    matcher = ProgressiveMatcher(catalog)

    assert matcher.resolve("") is None
    assert matcher.resolve("   ") is None
    assert catalog.calls == []


def test_queries_collapse_whitespace():
    catalog = FakeCatalog()
    ProgressiveMatcher(catalog).resolve("  Spy   x  Family ")
    assert catalog.calls == ["Spy", "Spy x", "Spy x Family"]


def test_search_failure_propagates_without_widening():
    calls = []

    def failing_search(query):
        calls.append(query)
        if len(calls) == 2:
            raise CatalogSearchError("AniList request failed: timeout")
        return None

    with pytest.raises(CatalogSearchError):
        ProgressiveMatcher(failing_search).resolve("Jujutsu Kaisen Season 2")

    assert calls == ["Jujutsu", "Jujutsu Kaisen"]


@pytest.mark.parametrize("title", [
    "Frieren",
    "Frieren Beyond Journey's End",
    "The Apothecary Diaries",
    "Some Unknown Show With Many Words",
])
@pytest.mark.parametrize("answer", [None, FRIEREN, APOTHECARY])
def test_search_count_and_words_used_bounds(title, answer):
    catalog = FakeCatalog(default=answer)
    total = len(title.split())
    result = ProgressiveMatcher(catalog).resolve(title)

    assert len(catalog.calls) <= total
    if result is not None:
        assert 1 <= result.words_used <= total
        assert result.total_words == total
        assert len(catalog.calls) == result.words_used


def test_resolve_candidate():
    matcher = ProgressiveMatcher(FakeCatalog(default=FRIEREN))
    assert matcher.resolve_candidate("Frieren") == FRIEREN
    assert ProgressiveMatcher(FakeCatalog()).resolve_candidate("Frieren") is None


class TestValidation:
    def test_words_may_come_from_either_title(self):
        assert candidate_matches_query(FRIEREN, ["Sousou", "Beyond"])

    def test_case_insensitive(self):
        assert candidate_matches_query(FRIEREN, ["FRIEREN", "sOuSoU"])

    def test_missing_word_rejects(self):
        assert not candidate_matches_query(FRIEREN, ["Frieren", "Kaisen"])

    def test_substring_match(self):
        # Validation is substring-based, so partial words count
        assert candidate_matches_query(FRIEREN, ["Frier"])

    def test_missing_fields_count_as_empty(self):
        romaji_only = MatchCandidate(romaji="Sousou no Frieren")
        assert candidate_matches_query(romaji_only, ["frieren"])
        assert not candidate_matches_query(MatchCandidate(), ["frieren"])


def test_match_result_rejects_invalid_word_counts():
    with pytest.raises(ValueError):
        MatchResult(candidate=FRIEREN, matched_query="", words_used=0, total_words=2)
    with pytest.raises(ValueError):
        MatchResult(candidate=FRIEREN, matched_query="a b c", words_used=3, total_words=2)
