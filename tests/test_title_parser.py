"""
Tests for title parsing: the strategy cascade and title cleaning.
"""
import pytest
from playon.playon.models import ParsedTitle
from playon.playon.title_parser import (
    ParseStrategy,
    STRATEGIES,
    clean_title,
    parse,
    parse_bracketed,
    parse_dash_number,
    parse_window_title,
)


def test_simple_dash_format():
    result = parse("Frieren - 05 [1080p].mkv")
    assert result == ParsedTitle(title="Frieren", episode=5, season=None)


def test_subgroup_format():
    result = parse("[SubsPlease] Jujutsu Kaisen - 23 [1080p].mkv")
    assert result.title == "Jujutsu Kaisen"
    assert result.episode == 23


def test_season_episode_format():
    result = parse("My Hero Academia S05E12.mp4")
    assert result == ParsedTitle(title="My Hero Academia", episode=12, season=5)


def test_season_episode_with_spaces():
    result = parse("Mushoku Tensei S2 E05")
    assert result.title == "Mushoku Tensei"
    assert result.season == 2
    assert result.episode == 5


def test_season_episode_needs_digits_right_after_markers():
    # "S 2 E 05" is not a season/episode marker; nothing else applies either
    result = parse("Mushoku Tensei S 2 E 05")
    assert result == ParsedTitle(title="Mushoku Tensei S 2 E 05")


@pytest.mark.parametrize("window_title,title,episode,season", [
    ("Frieren - 05 [1080p].mkv - VLC media player", "Frieren", 5, None),
    ("[SubsPlease] Jujutsu Kaisen - 23 [1080p].mkv - mpv", "Jujutsu Kaisen", 23, None),
    ("My Hero Academia S05E12.mp4 - VLC media player", "My Hero Academia", 12, 5),
    ("Attack on Titan Episode 25 - MPC-HC", "Attack on Titan", 25, None),
    ("[Erai-raws] Spy x Family - 12 [1080p][HEVC].mkv - VLC", "Spy x Family", 12, None),
    ("Anime.Title.S02E05.mkv - mpv", "Anime Title", 5, 2),
    ("Anime_Title_-_01.mkv", "Anime Title", 1, None),
    ("[Judas] Vinland Saga - 03 [1080p] [ABCDEF12].mkv - mpv", "Vinland Saga", 3, None),
])
def test_window_titles(window_title, title, episode, season):
    result = parse_window_title(window_title)
    assert result.title == title
    assert result.episode == episode
    assert result.season == season


def test_hianime_browser_title():
    result = parse_window_title(
        "Chitose Is In The Ramune Bottle Episode 1 English Sub at Hianime - Google Chrome"
    )
    assert result.episode == 1
    assert result.title == "Chitose Is In The Ramune Bottle"


def test_episode_keyword_abbreviation():
    assert parse("Dandadan Ep.7") == ParsedTitle(title="Dandadan", episode=7)
    assert parse("Dandadan Ep 7") == ParsedTitle(title="Dandadan", episode=7)
    assert parse("Dandadan EPISODE 7") == ParsedTitle(title="Dandadan", episode=7)


def test_no_episode_number_falls_back_to_title():
    result = parse_window_title("Random Movie Title - VLC media player")
    assert result == ParsedTitle(title="Random Movie Title")


def test_dash_number_rejects_resolution_tags():
    # "- 108" is followed by "0p", none of the allowed terminators
    result = parse("Show - 1080p")
    assert result.episode is None
    assert result.title == "Show - 1080p"


def test_dash_number_rejects_version_suffix():
    assert parse_dash_number("Spy x Family - 12v2") is None


def test_dash_number_terminators():
    assert parse_dash_number("Show - 04 [720p]").episode == 4
    assert parse_dash_number("Show - 04(720p)").episode == 4
    assert parse_dash_number("Show - 04.mkv").episode == 4
    assert parse_dash_number("Show - 04").episode == 4
    assert parse_dash_number("Show-04").episode == 4


def test_bracketed_strategy_strips_group_first():
    assert parse_bracketed("[Group] Show - 04") == ParsedTitle(title="Show", episode=4)


def test_first_strategy_wins():
    result = parse("Show S01E02 - 05 [1080p]")
    assert result == ParsedTitle(title="Show", episode=2, season=1)


def test_season_only_with_episode():
    samples = [
        "Frieren - 05 [1080p].mkv",
        "My Hero Academia S05E12.mp4",
        "Attack on Titan Episode 25",
        "Random Movie Title",
        "",
    ]
    for sample in samples:
        result = parse(sample)
        if result.season is not None:
            assert result.episode is not None, sample


def test_empty_input():
    assert parse("") == ParsedTitle()


def test_group_tag_only_has_no_title():
    result = parse("[Group] - 05.mkv")
    assert result.title is None
    assert result.episode == 5


def test_custom_strategy_list():
    always = ParseStrategy("always", lambda text: ParsedTitle(title="X"))
    assert parse("Frieren - 05", strategies=[always]) == ParsedTitle(title="X")
    assert parse("Frieren - 05", strategies=[]) == ParsedTitle(title="Frieren - 05")


def test_strategy_order():
    assert [s.name for s in STRATEGIES] == [
        "season_episode", "episode_keyword", "dash_number", "bracketed",
    ]


class TestCleanTitle:
    def test_removes_extension_quality_and_group(self):
        assert clean_title("[SubsPlease] Jujutsu Kaisen [1080p].mkv") == "Jujutsu Kaisen"

    def test_removes_codec_tags_and_trailing_hyphen(self):
        assert clean_title("Show (x265) [HEVC] -") == "Show"
        assert clean_title("Show [hevc][FLAC][10bit]") == "Show"
        assert clean_title("Show (WEB-DL) (BluRay)") == "Show"

    def test_removes_trailing_hash(self):
        assert clean_title("Show [ABCD1234]") == "Show"

    def test_keeps_other_brackets(self):
        assert clean_title("Show (2023)") == "Show (2023)"
        assert clean_title("Show [Uncensored]") == "Show [Uncensored]"

    def test_only_one_leading_group_removed(self):
        assert clean_title("[A] [B] Show") == "[B] Show"

    def test_empty(self):
        assert clean_title("") == ""
        assert clean_title(" - ") == ""
