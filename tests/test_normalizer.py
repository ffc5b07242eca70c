"""
Tests for window title normalization.
"""
import pytest
from playon.playon.normalizer import (
    normalize,
    normalize_separators,
    split_extension,
    strip_player_suffix,
)


def test_removes_player_suffix():
    assert strip_player_suffix("Anime - 01 - VLC media player") == "Anime - 01"


def test_suffix_priority_prefers_full_vlc_name():
    # " - VLC media player" is tried before " - VLC"
    assert strip_player_suffix("Show - VLC media player") == "Show"


def test_suffix_uses_rightmost_occurrence():
    assert strip_player_suffix("A - mpv - B - mpv") == "A - mpv - B"


def test_only_one_suffix_is_removed():
    assert strip_player_suffix("Show - 01 - mpv - VLC media player") == "Show - 01 - mpv"


def test_suffix_is_case_insensitive():
    assert strip_player_suffix("Show - 01 - vlc MEDIA player") == "Show - 01"
    assert strip_player_suffix("Show - 01 - MPV") == "Show - 01"


def test_en_dash_suffix():
    assert strip_player_suffix("Show – VLC media player") == "Show"


def test_no_suffix_only_trims():
    assert strip_player_suffix("  Visual Studio Code ") == "Visual Studio Code"


def test_separators_become_spaces():
    assert normalize_separators("Anime_Title_01.mkv") == "Anime Title 01.mkv"
    assert normalize_separators("Anime.Title.01.mkv") == "Anime Title 01.mkv"


def test_separators_keep_extension_case():
    assert normalize_separators("Anime.Title.01.MKV") == "Anime Title 01.MKV"


def test_separators_collapse_whitespace():
    assert normalize_separators("a__b  c") == "a b c"
    assert normalize_separators("  Show..Name  ") == "Show Name"


def test_split_extension():
    assert split_extension("Show - 01.mkv") == ("Show - 01", ".mkv")
    assert split_extension("Show - 01") == ("Show - 01", None)
    assert split_extension("Show.Mp4") == ("Show", ".Mp4")


def test_normalize_full_title():
    assert normalize("[SubsPlease] Jujutsu Kaisen - 23 [1080p].mkv - mpv") == \
        "[SubsPlease] Jujutsu Kaisen - 23 [1080p].mkv"
    assert normalize("Anime_Title_-_01.mkv - VLC media player") == "Anime Title - 01.mkv"


def test_normalize_empty():
    assert normalize("") == ""
    assert normalize("   ") == ""


@pytest.mark.parametrize("raw", [
    "[SubsPlease] Jujutsu Kaisen - 23 [1080p].mkv - mpv",
    "Frieren - 05 [1080p].mkv - VLC media player",
    "My Hero Academia S05E12.mp4 - VLC media player",
    "Attack on Titan Episode 25 - MPC-HC",
    "[Erai-raws] Spy x Family - 12 [1080p][HEVC].mkv - VLC",
    "Anime.Title.S02E05.mkv",
    "Anime_Title_01.mkv",
    "Chitose Is In The Ramune Bottle Episode 1 English Sub at Hianime - Google Chrome",
    "Show .mkv",
    "Visual Studio Code",
    "",
])
def test_normalize_is_idempotent(raw):
    once = normalize(raw)
    assert normalize(once) == once


@pytest.mark.parametrize("raw,once,twice", [
    # Separator conversion exposes a suffix only after the strip step ran
    ("Show_-_mpv", "Show - mpv", "Show"),
    # Only one suffix comes off per call
    ("X - mpv - VLC media player", "X - mpv", "X"),
])
def test_normalize_strips_one_suffix_per_call(raw, once, twice):
    assert normalize(raw) == once
    assert normalize(once) == twice
    assert normalize(twice) == twice
