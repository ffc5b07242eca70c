"""
Constants used throughout the PlayOn application.
"""

# Video file extensions recognized in window titles (checked in this order)
VIDEO_EXTENSIONS = (
    ".mkv", ".mp4", ".avi", ".webm", ".m4v", ".mov", ".wmv", ".flv",
)

# Player Detection
# Ordered (needle, kind) pairs; the first needle found in the lower-cased title wins.
DESKTOP_PLAYER_NAMES = (
    ("vlc media player", "VLC"),
    ("mpv", "MPV"),
    ("mpc", "MPC"),
    ("media player classic", "MPC"),
    ("potplayer", "POTPLAYER"),
    ("kmplayer", "KMPLAYER"),
    ("gom player", "GOM"),
    ("windows media player", "WMP"),
)

# Streaming brands that show up in browser tab titles
STREAMING_SITE_NAMES = (
    "youtube",
    "netflix",
    "prime video",
    "crunchyroll",
    "funimation",
    "hidive",
    "hianime",
    "animepahe",
    "gogoanime",
    "disney+",
    "hulu",
    "bilibili",
)

# Window chrome appended by players, in priority order
PLAYER_SUFFIXES = (
    " - VLC media player",
    " - VLC",
    " - mpv",
    " - MPC-HC",
    " - MPC-BE",
    " - Media Player Classic",
    " - Windows Media Player",
    " - PotPlayer",
    " - KMPlayer",
    " - GOM Player",
    " – VLC media player",  # en-dash variant
)

# Tokens stripped from titles when they appear alone inside [] or ()
QUALITY_TAG_TOKENS = (
    r"\d{3,4}p",
    "BD", "BDRip", "BluRay", "DVD", "DVDRip",
    "WEB-DL", "WEBRip", "WEB",
    "HEVC", "AVC", "x264", "x265", "H264", "H265",
    "AAC", "FLAC", "AC3", "EAC3", "DTS", "Opus",
    "8bit", "10bit", "Hi10P",
)

# Cache Configuration
DEFAULT_CACHE_TTL_SECONDS = 300  # 5 minutes

# AniList API
ANILIST_API_URL = "https://graphql.anilist.co"
ANILIST_DEFAULT_PER_PAGE = 5
ANILIST_TIMEOUT_SECONDS = 10
ANILIST_RETRY_COUNT = 3
ANILIST_RETRY_BACKOFF_FACTOR = 0.5

# Detection
DEFAULT_POLL_INTERVAL_SECONDS = 3.0
NO_ACTIVE_WINDOW_TEXT = "No active window"

# Logging
DEFAULT_LOG_FILE = "playon.log"
