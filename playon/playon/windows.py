"""
Window title introspection.

Reads the title of the foreground window and of every visible window via
pygetwindow. Only Windows is supported; elsewhere WindowAccessError is
raised.
"""

import sys
from typing import List, Optional

from .logging import get_logger, WindowAccessError

logger = get_logger(__name__)


def _require_windows() -> None:
    if sys.platform != "win32":
        raise WindowAccessError(f"Reading window titles is not supported on {sys.platform}")


def get_active_window_title() -> Optional[str]:
    """Returns the foreground window's title, or None if there is no titled window."""
    _require_windows()
    import pygetwindow as gw

    window = gw.getActiveWindow()
    if window is None or not window.title:
        return None
    return window.title


def get_all_visible_window_titles() -> List[str]:
    """Returns the titles of all visible, titled windows, front to back."""
    _require_windows()
    import pygetwindow as gw

    titles = []
    for window in gw.getAllWindows():
        try:
            if window.visible and window.title and window.title.strip():
                titles.append(window.title)
        except Exception as e:
            # Windows can close between enumeration and inspection
            logger.debug(f"Skipping window during enumeration: {e}")
    return titles


class DesktopWindowSource:
    """Window collaborator backed by the real desktop."""

    def get_active_window_title(self) -> Optional[str]:
        return get_active_window_title()

    def get_all_visible_window_titles(self) -> List[str]:
        return get_all_visible_window_titles()
