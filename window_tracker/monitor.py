"""Focused window monitor - finds the window with input focus and snapshots its attributes."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

from .base import Geometry, WindowHandle, WindowSource, Workspace

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class WindowSnapshot:
    """Attributes of the focused window, captured once per call."""

    title: str = ""
    window_class: str = ""
    role: str = ""
    pid: int = 0
    geometry: Geometry = field(default_factory=Geometry)
    workspace: Optional[Workspace] = None  # None: on all workspaces or WM has none

    @property
    def context_id(self) -> str:
        """Unique ID for this context (class + title)."""
        return f"{self.window_class}::{self.title}"


def _safe_get(getter: Callable[[], T], default: T, what: str) -> T:
    try:
        value = getter()
    except Exception as e:  # collaborator fault degrades to the default
        logger.warning("Could not read window %s: %s", what, e)
        return default
    return default if value is None else value


def capture_snapshot(window: WindowHandle) -> WindowSnapshot:
    """Read every attribute independently; a failing getter only blanks its own field."""
    return WindowSnapshot(
        title=_safe_get(window.get_title, "", "title"),
        window_class=_safe_get(window.get_wm_class, "", "class"),
        role=_safe_get(window.get_role, "", "role"),
        pid=_safe_get(window.get_pid, 0, "pid"),
        geometry=_safe_get(window.get_frame_rect, Geometry(), "geometry"),
        workspace=_safe_get(window.get_workspace, None, "workspace"),
    )


class WindowMonitor:
    """
    Locates the focused window on demand.
    Holds no state between calls: every locate_focused() asks the window source again.
    """

    def __init__(self, source: WindowSource):
        self.source = source

    def find_focused(self) -> Optional[WindowHandle]:
        """First window reporting focus, or None (desktop focused, window just closed, no display)."""
        try:
            windows = self.source.list_windows()
        except Exception as e:
            logger.warning("Could not list windows: %s", e)
            return None
        for w in windows:
            try:
                if w.has_focus():
                    return w
            except Exception as e:
                logger.debug("Skipping window, focus check failed: %s", e)
        return None

    def locate_focused(self) -> Optional[WindowSnapshot]:
        """Snapshot of the focused window, or None if no window holds focus."""
        window = self.find_focused()
        if window is None:
            return None
        return capture_snapshot(window)
