"""Window tracking - focused window detection and process records."""

from .base import Geometry, WindowHandle, WindowSource, Workspace
from .errors import WindowDetailsError, WindowSourceError
from .linux import X11Window, X11WindowSource
from .monitor import WindowMonitor, WindowSnapshot, capture_snapshot
from .process import ProcessRecordReader

__all__ = [
    "Geometry",
    "Workspace",
    "WindowHandle",
    "WindowSource",
    "WindowDetailsError",
    "WindowSourceError",
    "X11Window",
    "X11WindowSource",
    "WindowMonitor",
    "WindowSnapshot",
    "capture_snapshot",
    "ProcessRecordReader",
]
