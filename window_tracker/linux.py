"""Linux window access using X11 (xprop / xwininfo)."""

import logging
import re
import subprocess
from typing import Optional

from .base import Geometry, WindowHandle, WindowSource, Workspace
from .errors import WindowSourceError

logger = logging.getLogger(__name__)

# Per-window properties fetched in a single xprop call
WINDOW_PROPS = (
    "_NET_WM_NAME",
    "WM_NAME",
    "WM_CLASS",
    "WM_WINDOW_ROLE",
    "_NET_WM_PID",
    "_NET_WM_DESKTOP",
    "_NET_FRAME_EXTENTS",
)

# _NET_WM_DESKTOP value for windows shown on every desktop
ALL_DESKTOPS = 0xFFFFFFFF

_PROP_LINE = re.compile(r"^([A-Za-z0-9_]+)\(([A-Za-z0-9_]+)\)\s*[:=]\s*(.*)$")
_QUOTED = re.compile(r'"((?:[^"\\]|\\.)*)"')
_WINDOW_ID = re.compile(r"0x[0-9a-fA-F]+")
_ESCAPE = re.compile(r"((?:\\[0-3][0-7]{2})+)|\\(.)")


def run_x11_tool(args: list[str], timeout: float) -> str:
    """Run xprop / xwininfo and return stdout. Raises WindowSourceError on any failure."""
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except (subprocess.TimeoutExpired, FileNotFoundError, OSError) as e:
        raise WindowSourceError(f"{args[0]} failed: {e}") from e
    if result.returncode != 0:
        raise WindowSourceError(f"{args[0]} exited {result.returncode}: {result.stderr.strip()[:200]}")
    return result.stdout


def parse_xprop(output: str) -> dict[str, str]:
    """
    Parse xprop output into {property: raw value}.
    e.g. 'WM_CLASS(STRING) = "code", "Code"' -> {"WM_CLASS": '"code", "Code"'}
    Properties reported as "not found." are left out.
    """
    props = {}
    for line in output.splitlines():
        m = _PROP_LINE.match(line.strip())
        if m:
            props[m.group(1)] = m.group(3).strip()
    return props


def _unescape(s: str) -> str:
    """Undo xprop quoting. Octal runs (\\303\\251) are the UTF-8 bytes of characters the locale cannot show."""

    def replace(m: re.Match) -> str:
        if m.group(1):
            raw = bytes(int(o, 8) for o in m.group(1).split("\\")[1:])
            return raw.decode("utf-8", errors="replace")
        return m.group(2)

    return _ESCAPE.sub(replace, s)


def parse_strings(value: str) -> list[str]:
    """Quoted string list: '"a", "b"' -> ["a", "b"]."""
    return [_unescape(s) for s in _QUOTED.findall(value or "")]


def parse_cardinals(value: str) -> list[int]:
    """Comma-separated integers: '0, 0, 37, 0' -> [0, 0, 37, 0]."""
    out = []
    for part in (value or "").split(","):
        part = part.strip()
        try:
            out.append(int(part, 0))
        except ValueError:
            continue
    return out


def parse_window_ids(value: str) -> list[int]:
    """'window id # 0x1a00003, 0x2c00007' -> [0x1a00003, 0x2c00007]."""
    return [int(w, 16) for w in _WINDOW_ID.findall(value or "")]


class X11Window(WindowHandle):
    """
    A top-level X11 client window.
    Properties are read with one xprop call on first access and kept for the life of this handle.
    """

    def __init__(self, window_id: int, focused: bool = False, timeout: float = 1.0,
                 desktop_names: Optional[list[str]] = None):
        self.window_id = window_id
        self._focused = focused
        self._timeout = timeout
        self._desktop_names = desktop_names
        self._props: Optional[dict[str, str]] = None

    @property
    def hex_id(self) -> str:
        return hex(self.window_id)

    def _get_props(self) -> dict[str, str]:
        if self._props is None:
            out = run_x11_tool(["xprop", "-id", self.hex_id, *WINDOW_PROPS], self._timeout)
            self._props = parse_xprop(out)
        return self._props

    def has_focus(self) -> bool:
        return self._focused

    def get_title(self) -> str:
        props = self._get_props()
        for key in ("_NET_WM_NAME", "WM_NAME"):
            values = parse_strings(props.get(key, ""))
            if values:
                return values[0]
        return ""

    def get_wm_class(self) -> str:
        # WM_CLASS(STRING) = "instance", "Class" - use the class name, not the instance
        values = parse_strings(self._get_props().get("WM_CLASS", ""))
        if len(values) >= 2:
            return values[1]
        return values[0] if values else ""

    def get_role(self) -> str:
        values = parse_strings(self._get_props().get("WM_WINDOW_ROLE", ""))
        return values[0] if values else ""

    def get_pid(self) -> int:
        values = parse_cardinals(self._get_props().get("_NET_WM_PID", ""))
        return values[0] if values else 0

    def get_frame_rect(self) -> Geometry:
        out = run_x11_tool(["xwininfo", "-id", self.hex_id], self._timeout)
        info = {}
        for line in out.splitlines():
            key, sep, value = line.strip().partition(":")
            if sep:
                info[key.strip()] = value.strip()
        try:
            x = int(info["Absolute upper-left X"])
            y = int(info["Absolute upper-left Y"])
            width = int(info["Width"])
            height = int(info["Height"])
        except (KeyError, ValueError) as e:
            raise WindowSourceError(f"Unexpected xwininfo output for {self.hex_id}") from e
        # xwininfo reports the client area; add decorations to get the frame
        extents = parse_cardinals(self._get_props().get("_NET_FRAME_EXTENTS", ""))
        if len(extents) == 4:
            left, right, top, bottom = extents
            return Geometry(x=x - left, y=y - top, width=width + left + right, height=height + top + bottom)
        return Geometry(x=x, y=y, width=width, height=height)

    def get_workspace(self) -> Optional[Workspace]:
        values = parse_cardinals(self._get_props().get("_NET_WM_DESKTOP", ""))
        if not values or values[0] == ALL_DESKTOPS:
            return None
        index = values[0]
        names = self._desktop_names
        if names is None:
            names = get_desktop_names(self._timeout)
        name = names[index] if index < len(names) and names[index] else f"Workspace {index + 1}"
        return Workspace(index=index, name=name)


def get_desktop_names(timeout: float = 1.0) -> list[str]:
    """Names of the virtual desktops (_NET_DESKTOP_NAMES). Empty if the WM does not set them."""
    try:
        out = run_x11_tool(["xprop", "-root", "_NET_DESKTOP_NAMES"], timeout)
    except WindowSourceError as e:
        logger.debug("Desktop names unavailable: %s", e)
        return []
    return parse_strings(parse_xprop(out).get("_NET_DESKTOP_NAMES", ""))


class X11WindowSource(WindowSource):
    """Lists client windows from the root window's _NET_CLIENT_LIST, flagging _NET_ACTIVE_WINDOW."""

    def __init__(self, timeout: float = 1.0):
        self.timeout = timeout

    def list_windows(self) -> list[X11Window]:
        out = run_x11_tool(["xprop", "-root", "_NET_CLIENT_LIST", "_NET_ACTIVE_WINDOW"], self.timeout)
        props = parse_xprop(out)
        active = parse_window_ids(props.get("_NET_ACTIVE_WINDOW", ""))
        # "window id # 0x0" means the desktop / nothing has focus
        active_id = active[0] if active and active[0] else None
        window_ids = parse_window_ids(props.get("_NET_CLIENT_LIST", ""))
        return [
            X11Window(wid, focused=(wid == active_id), timeout=self.timeout)
            for wid in window_ids
        ]
