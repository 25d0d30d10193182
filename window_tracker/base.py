"""Windowing-system interface consumed by the focused window locator."""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Optional


@dataclass(frozen=True)
class Geometry:
    """Frame rectangle of a window, screen-relative, in pixels."""
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Workspace:
    """Workspace (virtual desktop) a window lives on. index is 0-based."""
    index: int = 0
    name: str = "Unknown"

    def to_dict(self) -> dict:
        return asdict(self)


class WindowHandle(ABC):
    """One top-level window as reported by the windowing system."""

    @abstractmethod
    def has_focus(self) -> bool:
        """Whether this window currently receives input."""
        pass

    @abstractmethod
    def get_title(self) -> str:
        pass

    @abstractmethod
    def get_wm_class(self) -> str:
        pass

    @abstractmethod
    def get_role(self) -> str:
        pass

    @abstractmethod
    def get_pid(self) -> int:
        """Owning process id, 0 when the window does not advertise one."""
        pass

    @abstractmethod
    def get_frame_rect(self) -> Geometry:
        pass

    @abstractmethod
    def get_workspace(self) -> Optional[Workspace]:
        """Workspace of the window, or None when it is on all workspaces / none."""
        pass


class WindowSource(ABC):
    """Gives the current list of top-level windows."""

    @abstractmethod
    def list_windows(self) -> list[WindowHandle]:
        pass
