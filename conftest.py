"""Shared fakes: in-memory windows and an in-memory process table."""

from pathlib import Path
from typing import Optional

import psutil
import pytest

from window_tracker import Geometry, ProcessRecordReader, WindowHandle, WindowSource, Workspace
from window_tracker.errors import WindowSourceError


class FakeWindow(WindowHandle):
    """Window with fixed attributes. Getters named in `failing` raise WindowSourceError."""

    def __init__(
        self,
        title: str = "",
        wm_class: str = "",
        role: str = "",
        pid: int = 0,
        focused: bool = True,
        geometry: Optional[Geometry] = None,
        workspace: Optional[Workspace] = Workspace(0, "Main"),
        failing: tuple = (),
    ):
        self.title = title
        self.wm_class = wm_class
        self.role = role
        self.pid = pid
        self.focused = focused
        self.geometry = geometry or Geometry(10, 20, 800, 600)
        self.workspace = workspace
        self.failing = set(failing)

    def _check(self, name: str):
        if name in self.failing:
            raise WindowSourceError(f"{name} failed")

    def has_focus(self) -> bool:
        self._check("has_focus")
        return self.focused

    def get_title(self) -> str:
        self._check("get_title")
        return self.title

    def get_wm_class(self) -> str:
        self._check("get_wm_class")
        return self.wm_class

    def get_role(self) -> str:
        self._check("get_role")
        return self.role

    def get_pid(self) -> int:
        self._check("get_pid")
        return self.pid

    def get_frame_rect(self) -> Geometry:
        self._check("get_frame_rect")
        return self.geometry

    def get_workspace(self) -> Optional[Workspace]:
        self._check("get_workspace")
        return self.workspace


class FakeWindowSource(WindowSource):
    """Fixed window list; set `error` to make list_windows() fail."""

    def __init__(self, windows=None, error: Optional[Exception] = None):
        self.windows = list(windows or [])
        self.error = error
        self.calls = 0

    def list_windows(self):
        self.calls += 1
        if self.error:
            raise self.error
        return list(self.windows)


class FakeProcess:
    """Stands in for psutil.Process. Fields named in `denied` raise AccessDenied."""

    def __init__(self, pid: int, record: dict, denied: set):
        self.pid = pid
        self._record = record
        self._denied = denied

    def _get(self, field: str):
        if field in self._denied or self._record[field] is None:
            raise psutil.AccessDenied(self.pid)
        return self._record[field]

    def name(self) -> str:
        return self._get("name")

    def exe(self) -> str:
        return self._get("exe")

    def cmdline(self) -> list:
        return list(self._get("cmdline"))

    def cwd(self) -> str:
        return self._get("cwd")

    def ppid(self) -> int:
        return self._get("ppid")


class FakeProc:
    """In-memory process table served through a patched psutil.Process."""

    def __init__(self):
        self.records: dict[int, tuple] = {}
        self.lookups = 0

    def add(
        self,
        pid: int,
        comm: str = "app",
        cmdline: tuple = ("app",),
        cwd: Optional[Path] = None,
        exe: Optional[Path] = None,
        ppid: int = 1,
        denied: tuple = (),
    ):
        record = {
            "name": comm,
            "cmdline": list(cmdline),
            "cwd": str(cwd) if cwd is not None else None,
            "exe": str(exe) if exe is not None else "",
            "ppid": ppid,
        }
        self.records[pid] = (record, set(denied))

    def process(self, pid: int) -> FakeProcess:
        self.lookups += 1
        if pid not in self.records:
            raise psutil.NoSuchProcess(pid)
        record, denied = self.records[pid]
        return FakeProcess(pid, record, denied)

    def reader(self) -> ProcessRecordReader:
        return ProcessRecordReader()


@pytest.fixture
def fake_proc(monkeypatch) -> FakeProc:
    table = FakeProc()
    monkeypatch.setattr(psutil, "Process", table.process)
    return table


@pytest.fixture
def project_dir(tmp_path) -> Path:
    d = tmp_path / "home" / "user" / "myproject"
    d.mkdir(parents=True)
    return d


@pytest.fixture
def fake_binary() -> Path:
    return Path("/usr/share/cursor/cursor")
