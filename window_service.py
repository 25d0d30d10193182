"""
Window details service - the operations exported to callers.

Every operation takes no arguments, locates the focused window afresh and returns one
string: a raw value for scalar operations, JSON for structured ones, "" when nothing has
focus. Nothing is cached between calls.
"""

import logging
import time
from typing import Callable, Optional

import config
from context_handlers import ContextRouter, browser_tab_info, extraction_methods
from data_schema import (
    AppContextResponse,
    CoreData,
    VersionInfo,
    WindowDataSnapshot,
    no_window_data,
    now_ms,
    to_json,
)
from window_tracker import (
    ProcessRecordReader,
    WindowMonitor,
    WindowSnapshot,
    WindowSource,
    Workspace,
    X11WindowSource,
)

logger = logging.getLogger(__name__)


# Wire name -> service method. Order is the order callers see when introspecting.
OPERATIONS: dict[str, str] = {
    # Core window / process information
    "getWinFocusData": "get_win_focus_data",
    "getWinPID": "get_win_pid",
    "getWinClass": "get_win_class",
    "getWinRole": "get_win_role",
    "getProcessName": "get_process_name",
    "getProcessPath": "get_process_path",
    "getProcessCmdline": "get_process_cmdline",
    "getProcessCwd": "get_process_cwd",
    "getWinGeometry": "get_win_geometry",
    "getWinWorkspace": "get_win_workspace",
    "getProcessParent": "get_process_parent",
    # Application-specific context
    "getBrowserUrl": "get_browser_url",
    "getBrowserTabInfo": "get_browser_tab_info",
    "getIdeProject": "get_ide_project",
    "getIdeActiveFile": "get_ide_active_file",
    "getTerminalCommand": "get_terminal_command",
    "getFileManagerPath": "get_file_manager_path",
    "getDocumentPath": "get_document_path",
    "getAppContext": "get_app_context",
    # Aggregate
    "getAllWindowData": "get_all_window_data",
    # Identity
    "getVersion": "get_version",
}


class WindowDetailsService:
    """Stateless: holds only its collaborators (window source, process reader, router)."""

    def __init__(
        self,
        source: Optional[WindowSource] = None,
        reader: Optional[ProcessRecordReader] = None,
    ):
        self.monitor = WindowMonitor(source or X11WindowSource(timeout=config.XPROP_TIMEOUT))
        self.reader = reader or ProcessRecordReader(config.PROC_ROOT)
        self.router = ContextRouter(self.reader)

    def _focused(self) -> Optional[WindowSnapshot]:
        return self.monitor.locate_focused()

    # ------------------------------------------------------------------
    # Core window / process information
    # ------------------------------------------------------------------

    def get_win_focus_data(self) -> str:
        """Title of the focused window."""
        snap = self._focused()
        return snap.title if snap else ""

    def get_win_pid(self) -> str:
        snap = self._focused()
        return str(snap.pid) if snap else ""

    def get_win_class(self) -> str:
        snap = self._focused()
        return snap.window_class if snap else ""

    def get_win_role(self) -> str:
        snap = self._focused()
        return snap.role if snap else ""

    def get_process_name(self) -> str:
        snap = self._focused()
        return (self.reader.name(snap.pid) or "") if snap else ""

    def get_process_path(self) -> str:
        snap = self._focused()
        return (self.reader.executable_path(snap.pid) or "") if snap else ""

    def get_process_cmdline(self) -> str:
        snap = self._focused()
        return (self.reader.cmdline(snap.pid) or "") if snap else ""

    def get_process_cwd(self) -> str:
        snap = self._focused()
        return (self.reader.cwd(snap.pid) or "") if snap else ""

    def get_win_geometry(self) -> str:
        """{x, y, width, height} of the window frame."""
        snap = self._focused()
        return to_json(snap.geometry.to_dict()) if snap else ""

    def get_win_workspace(self) -> str:
        """{index, name}; "" when the window is not on a single workspace."""
        snap = self._focused()
        if not snap or snap.workspace is None:
            return ""
        return to_json(snap.workspace.to_dict())

    def get_process_parent(self) -> str:
        snap = self._focused()
        if not snap:
            return ""
        parent = self.reader.parent_id(snap.pid)
        return str(parent) if parent is not None else ""

    # ------------------------------------------------------------------
    # Application-specific context
    # ------------------------------------------------------------------

    def get_browser_url(self) -> str:
        snap = self._focused()
        if not snap:
            return ""
        return to_json(self.router.browser.extract(snap.window_class, snap.title, snap.pid))

    def get_browser_tab_info(self) -> str:
        snap = self._focused()
        if not snap:
            return ""
        return to_json(browser_tab_info(snap.window_class, snap.title, now_ms()))

    def get_ide_project(self) -> str:
        snap = self._focused()
        if not snap:
            return ""
        return to_json(self.router.ide_project.extract(snap.window_class, snap.title, snap.pid))

    def get_ide_active_file(self) -> str:
        snap = self._focused()
        if not snap:
            return ""
        return to_json(self.router.ide_active_file.extract(snap.window_class, snap.title, snap.pid))

    def get_terminal_command(self) -> str:
        snap = self._focused()
        if not snap:
            return ""
        return to_json(self.router.terminal.extract(snap.window_class, snap.title, snap.pid))

    def get_file_manager_path(self) -> str:
        snap = self._focused()
        if not snap:
            return ""
        return to_json(self.router.file_manager.extract(snap.window_class, snap.title, snap.pid))

    def get_document_path(self) -> str:
        snap = self._focused()
        if not snap:
            return ""
        return to_json(self.router.document.extract(snap.window_class, snap.title, snap.pid))

    def app_context(self, snap: WindowSnapshot) -> AppContextResponse:
        category, context = self.router.route(snap.window_class, snap.title, snap.pid)
        return AppContextResponse(
            app_type=category.value,
            window_class=snap.window_class,
            window_title=snap.title,
            pid=snap.pid,
            context=context,
        )

    def get_app_context(self) -> str:
        """Detect the app type and return its context in one call."""
        snap = self._focused()
        if not snap:
            return ""
        return to_json(self.app_context(snap).to_dict())

    # ------------------------------------------------------------------
    # Aggregate
    # ------------------------------------------------------------------

    def collect(self, snap: WindowSnapshot, started: float) -> WindowDataSnapshot:
        """Assemble the full snapshot from one captured WindowSnapshot."""
        pid = snap.pid
        core = CoreData(
            title=snap.title,
            window_class=snap.window_class,
            pid=pid,
            role=snap.role,
            process_name=self.reader.name(pid) or "",
            process_path=self.reader.executable_path(pid) or "",
            command_line=self.reader.cmdline(pid) or "",
            working_directory=self.reader.cwd(pid) or "",
            parent_pid=self.reader.parent_id(pid) or 0,
            geometry=snap.geometry,
            workspace=snap.workspace or Workspace(),
        )
        ctx = self.app_context(snap)
        return WindowDataSnapshot(
            core=core,
            detected_type=ctx.app_type,
            specific_data=ctx.context,
            extraction_methods=extraction_methods(ctx.context),
            collection_duration_ms=int((time.monotonic() - started) * 1000),
        )

    def get_all_window_data(self) -> str:
        """Core data, app context, data quality and collection time for the focused window."""
        timestamp = now_ms()
        started = time.monotonic()
        snap = self._focused()
        if not snap:
            return to_json(no_window_data(timestamp))
        data = self.collect(snap, started)
        data.timestamp = timestamp
        return to_json(data.to_dict())

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    def get_version(self) -> str:
        return to_json(VersionInfo().to_dict())


def safe_operation(name: str, fn: Callable[[], str]) -> Callable[[], str]:
    """Wrap an operation so no exception crosses the export boundary: failures become ""."""

    def call() -> str:
        try:
            result = fn()
        except Exception:
            logger.exception("Operation %s failed", name)
            return ""
        return result if isinstance(result, str) else ""

    call.__name__ = name
    return call


def exported_operations(service: WindowDetailsService) -> dict[str, Callable[[], str]]:
    """{wire name: zero-arg callable returning str} for every operation."""
    return {
        name: safe_operation(name, getattr(service, method))
        for name, method in OPERATIONS.items()
    }
