"""
Response shapes returned by the exported operations.

All structures are JSON-serializable; operations return json.dumps(obj.to_dict()).
Keys are camelCase to match what existing callers of the D-Bus interface parse.
"""

import json
import time
from dataclasses import dataclass, field
from typing import Any, Optional

import config
from window_tracker import Geometry, Workspace


def now_ms() -> int:
    """Milliseconds since the epoch."""
    return int(time.time() * 1000)


def to_json(d: Any) -> str:
    return json.dumps(d, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Unified app context (getAppContext)
# ---------------------------------------------------------------------------


@dataclass
class AppContextResponse:
    """Detected app type plus the category-specific context."""

    app_type: str  # "browser" | "ide" | "terminal" | "file_manager" | "document" | "unknown"
    window_class: str
    window_title: str
    pid: int
    context: dict
    timestamp: int = field(default_factory=now_ms)

    def to_dict(self) -> dict:
        return {
            "appType": self.app_type,
            "windowClass": self.window_class,
            "windowTitle": self.window_title,
            "pid": self.pid,
            "context": self.context,
            "timestamp": self.timestamp,
        }


# ---------------------------------------------------------------------------
# Full snapshot (getAllWindowData)
# ---------------------------------------------------------------------------


@dataclass
class ExtensionInfo:
    name: str = config.EXTENSION_NAME
    uuid: str = config.EXTENSION_UUID
    version: str = config.EXTENSION_VERSION

    def to_dict(self) -> dict:
        return {"name": self.name, "uuid": self.uuid, "version": self.version}


@dataclass
class CoreData:
    """Window + process attributes. Absent process fields are already "" / 0 here."""

    title: str
    window_class: str
    pid: int
    role: str = ""
    process_name: str = ""
    process_path: str = ""
    command_line: str = ""
    working_directory: str = ""
    parent_pid: int = 0
    geometry: Geometry = field(default_factory=Geometry)
    workspace: Workspace = field(default_factory=Workspace)

    @property
    def is_complete(self) -> bool:
        """Title, class, pid and process name all present."""
        return all((self.title, self.window_class, self.pid, self.process_name))

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "windowClass": self.window_class,
            "pid": self.pid,
            "role": self.role,
            "processName": self.process_name,
            "processPath": self.process_path,
            "commandLine": self.command_line,
            "workingDirectory": self.working_directory,
            "parentPid": self.parent_pid,
            "geometry": self.geometry.to_dict(),
            "workspace": self.workspace.to_dict(),
        }


@dataclass
class WindowDataSnapshot:
    """
    Everything known about the focused window, from one snapshot.
    collection_duration_ms: time from snapshot capture to assembly (never negative).
    """

    core: CoreData
    detected_type: str
    specific_data: dict
    extraction_methods: list[str]
    collection_duration_ms: int = 0
    timestamp: int = field(default_factory=now_ms)
    extension_info: ExtensionInfo = field(default_factory=ExtensionInfo)
    data_collection_version: str = config.DATA_COLLECTION_VERSION

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "dataCollectionVersion": self.data_collection_version,
            "extensionInfo": self.extension_info.to_dict(),
            "core": self.core.to_dict(),
            "applicationContext": {
                "detectedType": self.detected_type,
                "specificData": self.specific_data,
            },
            "dataQuality": {
                "coreDataComplete": self.core.is_complete,
                "applicationContextAvailable": self.detected_type != "unknown",
                "extractionMethods": self.extraction_methods,
            },
            "performance": {
                "collectionDuration": max(0, int(self.collection_duration_ms)),
            },
        }


def no_window_data(timestamp: Optional[int] = None) -> dict:
    """getAllWindowData result when nothing has focus."""
    return {
        "error": "No focused window found",
        "timestamp": timestamp if timestamp is not None else now_ms(),
        "dataAvailable": False,
    }


# ---------------------------------------------------------------------------
# Identity (getVersion)
# ---------------------------------------------------------------------------


@dataclass
class VersionInfo:
    version: str = config.EXTENSION_VERSION
    name: str = config.EXTENSION_NAME
    uuid: str = config.EXTENSION_UUID
    description: str = config.EXTENSION_DESCRIPTION
    url: str = config.EXTENSION_URL
    timestamp: int = field(default_factory=now_ms)

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "name": self.name,
            "uuid": self.uuid,
            "description": self.description,
            "url": self.url,
            "timestamp": self.timestamp,
        }
