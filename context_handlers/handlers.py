"""
Application-specific context handlers.
Each one parses the window title (and for IDEs / terminals the process cwd) for its category.
"""

import re
from typing import Optional

from window_tracker import ProcessRecordReader

from .base import ContextHandler, extraction_method
from .classifier import ApplicationCategory

_URL = re.compile(r"(https?://\S+)")
_ROOTED_PATH = re.compile(r"(/\S*)")
_ROOTED_FILE = re.compile(r"(/\S*\.[A-Za-z0-9]+)")

# Longest first " - " segment still taken as a file name
MAX_FILENAME_LEN = 50


def extract_url(title: str) -> str:
    """
    URL from a browser title, e.g. "GitHub - https://github.com - Brave" -> "https://github.com".
    Titles without " - " fall back to the first http(s):// run.
    """
    if " - " in title and ("http" in title or "www" in title):
        for part in title.split(" - "):
            if "http" in part or "www" in part:
                return part
        return ""
    if "://" in title:
        m = _URL.search(title)
        return m.group(1) if m else ""
    return ""


def extract_active_file(title: str) -> str:
    """File name from an editor title like "README.md - myproject - Cursor"."""
    if " - " not in title:
        return ""
    first = title.split(" - ")[0]
    if "." in first and "/" not in first and len(first) < MAX_FILENAME_LEN:
        return first
    return ""


def extract_directory_path(title: str) -> str:
    """First /-rooted run in a file manager title."""
    if "/" not in title:
        return ""
    m = _ROOTED_PATH.search(title)
    return m.group(1) if m else ""


def extract_document_path(title: str) -> str:
    """Full path with an extension if the title shows one, else a "name.ext - App" file name."""
    if "/" in title:
        m = _ROOTED_FILE.search(title)
        return m.group(1) if m else ""
    if " - " in title:
        first = title.split(" - ")[0]
        if "." in first:
            return first
    return ""


def project_name(project_path: str) -> str:
    return project_path.split("/")[-1] if project_path else ""


class BrowserHandler(ContextHandler):
    """URL from the window title. No tab introspection beyond that."""

    name = "browser"
    category = ApplicationCategory.BROWSER
    flag = "isBrowser"
    mismatch_error = "Not a browser window"

    def enrich(self, window_class: str, window_title: str, pid: int) -> dict:
        url = extract_url(window_title)
        return {
            "url": url,
            "title": window_title,
            "browserType": window_class,
            "isBrowser": True,
            "extractionMethod": extraction_method(url),
        }


class IdeProjectHandler(ContextHandler):
    """Project = working directory of the editor process."""

    name = "ide_project"
    category = ApplicationCategory.IDE
    flag = "isIde"
    mismatch_error = "Not an IDE window"

    def __init__(self, reader: Optional[ProcessRecordReader] = None):
        self.reader = reader or ProcessRecordReader()

    def enrich(self, window_class: str, window_title: str, pid: int) -> dict:
        project_path = self.reader.cwd(pid) or ""
        return {
            "projectPath": project_path,
            "projectName": project_name(project_path),
            "ideType": window_class,
            "windowTitle": window_title,
            "isIde": True,
        }


class IdeActiveFileHandler(ContextHandler):
    """Open file name from the editor title."""

    name = "ide_active_file"
    category = ApplicationCategory.IDE
    flag = "isIde"
    mismatch_error = "Not an IDE window"

    def enrich(self, window_class: str, window_title: str, pid: int) -> dict:
        active_file = extract_active_file(window_title)
        return {
            "activeFile": active_file,
            "windowTitle": window_title,
            "ideType": window_class,
            "extractionMethod": extraction_method(active_file),
        }


class TerminalHandler(ContextHandler):
    """Working directory of the terminal process."""

    name = "terminal"
    category = ApplicationCategory.TERMINAL
    flag = "isTerminal"
    mismatch_error = "Not a terminal window"

    def __init__(self, reader: Optional[ProcessRecordReader] = None):
        self.reader = reader or ProcessRecordReader()

    def enrich(self, window_class: str, window_title: str, pid: int) -> dict:
        return {
            "workingDirectory": self.reader.cwd(pid) or "",
            "windowTitle": window_title,
            "terminalType": window_class,
            "isTerminal": True,
            "note": "Command history requires shell-specific integration",
        }


class FileManagerHandler(ContextHandler):
    name = "file_manager"
    category = ApplicationCategory.FILE_MANAGER
    flag = "isFileManager"
    mismatch_error = "Not a file manager window"

    def enrich(self, window_class: str, window_title: str, pid: int) -> dict:
        current_path = extract_directory_path(window_title)
        return {
            "currentPath": current_path,
            "windowTitle": window_title,
            "fileManagerType": window_class,
            "isFileManager": True,
            "extractionMethod": extraction_method(current_path),
        }


class DocumentHandler(ContextHandler):
    """
    Document path from the viewer / office suite title.
    A non-document window gets "Not a document application", not "Not a document window":
    that is the wording existing callers of the interface match on.
    """

    name = "document"
    category = ApplicationCategory.DOCUMENT
    flag = "isDocument"
    mismatch_error = "Not a document application"

    def enrich(self, window_class: str, window_title: str, pid: int) -> dict:
        document_path = extract_document_path(window_title)
        return {
            "documentPath": document_path,
            "windowTitle": window_title,
            "documentType": window_class,
            "isDocument": True,
            "extractionMethod": extraction_method(document_path),
        }


def browser_tab_info(window_class: str, window_title: str, timestamp: int) -> dict:
    """Title-level tab info; applies to any window."""
    return {
        "title": window_title or "",
        "windowClass": window_class or "",
        "timestamp": timestamp,
        "note": "Full tab details require browser-specific integration",
    }
