"""
Routes a window to the context handler(s) of its category.
Classification happens once; only the matching handlers run.
"""

import logging
from typing import Optional

from window_tracker import ProcessRecordReader

from .base import ContextHandler
from .classifier import ApplicationCategory, classify
from .handlers import (
    BrowserHandler,
    DocumentHandler,
    FileManagerHandler,
    IdeActiveFileHandler,
    IdeProjectHandler,
    TerminalHandler,
)

logger = logging.getLogger(__name__)


class ContextRouter:
    """Picks the handlers for a window's category and merges their output."""

    def __init__(self, reader: Optional[ProcessRecordReader] = None):
        reader = reader or ProcessRecordReader()
        self.browser = BrowserHandler()
        self.ide_project = IdeProjectHandler(reader)
        self.ide_active_file = IdeActiveFileHandler()
        self.terminal = TerminalHandler(reader)
        self.file_manager = FileManagerHandler()
        self.document = DocumentHandler()
        self._single: dict[ApplicationCategory, ContextHandler] = {
            ApplicationCategory.BROWSER: self.browser,
            ApplicationCategory.TERMINAL: self.terminal,
            ApplicationCategory.FILE_MANAGER: self.file_manager,
            ApplicationCategory.DOCUMENT: self.document,
        }

    def route(self, window_class: str, window_title: str, pid: int = 0) -> tuple[ApplicationCategory, dict]:
        """(category, context). IDE context is {project, activeFile}; unknown apps get {}."""
        category = classify(window_class, window_title)
        if category == ApplicationCategory.IDE:
            logger.debug("Routing %r to %s, %s", window_class, self.ide_project.name, self.ide_active_file.name)
            return category, {
                "project": self.ide_project.extract(window_class, window_title, pid),
                "activeFile": self.ide_active_file.extract(window_class, window_title, pid),
            }
        handler = self._single.get(category)
        if handler is None:
            logger.debug("No context handler for %r", window_class)
            return category, {}
        logger.debug("Routing %r to %s", window_class, handler.name)
        return category, handler.extract(window_class, window_title, pid)


def extraction_methods(context: dict) -> list[str]:
    """Which extraction methods produced a routed context, for data-quality reporting."""
    methods = []
    if context.get("extractionMethod"):
        methods.append(context["extractionMethod"])
    project = context.get("project")
    if isinstance(project, dict) and project.get("extractionMethod"):
        methods.append(f"project_{project['extractionMethod']}")
    active_file = context.get("activeFile")
    if isinstance(active_file, dict) and active_file.get("extractionMethod"):
        methods.append(f"file_{active_file['extractionMethod']}")
    return methods or ["basic_window_analysis"]
