"""
Application context handlers - classify the focused app and extract what it is working on.

Each handler understands one kind of application (browser, IDE, terminal, file manager,
document viewer) and parses its window title or process records for context.
"""

from .base import ContextHandler
from .classifier import ApplicationCategory, CATEGORY_KEYWORDS, classify, matches
from .router import ContextRouter, extraction_methods
from .handlers import (
    BrowserHandler,
    IdeProjectHandler,
    IdeActiveFileHandler,
    TerminalHandler,
    FileManagerHandler,
    DocumentHandler,
    browser_tab_info,
)

__all__ = [
    "ContextHandler",
    "ApplicationCategory",
    "CATEGORY_KEYWORDS",
    "classify",
    "matches",
    "ContextRouter",
    "extraction_methods",
    "BrowserHandler",
    "IdeProjectHandler",
    "IdeActiveFileHandler",
    "TerminalHandler",
    "FileManagerHandler",
    "DocumentHandler",
    "browser_tab_info",
]
