"""Base interface for application-specific context handlers."""

from abc import ABC, abstractmethod

from .classifier import ApplicationCategory, classify

TITLE_PARSED = "window_title"
TITLE_PARSING_FAILED = "title_parsing_failed"


def extraction_method(found: str) -> str:
    return TITLE_PARSED if found else TITLE_PARSING_FAILED


class ContextHandler(ABC):
    """
    Extracts category-specific context from a window's class, title and pid.
    Handlers never raise: a heuristic miss leaves fields empty, and a window of
    another category gets the uniform {error, windowClass, is<Category>: false} shape.
    """

    name: str = ""
    category: ApplicationCategory = ApplicationCategory.UNKNOWN
    flag: str = ""            # discriminator key, e.g. "isBrowser"
    mismatch_error: str = ""  # e.g. "Not a browser window"

    def applies_to(self, window_class: str) -> bool:
        """Whether the classifier puts the window class in this handler's category."""
        return classify(window_class) == self.category

    def mismatch(self, window_class: str) -> dict:
        return {
            "error": self.mismatch_error,
            "windowClass": window_class,
            self.flag: False,
        }

    def extract(self, window_class: str, window_title: str, pid: int = 0) -> dict:
        window_class = window_class or ""
        window_title = window_title or ""
        if not self.applies_to(window_class):
            return self.mismatch(window_class)
        return self.enrich(window_class, window_title, pid)

    @abstractmethod
    def enrich(self, window_class: str, window_title: str, pid: int) -> dict:
        """Build the positive context for a window already known to be in this category."""
        pass
