"""
Application classifier - maps a window class to an application category.

Keyword lists are data: one ordered entry per category. The first category with a
keyword contained in the (lower-cased) window class wins, so an app matching two
lists is always resolved the same way: browser, then ide, terminal, file_manager, document.
"""

from enum import Enum


class ApplicationCategory(Enum):
    BROWSER = "browser"
    IDE = "ide"
    TERMINAL = "terminal"
    FILE_MANAGER = "file_manager"
    DOCUMENT = "document"
    UNKNOWN = "unknown"


# Order matters: earlier categories take precedence.
CATEGORY_KEYWORDS: list[tuple[ApplicationCategory, tuple[str, ...]]] = [
    (ApplicationCategory.BROWSER, ("firefox", "chrome", "brave-browser", "chromium", "safari", "edge")),
    (ApplicationCategory.IDE, ("code", "cursor", "atom", "sublime", "intellij", "pycharm", "vscode", "vim", "emacs", "gedit")),
    (ApplicationCategory.TERMINAL, ("gnome-terminal", "terminal", "konsole", "xterm", "alacritty", "terminator")),
    (ApplicationCategory.FILE_MANAGER, ("nautilus", "files", "dolphin", "thunar", "pcmanfm", "nemo")),
    (ApplicationCategory.DOCUMENT, ("evince", "okular", "libreoffice", "writer", "calc", "impress", "draw", "math", "acroread", "xpdf")),
]

# Browser classes vary in hyphenation ("brave-browser" vs "bravebrowser")
_HYPHEN_TOLERANT = {ApplicationCategory.BROWSER}

_KEYWORDS = dict(CATEGORY_KEYWORDS)


def matches(category: ApplicationCategory, window_class: str) -> bool:
    """Whether window_class contains one of the category's keywords (case-insensitive)."""
    keywords = _KEYWORDS.get(category, ())
    cls = (window_class or "").lower()
    if category in _HYPHEN_TOLERANT:
        return any(k in cls or k.replace("-", "") in cls for k in keywords)
    return any(k in cls for k in keywords)


def classify(window_class: str, window_title: str = "") -> ApplicationCategory:
    """
    Category of the application owning a window.
    Only the class is matched; the title is accepted so callers can pass both attributes.
    """
    for category, _ in CATEGORY_KEYWORDS:
        if matches(category, window_class):
            return category
    return ApplicationCategory.UNKNOWN
