"""Exception classes for window and process introspection."""


class WindowDetailsError(Exception):
    """Base exception for window details errors."""
    pass


class WindowSourceError(WindowDetailsError):
    """Raised when the windowing system cannot be queried (no X display, xprop missing, timeout)."""
    pass
