"""findlite: a small find-like query language for filesystem trees."""

__version__ = "0.1.0"


class FindliteError(Exception):
    """User-facing error.

    Raised for invalid expressions and malformed patterns. The CLI
    prints the message to stderr and exits with code 1.
    """
