# ABOUTME: Base exception for every failure Bookinfo reports to the user.
# ABOUTME: Stage-specific errors live next to the code that raises them.


class BookinfoError(Exception):
    """Base class for errors raised by the bookinfo pipeline."""
