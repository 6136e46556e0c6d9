"""
Exceptions raised by the store and view layers and turned into
HTTP responses by the route handlers in movie_catalog.main.
movie_catalog.errors.py
"""


class NotFound(Exception):
    """The requested movie is not in the store."""

    def __init__(self, msg: str = "Movie not found."):
        super().__init__(msg)
        self.msg = msg


class StoreError(Exception):
    """A database operation failed (connectivity, driver or server error)."""


class TemplateError(Exception):
    """A view could not be rendered."""
