"""
Error types raised by the search and recommendation core.

Bad input is distinguished from programmer error so a host can map the
former to a 400-style response and the latter to a 500.
"""


class SearchError(Exception):
    """Base class for all core errors."""


class InvalidArgumentError(SearchError, ValueError):
    """Malformed caller input: non-string query, bad limit, duplicate ids."""


class IndexNotBuiltError(SearchError, RuntimeError):
    """The fuzzy index was searched before build() was called."""
