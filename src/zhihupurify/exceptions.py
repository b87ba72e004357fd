"""Exceptions raised while building a Zhihu Daily feed."""

from __future__ import annotations

__all__ = ["FeedError", "FetchError", "ParseError"]


class FeedError(Exception):
    """Base class for failures that abort a feed build."""


class FetchError(FeedError):
    """Raised when a payload could not be retrieved from the remote API."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"Failed to fetch {url}: {message}")
        self.url = url


class ParseError(FeedError):
    """Raised when an index or detail payload is malformed."""
