"""Service layer entry points for Zhihu Daily Purify."""

from __future__ import annotations

from .feed import FeedBuilder, assemble_news, drop_empty  # noqa: F401
from .fetcher import Fetcher, HttpFetcher  # noqa: F401

__all__ = ["FeedBuilder", "Fetcher", "HttpFetcher", "assemble_news", "drop_empty"]
