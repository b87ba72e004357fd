"""Builds a daily feed by pairing each story with its parsed detail body."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Dict, Iterable, List, Sequence

from bs4 import BeautifulSoup

from zhihupurify.config import FeedConfig
from zhihupurify.exceptions import FeedError
from zhihupurify.models import DetailFailure, Feed, FeedReport, News, Story
from zhihupurify.services.extractor import extract_questions
from zhihupurify.services.fetcher import Fetcher, HttpFetcher
from zhihupurify.services.parsers import empty_document, parse_document, parse_stories

__all__ = ["FeedBuilder", "assemble_news", "drop_empty"]

logger = logging.getLogger(__name__)

# Slot markers for the detail fan-out; ``None`` is a legitimate result (no body).
_PENDING = object()
_FAILED = object()


def assemble_news(date: str, story: Story, document: BeautifulSoup | None) -> News | None:
    """Combine a story and its detail body into a :class:`News` item.

    Returns ``None`` when the body links to no valid question.
    """

    if document is None:
        document = empty_document()

    questions = extract_questions(document, story.title)
    if not questions:
        logger.debug("Story %s (%s) has no question threads", story.id, story.title)
        return None

    return News(
        date=date,
        title=story.title,
        thumbnail_url=story.thumbnail_url,
        questions=questions,
    )


def drop_empty(candidates: Iterable[News | None]) -> List[News]:
    """Remove stories that produced no news, keeping the original order."""

    return [news for news in candidates if news is not None]


class FeedBuilder:
    """Fetches a date's stories and their details and assembles them into a feed."""

    def __init__(self, fetcher: Fetcher | None = None, config: FeedConfig | None = None) -> None:
        self._config = config or FeedConfig()
        # Only a fetcher built here is closed by the builder.
        self._owned_fetcher = HttpFetcher(self._config) if fetcher is None else None
        self._fetcher = fetcher or self._owned_fetcher

    @property
    def config(self) -> FeedConfig:
        return self._config

    def close(self) -> None:
        if self._owned_fetcher is not None:
            self._owned_fetcher.close()

    def __enter__(self) -> "FeedBuilder":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def fetch_stories(self, date: str) -> List[Story]:
        """Fetch and parse the story index for ``date``."""

        stories = parse_stories(self._fetcher.fetch(self._config.index_url(date)))
        logger.info("Found %d stories for %s", len(stories), date)
        return stories

    def fetch_document(self, story: Story) -> BeautifulSoup | None:
        """Fetch and parse the detail body of a single story."""

        logger.debug("Fetching detail for story %s", story.id)
        return parse_document(self._fetcher.fetch(self._config.detail_url(story.id)))

    def feed_for_date(self, date: str) -> Feed:
        """Build the feed for ``date``.

        Any failed index or detail fetch aborts the build and is re-raised,
        so the returned feed always covers every story of the index.
        """

        stories = self.fetch_stories(date)
        documents, _ = self._fetch_documents(stories, fail_fast=True)
        feed = Feed(news=self._assemble(date, stories, documents))
        logger.info("Built feed for %s with %d news items", date, len(feed.news))
        return feed

    def report_for_date(self, date: str) -> FeedReport:
        """Build the feed for ``date``, skipping stories whose detail failed.

        Index failures still raise. Skipped stories are listed in
        :attr:`FeedReport.failures` in index order.
        """

        stories = self.fetch_stories(date)
        documents, failures = self._fetch_documents(stories, fail_fast=False)
        feed = Feed(news=self._assemble(date, stories, documents))
        logger.info(
            "Built feed for %s with %d news items (%d stories skipped)",
            date,
            len(feed.news),
            len(failures),
        )
        return FeedReport(feed=feed, failures=failures)

    def _assemble(
        self, date: str, stories: Sequence[Story], documents: Sequence[Any]
    ) -> List[News]:
        candidates = (
            assemble_news(date, story, document)
            for story, document in zip(stories, documents)
            if document is not _FAILED
        )
        return drop_empty(candidates)

    def _fetch_documents(
        self, stories: Sequence[Story], *, fail_fast: bool
    ) -> tuple[List[Any], List[DetailFailure]]:
        """Fetch every story's detail concurrently.

        Results land in a slot list indexed by story position, so the output
        order matches ``stories`` whatever order the fetches finish in.
        """

        slots: List[Any] = [_PENDING] * len(stories)
        failed: Dict[int, DetailFailure] = {}
        if not stories:
            return slots, []

        workers = min(self._config.max_workers, len(stories))
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="zhihu-detail")
        try:
            futures = {
                executor.submit(self.fetch_document, story): index
                for index, story in enumerate(stories)
            }
            for future in as_completed(futures):
                index = futures[future]
                story = stories[index]
                try:
                    slots[index] = future.result()
                except FeedError as exc:
                    if fail_fast:
                        raise
                    logger.warning("Skipping story %s (%s): %s", story.id, story.title, exc)
                    slots[index] = _FAILED
                    failed[index] = DetailFailure(
                        story_id=story.id,
                        title=story.title,
                        url=self._config.detail_url(story.id),
                        error=str(exc),
                    )
        finally:
            # On an early exit, queued fetches are dropped and running ones are discarded.
            executor.shutdown(wait=True, cancel_futures=True)

        return slots, [failed[index] for index in sorted(failed)]
