"""Domain models used across the application."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Story(BaseModel):
    """One entry of a date's story index."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    thumbnail_url: str = ""


class Question(BaseModel):
    """A discussion thread linked from a story body."""

    model_config = ConfigDict(frozen=True)

    title: str
    url: str


class News(BaseModel):
    """A story together with the question threads it links to."""

    model_config = ConfigDict(frozen=True)

    date: str
    title: str
    thumbnail_url: str = ""
    questions: List[Question] = Field(default_factory=list)


class Feed(BaseModel):
    """All news for a single requested date."""

    model_config = ConfigDict(frozen=True)

    news: List[News] = Field(default_factory=list)


class DetailFailure(BaseModel):
    """A story whose detail payload could not be fetched or parsed."""

    model_config = ConfigDict(frozen=True)

    story_id: int
    title: str
    url: str
    error: str


class FeedReport(BaseModel):
    """Result of a resilient feed build: the partial feed plus what was skipped."""

    model_config = ConfigDict(frozen=True)

    feed: Feed
    failures: List[DetailFailure] = Field(default_factory=list)
