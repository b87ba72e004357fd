"""Parsers for the story index and story detail payloads."""

from __future__ import annotations

import json
from typing import IO, Any, List, Union

from bs4 import BeautifulSoup

from zhihupurify.exceptions import ParseError
from zhihupurify.models import Story

__all__ = ["Payload", "empty_document", "parse_document", "parse_stories"]

KEY_STORIES = "stories"
KEY_ID = "id"
KEY_TITLE = "title"
KEY_IMAGES = "images"
KEY_BODY = "body"

Payload = Union[str, bytes, IO[str], IO[bytes]]


def _read_payload(source: Payload) -> str:
    if hasattr(source, "read"):
        source = source.read()
    if isinstance(source, bytes):
        return source.decode("utf-8")
    return source


def _load_object(source: Payload) -> dict[str, Any]:
    """Decode ``source`` as JSON and make sure the top level is an object."""

    try:
        data = json.loads(_read_payload(source))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ParseError(f"Payload is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def _thumbnail_url(entry: dict[str, Any]) -> str:
    images = entry.get(KEY_IMAGES)
    if isinstance(images, list) and images and isinstance(images[0], str):
        return images[0]
    return ""


def _to_story(entry: Any) -> Story:
    if not isinstance(entry, dict):
        raise ParseError(f"Story entry must be an object, got {type(entry).__name__}")

    story_id = entry.get(KEY_ID)
    # bool is an int subclass; the index never uses it as an identifier.
    if isinstance(story_id, bool) or not isinstance(story_id, int):
        raise ParseError(f"Story entry has no integer '{KEY_ID}': {entry!r}")

    title = entry.get(KEY_TITLE)
    if not isinstance(title, str):
        raise ParseError(f"Story {story_id} has no string '{KEY_TITLE}'")

    return Story(id=story_id, title=title, thumbnail_url=_thumbnail_url(entry))


def parse_stories(source: Payload) -> List[Story]:
    """Parse a date's index payload into stories, keeping index order.

    A payload without a ``stories`` key means there is no news for the date
    and yields an empty list. Any malformed entry fails the whole index.
    """

    data = _load_object(source)
    entries = data.get(KEY_STORIES)
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise ParseError(f"'{KEY_STORIES}' must be an array, got {type(entries).__name__}")
    return [_to_story(entry) for entry in entries]


def empty_document() -> BeautifulSoup:
    return BeautifulSoup("", "lxml")


def parse_document(source: Payload) -> BeautifulSoup | None:
    """Parse a story detail payload into its HTML body.

    Returns ``None`` when the payload carries no body, which is normal for
    video-only stories.
    """

    data = _load_object(source)
    body = data.get(KEY_BODY)
    if body is None:
        return None
    if not isinstance(body, str):
        raise ParseError(f"'{KEY_BODY}' must be a string, got {type(body).__name__}")
    return BeautifulSoup(body, "lxml")
