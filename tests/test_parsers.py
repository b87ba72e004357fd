from __future__ import annotations

import io
import json

import pytest

from zhihupurify.exceptions import ParseError
from zhihupurify.models import Story
from zhihupurify.services.parsers import parse_document, parse_stories


def test_parse_stories_keeps_index_order_and_thumbnails() -> None:
    payload = json.dumps(
        {
            "date": "20240105",
            "stories": [
                {"id": 3, "title": "Third", "images": ["https://pic.example.com/3.jpg", "x"]},
                {"id": 1, "title": "First"},
                {"id": 2, "title": "Second", "images": []},
            ],
        }
    )

    assert parse_stories(payload) == [
        Story(id=3, title="Third", thumbnail_url="https://pic.example.com/3.jpg"),
        Story(id=1, title="First", thumbnail_url=""),
        Story(id=2, title="Second", thumbnail_url=""),
    ]


def test_parse_stories_without_stories_key_is_empty() -> None:
    assert parse_stories('{"date": "20240105"}') == []


def test_parse_stories_accepts_streams() -> None:
    text_stream = io.StringIO('{"stories": [{"id": 7, "title": "Seven"}]}')
    byte_stream = io.BytesIO('{"stories": [{"id": 8, "title": "八"}]}'.encode("utf-8"))

    assert parse_stories(text_stream)[0].id == 7
    assert parse_stories(byte_stream)[0].title == "八"


@pytest.mark.parametrize(
    "payload",
    [
        "not json",
        "[]",
        '{"stories": {"id": 1}}',
        '{"stories": [{"title": "no id"}]}',
        '{"stories": [{"id": "1", "title": "string id"}]}',
        '{"stories": [{"id": 1}]}',
    ],
)
def test_parse_stories_rejects_malformed_index(payload: str) -> None:
    with pytest.raises(ParseError):
        parse_stories(payload)


def test_parse_document_without_body_is_absent() -> None:
    assert parse_document('{"id": 1, "title": "video"}') is None
    assert parse_document('{"body": null}') is None


def test_parse_document_parses_html_body() -> None:
    document = parse_document(json.dumps({"body": "<div class='question'><p>hi</p></div>"}))

    assert document is not None
    assert document.select_one("div.question p").get_text() == "hi"


def test_parse_document_with_empty_body_is_present() -> None:
    document = parse_document('{"body": ""}')

    assert document is not None
    assert document.select("div.question") == []


@pytest.mark.parametrize("payload", ["{", '"body"', '{"body": 42}'])
def test_parse_document_rejects_malformed_payload(payload: str) -> None:
    with pytest.raises(ParseError):
        parse_document(payload)


@pytest.mark.parametrize("images", [[None], [42], [{"url": "x"}]])
def test_parse_stories_ignores_non_string_thumbnail(images: list) -> None:
    payload = json.dumps({"stories": [{"id": 1, "title": "t", "images": images}]})

    assert parse_stories(payload)[0].thumbnail_url == ""
