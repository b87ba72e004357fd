from __future__ import annotations

import importlib.util
import json
from pathlib import Path

import pytest

from zhihupurify.exceptions import FetchError
from zhihupurify.models import Feed, News, Question

RUN_FEED_PATH = Path(__file__).resolve().parents[1] / "run_feed.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("run_feed", RUN_FEED_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class StubBuilder:
    closed = False

    def __init__(self, fetcher=None, config=None) -> None:
        self.config = config

    def __enter__(self) -> "StubBuilder":
        return self

    def __exit__(self, *exc_info) -> None:
        StubBuilder.closed = True

    def feed_for_date(self, date: str) -> Feed:
        if date == "broken":
            raise FetchError("https://news.example.com/before/broken", "boom")
        return Feed(
            news=[
                News(
                    date=date,
                    title="T1",
                    questions=[Question(title="Q1", url="https://www.zhihu.com/question/1")],
                )
            ]
        )


def test_main_prints_feed_json(monkeypatch, capsys) -> None:
    script = _load_script()
    monkeypatch.setattr(script, "FeedBuilder", StubBuilder)

    script.main(["20240105"])

    payload = json.loads(capsys.readouterr().out)
    assert payload["news"][0]["date"] == "20240105"
    assert payload["news"][0]["questions"][0]["title"] == "Q1"


def test_main_exits_on_feed_error(monkeypatch) -> None:
    script = _load_script()
    monkeypatch.setattr(script, "FeedBuilder", StubBuilder)

    with pytest.raises(SystemExit) as excinfo:
        script.main(["broken"])

    assert excinfo.value.code == 1


def test_main_closes_builder(monkeypatch, capsys) -> None:
    script = _load_script()
    monkeypatch.setattr(StubBuilder, "closed", False)
    monkeypatch.setattr(script, "FeedBuilder", StubBuilder)

    script.main(["20240105"])

    assert StubBuilder.closed is True
