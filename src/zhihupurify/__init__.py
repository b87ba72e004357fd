"""Zhihu Daily Purify: daily news feeds reduced to their linked question threads."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, MutableMapping

DEFAULT_ENV_PATH = Path(__file__).resolve().parents[2] / ".env"


def load_local_env(
    env_path: Path | str | None = None, environ: MutableMapping[str, str] | None = None
) -> List[str]:
    """Copy ``KEY=value`` pairs from a ``.env`` file into ``environ``.

    Variables that are already set win over the file. ``export`` prefixes and
    surrounding quotes are accepted. Returns the names that were set.
    """

    path = Path(env_path) if env_path else DEFAULT_ENV_PATH
    target = os.environ if environ is None else environ
    if not path.is_file():
        return []

    loaded: List[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        name, sep, value = line.partition("=")
        name = name.strip()
        if line.startswith("#") or not sep or not name or name in target:
            continue

        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        target[name] = value
        loaded.append(name)
    return loaded


load_local_env()

from .config import FeedConfig  # noqa: E402,F401
from .exceptions import FeedError, FetchError, ParseError  # noqa: E402,F401
from .models import Feed, FeedReport, News, Question, Story  # noqa: E402,F401

__all__ = [
    "DEFAULT_ENV_PATH",
    "Feed",
    "FeedConfig",
    "FeedError",
    "FeedReport",
    "FetchError",
    "News",
    "ParseError",
    "Question",
    "Story",
    "load_local_env",
]
