"""Configuration models and helpers for the Zhihu Daily feed builder."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Mapping

from pydantic import BaseModel, Field, HttpUrl, ValidationError

__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_HEADERS",
    "FeedConfig",
]

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "data" / "feed.json"
DEFAULT_BASE_URL = "https://news-at.zhihu.com/api/4/news"
DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/129.0.0.0 Safari/537.36"
    ),
    "Accept": "application/json,text/plain;q=0.9,*/*;q=0.8",
    "Accept-Language": "zh-CN,zh;q=0.9,en-US;q=0.8,en;q=0.7",
    "Connection": "keep-alive",
}

# Environment variable -> FeedConfig field
_ENV_FIELDS = {
    "ZHIHU_DAILY_BASE_URL": "base_url",
    "ZHIHU_DAILY_MAX_WORKERS": "max_workers",
    "ZHIHU_DAILY_CONNECT_TIMEOUT": "connect_timeout",
    "ZHIHU_DAILY_READ_TIMEOUT": "read_timeout",
    "ZHIHU_DAILY_RETRIES": "retries",
}


class FeedConfig(BaseModel):
    """Settings for fetching a daily feed."""

    base_url: HttpUrl = Field(
        default=DEFAULT_BASE_URL,
        validate_default=True,
        description="Root of the news API; index and detail URLs hang off it"
    )
    max_workers: int = Field(
        default=8,
        ge=1,
        description="Upper bound on concurrent story detail fetches",
    )
    connect_timeout: float = Field(default=10.0, gt=0, description="Seconds to wait for a connection")
    read_timeout: float = Field(default=30.0, gt=0, description="Seconds to wait for a response body")
    retries: int = Field(
        default=3,
        ge=0,
        description="Retries for connection errors and 429/5xx responses",
    )
    backoff_factor: float = Field(default=0.5, ge=0)
    headers: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_HEADERS))

    @property
    def timeout(self) -> tuple[float, float]:
        """Return the ``(connect, read)`` timeout pair understood by ``requests``."""

        return (self.connect_timeout, self.read_timeout)

    def index_url(self, date: str) -> str:
        """Return the URL listing the stories published before ``date``."""

        return f"{str(self.base_url).rstrip('/')}/before/{date}"

    def detail_url(self, story_id: int) -> str:
        """Return the URL of a single story's detail payload."""

        return f"{str(self.base_url).rstrip('/')}/{story_id}"

    @classmethod
    def from_file(cls, path: Path | str | None = None) -> "FeedConfig":
        """Load configuration data from a JSON file."""

        config_path = Path(path) if path else DEFAULT_CONFIG_PATH
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise FileNotFoundError(f"Configuration file not found: {config_path}") from exc
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in configuration file: {config_path}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Configuration file is invalid: {config_path}\n{exc}") from exc

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "FeedConfig":
        """Build a configuration from ``ZHIHU_DAILY_*`` environment variables.

        Unset or blank variables keep the field default.
        """

        environ = os.environ if environ is None else environ
        data = {}
        for variable, field_name in _ENV_FIELDS.items():
            value = environ.get(variable)
            if value is None or not value.strip():
                continue
            data[field_name] = value.strip()

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Invalid ZHIHU_DAILY_* environment configuration\n{exc}") from exc

    def dump(self, path: Path | str | None = None) -> None:
        """Persist the configuration back to disk as JSON."""

        config_path = Path(path) if path else DEFAULT_CONFIG_PATH
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
