"""HTTP transport used to retrieve Zhihu Daily payloads."""

from __future__ import annotations

import logging
from typing import Protocol

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from zhihupurify.config import FeedConfig
from zhihupurify.exceptions import FetchError

__all__ = ["Fetcher", "HttpFetcher"]

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Anything that can turn a URL into the response body text."""

    def fetch(self, url: str) -> str:
        ...


def _build_session(config: FeedConfig) -> requests.Session:
    retry = Retry(
        total=config.retries,
        connect=config.retries,
        read=config.retries,
        backoff_factor=config.backoff_factor,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods={"GET"},
    )
    # Pool sized for the detail fan-out so worker threads do not queue on connections.
    adapter = HTTPAdapter(max_retries=retry, pool_maxsize=config.max_workers)

    session = requests.Session()
    session.headers.update(config.headers)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class HttpFetcher:
    """``requests`` based fetcher with retries and timeouts."""

    def __init__(
        self, config: FeedConfig | None = None, session: requests.Session | None = None
    ) -> None:
        self._config = config or FeedConfig()
        self._session = session or _build_session(self._config)

    def fetch(self, url: str) -> str:
        logger.debug("GET %s", url)
        try:
            response = self._session.get(url, timeout=self._config.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(url, str(exc)) from exc
        return response.text

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "HttpFetcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
