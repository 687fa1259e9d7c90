"""HTTP document source with bounded retries."""

from __future__ import annotations

import threading
from typing import Any, Protocol

import httpx
from anystore.logging import get_logger

from pathscraper.exc import (
    ConfigurationError,
    ExhaustedRetries,
    FetchCancelled,
    FetchError,
)
from pathscraper.settings import Settings
from pathscraper.util import clean_url, guess_encoding

log = get_logger(__name__)


class Source(Protocol):
    """Anything that can supply the raw bytes of a document."""

    def get(self, url: str) -> Document: ...


class Document:
    """Raw content of a fetched document."""

    def __init__(
        self, url: str, content: bytes, content_type: str | None = None
    ) -> None:
        self.url = url
        self.content = content
        self.content_type = content_type

    @property
    def encoding(self) -> str:
        return guess_encoding(self.content, self.content_type)

    def __repr__(self) -> str:
        return "<Document(%s,%d bytes)>" % (self.url, len(self.content))


class HttpSource:
    """Fetch documents over HTTP, retrying transport errors.

    ``retries`` is the total number of attempts. Between two attempts the
    source waits ``retry_delay`` seconds; no wait follows the last attempt.
    Setting ``cancel`` aborts the fetch before the next attempt and
    interrupts a pending wait.

    Example:
        >>> source = HttpSource(Settings(retries=5, retry_delay=2))
        >>> document = source.get("https://example.com")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.Client | None = None,
        cancel: threading.Event | None = None,
        **kwargs: Any,
    ) -> None:
        settings = settings or Settings()
        if kwargs:
            settings = settings.model_copy(update=kwargs)
        if settings.retry_delay < 0:
            raise ConfigurationError("retry_delay should not be negative")
        if settings.retries < 1:
            raise ConfigurationError("retries should be at least 1")
        self.settings = settings
        self.cancel = cancel or threading.Event()
        self.owns_client = client is None
        self.client = client or httpx.Client(
            timeout=settings.http_timeout, follow_redirects=True
        )

    @property
    def retries(self) -> int:
        return self.settings.retries

    @property
    def retry_delay(self) -> float:
        return self.settings.retry_delay

    def _check_cancelled(self, url: str) -> None:
        if self.cancel.is_set():
            raise FetchCancelled("Fetch cancelled: %s" % url)

    def request(self, url: str) -> httpx.Response:
        """Perform a GET request, retrying on transport errors.

        Raises:
            ExhaustedRetries: If every attempt failed.
            FetchCancelled: If cancellation was requested.
        """
        url = clean_url(url)
        headers = {
            "Cache-Control": "no-cache",
            "Accept-Charset": "utf-8",
            "User-Agent": self.settings.user_agent,
        }
        error: httpx.HTTPError | None = None
        for attempt in range(1, self.retries + 1):
            self._check_cancelled(url)
            try:
                return self.client.get(url, headers=headers)
            except httpx.HTTPError as exc:
                error = exc
                log.warning(
                    "Request failed",
                    url=url,
                    attempt=attempt,
                    retries=self.retries,
                    error=str(exc),
                )
            if attempt < self.retries:
                self._check_cancelled(url)
                if self.cancel.wait(self.retry_delay):
                    raise FetchCancelled("Fetch cancelled: %s" % url)
        raise ExhaustedRetries(url, self.retries) from error

    def get(self, url: str) -> Document:
        """Fetch ``url`` and return its content.

        Raises:
            FetchError: If the server does not answer with status 200.
        """
        response = self.request(url)
        try:
            if response.status_code != httpx.codes.OK:
                raise FetchError(str(response.url), response.status_code)
            log.info("Fetched", status=response.status_code, url=str(response.url))
            return Document(
                str(response.url),
                response.content,
                response.headers.get("content-type"),
            )
        finally:
            response.close()

    def close(self) -> None:
        """Close the HTTP client if this source created it."""
        if self.owns_client:
            self.client.close()

    def __enter__(self) -> HttpSource:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()
