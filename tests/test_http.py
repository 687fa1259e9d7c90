"""Tests for the HTTP document source."""

import threading

import httpx
import pytest

from pathscraper.exc import (
    ConfigurationError,
    ExhaustedRetries,
    FetchCancelled,
    FetchError,
)
from pathscraper.logic.http import HttpSource
from pathscraper.settings import Settings

PAGE = b"<html><body><h1>Hello</h1></body></html>"


def make_source(handler, **kwargs):
    """Create a source answering through a mock transport."""
    client = httpx.Client(transport=httpx.MockTransport(handler))
    settings = Settings(retries=3, retry_delay=0)
    return HttpSource(settings, client=client, **kwargs)


class TestHttpSourceConfig:
    """Tests for HttpSource configuration."""

    def test_defaults(self):
        """Test HttpSource defaults and closes its own client."""
        with HttpSource() as source:
            assert source.retries == 3
            assert source.retry_delay == 30.0
            assert source.owns_client
        assert source.client.is_closed

    def test_overrides(self):
        """Test keyword overrides replace settings values."""
        with HttpSource(retries=10, retry_delay=2) as source:
            assert source.retries == 10
            assert source.retry_delay == 2

    def test_negative_delay(self):
        """Test a negative retry delay is rejected."""
        with pytest.raises(ConfigurationError):
            HttpSource(retry_delay=-30)

    def test_no_attempts(self):
        """Test zero attempts are rejected."""
        with pytest.raises(ConfigurationError):
            HttpSource(retries=0)

    def test_invalid_url(self):
        """Test missing, blank and non-HTTP URLs are rejected."""
        source = make_source(lambda request: httpx.Response(200, content=PAGE))
        with pytest.raises(ConfigurationError):
            source.get(None)
        with pytest.raises(ConfigurationError):
            source.get("   ")
        with pytest.raises(ConfigurationError):
            source.get("ftp://example.com/file")

    def test_injected_client(self):
        """Test a caller client is neither modified nor closed."""
        client = httpx.Client(transport=httpx.MockTransport(lambda r: None))
        user_agent = client.headers["User-Agent"]
        with HttpSource(Settings(retries=1, retry_delay=0), client=client) as source:
            assert not source.owns_client
        assert client.headers["User-Agent"] == user_agent
        assert not client.is_closed
        client.close()


class TestHttpSourceGet:
    """Tests for HttpSource.get() with mocked transports."""

    def test_get(self):
        """Test HttpSource.get() sends fixed headers and returns content."""
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(
                200, content=PAGE, headers={"content-type": "text/html; charset=utf-8"}
            )

        source = make_source(handler)
        document = source.get("  https://example.com/page  ")
        assert document.content == PAGE
        assert document.url == "https://example.com/page"
        assert document.encoding == "utf-8"
        assert len(seen) == 1
        assert seen[0].headers["Cache-Control"] == "no-cache"
        assert seen[0].headers["Accept-Charset"] == "utf-8"
        assert "pathscraper" in seen[0].headers["User-Agent"]

    def test_retry_then_succeed(self):
        """Test transport errors are retried until success."""
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) < 3:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, content=PAGE)

        document = make_source(handler).get("https://example.com")
        assert document.content == PAGE
        assert len(calls) == 3

    def test_exhausted_retries(self):
        """Test retries means total attempts before ExhaustedRetries."""
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ExhaustedRetries) as exc:
            make_source(handler).get("https://example.com")
        assert len(calls) == 3
        assert exc.value.attempts == 3
        assert isinstance(exc.value.__cause__, httpx.ConnectError)

    def test_wait_between_attempts(self, mocker):
        """Test the delay is waited between attempts only."""
        cancel = threading.Event()
        wait = mocker.patch.object(cancel, "wait", return_value=False)

        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        client = httpx.Client(transport=httpx.MockTransport(handler))
        source = HttpSource(
            Settings(retries=3, retry_delay=5), client=client, cancel=cancel
        )
        with pytest.raises(ExhaustedRetries):
            source.get("https://example.com")
        assert wait.call_count == 2
        wait.assert_called_with(5)

    def test_status_not_retried(self):
        """Test a non-200 status raises FetchError without retry."""
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(502)

        with pytest.raises(FetchError) as exc:
            make_source(handler).get("https://example.com")
        assert exc.value.status_code == 502
        assert len(calls) == 1

    def test_cancelled_before_start(self):
        """Test a set cancel event stops the fetch before any request."""
        calls = []
        cancel = threading.Event()
        cancel.set()
        source = make_source(lambda request: calls.append(request), cancel=cancel)
        with pytest.raises(FetchCancelled):
            source.get("https://example.com")
        assert calls == []

    def test_cancelled_between_attempts(self):
        """Test cancellation is checked before waiting."""
        calls = []
        cancel = threading.Event()

        def handler(request):
            calls.append(request)
            cancel.set()
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchCancelled):
            make_source(handler, cancel=cancel).get("https://example.com")
        assert len(calls) == 1

    def test_httpbin(self, httpbin_url):
        """Test fetching HTML and an error status from httpbin."""
        with HttpSource(Settings(retries=1, retry_delay=0)) as source:
            document = source.get(f"{httpbin_url}/html")
            assert b"Moby-Dick" in document.content
            with pytest.raises(FetchError) as exc:
                source.get(f"{httpbin_url}/status/418")
            assert exc.value.status_code == 418
