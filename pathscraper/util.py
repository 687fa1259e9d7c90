import io

from furl import furl
from normality import guess_file_encoding
from rigour.mime import parse_mimetype

from pathscraper.exc import ConfigurationError

SCHEMES = ("http", "https")


def clean_url(url: str | bytes | None) -> str:
    """Validate a web address and return it trimmed.

    Rejects missing, non-UTF-8, blank and non-HTTP(S) addresses.
    """
    if url is None:
        raise ConfigurationError("URL should not be None")
    if isinstance(url, bytes):
        try:
            url = url.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ConfigurationError("URL is not a valid UTF-8 string") from exc
    try:
        url.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise ConfigurationError("URL is not a valid UTF-8 string") from exc
    url = url.strip()
    if not url:
        raise ConfigurationError("URL should not be empty")
    try:
        parsed = furl(url)
    except ValueError as exc:
        raise ConfigurationError("Parse URL [%s]: %s" % (url, exc)) from exc
    if parsed.scheme not in SCHEMES or not parsed.host:
        raise ConfigurationError("Not a valid HTTP(S) URL: %s" % url)
    return url


def guess_encoding(raw: bytes, content_type: str | None = None) -> str:
    """Detect the encoding of a document from its content type or bytes."""
    if content_type:
        mime = parse_mimetype(content_type)
        if mime.charset:
            return mime.charset
    try:
        raw.decode("utf-8")
        return "utf-8"
    except UnicodeDecodeError:
        return guess_file_encoding(io.BytesIO(raw))
