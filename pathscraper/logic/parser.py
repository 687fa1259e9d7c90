"""Path expression parser.

Turns a path such as ``/html/body/div[2]/text`` into an ordered
``PathExpression``. Parsing is purely syntactic: the whole path is validated
before any document is touched.
"""

from __future__ import annotations

import re

from pathscraper.exc import (
    DigitOutsideBrackets,
    DisallowedCharacter,
    EmptySegment,
    InvalidEncoding,
    MisplacedBrackets,
    MissingPathPrefix,
    NonNumericIndex,
)
from pathscraper.model.path import PathExpression, PathSegment

PATH_DELIMITER = "/"
OPEN_BRACKET = "["
CLOSE_BRACKET = "]"
NOT_ALLOWED_SYMBOLS = frozenset("!@#$%^&*_+-={}\"№;'<>/\\~`:?")
DIGITS = re.compile(r"\d")
INDEX = re.compile(r"^[0-9]+$")


def _ensure_text(path: str | bytes) -> str:
    if isinstance(path, bytes):
        try:
            return path.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidEncoding("Path is not a valid UTF-8 string") from exc
    try:
        path.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidEncoding("Path is not a valid UTF-8 string") from exc
    return path


def parse_segment(segment: str) -> PathSegment:
    """Parse one ``tag`` or ``tag[N]`` segment.

    Example:
        >>> parse_segment("div[3]")
        PathSegment(tag='div', ordinal=3)
        >>> parse_segment("someTag2")
        PathSegment(tag='someTag2', ordinal=1)
    """
    segment = segment.strip()
    if not segment:
        raise EmptySegment("Empty path segment", path=segment)

    for char in segment:
        if char in NOT_ALLOWED_SYMBOLS or not char.isprintable() or char.isspace():
            raise DisallowedCharacter(
                "The tag contains a not allowed symbol: %r" % char, path=segment
            )

    opening = segment.find(OPEN_BRACKET)
    closing = segment.find(CLOSE_BRACKET)
    if opening == -1 and closing == -1:
        return PathSegment(tag=segment)
    if (
        segment.count(OPEN_BRACKET) > 1
        or segment.count(CLOSE_BRACKET) > 1
        or (opening == -1) != (closing == -1)
        or opening == 0
        or closing < opening
    ):
        raise MisplacedBrackets("Brackets are arranged incorrectly", path=segment)
    if DIGITS.search(segment, closing + 1):
        raise DigitOutsideBrackets("The tag number is out of brackets", path=segment)
    if closing != len(segment) - 1:
        raise MisplacedBrackets("Brackets are arranged incorrectly", path=segment)

    index = segment[opening + 1 : closing]
    if not INDEX.match(index) or int(index) < 1:
        raise NonNumericIndex(
            "The tag number is not a positive integer: %r" % index, path=segment
        )
    return PathSegment(tag=segment[:opening], ordinal=int(index))


def parse_path(path: str | bytes) -> PathExpression:
    """Parse an absolute path expression.

    Args:
        path: The path, which must start with ``/``. A bare ``/`` addresses
            the document root.

    Returns:
        The parsed expression.

    Raises:
        PathSyntaxError: On the first malformed part of the path.

    Example:
        >>> [str(s) for s in parse_path("/html/body/div[2]")]
        ['html[1]', 'body[1]', 'div[2]']
    """
    path = _ensure_text(path)
    if not path.startswith(PATH_DELIMITER):
        raise MissingPathPrefix(
            'Path should have a prefix "%s"' % PATH_DELIMITER, path=path
        )
    remainder = path[len(PATH_DELIMITER) :]
    if not remainder:
        return PathExpression(path=path)
    segments = []
    for raw in remainder.split(PATH_DELIMITER):
        try:
            segments.append(parse_segment(raw))
        except EmptySegment as exc:
            raise EmptySegment("Empty segment in path: %s" % path, path=path) from exc
    return PathExpression(path=path, segments=tuple(segments))
