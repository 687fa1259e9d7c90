"""Path expression models."""

from __future__ import annotations

from pydantic import BaseModel, Field

TEXT_PREFIX = "text"


class PathSegment(BaseModel):
    """A single ``tag`` or ``tag[N]`` step of a path expression."""

    tag: str
    ordinal: int = Field(default=1, ge=1)

    model_config = {"frozen": True}

    @property
    def is_text_match(self) -> bool:
        """Segments whose tag starts with ``text`` (any case) select text nodes."""
        return self.tag.casefold().startswith(TEXT_PREFIX)

    def __str__(self) -> str:
        return "%s[%d]" % (self.tag, self.ordinal)


class PathExpression(BaseModel):
    """An absolute path, as an ordered list of segments.

    An empty list of segments addresses the node the walk starts on.
    """

    path: str
    segments: tuple[PathSegment, ...] = ()

    model_config = {"frozen": True}

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self):
        return iter(self.segments)

    def __str__(self) -> str:
        return self.path
