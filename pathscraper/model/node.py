"""DOM node record stored in a document tree arena."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

DOCUMENT = "document"
DOCTYPE = "doctype"
ELEMENT = "element"
TEXT = "text"
COMMENT = "comment"
ERROR = "error"

NodeKind = Literal["document", "doctype", "element", "text", "comment", "error"]

# Kinds a path walk passes through without consuming a segment
TRANSPARENT = (DOCUMENT, DOCTYPE)


class Node(BaseModel):
    """One node of a parsed document.

    Links to related nodes are indexes into the owning ``DocumentTree``.
    ``data`` holds the tag name for elements and the payload for text,
    comment and doctype nodes.
    """

    index: int
    kind: NodeKind
    data: str = ""
    attrs: dict[str, str] = Field(default_factory=dict)
    parent: int | None = None
    first_child: int | None = None
    next_sibling: int | None = None
    prev_sibling: int | None = None

    model_config = {"frozen": True}

    def __hash__(self) -> int:
        return hash((self.index, self.kind, self.data))

    @property
    def is_element(self) -> bool:
        return self.kind == ELEMENT

    @property
    def is_text(self) -> bool:
        return self.kind == TEXT

    def __repr__(self) -> str:
        return "<Node(%d,%s,%r)>" % (self.index, self.kind, self.data[:30])
