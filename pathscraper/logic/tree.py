"""Index-addressed document trees.

A ``DocumentTree`` is an arena of immutable ``Node`` records. Nodes refer to
their parent, first child and siblings by index, so a tree can be shared
freely between threads and walked without mutation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Iterator, Mapping

from anystore.logging import get_logger
from lxml import etree, html

from pathscraper.exc import ConfigurationError, DocumentParseError
from pathscraper.model.node import (
    COMMENT,
    DOCTYPE,
    DOCUMENT,
    ELEMENT,
    ERROR,
    TEXT,
    Node,
    NodeKind,
)
from pathscraper.util import guess_encoding

if TYPE_CHECKING:
    from lxml.html import HtmlElement

log = get_logger(__name__)


class DocumentTree:
    """Read-only arena of document nodes; index 0 is the root."""

    def __init__(self, nodes: Iterable[Node]) -> None:
        self._nodes = tuple(nodes)
        if not self._nodes:
            raise ConfigurationError("A document tree needs at least one node")

    @property
    def root(self) -> Node:
        return self._nodes[0]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __getitem__(self, index: int) -> Node:
        return self._nodes[index]

    def get(self, index: int | None) -> Node | None:
        if index is None:
            return None
        return self._nodes[index]

    def parent(self, node: Node) -> Node | None:
        return self.get(node.parent)

    def first_child(self, node: Node) -> Node | None:
        return self.get(node.first_child)

    def next_sibling(self, node: Node) -> Node | None:
        return self.get(node.next_sibling)

    def siblings(self, node: Node | None) -> Iterator[Node]:
        """Iterate over ``node`` and every sibling that follows it."""
        while node is not None:
            yield node
            node = self.get(node.next_sibling)

    def children(self, node: Node) -> Iterator[Node]:
        return self.siblings(self.first_child(node))

    def __repr__(self) -> str:
        return "<DocumentTree(%d nodes)>" % len(self._nodes)


class TreeBuilder:
    """Assemble a ``DocumentTree`` by appending nodes in document order."""

    def __init__(self) -> None:
        self._nodes: list[dict[str, Any]] = []
        self._last_child: dict[int, int] = {}

    def add(
        self,
        kind: NodeKind,
        data: str = "",
        parent: int | None = None,
        attrs: Mapping[str, str] | None = None,
    ) -> int:
        """Append a node as the last child of ``parent`` and return its index."""
        index = len(self._nodes)
        if parent is None and index > 0:
            raise ConfigurationError("Only the root node may be added without parent")
        if parent is not None and not 0 <= parent < index:
            raise ConfigurationError("Unknown parent node: %r" % parent)
        node = {
            "index": index,
            "kind": kind,
            "data": data,
            "attrs": dict(attrs or {}),
            "parent": parent,
        }
        self._nodes.append(node)
        if parent is not None:
            last = self._last_child.get(parent)
            if last is None:
                self._nodes[parent]["first_child"] = index
            else:
                self._nodes[last]["next_sibling"] = index
                node["prev_sibling"] = last
            self._last_child[parent] = index
        return index

    def build(self) -> DocumentTree:
        return DocumentTree(Node(**node) for node in self._nodes)


def _add_element(builder: TreeBuilder, element: HtmlElement, parent: int) -> None:
    tag = element.tag
    if tag is etree.Comment or tag is etree.ProcessingInstruction:
        builder.add(COMMENT, element.text or "", parent=parent)
    elif tag is etree.Entity:
        builder.add(ERROR, element.text or "", parent=parent)
    else:
        index = builder.add(ELEMENT, str(tag), parent=parent, attrs=element.attrib)
        if element.text:
            builder.add(TEXT, element.text, parent=index)
        for child in element:
            _add_element(builder, child, index)
    if element.tail:
        builder.add(TEXT, element.tail, parent=parent)


def from_lxml(doc: etree._ElementTree | HtmlElement) -> DocumentTree:
    """Convert a parsed lxml document into a ``DocumentTree``.

    The result has a ``document`` root, an optional ``doctype`` child and
    the top-level comments and root element in document order.
    """
    if not isinstance(doc, etree._ElementTree):
        doc = doc.getroottree()
    root = doc.getroot()
    builder = TreeBuilder()
    document = builder.add(DOCUMENT)
    if doc.docinfo.doctype:
        builder.add(DOCTYPE, doc.docinfo.root_name or "html", parent=document)
    for sibling in reversed(list(root.itersiblings(preceding=True))):
        _add_element(builder, sibling, document)
    _add_element(builder, root, document)
    for sibling in root.itersiblings():
        _add_element(builder, sibling, document)
    return builder.build()


def parse_html(content: bytes | str, encoding: str | None = None) -> DocumentTree:
    """Parse HTML markup into a ``DocumentTree``.

    Args:
        content: Raw bytes or text of the document.
        encoding: Encoding of ``content`` if it is bytes; guessed when omitted.

    Raises:
        DocumentParseError: If lxml cannot make a document of the content.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
        encoding = "utf-8"
    if encoding is None:
        encoding = guess_encoding(content)
    try:
        parser = html.HTMLParser(encoding=encoding)
        root = html.document_fromstring(content, parser=parser, ensure_head_body=True)
    except LookupError as exc:
        raise DocumentParseError("Unknown encoding: %s" % encoding) from exc
    except (etree.ParserError, etree.ParseError) as exc:
        raise DocumentParseError("Parse content as HTML: %s" % exc) from exc
    tree = from_lxml(root)
    log.debug("Parsed document", nodes=len(tree), encoding=encoding)
    return tree
