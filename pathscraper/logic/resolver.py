"""Resolve path expressions against a document tree.

The walk descends one tree level per segment. At each level the sibling
chain is scanned for nodes matching the segment's tag, counting matches
until the requested ordinal is reached. Document and doctype nodes are
transparent: they are passed through without consuming a segment.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from anystore.logging import get_logger

from pathscraper.exc import ElementNotFound, NodeProcessingError, NotTextNode
from pathscraper.logic.parser import parse_path
from pathscraper.logic.tree import DocumentTree
from pathscraper.model.node import DOCTYPE, DOCUMENT, ERROR, TRANSPARENT, Node
from pathscraper.model.path import PathExpression, PathSegment

log = get_logger(__name__)


def matches(segment: PathSegment, node: Node) -> bool:
    """Check whether ``node`` is selected by the tag of ``segment``."""
    if node.is_element and node.data.casefold() == segment.tag.casefold():
        return True
    return node.is_text and segment.is_text_match


def _level(tree: DocumentTree, node: Node | None) -> Iterator[Node]:
    """Iterate over a sibling chain, flattening transparent nodes."""
    stack = [node]
    while stack:
        sibling = stack.pop()
        if sibling is None:
            continue
        stack.append(tree.next_sibling(sibling))
        if sibling.kind == DOCUMENT:
            stack.append(tree.first_child(sibling))
        elif sibling.kind != DOCTYPE:
            yield sibling


def _descend(
    tree: DocumentTree,
    segments: Sequence[PathSegment],
    chain: Node | None,
) -> Node:
    node = None
    for depth, segment in enumerate(segments, 1):
        node = _match(tree, segment, chain, depth)
        chain = tree.first_child(node)
    return node


def _match(
    tree: DocumentTree, segment: PathSegment, chain: Node | None, depth: int
) -> Node:
    """Find the ordinal-th node matching ``segment`` on one level."""
    count = 0
    for node in _level(tree, chain):
        if node.kind == ERROR:
            raise NodeProcessingError(
                "Error node at level %d: %r" % (depth, node.data)
            )
        if not matches(segment, node):
            continue
        count += 1
        if count == segment.ordinal:
            return node
    raise ElementNotFound(str(segment), depth)


def resolve(
    tree: DocumentTree,
    segments: PathExpression | Sequence[PathSegment],
    start: Node | None = None,
) -> Node:
    """Return the node addressed by ``segments``.

    Args:
        tree: The document to walk.
        segments: Parsed path segments.
        start: Node the path is relative to. Defaults to the tree root;
            segments then address the children of ``start``.

    Raises:
        ElementNotFound: If some level has fewer matches than the ordinal.
        NodeProcessingError: If an error node is met during the walk.
    """
    if start is None:
        start = tree.root
    segments = tuple(segments)
    if not segments:
        return start
    chain = start if start.kind in TRANSPARENT else tree.first_child(start)
    return _descend(tree, segments, chain)


def find_node(tree: DocumentTree, path: str | bytes) -> Node:
    """Parse ``path`` and resolve it from the document root."""
    expression = parse_path(path)
    node = resolve(tree, expression)
    log.debug("Resolved path", path=expression.path, node=node.index)
    return node


def get_value(tree: DocumentTree, path: str | bytes) -> str:
    """Return the payload of the text node addressed by ``path``.

    Raises:
        NotTextNode: If ``path`` resolves to anything but a text node.
    """
    node = find_node(tree, path)
    if not node.is_text:
        raise NotTextNode(node.kind)
    return node.data
