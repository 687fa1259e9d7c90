"""Flatten parts of a document tree in preorder."""

from __future__ import annotations

from pathscraper.logic.resolver import find_node
from pathscraper.logic.tree import DocumentTree
from pathscraper.model.node import Node


def collect(tree: DocumentTree, start: Node | None) -> list[Node]:
    """Collect ``start``, its descendants and its following siblings.

    Each node is listed before its first child, and a node's whole subtree
    is listed before its next sibling. A ``None`` start yields an empty list.
    """
    nodes: list[Node] = []
    stack = [start] if start is not None else []
    while stack:
        node = stack.pop()
        nodes.append(node)
        sibling = tree.next_sibling(node)
        if sibling is not None:
            stack.append(sibling)
        child = tree.first_child(node)
        if child is not None:
            stack.append(child)
    return nodes


def next_after(tree: DocumentTree, path: str | bytes) -> list[Node]:
    """Collect the node at ``path`` together with everything after it."""
    return collect(tree, find_node(tree, path))


def get_children(tree: DocumentTree, path: str | bytes) -> list[Node]:
    """Collect every descendant of the node at ``path``."""
    node = find_node(tree, path)
    return collect(tree, tree.first_child(node))
