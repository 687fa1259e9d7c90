"""Extract values from one parsed document by absolute path."""

from __future__ import annotations

from anystore.logging import get_logger

from pathscraper.exc import MissingDocument
from pathscraper.logic import collector, resolver
from pathscraper.logic.http import HttpSource, Source
from pathscraper.logic.tree import DocumentTree, parse_html
from pathscraper.model.node import Node
from pathscraper.settings import Settings
from pathscraper.util import clean_url

log = get_logger(__name__)


class Scraper:
    """Query a parsed document with path expressions.

    Paths are absolute, start at the document root and name one tag per
    level, optionally with a 1-based number among same-named siblings.
    A tag starting with ``text`` selects text nodes.

    Example:
        >>> scraper = Scraper.from_content(b"<p>a<b>b</b>c</p>")
        >>> scraper.get_value("/html/body/p/text[2]")
        'c'
    """

    def __init__(self, tree: DocumentTree) -> None:
        self.tree = tree

    @classmethod
    def from_content(
        cls, content: bytes | str, encoding: str | None = None
    ) -> Scraper:
        return cls(parse_html(content, encoding=encoding))

    @classmethod
    def from_url(
        cls,
        url: str,
        source: Source | None = None,
        settings: Settings | None = None,
    ) -> Scraper:
        """Fetch ``url`` with ``source`` and parse the result.

        When no source is given, an ``HttpSource`` is created from
        ``settings`` for this call and closed afterwards.
        """
        url = clean_url(url)
        if source is None:
            with HttpSource(settings) as http:
                return cls.from_url(url, http)
        document = source.get(url)
        if document is None:
            raise MissingDocument("Source returned no document: %s" % url)
        log.info("Parsing document", url=url, size=len(document.content))
        return cls(parse_html(document.content, encoding=document.encoding))

    def find_node(self, path: str | bytes) -> Node:
        return resolver.find_node(self.tree, path)

    def get_value(self, path: str | bytes) -> str:
        return resolver.get_value(self.tree, path)

    def next_after(self, path: str | bytes) -> list[Node]:
        """Nodes from ``path`` onwards: the node, its subtree, later siblings."""
        return collector.next_after(self.tree, path)

    def get_children(self, path: str | bytes) -> list[Node]:
        """All descendants of the node at ``path``, in preorder."""
        return collector.get_children(self.tree, path)

    def __repr__(self) -> str:
        return "<Scraper(%r)>" % self.tree
