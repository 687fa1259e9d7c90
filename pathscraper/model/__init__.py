from pathscraper.model.node import Node
from pathscraper.model.path import PathExpression, PathSegment

__all__ = [
    "Node",
    "PathExpression",
    "PathSegment",
]
