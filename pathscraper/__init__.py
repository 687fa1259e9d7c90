import logging

from pathscraper.logic.collector import collect
from pathscraper.logic.http import HttpSource
from pathscraper.logic.parser import parse_path
from pathscraper.logic.resolver import find_node, get_value, resolve
from pathscraper.logic.tree import DocumentTree, parse_html
from pathscraper.scraper import Scraper
from pathscraper.settings import Settings

# Silence noisy third-party loggers
for logger_name in ("httpx", "httpcore"):
    logging.getLogger(logger_name).setLevel(logging.WARNING)

__all__ = [
    "DocumentTree",
    "HttpSource",
    "Scraper",
    "Settings",
    "collect",
    "find_node",
    "get_value",
    "parse_html",
    "parse_path",
    "resolve",
]
