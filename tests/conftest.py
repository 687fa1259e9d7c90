import os

import pytest

from pathscraper.logic.tree import parse_html
from pathscraper.scraper import Scraper

AMOUNT_PATH = (
    "/html/body/div[1]/div[1]/div[1]/div[2]/div[3]/div/div[2]/div/div[1]/div[1]"
    "/div/span[1]/span/span/span/span/span/span/span/span/span/span/span/span"
)


@pytest.fixture(scope="session")
def amount_path():
    return AMOUNT_PATH


def get_testdata(name):
    file_path = os.path.realpath(__file__)
    return os.path.normpath(os.path.join(file_path, "../testdata", name))


def get_content():
    with open(get_testdata("product.html"), "rb") as fh:
        return fh.read()


@pytest.fixture(scope="module")
def content():
    return get_content()


@pytest.fixture(scope="module")
def tree():
    return parse_html(get_content(), encoding="utf-8")


@pytest.fixture(scope="module")
def scraper(tree):
    return Scraper(tree)


@pytest.fixture(scope="session")
def httpbin_url(httpbin):
    """Provide httpbin URL from pytest-httpbin fixture.

    pytest-httpbin automatically starts a local httpbin server in a separate
    thread - no Docker required.
    """
    return httpbin.url
