import pytest

from rss_maker.fetcher import parse_document


@pytest.fixture
def parse():
    return lambda markup: parse_document(markup.encode("utf-8"))
