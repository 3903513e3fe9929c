from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from headlines_tui.config import DEFAULT_CONFIG, query_from_config
from headlines_tui.datamodels import QuerySpec, RawArticle
from headlines_tui.errors import FeedError
from headlines_tui.sources.rss import RSSLoader


@pytest.fixture
def rss_loader():
    feeds = {
        "Feed 1": "http://feed1.com",
        "Feed 2": "http://feed2.com",
    }
    return RSSLoader({"feeds": feeds}, max_articles=2)


def _feed(entries, bozo=False):
    mock_feed = MagicMock()
    mock_feed.entries = entries
    mock_feed.bozo = bozo
    return mock_feed


def test_rss_load_first_feed(rss_loader):
    with patch("headlines_tui.sources.rss.feedparser.parse") as mock_parse:
        mock_parse.return_value = _feed(
            [
                {"title": "Story 1", "link": "http://story1.com"},
                {"title": "Story 2", "link": "http://story2.com"},
                {"title": "Story 3", "link": "http://story3.com"},
            ]
        )
        batch = rss_loader.load(QuerySpec())
        mock_parse.assert_called_once_with("http://feed1.com")
        assert batch == [
            RawArticle("Story 1", "http://story1.com"),
            RawArticle("Story 2", "http://story2.com"),
        ]


def test_rss_load_named_feed_with_filter(rss_loader):
    with patch("headlines_tui.sources.rss.feedparser.parse") as mock_parse:
        mock_parse.return_value = _feed(
            [
                {"title": "Markets rally", "link": "http://story1.com"},
                {"title": "Election night", "link": "http://story2.com"},
                {"title": "No link"},
            ]
        )
        batch = rss_loader.load(QuerySpec(q="ELECTION", category="Feed 2"))
        mock_parse.assert_called_once_with("http://feed2.com")
        assert batch == [RawArticle("Election night", "http://story2.com")]


def test_rss_unreadable_feed(rss_loader):
    with patch("headlines_tui.sources.rss.feedparser.parse") as mock_parse:
        mock_parse.return_value = _feed([], bozo=True)
        with pytest.raises(FeedError):
            rss_loader.load(QuerySpec())


def test_rss_no_feeds_configured():
    with pytest.raises(FeedError):
        RSSLoader({}).load(QuerySpec())


def test_rss_default_config_keeps_every_entry():
    query = query_from_config(DEFAULT_CONFIG, source_name="rss")
    loader = RSSLoader({"feeds": {"World": "http://world.example.com/rss"}})
    with patch("headlines_tui.sources.rss.feedparser.parse") as mock_parse:
        mock_parse.return_value = _feed(
            [
                {"title": "Markets rally", "link": "http://story1.com"},
                {"title": "Election news", "link": "http://story2.com"},
            ]
        )
        batch = loader.load(query)
    assert [a.title for a in batch] == ["Markets rally", "Election news"]
