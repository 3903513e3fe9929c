from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
import requests

from headlines_tui.datamodels import QuerySpec, RawArticle
from headlines_tui.errors import FeedError
from headlines_tui.sources.newsapi import NewsAPILoader, build_params


def _response(payload, ok=True, status_code=200):
    resp = MagicMock()
    resp.ok = ok
    resp.status_code = status_code
    resp.reason = "OK" if ok else "Unauthorized"
    resp.json.return_value = payload
    return resp


@pytest.fixture
def http():
    return MagicMock()


def test_load_caps_and_keeps_order(http):
    articles = [{"title": f"T{i}", "url": f"https://example.com/{i}"} for i in range(15)]
    http.get.return_value = _response(
        {"status": "ok", "totalResults": 15, "articles": articles}
    )
    loader = NewsAPILoader({}, "secret", session=http)

    batch = loader.load(QuerySpec(q="Trump America"))

    assert batch == [RawArticle(f"T{i}", f"https://example.com/{i}") for i in range(10)]
    args, kwargs = http.get.call_args
    assert args[0] == "https://newsapi.org/v2/everything"
    assert kwargs["headers"] == {"X-Api-Key": "secret"}
    assert kwargs["params"]["q"] == "Trump America"


def test_load_skips_unusable_entries(http):
    http.get.return_value = _response(
        {
            "status": "ok",
            "articles": [
                {"title": "[Removed]", "url": "https://removed.com"},
                {"title": "No link", "url": None},
                {"title": "", "url": "https://example.com/untitled"},
                {"title": "Kept", "url": "https://example.com/kept"},
            ],
        }
    )
    batch = NewsAPILoader({}, "secret", session=http).load(QuerySpec())
    assert batch == [RawArticle("Kept", "https://example.com/kept")]


def test_load_empty_batch(http):
    http.get.return_value = _response({"status": "ok", "totalResults": 0, "articles": []})
    assert NewsAPILoader({}, "secret", session=http).load(QuerySpec()) == []


def test_api_error_is_fatal(http):
    http.get.return_value = _response(
        {"status": "error", "code": "apiKeyInvalid", "message": "Your API key is invalid."},
        ok=False,
        status_code=401,
    )
    with pytest.raises(FeedError, match="API key is invalid"):
        NewsAPILoader({}, "bad", session=http).load(QuerySpec())


def test_transport_error_is_fatal(http):
    http.get.side_effect = requests.ConnectionError("connection refused")
    with pytest.raises(FeedError):
        NewsAPILoader({}, "secret", session=http).load(QuerySpec())


def test_malformed_response_is_fatal(http):
    resp = _response(None)
    resp.json.side_effect = ValueError("Expecting value")
    http.get.return_value = resp
    with pytest.raises(FeedError, match="Malformed"):
        NewsAPILoader({}, "secret", session=http).load(QuerySpec())


@pytest.mark.parametrize("payload", [["not", "an", "object"], "Service unavailable", None])
def test_non_object_response_is_fatal(http, payload):
    http.get.return_value = _response(payload)
    with pytest.raises(FeedError, match="Malformed"):
        NewsAPILoader({}, "secret", session=http).load(QuerySpec())


def test_missing_article_list_is_fatal(http):
    http.get.return_value = _response({"status": "ok"})
    with pytest.raises(FeedError):
        NewsAPILoader({}, "secret", session=http).load(QuerySpec())


def test_build_params_everything():
    query = QuerySpec(
        q="Trump America",
        category="general",
        language="en",
        date_from=datetime(2024, 5, 1, 12, 30, 15, 999, tzinfo=timezone.utc),
        date_to=datetime(2024, 5, 11, 12, 30, 15, tzinfo=timezone.utc),
        sort_by="popularity",
    )
    assert build_params(query) == {
        "pageSize": 10,
        "q": "Trump America",
        "language": "en",
        "from": "2024-05-01T12:30:15+00:00",
        "to": "2024-05-11T12:30:15+00:00",
        "sortBy": "popularity",
    }


def test_build_params_top_headlines():
    query = QuerySpec(q="election", category="general", language="en", endpoint="top-headlines")
    assert build_params(query) == {"pageSize": 10, "q": "election", "category": "general"}
