from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

import requests

from ..config import BATCH_SIZE, NEWSAPI_BASE_URL
from ..datamodels import QuerySpec, RawArticle
from ..errors import FeedError
from ..fetcher import create_session
from .base import BatchLoader

logger = logging.getLogger("headlines")

REMOVED_MARKER = "[Removed]"


class NewsAPILoader(BatchLoader):
    def __init__(
        self,
        config: Dict[str, Any],
        api_key: str,
        max_articles: int = BATCH_SIZE,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__(config, max_articles)
        self.api_key = api_key
        self.session = session or create_session()
        self.timeout = timeout

    def fetch(self, query: QuerySpec) -> Iterable[RawArticle]:
        url = f"{NEWSAPI_BASE_URL}/{query.endpoint}"
        params = build_params(query)
        logger.info("Requesting %s with %s", url, params)
        try:
            resp = self.session.get(
                url,
                params=params,
                headers={"X-Api-Key": self.api_key},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise FeedError(f"Request to {url} failed: {e}") from e

        try:
            payload = resp.json()
        except ValueError as e:
            raise FeedError(f"Malformed response from {url}: {e}") from e
        if not isinstance(payload, dict):
            raise FeedError(f"Malformed response from {url}: expected a JSON object")

        if not resp.ok or payload.get("status") != "ok":
            message = payload.get("message") or resp.reason
            raise FeedError(f"News API error ({resp.status_code}): {message}")

        articles = payload.get("articles")
        if not isinstance(articles, list):
            raise FeedError(f"Malformed response from {url}: no article list")
        logger.info("News API returned %d of %s articles", len(articles), payload.get("totalResults"))
        return _usable_articles(articles)


def build_params(query: QuerySpec) -> Dict[str, Any]:
    """Map a query to News API request parameters for its endpoint."""
    params: Dict[str, Any] = {"pageSize": query.page_size}
    if query.q:
        params["q"] = query.q
    if query.endpoint == "top-headlines":
        if query.category:
            params["category"] = query.category
        return params

    if query.language:
        params["language"] = query.language
    if query.date_from:
        params["from"] = _iso(query.date_from)
    if query.date_to:
        params["to"] = _iso(query.date_to)
    if query.sort_by:
        params["sortBy"] = query.sort_by
    return params


def _iso(value: datetime) -> str:
    return value.replace(microsecond=0).isoformat()


def _usable_articles(articles: List[Dict[str, Any]]) -> Iterable[RawArticle]:
    for article in articles:
        title = (article.get("title") or "").strip()
        url = (article.get("url") or "").strip()
        if not title or not url or title == REMOVED_MARKER:
            continue
        yield RawArticle(title=title, url=url)
