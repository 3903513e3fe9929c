from __future__ import annotations

import logging
from typing import Any, Dict, Iterable

import feedparser

from ..config import BATCH_SIZE
from ..datamodels import QuerySpec, RawArticle
from ..errors import FeedError
from .base import BatchLoader

logger = logging.getLogger("headlines")


class RSSLoader(BatchLoader):
    def __init__(self, config: Dict[str, Any], max_articles: int = BATCH_SIZE):
        super().__init__(config, max_articles)
        self.feeds = self.config.get("feeds", {})

    def fetch(self, query: QuerySpec) -> Iterable[RawArticle]:
        name = query.category or next(iter(self.feeds), None)
        url = self.feeds.get(name) if name else None
        if not url:
            raise FeedError(f"No RSS feed configured for {name or 'this query'}")

        feed = feedparser.parse(url)
        if getattr(feed, "bozo", False) and not feed.entries:
            raise FeedError(f"Could not read feed {url}: {feed.get('bozo_exception')}")
        logger.info("Feed %s returned %d entries", url, len(feed.entries))

        needle = (query.q or "").lower()
        for entry in feed.entries:
            title = entry.get("title", "").strip()
            link = entry.get("link", "").strip()
            if not title or not link:
                continue
            if needle and needle not in title.lower():
                continue
            yield RawArticle(title=title, url=link)
