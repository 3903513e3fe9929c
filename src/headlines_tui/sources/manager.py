from __future__ import annotations

from typing import Any, Dict, Optional, Type

from ..config import BATCH_SIZE, get_int_setting
from .base import BatchLoader
from .newsapi import NewsAPILoader
from .rss import RSSLoader

AVAILABLE_SOURCES: Dict[str, Type[BatchLoader]] = {
    "newsapi": NewsAPILoader,
    "rss": RSSLoader,
}


def get_loader(
    config: Dict[str, Any],
    api_key: Optional[str] = None,
    source_name: Optional[str] = None,
) -> BatchLoader:
    """Build the batch loader named by ``source_name`` or the config."""
    name = source_name or config.get("source", "newsapi")
    if name not in AVAILABLE_SOURCES:
        raise ValueError(f"Unknown source: {name}")

    max_articles = get_int_setting(config, "batch_size", BATCH_SIZE)
    source_config = config.get("sources", {}).get(name, {})
    if name == "newsapi":
        return NewsAPILoader(
            source_config,
            api_key or "",
            max_articles=max_articles,
            timeout=config.get("http_timeout"),
        )
    return RSSLoader(source_config, max_articles=max_articles)
