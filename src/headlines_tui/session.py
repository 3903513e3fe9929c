from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from .article_list import ArticleList
from .config import PLACEHOLDER_TEXT
from .datamodels import QuerySpec
from .fetcher import ContentFetcher
from .sources.base import BatchLoader

logger = logging.getLogger("headlines")


class KeyKind(Enum):
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


@dataclass(frozen=True)
class KeyEvent:
    key: str
    kind: KeyKind = KeyKind.PRESS


# key name -> Session action
KEY_ACTIONS: Dict[str, str] = {
    "q": "quit",
    "escape": "quit",
    "h": "select_none",
    "left": "select_none",
    "j": "select_next",
    "down": "select_next",
    "k": "select_previous",
    "up": "select_previous",
    "g": "select_first",
    "home": "select_first",
    "G": "select_last",
    "shift+g": "select_last",
    "end": "select_last",
    "l": "toggle_status",
    "right": "toggle_status",
    "enter": "toggle_status",
}


class Session:
    """Interactive state: the article list and the exit flag."""

    def __init__(self) -> None:
        self.should_exit = False
        self.article_list = ArticleList([(PLACEHOLDER_TEXT, PLACEHOLDER_TEXT)])

    def populate(
        self,
        loader: BatchLoader,
        fetcher: ContentFetcher,
        query: QuerySpec,
        workers: int = 1,
    ) -> None:
        """Load the batch and resolve every article's text.

        Errors from the batch call propagate; per-article failures are
        absorbed by the fetcher.
        """
        raw = loader.load(query)
        logger.info("Loaded %d articles, fetching content", len(raw))
        urls = [article.url for article in raw]
        if workers > 1 and len(urls) > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                details: List[str] = list(executor.map(fetcher.fetch_and_extract, urls))
        else:
            details = [fetcher.fetch_and_extract(url) for url in urls]
        self.article_list.replace_all(
            (article.title, detail) for article, detail in zip(raw, details)
        )

    def handle_key(self, event: KeyEvent) -> None:
        if event.kind is not KeyKind.PRESS:
            return
        action = KEY_ACTIONS.get(event.key)
        if action is None:
            return
        getattr(self, f"action_{action}")()

    def action_quit(self) -> None:
        self.should_exit = True

    def action_select_none(self) -> None:
        self.article_list.select_none()

    def action_select_next(self) -> None:
        self.article_list.select_next()

    def action_select_previous(self) -> None:
        self.article_list.select_previous()

    def action_select_first(self) -> None:
        self.article_list.select_first()

    def action_select_last(self) -> None:
        self.article_list.select_last()

    def action_toggle_status(self) -> None:
        self.article_list.toggle_selected_status()
