from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List

from ..config import BATCH_SIZE
from ..datamodels import QuerySpec, RawArticle


class BatchLoader(ABC):
    """Abstract base class for a source of article batches."""

    def __init__(self, config: Dict[str, Any], max_articles: int = BATCH_SIZE):
        self.config = config
        self.max_articles = max_articles

    def load(self, query: QuerySpec) -> List[RawArticle]:
        """Return at most ``max_articles`` summaries, in feed order."""
        return _take(self.fetch(query), self.max_articles)

    @abstractmethod
    def fetch(self, query: QuerySpec) -> Iterable[RawArticle]:
        """Return every usable article summary the feed offers for a query."""
        pass


def _take(items: Iterable[RawArticle], limit: int) -> List[RawArticle]:
    out: List[RawArticle] = []
    for item in items:
        if len(out) >= limit:
            break
        out.append(item)
    return out
