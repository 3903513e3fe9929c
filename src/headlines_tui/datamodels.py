from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class Status(Enum):
    UNREAD = "unread"
    COMPLETED = "completed"

    def toggled(self) -> "Status":
        if self is Status.UNREAD:
            return Status.COMPLETED
        return Status.UNREAD

    @property
    def glyph(self) -> str:
        return "✓" if self is Status.COMPLETED else "☐"


# --- Data models ---
@dataclass
class ArticleItem:
    headline: str
    detail: str
    status: Status = Status.UNREAD


@dataclass(frozen=True)
class RawArticle:
    title: str
    url: str


@dataclass(frozen=True)
class QuerySpec:
    q: Optional[str] = None
    category: Optional[str] = None
    language: Optional[str] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    sort_by: Optional[str] = None
    endpoint: str = "everything"
    page_size: int = 10
