from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from .datamodels import ArticleItem


class ArticleList:
    """Ordered article items plus an optional selection cursor.

    Every operation is total: moving past either end stops at the bound, and
    operations that need a selection do nothing without one.
    """

    def __init__(self, items: Iterable[Tuple[str, str]] = ()):
        self.items: List[ArticleItem] = []
        self.selected: Optional[int] = None
        self.replace_all(items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[ArticleItem]:
        return iter(self.items)

    @property
    def selected_item(self) -> Optional[ArticleItem]:
        if self.selected is None:
            return None
        return self.items[self.selected]

    def replace_all(self, items: Iterable[Tuple[str, str]]) -> None:
        self.items = [ArticleItem(headline, detail) for headline, detail in items]
        self.selected = None

    def select_next(self) -> None:
        if not self.items:
            return
        if self.selected is None:
            self.selected = 0
        else:
            self.selected = min(self.selected + 1, len(self.items) - 1)

    def select_previous(self) -> None:
        if not self.items:
            return
        if self.selected is None:
            self.selected = len(self.items) - 1
        else:
            self.selected = max(self.selected - 1, 0)

    def select_first(self) -> None:
        if self.items:
            self.selected = 0

    def select_last(self) -> None:
        if self.items:
            self.selected = len(self.items) - 1

    def select_none(self) -> None:
        self.selected = None

    def toggle_selected_status(self) -> None:
        item = self.selected_item
        if item is not None:
            item.status = item.status.toggled()
