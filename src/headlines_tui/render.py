from __future__ import annotations

import textwrap
from dataclasses import dataclass
from typing import List

from rich.style import Style
from rich.text import Text

from .article_list import ArticleList
from .datamodels import ArticleItem, Status

TITLE = "Terminal News Reader"
HELP_TEXT = "Use ↓↑ to move, ← to unselect, → to change status, g/G to go top/bottom."
NOTHING_SELECTED = "Nothing selected..."

HEADER_HEIGHT = 2
FOOTER_HEIGHT = 1


@dataclass(frozen=True)
class RenderStyle:
    """Colours for one draw, as rich style definitions."""

    header: str = "#f1f5f9 on #1e40af"
    normal_row_bg: str = "#020617"
    alt_row_bg: str = "#0f172a"
    selected: str = "bold on #1e293b"
    text_fg: str = "#e2e8f0"
    completed_fg: str = "#22c55e"

    def row_bg(self, index: int) -> str:
        return self.normal_row_bg if index % 2 == 0 else self.alt_row_bg


@dataclass(frozen=True)
class Region:
    y: int
    height: int
    content: Text


@dataclass(frozen=True)
class Frame:
    width: int
    height: int
    header: Region
    headlines: Region
    detail: Region
    footer: Region


def render(articles: ArticleList, width: int, height: int, style: RenderStyle = RenderStyle()) -> Frame:
    """Lay out one full screen for the current list state.

    Nothing is remembered between draws; the list scrolls just far enough
    to keep the selected row visible.
    """
    width = max(width, 1)
    height = max(height, 0)
    header_h = min(HEADER_HEIGHT, height)
    footer_h = min(FOOTER_HEIGHT, height - header_h)
    body_h = height - header_h - footer_h
    list_h = body_h - body_h // 2
    detail_h = body_h // 2

    header = Region(0, header_h, _clip(Text(TITLE, style="bold", justify="center"), header_h))
    headlines = Region(header_h, list_h, render_headlines(articles, width, list_h, style))
    detail = Region(header_h + list_h, detail_h, render_detail(articles, width, detail_h, style))
    footer = Region(height - footer_h, footer_h, _clip(Text(HELP_TEXT, justify="center"), footer_h))
    return Frame(width, height, header, headlines, detail, footer)


def render_headlines(articles: ArticleList, width: int, height: int, style: RenderStyle) -> Text:
    if height <= 0:
        return Text()
    lines = [_title_line("Headlines", width, style)]
    rows = height - 1
    offset = 0
    if articles.selected is not None and articles.selected >= rows:
        offset = articles.selected - rows + 1

    for index in range(offset, min(len(articles), offset + rows)):
        item = articles.items[index]
        lines.append(
            _headline_line(item, index, index == articles.selected, width, style)
        )
    return Text("\n").join(lines)


def render_detail(articles: ArticleList, width: int, height: int, style: RenderStyle) -> Text:
    if height <= 0:
        return Text()
    item = articles.selected_item
    if item is None:
        body = NOTHING_SELECTED
    else:
        body = f"{item.status.glyph} {item.detail}"

    base = Style.parse(f"{style.text_fg} on {style.normal_row_bg}")
    lines = [_title_line("Article", width, style)]
    # one column of padding either side
    for line in wrap_text(body, max(width - 2, 1))[: height - 1]:
        text = Text(f" {line}", style=base)
        text.truncate(width, pad=True)
        lines.append(text)
    return Text("\n").join(lines)


def wrap_text(body: str, width: int) -> List[str]:
    lines: List[str] = []
    for paragraph in body.splitlines() or [""]:
        lines.extend(textwrap.wrap(paragraph, width, replace_whitespace=False) or [""])
    return lines


def _headline_line(item: ArticleItem, index: int, selected: bool, width: int, style: RenderStyle) -> Text:
    fg = style.completed_fg if item.status is Status.COMPLETED else style.text_fg
    line_style = Style.parse(f"{fg} on {style.row_bg(index)}")
    if selected:
        line_style += Style.parse(style.selected)
    marker = ">" if selected else " "
    text = Text(f"{marker} {item.status.glyph} {item.headline}", style=line_style)
    text.truncate(width, overflow="ellipsis", pad=True)
    return text


def _title_line(title: str, width: int, style: RenderStyle) -> Text:
    text = Text(title.center(width), style=Style.parse(style.header))
    text.truncate(width, pad=True)
    return text


def _clip(text: Text, height: int) -> Text:
    return text if height > 0 else Text()
