from __future__ import annotations

from typing import Any, Optional

from textual import events
from textual.app import App, ComposeResult
from textual.css.query import NoMatches
from textual.widgets import Static

from .render import TITLE as SCREEN_TITLE
from .render import Frame, RenderStyle, render
from .session import KeyEvent, Session


class HeadlinesApp(App):
    """The terminal session around one reader ``Session``.

    Textual owns raw mode and the alternate screen, and restores the terminal
    however ``run()`` ends. Each draw is a fresh ``render()`` of the list.
    """

    TITLE = SCREEN_TITLE

    CSS_PATH = "app.css"

    ENABLE_COMMAND_PALETTE = False

    def __init__(
        self,
        session: Session,
        frame_style: Optional[RenderStyle] = None,
        **kwargs: Any,
    ):
        super().__init__(**kwargs)
        self.reader_session = session
        self.frame_style = frame_style or RenderStyle()

    def compose(self) -> ComposeResult:
        yield Static(id="header")
        yield Static(id="headlines")
        yield Static(id="article")
        yield Static(id="footer")

    def on_mount(self) -> None:
        self.draw()

    def on_resize(self, event: events.Resize) -> None:
        try:
            self.draw()
        except NoMatches:
            pass  # resized before compose finished

    def on_key(self, event: events.Key) -> None:
        event.prevent_default()
        event.stop()
        self.reader_session.handle_key(KeyEvent(event.key))
        if self.reader_session.should_exit:
            self.exit()
        else:
            self.draw()

    def draw(self) -> Frame:
        width, height = self.size
        frame = render(
            self.reader_session.article_list, width, height, self.frame_style
        )
        for widget_id, region in (
            ("#header", frame.header),
            ("#headlines", frame.headlines),
            ("#article", frame.detail),
            ("#footer", frame.footer),
        ):
            widget = self.query_one(widget_id, Static)
            widget.styles.height = region.height
            widget.update(region.content)
        return frame
