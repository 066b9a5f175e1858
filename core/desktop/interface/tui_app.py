#!/usr/bin/env python3
"""TUI application - FateTUI class and cmd_tui command."""

import asyncio
import logging
import os
import shutil

from prompt_toolkit.application import Application
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.styles import Style

from core.desktop.application.session import (
    FateSession,
    KEY_BACKSPACE,
    KEY_CTRL_C,
    KEY_DELETE,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_TAB,
    KEY_UP,
)
from core.desktop.interface.tui_footer import build_footer_text
from core.desktop.interface.tui_render import render_session
from core.desktop.interface.tui_status import build_status_text
from .tui_themes import DEFAULT_THEME, build_style

logger = logging.getLogger("fate.app")

TICK_SECONDS = 1.0

# prompt_toolkit key name -> session key name
SPECIAL_KEYS = {
    "up": KEY_UP,
    "down": KEY_DOWN,
    "enter": KEY_ENTER,
    "tab": KEY_TAB,
    "escape": KEY_ESCAPE,
    "backspace": KEY_BACKSPACE,
    "delete": KEY_DELETE,
    "c-c": KEY_CTRL_C,
}


class FateTUI:
    @classmethod
    def build_style(cls, theme: str) -> Style:
        return build_style(theme)

    def __init__(self, session: FateSession, theme: str = DEFAULT_THEME):
        self.session = session
        self.style = self.build_style(theme)
        self.key_bindings = self._build_key_bindings()

        self.status_bar = Window(content=FormattedTextControl(self.get_status_text), height=1, always_hide_cursor=True)
        self.main_window = Window(content=FormattedTextControl(self.get_body_text), always_hide_cursor=True, wrap_lines=True)
        self.footer = Window(
            content=FormattedTextControl(self.get_footer_text),
            height=Dimension(min=1, max=2),
            always_hide_cursor=True,
            wrap_lines=True,
        )
        root = HSplit([self.status_bar, self.main_window, self.footer])

        self.app = Application(
            layout=Layout(root),
            key_bindings=self.key_bindings,
            style=self.style,
            full_screen=True,
        )
        # Esc must not wait for a possible escape sequence; allow override for slow terminals/SSH.
        try:
            self.app.ttimeoutlen = max(0.0, float(os.getenv("FATE_TUI_TTIMEOUTLEN", "0.05")))
        except ValueError:
            self.app.ttimeoutlen = 0.05

    def _build_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        def bind(pt_key: str, name: str) -> None:
            @kb.add(pt_key, eager=True)
            def _(event):
                if self.dispatch_key(name):
                    event.app.exit()

        for pt_key, name in SPECIAL_KEYS.items():
            bind(pt_key, name)

        @kb.add(Keys.Any)
        def _(event):
            """Printable keys: commands or text, depending on mode."""
            data = event.data
            if len(data) != 1 or not data.isprintable():
                return
            if self.dispatch_key(data):
                event.app.exit()

        @kb.add(Keys.BracketedPaste)
        def _(event):
            if not self.session.state.mode.has_text_input:
                return
            for ch in event.data.replace("\r", " ").replace("\n", " "):
                if ch.isprintable():
                    self.dispatch_key(ch)

        return kb

    def dispatch_key(self, name: str) -> bool:
        """Feed one key to the session; True means quit."""
        return self.session.handle_key(name)

    @staticmethod
    def get_terminal_width() -> int:
        """Get current terminal width, default to 80 if unavailable."""
        try:
            return shutil.get_terminal_size((80, 24)).columns
        except OSError:
            return 80

    def get_status_text(self) -> FormattedText:
        return build_status_text(self.session.state, self.get_terminal_width())

    def get_body_text(self) -> FormattedText:
        return render_session(self.session.state, self.get_terminal_width() - 2)

    def get_footer_text(self) -> FormattedText:
        return build_footer_text(self.session.state)

    async def _tick_loop(self) -> None:
        while True:
            await asyncio.sleep(TICK_SECONDS)
            self.session.tick()
            self.app.invalidate()

    def _start_ticker(self) -> None:
        self.app.create_background_task(self._tick_loop())

    def run(self) -> None:
        logger.debug("starting TUI with %s pending task(s)", len(self.session.state.pending))
        self.app.run(pre_run=self._start_ticker)


def cmd_tui(session: FateSession, theme: str = DEFAULT_THEME) -> int:
    FateTUI(session, theme=theme).run()
    return 0
