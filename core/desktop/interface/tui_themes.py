#!/usr/bin/env python3
"""TUI themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "slate": {
        "": "#fafafa",
        "title": "bg:#7aa2f7 #1a1b26 bold",
        "header": "#fafafa bold italic",
        "text": "#fafafa",
        "text.dim": "#6b7280",
        "text.strike": "#374151 strike",
        "cursor": "#7aa2f7",
        "selected": "#7aa2f7 bold",
        "editing": "#ff5faf bold",
        "winner": "#fafafa bold",
        "winner.border": "#7aa2f7",
        "input": "#fafafa",
        "input.placeholder": "#6b7280 italic",
        "banner": "#ff5faf bold",
        "warning": "#ef4444 bold",
        "flash": "#4361ee bold",
        "status": "bg:#1a1b26 #97a0a9",
        "status.mode": "bg:#1a1b26 #7aa2f7 bold",
        "status.error": "bg:#1a1b26 #ef4444 bold",
    },
    "contrast": {
        "": "#ffffff",
        "title": "bg:#ee6ff8 #000000 bold",
        "header": "#ffffff bold",
        "text": "#ffffff",
        "text.dim": "#8a9097",
        "text.strike": "#444444 strike",
        "cursor": "#ee6ff8",
        "selected": "#ee6ff8 bold",
        "editing": "#ff5faf bold",
        "winner": "#ee6ff8 bold",
        "winner.border": "#ee6ff8",
        "input": "#ffffff",
        "input.placeholder": "#8a9097 italic",
        "banner": "#ff5faf bold",
        "warning": "#ff0000 bold",
        "flash": "#b8f171 bold",
        "status": "bg:#000000 #a7b0ba",
        "status.mode": "bg:#000000 #ee6ff8 bold",
        "status.error": "bg:#000000 #ff6b6b bold",
    },
}

DEFAULT_THEME = "slate"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Palette for `theme` layered over the default one; unknown names get the default."""
    palette = dict(THEMES[DEFAULT_THEME])
    palette.update(THEMES.get(theme, {}))
    return palette


def build_style(theme: str) -> Style:
    return Style.from_dict(get_theme_palette(theme))
