"""Terminal cell widths for task names (CJK and emoji take two cells)."""

from typing import Iterator, Tuple

from wcwidth import wcwidth

ELLIPSIS = "…"


def _cells(text: str) -> Iterator[Tuple[str, int]]:
    # Control and combining characters report -1/0; neither advances the cursor.
    for ch in text:
        yield ch, max(wcwidth(ch), 0)


def display_width(text: str) -> int:
    return sum(cells for _, cells in _cells(text))


def trim_display(text: str, width: int) -> str:
    """Longest prefix of text that fits in `width` cells."""
    budget = width
    for index, (_, cells) in enumerate(_cells(text)):
        budget -= cells
        if budget < 0:
            return text[:index]
    return text


def pad_display(text: str, width: int) -> str:
    fitted = trim_display(text, width)
    return fitted + " " * (width - display_width(fitted))


def ellipsize(text: str, width: int) -> str:
    """Fit text into `width` cells, ending with an ellipsis when cut."""
    if width <= 0:
        return ""
    if display_width(text) <= width:
        return text
    return trim_display(text, width - 1) + ELLIPSIS


__all__ = ["display_width", "trim_display", "pad_display", "ellipsize"]
