from enum import Enum


class Mode(Enum):
    BROWSING = "Browsing"
    ADDING = "Adding"
    EDITING = "Editing"
    FOCUS = "Focus"
    HISTORY = "History"
    CONFIRM_CLEAR = "Confirm clear"

    @property
    def label(self) -> str:
        return self.value

    @property
    def has_text_input(self) -> bool:
        """Modes where printable keys edit a buffer instead of running commands."""
        return self in (Mode.ADDING, Mode.EDITING, Mode.FOCUS)
