"""Enumerations configuring a `Dialog`."""

from collections.abc import Callable
from enum import Enum
from typing import Any


class DialogType(Enum):
    MESSAGE = "message"
    BUTTONS = "buttons"
    DROPDOWN = "dropdown"
    PROMPT = "prompt"


class ButtonSet(Enum):
    """Buttons shown when a dialog has no options of its own."""

    DEFAULT = ("OK",)
    YES_NO = ("Yes", "No")
    YES_NO_CANCEL = ("Yes", "No", "Cancel")
    OK_CANCEL = ("OK", "Cancel")

    @property
    def labels(self) -> tuple[str, ...]:
        return self.value


class Importance(Enum):
    """Icon shown next to the text; the value is a Tk bitmap name."""

    PLAIN = None
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    QUESTION = "question"


class ReturnType(Enum):
    """What a BUTTONS dialog returns: the chosen option or its index."""

    OBJECT = "object"
    INDEX = "index"


def _to_str(text: str) -> str:
    return text


_CONVERTERS: dict[str, Callable[[str], Any]] = {
    "int": int,
    "float": float,
    "string": _to_str,
}


class Input(Enum):
    """Type a PROMPT dialog reads its answer as."""

    INT = "int"
    FLOAT = "float"
    STRING = "string"

    def verify(self, text: str | None) -> bool:
        """True if ``text`` converts cleanly. None never does."""
        if text is None:
            return False
        try:
            _CONVERTERS[self.value](text)
        except ValueError:
            return False
        return True

    def convert(self, text: str | None) -> Any:
        """Convert ``text``; None stays None.

        Raises:
            ValueError: If ``text`` is not a valid value of this type
        """
        if text is None:
            return None
        if not self.verify(text):
            raise ValueError(f"Cannot convert {text!r} to {self.name}")
        return _CONVERTERS[self.value](text)
