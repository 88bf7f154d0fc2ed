"""One-call prompts built on `Dialog`.

``force=True`` keeps asking until a usable answer is given; otherwise closing
the window returns None.
"""

from collections.abc import Callable, Sequence
from typing import Any

from kbdx.dialog.backend import DialogBackend
from kbdx.dialog.core import Dialog
from kbdx.dialog.options import Importance


def message(
    text: str, title: str = "Message", backend: DialogBackend | None = None
) -> None:
    Dialog.message(text, title, backend=backend).set_importance(
        Importance.INFO
    ).show()


def dropdown(
    force: bool,
    options: Sequence[Any],
    text: str = "Select an option from the menu",
    title: str = "Select an option",
    backend: DialogBackend | None = None,
) -> Any | None:
    return (
        Dialog.dropdown(text, title, options, backend=backend)
        .set_importance(Importance.QUESTION)
        .set_accept_none(not force)
        .show_and_get()
    )


def _in_range(
    minimum: float | None, maximum: float | None
) -> Callable[[float], bool]:
    def check(value: float) -> bool:
        if minimum is not None and value < minimum:
            return False
        if maximum is not None and value > maximum:
            return False
        return True

    return check


def read_int(
    force: bool = True,
    text: str = "Input a number",
    title: str = "Input",
    minimum: int | None = None,
    maximum: int | None = None,
    backend: DialogBackend | None = None,
) -> int | None:
    """Ask for a whole number, optionally within ``minimum``..``maximum``."""
    return (
        Dialog.get_int(text, title, backend=backend)
        .set_importance(Importance.QUESTION)
        .set_accept_none(not force)
        .set_filter(_in_range(minimum, maximum))
        .show_and_get()
    )


def read_float(
    force: bool = True,
    text: str = "Input a number",
    title: str = "Input",
    minimum: float | None = None,
    maximum: float | None = None,
    backend: DialogBackend | None = None,
) -> float | None:
    return (
        Dialog.get_float(text, title, backend=backend)
        .set_importance(Importance.QUESTION)
        .set_accept_none(not force)
        .set_filter(_in_range(minimum, maximum))
        .show_and_get()
    )


def read_string(
    force: bool,
    text: str = "Input a string",
    title: str = "Input",
    backend: DialogBackend | None = None,
) -> str | None:
    """Ask for text; a forced prompt also rejects the empty string."""
    dialog = (
        Dialog.string(text, title, backend=backend)
        .set_importance(Importance.QUESTION)
        .set_accept_none(not force)
    )
    if force:
        dialog.set_filter(bool)
    return dialog.show_and_get()


def read_option(
    force: bool = False,
    text: str = "Continue?",
    title: str = "Continue?",
    options: Sequence[str] = ("Yes", "No"),
    backend: DialogBackend | None = None,
) -> str | None:
    return (
        Dialog.buttons(text, title, options, backend=backend)
        .set_importance(Importance.QUESTION)
        .set_accept_none(not force)
        .show_and_get()
    )
