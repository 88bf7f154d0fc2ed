"""Display backends for `Dialog`.

A backend shows one window and blocks until it is closed. `TkBackend` draws
with tkinter; tests and non-GUI front ends can pass any object with the same
three methods.
"""

import logging
from collections.abc import Sequence
from typing import Any, Protocol

from kbdx.dialog.options import Importance

logger = logging.getLogger(__name__)


class DialogBackend(Protocol):
    def show_buttons(
        self,
        parent: Any,
        text: str,
        title: str,
        importance: Importance,
        labels: Sequence[str],
        initial: int,
    ) -> int:
        """Index of the button pressed, -1 if the window was closed."""
        ...

    def show_dropdown(
        self,
        parent: Any,
        text: str,
        title: str,
        importance: Importance,
        options: Sequence[Any],
        initial: int,
    ) -> Any | None:
        """The chosen option, None if the window was closed."""
        ...

    def show_prompt(
        self,
        parent: Any,
        text: str,
        title: str,
        importance: Importance,
        default: str,
    ) -> str | None:
        """The text entered, None if the window was closed."""
        ...


class TkBackend:
    """Modal windows drawn with tkinter.

    Without a parent widget every call creates (and destroys) its own hidden
    Tk root, so a dialog can be shown from whichever thread calls it.
    """

    def show_buttons(
        self,
        parent: Any,
        text: str,
        title: str,
        importance: Importance,
        labels: Sequence[str],
        initial: int,
    ) -> int:
        tk, owner, window = self._window(parent, title, text, importance)
        answer = [-1]

        def choose(index: int) -> None:
            answer[0] = index
            window.destroy()

        row = tk.Frame(window)
        row.pack(padx=12, pady=(0, 12))
        for i, label in enumerate(labels):
            button = tk.Button(row, text=str(label), command=lambda i=i: choose(i))
            button.pack(side="left", padx=4)
            if i == initial:
                button.focus_set()
                window.bind("<Return>", lambda _e, i=i: choose(i))

        self._run_modal(owner, window, parent)
        return answer[0]

    def show_dropdown(
        self,
        parent: Any,
        text: str,
        title: str,
        importance: Importance,
        options: Sequence[Any],
        initial: int,
    ) -> Any | None:
        tk, owner, window = self._window(parent, title, text, importance)
        from tkinter import ttk

        answer: list[Any] = [None]
        combo = ttk.Combobox(
            window, values=[str(o) for o in options], state="readonly"
        )
        if options:
            combo.current(initial)
        combo.pack(padx=12, pady=(0, 8), fill="x")

        def accept(_event: Any = None) -> None:
            if combo.current() >= 0:
                answer[0] = options[combo.current()]
            window.destroy()

        tk.Button(window, text="OK", command=accept).pack(pady=(0, 12))
        window.bind("<Return>", accept)

        self._run_modal(owner, window, parent)
        return answer[0]

    def show_prompt(
        self,
        parent: Any,
        text: str,
        title: str,
        importance: Importance,
        default: str,
    ) -> str | None:
        tk, owner, window = self._window(parent, title, text, importance)
        answer: list[str | None] = [None]

        entry = tk.Entry(window, width=32)
        entry.insert(0, default)
        entry.pack(padx=12, pady=(0, 8), fill="x")
        entry.focus_set()

        def accept(_event: Any = None) -> None:
            answer[0] = entry.get()
            window.destroy()

        row = tk.Frame(window)
        row.pack(pady=(0, 12))
        tk.Button(row, text="OK", command=accept).pack(side="left", padx=4)
        cancel = tk.Button(row, text="Cancel", command=window.destroy)
        cancel.pack(side="left", padx=4)
        window.bind("<Return>", accept)
        window.bind("<Escape>", lambda _e: window.destroy())

        self._run_modal(owner, window, parent)
        return answer[0]

    def _window(
        self, parent: Any, title: str, text: str, importance: Importance
    ) -> tuple[Any, Any, Any]:
        # tkinter is optional on some Python builds; only needed once shown
        import tkinter as tk

        owner = parent if parent is not None else tk.Tk()
        if parent is None:
            owner.withdraw()
        window = tk.Toplevel(owner)
        window.title(title)
        window.resizable(False, False)
        window.attributes("-topmost", True)

        body = tk.Frame(window)
        body.pack(padx=12, pady=12, fill="x")
        if importance.value is not None:
            tk.Label(body, bitmap=importance.value).pack(side="left", padx=(0, 8))
        tk.Label(body, text=text, justify="left").pack(side="left")
        return tk, owner, window

    def _run_modal(self, owner: Any, window: Any, parent: Any) -> None:
        if parent is not None:
            window.transient(parent)
        window.grab_set()
        window.focus_force()
        logger.debug("waiting for dialog window %r", window.title())
        owner.wait_window(window)
        if parent is None:
            owner.destroy()
