"""Fluent builder for modal dialogs.

A `Dialog` is configured with chained setters, then shown either on the
calling thread or on one background thread:

    >>> age = Dialog.get_int("How old are you?").set_filter(lambda n: n >= 0)
    >>> age.show_and_get()  # blocks until a valid answer is given

    >>> question = Dialog.buttons("Deploy?", options=["Now", "Later"])
    >>> question.set_show_async(True).show()
    >>> ...  # do other work
    >>> choice = question.wait().result

The dialog is displayed again until the answer is acceptable: not None
(unless ``accept_none``), of the right `Input` type for prompts, and
accepted by the filter. `cancel` stops that loop at the next display.
"""

import logging
import threading
from collections.abc import Callable, Sequence
from concurrent.futures import Future
from typing import Any

from kbdx.dialog.backend import DialogBackend, TkBackend
from kbdx.dialog.options import ButtonSet, DialogType, Importance, Input, ReturnType

logger = logging.getLogger(__name__)


class Dialog:
    """A configurable modal dialog and the result of its last display."""

    def __init__(self, backend: DialogBackend | None = None) -> None:
        """
        Args:
            backend: Draws the windows; defaults to a `TkBackend`
        """
        self._backend: DialogBackend = (
            backend if backend is not None else TkBackend()
        )
        self._lock: threading.Lock = threading.Lock()
        self._running: bool = False
        self._future: Future[Any] | None = None
        self._cancelled: threading.Event = threading.Event()

        self._text: str = ""
        self._title: str = ""
        self._default_value: str = ""
        self._type: DialogType = DialogType.MESSAGE
        self._importance: Importance = Importance.PLAIN
        self._button_set: ButtonSet = ButtonSet.DEFAULT
        self._input: Input = Input.STRING
        self._return_type: ReturnType = ReturnType.OBJECT
        self._options: tuple[Any, ...] = ()
        self._filter: Callable[[Any], bool] | None = None
        self._selected_option_index: int = 0
        self._parent: Any = None
        self._accept_none: bool = False
        self._show_async: bool = False

    # Factories

    @classmethod
    def message(
        cls, text: str = "", title: str = "Message", **kwargs: Any
    ) -> "Dialog":
        return cls(**kwargs).set_text(text).set_title(title)

    @classmethod
    def buttons(
        cls,
        text: str = "Select a button",
        title: str = "Select",
        options: Sequence[Any] = (),
        preselected: int = 0,
        **kwargs: Any,
    ) -> "Dialog":
        return (
            cls(**kwargs)
            .set_text(text)
            .set_title(title)
            .set_type(DialogType.BUTTONS)
            .set_options(options)
            .set_selected_option_index(preselected)
        )

    @classmethod
    def dropdown(
        cls,
        text: str = "Select an option",
        title: str = "Select",
        options: Sequence[Any] = (),
        preselected: int = 0,
        **kwargs: Any,
    ) -> "Dialog":
        return (
            cls(**kwargs)
            .set_text(text)
            .set_title(title)
            .set_type(DialogType.DROPDOWN)
            .set_options(options)
            .set_selected_option_index(preselected)
        )

    @classmethod
    def prompt(
        cls,
        input: Input,
        text: str,
        title: str = "Input",
        default: str = "",
        **kwargs: Any,
    ) -> "Dialog":
        return (
            cls(**kwargs)
            .set_text(text)
            .set_title(title)
            .set_type(DialogType.PROMPT)
            .set_input(input)
            .set_default_value(default)
        )

    @classmethod
    def string(
        cls,
        text: str = "Input a string",
        title: str = "Input",
        default: str = "",
        **kwargs: Any,
    ) -> "Dialog":
        return cls.prompt(Input.STRING, text, title, default, **kwargs)

    @classmethod
    def get_int(
        cls,
        text: str = "Input a number",
        title: str = "Input",
        default: str = "",
        **kwargs: Any,
    ) -> "Dialog":
        return cls.prompt(Input.INT, text, title, default, **kwargs)

    @classmethod
    def get_float(
        cls,
        text: str = "Input a number",
        title: str = "Input",
        default: str = "",
        **kwargs: Any,
    ) -> "Dialog":
        return cls.prompt(Input.FLOAT, text, title, default, **kwargs)

    # Configuration

    def _configure(self, **fields: Any) -> "Dialog":
        with self._lock:
            if self._running:
                raise RuntimeError(
                    "Cannot change a dialog while it is displayed.\n"
                    "Hint: call wait() first, or configure a new Dialog"
                )
            for name, value in fields.items():
                setattr(self, f"_{name}", value)
        return self

    def set_text(self, text: str | None) -> "Dialog":
        return self._configure(text=text or "")

    def set_title(self, title: str | None) -> "Dialog":
        return self._configure(title=title or "")

    def set_type(self, type: DialogType) -> "Dialog":
        return self._configure(type=type)

    def set_options(self, options: Sequence[Any]) -> "Dialog":
        return self._configure(options=tuple(options))

    set_buttons = set_options
    set_dropdowns = set_options

    def set_selected_option_index(self, index: int) -> "Dialog":
        return self._configure(selected_option_index=index)

    def set_button_set(self, button_set: ButtonSet) -> "Dialog":
        return self._configure(button_set=button_set)

    def set_importance(self, importance: Importance) -> "Dialog":
        return self._configure(importance=importance)

    def set_default_value(self, default: str | None) -> "Dialog":
        return self._configure(default_value=default or "")

    def set_input(self, input: Input) -> "Dialog":
        return self._configure(input=input)

    def set_return_type(self, return_type: ReturnType) -> "Dialog":
        return self._configure(return_type=return_type)

    def set_accept_none(self, accept_none: bool) -> "Dialog":
        """Let closing the window count as an answer (result None)."""
        return self._configure(accept_none=accept_none)

    def set_filter(self, filter: Callable[[Any], bool] | None) -> "Dialog":
        """Only accept answers for which ``filter`` returns True.

        Prompt answers are converted to the `Input` type before filtering.
        """
        return self._configure(filter=filter)

    def set_show_async(self, show_async: bool) -> "Dialog":
        """Display on a background thread instead of the calling one."""
        return self._configure(show_async=show_async)

    def set_parent(self, parent: Any) -> "Dialog":
        return self._configure(parent=parent)

    @property
    def text(self) -> str:
        return self._text

    @property
    def title(self) -> str:
        return self._title

    @property
    def type(self) -> DialogType:
        return self._type

    @property
    def options(self) -> tuple[Any, ...]:
        return self._options

    @property
    def show_async(self) -> bool:
        return self._show_async

    # Display

    def show(self) -> "Dialog":
        """Display the dialog.

        Blocks until answered unless ``show_async`` is set, in which case the
        dialog runs on a new thread and `wait` collects the answer.

        Raises:
            RuntimeError: If the dialog is already displayed
        """
        with self._lock:
            if self._running:
                raise RuntimeError("Dialog is already displayed")
            self._running = True
            self._cancelled.clear()
            future: Future[Any] = Future()
            self._future = future

        if self._show_async:
            threading.Thread(
                target=self._run, args=(future,), name=f"Dialog-{self._title}"
            ).start()
        else:
            self._run(future)
            future.result()
        return self

    def wait(self, timeout: float | None = None) -> "Dialog":
        """Block until the dialog has an answer.

        Raises:
            RuntimeError: If the dialog was never shown
            TimeoutError: If no answer arrives within ``timeout`` seconds
            Exception: Whatever the display raised on its thread
        """
        future = self._future
        if future is None:
            raise RuntimeError("Dialog has not been shown")
        future.result(timeout)
        return self

    def show_and_get(self) -> Any:
        return self.show().wait().result

    def cancel(self) -> bool:
        """Stop displaying at the next (re)display; the result becomes None.

        A window that is already open stays open until it is closed.

        Returns:
            False if the dialog is not displayed
        """
        with self._lock:
            if not self._running:
                return False
            self._cancelled.set()
            return True

    @property
    def running(self) -> bool:
        return self._running

    @property
    def finished(self) -> bool:
        return self._future is not None and self._future.done()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def result(self) -> Any:
        """Answer of the last finished display, None before that."""
        future = self._future
        if future is None or not future.done() or future.exception() is not None:
            return None
        return future.result()

    def _run(self, future: "Future[Any]") -> None:
        try:
            result = self._display()
        except Exception as exc:
            self._settle()
            future.set_exception(exc)
        else:
            self._settle()
            future.set_result(result)

    def _settle(self) -> None:
        with self._lock:
            self._running = False

    def _display(self) -> Any:
        logger.debug("displaying %s dialog %r", self._type.value, self._title)
        if self._type is DialogType.MESSAGE:
            return self._display_message()
        if self._type is DialogType.BUTTONS:
            return self._display_buttons()
        if self._type is DialogType.DROPDOWN:
            return self._display_dropdown()
        return self._display_prompt()

    def _initial_index(self, count: int) -> int:
        index = self._selected_option_index
        return index if 0 <= index < count else 0

    def _accepts(self, value: Any) -> bool:
        if value is None or self._filter is None:
            return True
        return bool(self._filter(value))

    def _display_message(self) -> None:
        labels = self._button_set.labels
        while not self._cancelled.is_set():
            answer = self._backend.show_buttons(
                self._parent, self._text, self._title, self._importance, labels, 0
            )
            if answer != -1:
                break
            logger.debug("message dialog %r closed, displaying again", self._title)
        return None

    def _display_buttons(self) -> Any:
        labels = self._options or self._button_set.labels
        initial = self._initial_index(len(labels))
        while not self._cancelled.is_set():
            answer = self._backend.show_buttons(
                self._parent,
                self._text,
                self._title,
                self._importance,
                labels,
                initial,
            )
            if answer == -1:
                if self._accept_none:
                    return None
            else:
                if self._return_type is ReturnType.OBJECT:
                    value = labels[answer]
                else:
                    value = answer
                if self._accepts(value):
                    return value
            logger.debug("answer to %r rejected, displaying again", self._title)
        return None

    def _display_dropdown(self) -> Any:
        initial = self._initial_index(len(self._options))
        while not self._cancelled.is_set():
            answer = self._backend.show_dropdown(
                self._parent,
                self._text,
                self._title,
                self._importance,
                self._options,
                initial,
            )
            if (answer is not None or self._accept_none) and self._accepts(answer):
                return answer
            logger.debug("answer to %r rejected, displaying again", self._title)
        return None

    def _display_prompt(self) -> Any:
        while not self._cancelled.is_set():
            answer = self._backend.show_prompt(
                self._parent,
                self._text,
                self._title,
                self._importance,
                self._default_value,
            )
            if answer is None:
                if self._accept_none:
                    return None
            elif self._input.verify(answer):
                value = self._input.convert(answer)
                if self._accepts(value):
                    return value
            logger.debug("answer to %r rejected, displaying again", self._title)
        return None
