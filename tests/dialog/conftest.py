"""Scripted dialog backend shared by the dialog tests."""

import threading
from collections.abc import Sequence
from typing import Any

import pytest

from kbdx.dialog.options import Importance


class FakeBackend:
    """Answers each window with the next scripted reply.

    Every call is recorded as ``(kind, title, importance, payload, initial)``.
    A reply may be a callable, which is called instead of returned.
    """

    def __init__(self, *replies: Any) -> None:
        self.replies: list[Any] = list(replies)
        self.calls: list[tuple[str, str, Importance, Any, Any]] = []
        self.threads: list[str] = []

    def _next(self) -> Any:
        self.threads.append(threading.current_thread().name)
        reply = self.replies.pop(0)
        return reply() if callable(reply) else reply

    def show_buttons(
        self,
        parent: Any,
        text: str,
        title: str,
        importance: Importance,
        labels: Sequence[str],
        initial: int,
    ) -> int:
        self.calls.append(("buttons", title, importance, tuple(labels), initial))
        return self._next()

    def show_dropdown(
        self,
        parent: Any,
        text: str,
        title: str,
        importance: Importance,
        options: Sequence[Any],
        initial: int,
    ) -> Any | None:
        self.calls.append(("dropdown", title, importance, tuple(options), initial))
        return self._next()

    def show_prompt(
        self,
        parent: Any,
        text: str,
        title: str,
        importance: Importance,
        default: str,
    ) -> str | None:
        self.calls.append(("prompt", title, importance, default, None))
        return self._next()


@pytest.fixture
def scripted():
    """Factory for a `FakeBackend` answering with the given replies."""
    return FakeBackend
