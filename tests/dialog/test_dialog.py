"""Tests for the Dialog builder."""

import threading

import pytest

from kbdx.dialog import ButtonSet, Dialog, DialogType, Importance, Input, ReturnType


def test_message_redisplays_until_acknowledged(scripted):
    """Test closing a message window shows it again."""
    backend = scripted(-1, -1, 0)
    dialog = Dialog.message("Done", backend=backend)

    assert dialog.show_and_get() is None
    assert len(backend.calls) == 3
    assert backend.calls[0][:4] == ("buttons", "Message", Importance.PLAIN, ("OK",))


def test_buttons_return_option(scripted):
    """Test a buttons dialog returns the chosen label."""
    backend = scripted(1)
    dialog = Dialog.buttons("Deploy?", options=["Now", "Later"], backend=backend)

    assert dialog.show_and_get() == "Later"
    assert dialog.finished
    assert not dialog.running


def test_buttons_return_index(scripted):
    """Test ReturnType.INDEX returns the position instead."""
    backend = scripted(2)
    dialog = (
        Dialog.buttons(backend=backend)
        .set_button_set(ButtonSet.YES_NO_CANCEL)
        .set_return_type(ReturnType.INDEX)
    )

    assert dialog.show_and_get() == 2
    assert backend.calls[0][3] == ("Yes", "No", "Cancel")


def test_buttons_preselection(scripted):
    """Test the preselected index reaches the backend, clamped to the options."""
    backend = scripted(0, 0)
    Dialog.buttons(options=["a", "b"], preselected=1, backend=backend).show()
    Dialog.buttons(options=["a", "b"], preselected=5, backend=backend).show()

    assert [call[4] for call in backend.calls] == [1, 0]


def test_closing_without_accept_none_redisplays(scripted):
    """Test a closed window is shown again unless None is acceptable."""
    backend = scripted(-1, 0)
    assert Dialog.buttons(options=["x"], backend=backend).show_and_get() == "x"
    assert len(backend.calls) == 2

    backend = scripted(-1)
    dialog = Dialog.buttons(options=["x"], backend=backend).set_accept_none(True)
    assert dialog.show_and_get() is None
    assert len(backend.calls) == 1


def test_filter_rejects_answers(scripted):
    """Test answers failing the filter are asked again."""
    backend = scripted(0, 2, 1)
    dialog = Dialog.buttons(options=["a", "b", "c"], backend=backend).set_filter(
        lambda option: option == "b"
    )

    assert dialog.show_and_get() == "b"
    assert len(backend.calls) == 3


def test_dropdown(scripted):
    """Test dropdown answers, None handling and the filter."""
    backend = scripted(None, 3, 7)
    dialog = Dialog.dropdown(options=[3, 7], backend=backend).set_filter(
        lambda n: n > 5
    )
    assert dialog.show_and_get() == 7
    assert backend.calls[0][:4] == ("dropdown", "Select", Importance.PLAIN, (3, 7))

    backend = scripted(None)
    dialog = Dialog.dropdown(options=[3], backend=backend).set_accept_none(True)
    assert dialog.show_and_get() is None


def test_prompt_converts_and_validates(scripted):
    """Test prompts re-ask until the text converts to the input type."""
    backend = scripted("abc", "4.5", "42")
    dialog = Dialog.get_int("Age?", backend=backend)

    assert dialog.show_and_get() == 42
    assert len(backend.calls) == 3
    assert dialog.type is DialogType.PROMPT


def test_prompt_float_with_filter(scripted):
    """Test the filter sees the converted value."""
    backend = scripted("-1", "2.5")
    dialog = Dialog.get_float(backend=backend).set_filter(lambda x: x > 0)

    assert dialog.show_and_get() == 2.5


def test_prompt_default_value(scripted):
    """Test the default value is passed to the backend."""
    backend = scripted("anything")
    assert Dialog.string(default="hello", backend=backend).show_and_get() == "anything"
    assert backend.calls[0][3] == "hello"


def test_prompt_cancelled_with_accept_none(scripted):
    """Test closing a prompt returns None when allowed."""
    backend = scripted(None)
    dialog = Dialog.prompt(Input.INT, "n?", backend=backend).set_accept_none(True)
    assert dialog.show_and_get() is None


def test_setters_are_chainable():
    """Test the builder keeps its configuration."""
    dialog = (
        Dialog(backend=object())
        .set_text(None)
        .set_title("T")
        .set_type(DialogType.BUTTONS)
        .set_buttons(["a"])
    )
    assert dialog.text == ""
    assert dialog.title == "T"
    assert dialog.type is DialogType.BUTTONS
    assert dialog.options == ("a",)
    assert not dialog.show_async


def test_result_before_show():
    """Test a dialog that was never shown has no result and cannot be waited on."""
    dialog = Dialog.message(backend=object())
    assert dialog.result is None
    assert not dialog.finished
    with pytest.raises(RuntimeError):
        dialog.wait()


def test_async_show_and_wait(scripted):
    """Test an async dialog runs on its own thread and wait collects the answer."""
    gate = threading.Event()

    def answer():
        gate.wait(5)
        return 0

    backend = scripted(answer)
    dialog = Dialog.buttons(title="Async", options=["go"], backend=backend)
    dialog.set_show_async(True).show()

    assert dialog.running
    assert dialog.result is None
    with pytest.raises(RuntimeError, match="Hint"):
        dialog.set_text("changed")
    with pytest.raises(RuntimeError):
        dialog.show()

    gate.set()
    assert dialog.wait(5).result == "go"
    assert not dialog.running
    assert backend.threads == ["Dialog-Async"]


def test_wait_timeout(scripted):
    """Test wait gives up after the timeout."""
    gate = threading.Event()
    backend = scripted(lambda: gate.wait(5) and 0)
    dialog = Dialog.buttons(options=["x"], backend=backend).set_show_async(True)
    dialog.show()

    with pytest.raises(TimeoutError):
        dialog.wait(0.05)
    gate.set()
    dialog.wait(5)


def test_cancel_stops_redisplay(scripted):
    """Test cancel ends the loop before the next display."""
    dialog = None

    def close_and_cancel():
        assert dialog.cancel()
        return -1

    backend = scripted(close_and_cancel)
    dialog = Dialog.buttons(options=["x"], backend=backend)

    assert dialog.show_and_get() is None
    assert dialog.cancelled
    assert len(backend.calls) == 1
    assert not dialog.cancel()


def test_backend_error_propagates(scripted):
    """Test errors from the display surface on show and wait."""

    def boom():
        raise OSError("no display")

    dialog = Dialog.message(backend=scripted(boom))
    with pytest.raises(OSError, match="no display"):
        dialog.show()
    assert not dialog.running
    assert dialog.result is None

    dialog = Dialog.message(backend=scripted(boom)).set_show_async(True)
    dialog.show()
    with pytest.raises(OSError):
        dialog.wait(5)


def test_filter_error_propagates(scripted):
    """Test an exception raised by the filter is not treated as a rejection."""
    backend = scripted("1")
    dialog = Dialog.get_int(backend=backend).set_filter(lambda n: 1 / 0)
    with pytest.raises(ZeroDivisionError):
        dialog.show()


def test_reshow_after_finish(scripted):
    """Test a finished dialog can be shown again."""
    backend = scripted(0, 1)
    dialog = Dialog.buttons(options=["a", "b"], backend=backend)
    assert dialog.show_and_get() == "a"
    assert dialog.show_and_get() == "b"
