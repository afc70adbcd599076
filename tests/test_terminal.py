"""Tests for the terminal driver's setup and teardown."""
import contextlib
import typing as t

import pytest
from prompt_toolkit.keys import Keys

from planner_tui import terminal as terminal_module
from planner_tui.terminal import EventKind, Terminal, TerminalEvent


class FakeInput:
    """Stand-in for a prompt_toolkit input that records mode changes."""

    def __init__(self) -> None:
        self.log: list[str] = []
        self.keys: list[t.Any] = []

    @contextlib.contextmanager
    def raw_mode(self) -> t.Iterator[None]:
        self.log.append("raw on")
        try:
            yield
        finally:
            self.log.append("raw off")

    @contextlib.contextmanager
    def attach(self, callback: t.Callable[[], None]) -> t.Iterator[None]:
        self.log.append("attached")
        try:
            yield
        finally:
            self.log.append("detached")

    def read_keys(self) -> list[t.Any]:
        keys, self.keys = self.keys, []
        return keys


class KeyPress:
    def __init__(self, key: t.Any) -> None:
        self.key = key


@pytest.mark.asyncio
async def test_failed_setup_restores_terminal(monkeypatch) -> None:
    """Test that raw mode is left again when the live display cannot start."""
    fake = FakeInput()

    def broken_live(*args: t.Any, **kwargs: t.Any) -> None:
        raise RuntimeError("no screen")

    monkeypatch.setattr(terminal_module, "create_input", lambda: fake)
    monkeypatch.setattr(terminal_module, "Live", broken_live)

    with pytest.raises(RuntimeError, match="no screen"):
        async with Terminal():
            pass

    assert fake.log == ["raw on", "attached", "detached", "raw off"]


@pytest.mark.asyncio
async def test_input_callback_without_input_is_ignored() -> None:
    """Test that a stray input callback before setup produces no events."""
    term = Terminal()

    term._on_input()

    assert term._events.empty()


@pytest.mark.asyncio
async def test_key_presses_become_key_events() -> None:
    """Test that prompt_toolkit key names are passed on as plain strings."""
    fake = FakeInput()
    fake.keys = [KeyPress("j"), KeyPress(Keys.ControlC)]
    term = Terminal()
    term._input = fake

    term._on_input()

    assert await term.next_event() == TerminalEvent(EventKind.KEY, "j")
    assert await term.next_event() == TerminalEvent(EventKind.KEY, "c-c")
