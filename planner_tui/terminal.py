"""
Full-screen terminal driver.

Puts stdin into raw mode with prompt_toolkit, paints with a rich ``Live``
display on the alternate screen, and turns key presses and two timers into a
single stream of ``TerminalEvent`` objects.
"""
from __future__ import annotations

import asyncio
import contextlib
import logging
import typing as t
from dataclasses import dataclass
from enum import Enum

from prompt_toolkit.input import Input, create_input
from prompt_toolkit.keys import Keys
from rich.console import Console, RenderableType
from rich.live import Live
from rich.text import Text

logger = logging.getLogger(__name__)

TICK_RATE = 4.0  # ticks per second
FRAME_RATE = 30.0  # render requests per second


class EventKind(Enum):
    """Kinds of terminal events."""
    TICK = "TICK"
    RENDER = "RENDER"
    KEY = "KEY"
    ERROR = "ERROR"


@dataclass(frozen=True)
class TerminalEvent:
    """One event from the terminal; ``key`` is set for KEY events only."""
    kind: EventKind
    key: str = ""


class Terminal:
    """Async context manager owning the screen and keyboard."""

    def __init__(
        self,
        console: t.Optional[Console] = None,
        tick_rate: float = TICK_RATE,
        frame_rate: float = FRAME_RATE,
    ) -> None:
        self.console = console or Console()
        self.tick_rate = tick_rate
        self.frame_rate = frame_rate
        self._events: asyncio.Queue[TerminalEvent] = asyncio.Queue()
        self._input: t.Optional[Input] = None
        self._live: t.Optional[Live] = None
        self._stack = contextlib.ExitStack()
        self._timers: list[asyncio.Task] = []

    async def __aenter__(self) -> Terminal:
        try:
            self._input = create_input()
            self._stack.enter_context(self._input.raw_mode())
            self._stack.enter_context(self._input.attach(self._on_input))

            self._live = Live(
                Text(""),
                console=self.console,
                screen=True,
                auto_refresh=False,
                transient=True,
            )
            self._stack.enter_context(self._live)

            self._timers = [
                asyncio.create_task(self._emit_every(1.0 / self.tick_rate, EventKind.TICK)),
                asyncio.create_task(self._emit_every(1.0 / self.frame_rate, EventKind.RENDER)),
            ]
        except BaseException:
            # restore cooked mode before propagating
            for timer in self._timers:
                timer.cancel()
            self._timers = []
            self._stack.close()
            self._live = None
            raise
        return self

    async def __aexit__(self, *exc_info: t.Any) -> None:
        for timer in self._timers:
            timer.cancel()
        await asyncio.gather(*self._timers, return_exceptions=True)
        self._timers = []
        self._stack.close()

    async def next_event(self) -> TerminalEvent:
        """Wait for the next key press or timer event."""
        return await self._events.get()

    def draw(self, renderable: RenderableType) -> None:
        """Repaint the whole screen with ``renderable``."""
        if self._live is None:
            raise RuntimeError("Terminal is not active")
        self._live.update(renderable, refresh=True)

    def _on_input(self) -> None:
        if self._input is None:
            return
        try:
            for key_press in self._input.read_keys():
                key = key_press.key
                if isinstance(key, Keys):
                    key = key.value
                self._events.put_nowait(TerminalEvent(EventKind.KEY, key))
        except Exception:
            logger.exception("Error reading terminal input")
            self._events.put_nowait(TerminalEvent(EventKind.ERROR))

    async def _emit_every(self, interval: float, kind: EventKind) -> None:
        event = TerminalEvent(kind)
        while True:
            await asyncio.sleep(interval)
            self._events.put_nowait(event)
