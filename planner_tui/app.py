"""The viewer's run loop.

A single coroutine owns the ``AppState``. Terminal events are translated to
actions and pushed onto the same FIFO queue the background loaders use; the
loop then drains everything queued so far before waiting again, so a repaint
always sees the state produced by the whole backlog.
"""
from __future__ import annotations

import asyncio
import logging
import typing as t
import webbrowser

import httpx
from rich.console import RenderableType

from planner_feed.config import FeedConfig
from planner_feed.store import CacheStore
from planner_tui.actions import Action, AnyAction
from planner_tui.loaders import start_loaders
from planner_tui.render import render_app
from planner_tui.state import AppState, UrlOpener, update
from planner_tui.terminal import EventKind, TerminalEvent

logger = logging.getLogger(__name__)

KEY_BINDINGS: dict[str, Action] = {
    "q": Action.QUIT,
    "c-c": Action.QUIT,
    "j": Action.NEXT_ITEM,
    "k": Action.PREV_ITEM,
    "l": Action.NEXT_DAY,
    "h": Action.PREV_DAY,
    "o": Action.OPEN_SELECTED,
}


class EventSource(t.Protocol):
    """What the run loop needs from a terminal driver."""

    async def next_event(self) -> TerminalEvent: ...

    def draw(self, renderable: RenderableType) -> None: ...


def get_action(event: TerminalEvent) -> Action:
    """Translate a terminal event into an action."""
    if event.kind is EventKind.TICK:
        return Action.TICK
    if event.kind is EventKind.RENDER:
        return Action.RENDER
    if event.kind is EventKind.KEY:
        return KEY_BINDINGS.get(event.key, Action.NONE)
    return Action.NONE


def drain(
    state: AppState,
    actions: asyncio.Queue,
    open_url: UrlOpener = webbrowser.open,
) -> bool:
    """Apply every queued action in arrival order.

    Returns:
        True if a ``RENDER`` action was among them
    """
    render_requested = False
    while True:
        try:
            action: AnyAction = actions.get_nowait()
        except asyncio.QueueEmpty:
            return render_requested
        update(state, action, open_url=open_url)
        if action is Action.RENDER:
            render_requested = True


def browser_opener(config: FeedConfig) -> UrlOpener:
    """URL opener resolving site-relative item links against the Canvas URL."""
    def open_url(url: str) -> bool:
        return webbrowser.open(config.resolve(url))
    return open_url


async def run_loop(
    terminal: EventSource,
    state: AppState,
    actions: asyncio.Queue,
    open_url: UrlOpener = webbrowser.open,
) -> AppState:
    """Process terminal events until the state asks to quit.

    Args:
        terminal: Source of terminal events and target of repaints
        state: The state this loop owns from now on
        actions: Queue shared with the background loaders
        open_url: URL launcher for ``OPEN_SELECTED``

    Returns:
        The final state
    """
    while not state.should_quit:
        event = await terminal.next_event()
        actions.put_nowait(get_action(event))

        if drain(state, actions, open_url=open_url) and not state.should_quit:
            terminal.draw(render_app(state))

    logger.debug("Quit requested; leaving run loop")
    return state


async def run(
    config: FeedConfig,
    store: CacheStore,
    terminal: EventSource,
    transport: t.Optional[httpx.AsyncBaseTransport] = None,
) -> AppState:
    """Start both loaders and run the viewer until the user quits.

    Loader tasks still running when the loop exits are cancelled.
    """
    actions: asyncio.Queue = asyncio.Queue()
    state = AppState()
    loaders = start_loaders(config, store, actions, transport=transport)
    try:
        return await run_loop(terminal, state, actions, open_url=browser_opener(config))
    finally:
        for task in loaders:
            task.cancel()
        await asyncio.gather(*loaders, return_exceptions=True)


async def collect(
    config: FeedConfig,
    store: CacheStore,
    transport: t.Optional[httpx.AsyncBaseTransport] = None,
) -> AppState:
    """Run both loaders to completion and fold their actions into a state.

    Used for non-interactive output; the same reducer decides which result
    wins, so the precedence matches the interactive viewer.
    """
    actions: asyncio.Queue = asyncio.Queue()
    state = AppState()
    await asyncio.gather(*start_loaders(config, store, actions, transport=transport))
    drain(state, actions)
    return state
