"""Background loaders racing to fill the calendar.

Two independent tasks run next to the UI loop:

- the cache loader decodes the last saved response, if any, and enqueues
  ``CacheReady``;
- the fetcher requests the planner feed once, enqueues ``NetworkReady`` and
  saves the raw body for the next run.

Neither task controls the order its action arrives in relative to the other
or to user input. The reducer decides which result wins.
"""
from __future__ import annotations

import asyncio
import logging
import typing as t
from datetime import date

import httpx

from planner_feed.builder import load_calendar
from planner_feed.config import FeedConfig, planner_query
from planner_feed.decoder import DecodeError
from planner_feed.store import CacheStore
from planner_tui.actions import CacheReady, NetworkReady

logger = logging.getLogger(__name__)

ActionQueue = asyncio.Queue  # asyncio.Queue[AnyAction]


async def load_cache(store: CacheStore, actions: ActionQueue) -> None:
    """Enqueue ``CacheReady`` from the stored response.

    A missing, unreadable or undecodable blob is a cache miss: nothing is
    enqueued and nothing is raised.
    """
    data = await asyncio.to_thread(store.read)
    if data is None:
        return

    try:
        calendar = load_calendar(data)
    except DecodeError as e:
        logger.info("Ignoring unusable cache file %s: %s", store.path, e)
        return

    logger.debug("Loaded %d day(s) from cache", len(calendar.days))
    actions.put_nowait(CacheReady(calendar))


async def fetch_planner(
    config: FeedConfig,
    store: CacheStore,
    actions: ActionQueue,
    transport: t.Optional[httpx.AsyncBaseTransport] = None,
    today: t.Optional[date] = None,
) -> None:
    """Fetch the planner once, enqueue ``NetworkReady`` and save the body.

    Failures are logged and swallowed; there is exactly one attempt per run.

    Args:
        config: Feed location and credential
        store: Where the raw response body is saved
        actions: Queue consumed by the run loop
        transport: Optional httpx transport (used by tests)
        today: Lower bound for the ``start_date`` query parameter
    """
    try:
        # No timeout: a slow server only delays NetworkReady, not the UI
        async with httpx.AsyncClient(timeout=None, transport=transport) as client:
            response = await client.get(config.endpoint, params=planner_query(config, today))
            response.raise_for_status()
        body = response.content
        calendar = load_calendar(body)
    except httpx.HTTPStatusError as e:
        logger.warning("Planner request failed with HTTP %s", e.response.status_code)
        return
    except httpx.HTTPError as e:
        logger.warning("Planner request failed: %s", e)
        return
    except DecodeError as e:
        logger.warning("Planner response could not be decoded: %s", e)
        return
    except Exception:
        logger.exception("Unexpected error while fetching planner")
        return

    logger.debug("Fetched %d day(s) from %s", len(calendar.days), config.endpoint)
    actions.put_nowait(NetworkReady(calendar))

    try:
        await asyncio.to_thread(store.write, body)
    except OSError as e:
        logger.warning("Could not write cache file %s: %s", store.path, e)


def start_loaders(
    config: FeedConfig,
    store: CacheStore,
    actions: ActionQueue,
    transport: t.Optional[httpx.AsyncBaseTransport] = None,
) -> list[asyncio.Task]:
    """Spawn the cache loader and the fetcher as independent tasks."""
    return [
        asyncio.create_task(load_cache(store, actions), name="load_cache"),
        asyncio.create_task(
            fetch_planner(config, store, actions, transport=transport),
            name="fetch_planner",
        ),
    ]
