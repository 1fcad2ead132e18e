"""Polling hooks — bind one endpoint to a refresh cadence."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from ..config import SourceConfig
from ..interfaces.fetcher import Fetcher
from .slots import Slot

logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[Any]]


class Poller:
    """Fetch a source immediately, then on a fixed cadence.

    Every tick spawns its own fetch task, so a slow request never delays the
    next one and responses may overlap. With ``discard_stale`` off the
    last-resolved response wins; with it on, a response is dropped when a
    newer request has already been applied.
    """

    def __init__(
        self,
        slot: Slot,
        source: SourceConfig,
        fetcher: Fetcher,
        discard_stale: bool = False,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.slot = slot
        self.path = source.path
        self.interval = source.refresh_interval
        self.discard_stale = discard_stale
        self.fetch_count = 0
        self._fetcher = fetcher
        self._sleep = sleep
        self._seq = 0
        self._applied_seq = 0
        self._timer: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()

    @property
    def name(self) -> str:
        return self.slot.name

    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def start(self) -> None:
        """Begin polling. A poller runs at most once; later calls are no-ops."""
        if self._timer is not None:
            return
        self._timer = asyncio.create_task(self._run(), name=f"poll-{self.name}")

    async def stop(self) -> None:
        """Cancel the timer and every in-flight fetch."""
        tasks = [t for t in (self._timer, *self._in_flight) if t is not None]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._in_flight.clear()

    async def _run(self) -> None:
        if self.interval is None:
            logger.debug("Polling %s once", self.path)
        else:
            logger.debug("Polling %s every %.1fs", self.path, self.interval)

        while True:
            self._spawn_fetch()
            if self.interval is None:
                return
            await self._sleep(self.interval)

    def _spawn_fetch(self) -> None:
        self._seq += 1
        self.fetch_count += 1
        task = asyncio.create_task(self.poll_once(self._seq))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def poll_once(self, seq: int | None = None) -> None:
        """Fetch the source once and publish the outcome into the slot."""
        if seq is None:
            self._seq += 1
            seq = self._seq

        try:
            payload = await self._fetcher.fetch_json(self.path)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("Fetching %s failed: %s", self.path, e)
            self.slot.fail(e)
            return

        if self.discard_stale and seq < self._applied_seq:
            logger.debug(
                "Dropping stale response #%d for %s (already at #%d)",
                seq, self.path, self._applied_seq,
            )
            return

        self._applied_seq = max(self._applied_seq, seq)
        self.slot.set(payload)
        logger.debug("Fetched %s (#%d)", self.path, seq)
