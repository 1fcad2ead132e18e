"""Dashboard orchestration — pollers feed slots, slot changes redraw the page."""
from __future__ import annotations

import asyncio
import logging

from ..config import SOURCE_NAMES, AppConfig
from ..fetchers import JsonFetcher
from ..interfaces.fetcher import Fetcher
from ..interfaces.sink import FrameSink
from ..models import FAILED, Snapshot
from ..page import RenderError, compose_page
from ..sinks import TerminalSink, render_text
from .poller import Poller, Sleep
from .slots import Slot, SlotStore

logger = logging.getLogger(__name__)


class Dashboard:
    """Owns the pollers for one view and tears them down with it."""

    def __init__(
        self,
        config: AppConfig,
        fetcher: Fetcher | None = None,
        sink: FrameSink | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._config = config
        self._width = config.display.width
        self._fetcher: Fetcher = fetcher or JsonFetcher(config.api)
        self._sink: FrameSink = sink or TerminalSink(
            width=self._width, clear=config.display.clear_screen
        )

        self.store = SlotStore()
        self.pollers: dict[str, Poller] = {
            name: Poller(
                self.store[name],
                config.sources[name],
                self._fetcher,
                discard_stale=config.polling.discard_stale,
                sleep=sleep,
            )
            for name in SOURCE_NAMES
        }

        self.last_frame: str | None = None
        self.render_errors = 0
        self.last_render_ok = True
        self._ready = asyncio.Event()
        self._unsubscribe = None
        self._started = False
        self._stopped = False

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        return self.store.snapshot()

    def render(self) -> str | None:
        """Compose the page from the current slots and push it to the sink.

        Returns the frame as plain text. A malformed payload keeps the
        previous frame on screen and returns None.
        """
        states = self.store.states()
        failed = [name for name, state in states.items() if state.status == FAILED]
        try:
            page = compose_page(self.snapshot(), failed=failed)
        except RenderError as e:
            self.render_errors += 1
            self.last_render_ok = False
            logger.error("Render failed, keeping previous frame: %s", e)
            return None

        self.last_render_ok = True
        frame = render_text(page, self._width)
        if frame != self.last_frame:
            self.last_frame = frame
            self._sink.show(page)
        return frame

    def _on_change(self, slot: Slot) -> None:
        logger.debug("Slot '%s' changed (%s)", slot.name, slot.status)
        self.render()
        if self.store.all_ready:
            self._ready.set()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start every poller. A stopped dashboard cannot be restarted."""
        if self._stopped:
            raise RuntimeError("Dashboard has been stopped; create a new one")
        if self._started:
            return
        self._started = True
        self._unsubscribe = self.store.subscribe(self._on_change)
        self.render()
        for poller in self.pollers.values():
            poller.start()
        logger.info("Dashboard started against %s", self._config.api.base_url)

    async def stop(self) -> None:
        """Cancel every timer and in-flight fetch, then freeze the slots."""
        if not self._started:
            return
        self._started = False
        self._stopped = True
        await asyncio.gather(*(p.stop() for p in self.pollers.values()))
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.store.close()
        self._sink.close()
        logger.info("Dashboard stopped")

    async def __aenter__(self) -> "Dashboard":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    # ------------------------------------------------------------------
    # Workflows
    # ------------------------------------------------------------------

    async def wait_ready(self, timeout: float | None = None) -> bool:
        """Wait until every slot holds a payload; False on timeout."""
        try:
            await asyncio.wait_for(self._ready.wait(), timeout)
        except asyncio.TimeoutError:
            return False
        return True

    async def run_forever(self) -> None:
        """Render continuously until cancelled."""
        async with self:
            await asyncio.Event().wait()

    async def run_snapshot(self, timeout: float = 30.0) -> str | None:
        """Render once every slot is ready (or ``timeout`` expires).

        Returns None when the latest render failed, so a malformed payload
        is never reported as a good frame.
        """
        async with self:
            if not await self.wait_ready(timeout):
                missing = [
                    f"{state.name} ({state.error or state.status})"
                    for state in self.store.states().values()
                    if state.value is None
                ]
                logger.warning(
                    "Timed out after %.1fs waiting for: %s", timeout, ", ".join(missing)
                )
            if not self.last_render_ok:
                logger.error("Latest render failed; no frame to report")
                return None
            return self.last_frame
