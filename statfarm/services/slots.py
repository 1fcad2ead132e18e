"""Observable payload slots."""
from __future__ import annotations

import logging
import time
from typing import Any, Callable

from ..config import SOURCE_NAMES
from ..models import FAILED, PENDING, READY, Snapshot, SlotState

logger = logging.getLogger(__name__)

Listener = Callable[["Slot"], None]


class Slot:
    """Holds the latest payload of one source and notifies on change."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.value: Any = None
        self.error: Exception | None = None
        self.updated_at: float | None = None
        self.closed = False
        self._listeners: list[Listener] = []

    @property
    def status(self) -> str:
        if self.value is not None:
            return READY
        if self.error is not None:
            return FAILED
        return PENDING

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set(self, value: Any) -> bool:
        """Replace the payload wholesale. Ignored once the slot is closed."""
        if self.closed:
            logger.debug("Slot '%s' closed, dropping update", self.name)
            return False
        self.value = value
        self.error = None
        self.updated_at = time.time()
        self._notify()
        return True

    def fail(self, error: Exception) -> bool:
        """Record a failed fetch. The last good payload is kept."""
        if self.closed:
            return False
        self.error = error
        self._notify()
        return True

    def close(self) -> None:
        self.closed = True
        self._listeners.clear()

    def state(self) -> SlotState:
        return SlotState(
            name=self.name,
            status=self.status,
            value=self.value,
            error=str(self.error) if self.error else "",
            updated_at=self.updated_at,
        )

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as e:
                logger.error("Listener on slot '%s' failed: %s", self.name, e)


class SlotStore:
    """The four dashboard slots plus fan-out subscription."""

    def __init__(self, names: tuple[str, ...] = SOURCE_NAMES) -> None:
        self._slots: dict[str, Slot] = {name: Slot(name) for name in names}

    def __getitem__(self, name: str) -> Slot:
        return self._slots[name]

    def __iter__(self):
        return iter(self._slots.values())

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        unsubscribers = [slot.subscribe(listener) for slot in self._slots.values()]

        def unsubscribe() -> None:
            for unsub in unsubscribers:
                unsub()

        return unsubscribe

    def snapshot(self) -> Snapshot:
        return Snapshot(
            **{
                name: slot.value
                for name, slot in self._slots.items()
                if name in Snapshot.__dataclass_fields__
            }
        )

    def states(self) -> dict[str, SlotState]:
        return {name: slot.state() for name, slot in self._slots.items()}

    @property
    def all_ready(self) -> bool:
        return all(slot.status == READY for slot in self._slots.values())

    def close(self) -> None:
        for slot in self._slots.values():
            slot.close()
