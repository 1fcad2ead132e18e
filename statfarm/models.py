"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

PENDING = "pending"
READY = "ready"
FAILED = "failed"


@dataclass(frozen=True)
class Snapshot:
    """Current payload of every source; ``None`` means not yet available."""

    info: Any = None
    markets: Any = None
    governance: Any = None
    chart: Any = None


@dataclass(frozen=True)
class SlotState:
    """Point-in-time view of a single slot."""

    name: str
    status: str
    value: Any = None
    error: str = ""
    updated_at: float | None = None


@dataclass(frozen=True)
class MarketEmission:
    """Daily COMP emitted to one side of each market and its yield."""

    symbol: str
    comp_per_day: float
    total_supply_usd: float
    total_borrow_usd: float
    supply_apr: float
    borrow_apr: float


@dataclass(frozen=True)
class Estimate:
    """Expected COMP earnings for a user position in one market."""

    symbol: str
    comp_per_day: float
    usd_per_day: float

    @property
    def comp_per_year(self) -> float:
        return self.comp_per_day * 365

    @property
    def usd_per_year(self) -> float:
        return self.usd_per_day * 365
