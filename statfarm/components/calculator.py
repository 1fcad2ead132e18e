"""COMP distribution calculator."""
from __future__ import annotations

import math
from typing import Any, Sequence

from rich import box
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..formatting import dollars, parse_int, to_locale_string
from ..models import Estimate, MarketEmission

# ~13.15s Ethereum blocks
BLOCKS_PER_DAY = 6570


def _usd(value: Any) -> float:
    parsed = parse_int(value) if isinstance(value, str) else float(value)
    return 0.0 if math.isnan(parsed) else float(parsed)


class DistributionCalculator:
    """Estimate COMP rewards from per-market emission speeds.

    Each market emits ``comp_speed`` COMP per block to its suppliers and the
    same amount to its borrowers; a position earns its pro-rata share of the
    side it sits on.
    """

    def __init__(self, tokens: Sequence[dict[str, Any]], price: float) -> None:
        self.price = float(price)
        self._markets: dict[str, MarketEmission] = {}
        for token in tokens:
            emission = self._emission(token)
            self._markets[emission.symbol] = emission

    def _emission(self, token: dict[str, Any]) -> MarketEmission:
        symbol = token.get("underlying_symbol") or token["symbol"]
        comp_per_day = float(token["comp_speed"]) * BLOCKS_PER_DAY
        supply = _usd(token["total_supply"])
        borrow = _usd(token["total_borrow"])
        yearly_usd = comp_per_day * 365 * self.price
        return MarketEmission(
            symbol=symbol,
            comp_per_day=comp_per_day,
            total_supply_usd=supply,
            total_borrow_usd=borrow,
            supply_apr=yearly_usd / supply * 100 if supply else 0.0,
            borrow_apr=yearly_usd / borrow * 100 if borrow else 0.0,
        )

    @property
    def markets(self) -> list[MarketEmission]:
        return list(self._markets.values())

    def estimate(
        self, symbol: str, supplied_usd: float = 0.0, borrowed_usd: float = 0.0
    ) -> Estimate:
        """Daily COMP (and its USD value) earned by a position in ``symbol``.

        Raises:
            KeyError: if no market is listed for ``symbol``.
        """
        market = self._markets[symbol]
        comp = 0.0
        if market.total_supply_usd:
            comp += market.comp_per_day * supplied_usd / market.total_supply_usd
        if market.total_borrow_usd:
            comp += market.comp_per_day * borrowed_usd / market.total_borrow_usd
        return Estimate(symbol=symbol, comp_per_day=comp, usd_per_day=comp * self.price)

    def render(self) -> Table:
        table = Table(
            box=box.SIMPLE,
            expand=True,
            caption=f"COMP price {dollars(self.price)}",
            caption_justify="left",
        )
        table.add_column("Market")
        table.add_column("COMP/day", justify="right")
        table.add_column("Supply APR", justify="right")
        table.add_column("Borrow APR", justify="right")
        for m in sorted(self._markets.values(), key=lambda m: -m.comp_per_day):
            table.add_row(
                Text(m.symbol),
                to_locale_string(round(m.comp_per_day, 2)),
                f"{m.supply_apr:.2f}%",
                f"{m.borrow_apr:.2f}%",
            )
        return table


def estimate_table(estimate: Estimate) -> Table:
    """Daily and yearly rewards of one position."""
    table = Table(box=box.SIMPLE, title=f"COMP rewards · {escape(estimate.symbol)}")
    table.add_column("Period")
    table.add_column("COMP", justify="right")
    table.add_column("USD", justify="right")
    table.add_row(
        "Day",
        to_locale_string(round(estimate.comp_per_day, 4)),
        dollars(round(estimate.usd_per_day, 2)),
    )
    table.add_row(
        "Year",
        to_locale_string(round(estimate.comp_per_year, 2)),
        dollars(round(estimate.usd_per_year, 2)),
    )
    return table
