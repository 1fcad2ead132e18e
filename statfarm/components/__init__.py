"""Display components built from rich renderables."""
from .calculator import DistributionCalculator, estimate_table
from .cards import card, mid_card, row, small_card, wide_card, xwide_card
from .chart import CandleChart, candle_chart
from .items import (
    address_item,
    address_table,
    governance_item,
    governance_table,
    ticker_item,
    ticker_table,
)
from .loader import LOADER, loader

__all__ = [
    "CandleChart",
    "DistributionCalculator",
    "LOADER",
    "address_item",
    "address_table",
    "candle_chart",
    "card",
    "estimate_table",
    "governance_item",
    "governance_table",
    "loader",
    "mid_card",
    "row",
    "small_card",
    "ticker_item",
    "ticker_table",
    "wide_card",
    "xwide_card",
]
