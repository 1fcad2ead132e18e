"""COMP/USD candle chart rendered as a text sparkline."""
from __future__ import annotations

from typing import Any, Sequence

from rich.console import Console, ConsoleOptions, RenderResult
from rich.text import Text

from ..formatting import dollars

BARS = "▁▂▃▄▅▆▇█"

# Coinbase candle layout: [time, low, high, open, close, volume]
CLOSE_INDEX = 4


def candle_closes(candles: Sequence[Any]) -> list[float]:
    """Closing prices in chronological order."""
    closes: list[tuple[float, float]] = []
    for i, candle in enumerate(candles):
        if isinstance(candle, dict):
            closes.append((float(candle.get("time", i)), float(candle["close"])))
        else:
            closes.append((float(candle[0]), float(candle[CLOSE_INDEX])))
    # Coinbase returns newest first
    closes.sort(key=lambda pair: pair[0])
    return [close for _, close in closes]


def sparkline(values: Sequence[float], width: int) -> str:
    if not values:
        return ""
    if len(values) > width:
        step = len(values) / width
        values = [values[int(i * step)] for i in range(width)]
    low, high = min(values), max(values)
    span = high - low
    if span == 0:
        return BARS[len(BARS) // 2] * len(values)
    return "".join(
        BARS[min(int((v - low) / span * len(BARS)), len(BARS) - 1)] for v in values
    )


class CandleChart:
    """Rich renderable: a close-price sparkline sized to its container."""

    def __init__(self, candles: Any) -> None:
        if isinstance(candles, dict):
            candles = candles.get("candles", candles.get("data", []))
        self.closes = candle_closes(candles)

    def summary(self) -> list[str]:
        closes = self.closes
        if not closes:
            return ["No candle data."]
        change = (closes[-1] - closes[0]) / closes[0] * 100 if closes[0] else 0.0
        return [
            f"Open {dollars(closes[0])}  Last {dollars(closes[-1])}  ({change:+.2f}%)",
            f"Low {dollars(min(closes))}  High {dollars(max(closes))}",
        ]

    def __rich_console__(
        self, console: Console, options: ConsoleOptions
    ) -> RenderResult:
        if self.closes:
            rising = self.closes[-1] >= self.closes[0]
            yield Text(
                sparkline(self.closes, options.max_width),
                style="green" if rising else "red",
            )
        for line in self.summary():
            yield Text(line)


def candle_chart(candles: Any) -> CandleChart:
    """Sparkline of closes plus first/last/low/high."""
    return CandleChart(candles)
