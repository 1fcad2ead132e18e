"""Page composer: the dashboard as a pure function of its payloads."""
from __future__ import annotations

from typing import Any, Iterable

from rich.console import Group
from rich.text import Text

from .components import (
    DistributionCalculator,
    address_table,
    candle_chart,
    governance_table,
    loader,
    mid_card,
    row,
    small_card,
    ticker_table,
    wide_card,
    xwide_card,
)
from .formatting import dollars, js_number, parse_int, to_locale_string
from .models import Snapshot

TITLE = "StatFarm | Compound"
STATUS_LINE = "● Data retrieved in real-time."
CALCULATOR_LOADING = "Loading calculator..."

# Anything a payload of the wrong shape can raise while being read.
PAYLOAD_ERRORS = (
    AttributeError,
    IndexError,
    KeyError,
    TypeError,
    ValueError,
    ZeroDivisionError,
)


class RenderError(RuntimeError):
    """A payload is missing a field the page needs."""


def _info_cards(info: Any):
    if info is None:
        contents = [loader()] * 4
    else:
        contents = [
            "$" + js_number(info["current_price"]),
            dollars(info["current_price"] * info["total_supply"]),
            to_locale_string(info["total_comp_distributed"]),
            dollars(info["total_volume"]),
        ]
    names = [
        "COMP Price",
        "Market Cap (Fully diluted)",
        "COMP Dispensed (of 4.2M)",
        "24H Volume (Cleaned)",
    ]
    return row(*((small_card(n, c), 1) for n, c in zip(names, contents)))


def _market_cards(markets: Any):
    fields = [
        ("Compound Supply", "total_supply"),
        ("Compound Borrow", "total_borrow"),
        ("Annual Interest Received", "earned_interest"),
        ("Annual Interest Paid", "paid_interest"),
    ]
    cards = []
    for name, key in fields:
        content = loader() if markets is None else dollars(parse_int(markets[key]))
        cards.append((small_card(name, content), 1))
    return row(*cards)


def _chart_and_volumes(chart: Any, info: Any):
    chart_body = loader() if chart is None else candle_chart(chart)
    tickers = loader() if info is None else ticker_table(info["tickers"])
    return row(
        (wide_card("COMP/USD (Coinbase)", chart_body), 2),
        (mid_card("COMP Market Volumes", tickers), 1),
    )


def _calculator(markets: Any):
    if markets is None:
        body = loader(CALCULATOR_LOADING)
    else:
        body = DistributionCalculator(markets["tokens"], markets["comp_price"]).render()
    return xwide_card("COMP Distribution Calculator", body)


def _governance(governance: Any):
    if governance is None:
        addresses = loader()
        proposals = loader()
    else:
        addresses = address_table(governance["addresses"], governance["current_price"])
        proposals = governance_table(governance["proposals"])
    return row(
        (mid_card("Adresses by Voting Weight", addresses), 1),
        (wide_card("Governance Proposals", proposals), 2),
    )


def status_line(failed: Iterable[str] = ()) -> str:
    failed = sorted(failed)
    if failed:
        return f"{STATUS_LINE} (retrying: {', '.join(failed)})"
    return STATUS_LINE


def compose_page(snapshot: Snapshot, failed: Iterable[str] = ()) -> Group:
    """Build the whole dashboard for ``snapshot``.

    Every region whose payload is absent shows the loading placeholder.
    Payload fields are read here, never lazily at draw time.

    Raises:
        RenderError: if a present payload lacks a field the page reads or
            has a row of the wrong shape.
    """
    try:
        sections = [
            Text(TITLE, style="bold"),
            Text(status_line(failed), style="green"),
            _info_cards(snapshot.info),
            _chart_and_volumes(snapshot.chart, snapshot.info),
            _market_cards(snapshot.markets),
            _calculator(snapshot.markets),
            _governance(snapshot.governance),
        ]
    except PAYLOAD_ERRORS as e:
        raise RenderError(f"Malformed payload: {e!r}") from e

    return Group(*sections)
