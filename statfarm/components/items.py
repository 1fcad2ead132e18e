"""Row renderers for tickers, voting addresses and governance proposals."""
from __future__ import annotations

from typing import Any, Iterable, Sequence

from rich import box
from rich.table import Table
from rich.text import Text

from ..formatting import dollars, to_locale_string


def _short_address(address: str) -> str:
    if len(address) > 14:
        return f"{address[:6]}…{address[-4:]}"
    return address


def _usd(field: Any) -> float:
    """Read a CoinGecko-style ``{"usd": ...}`` value or a bare number."""
    if isinstance(field, dict):
        return float(field["usd"])
    return float(field)


def _table(columns: Sequence[tuple[str, str]], rows: Iterable[tuple[str, ...]]) -> Table:
    table = Table(box=box.SIMPLE, expand=True, pad_edge=False)
    for header, justify in columns:
        table.add_column(header, justify=justify, no_wrap=True, overflow="ellipsis")
    for cells in rows:
        table.add_row(*(Text(cell) for cell in cells))
    return table


def ticker_item(ticker: dict[str, Any]) -> tuple[str, str, str, str]:
    """One exchange pair: market, pair, 24h volume and last price."""
    market = ticker["market"]
    market_name = market["name"] if isinstance(market, dict) else str(market)
    pair = f"{ticker['base']}/{ticker['target']}"
    volume = _usd(ticker.get("converted_volume", ticker.get("volume")))
    last = _usd(ticker.get("converted_last", ticker.get("last")))
    return market_name, pair, dollars(round(volume)), dollars(last)


def ticker_table(tickers: Iterable[dict[str, Any]]) -> Table:
    rows = [ticker_item(t) for t in tickers]
    return _table(
        [("Market", "left"), ("Pair", "left"), ("Volume", "right"), ("Last", "right")],
        rows,
    )


def address_item(address: dict[str, Any], price: float) -> tuple[str, str, str, str]:
    """A COMP holder with voting weight, its USD value and vote share."""
    label = address.get("display_name") or _short_address(address["address"])
    votes = float(address["votes"])
    share = ""
    if address.get("proportion") is not None:
        share = f"{float(address['proportion']) * 100:.2f}%"
    return (
        label,
        f"{to_locale_string(round(votes))} COMP",
        dollars(round(votes * float(price))),
        share,
    )


def address_table(addresses: Iterable[dict[str, Any]], price: float) -> Table:
    rows = [address_item(a, price) for a in addresses]
    return _table(
        [("Holder", "left"), ("Votes", "right"), ("Value", "right"), ("Share", "right")],
        rows,
    )


def proposal_state(proposal: dict[str, Any]) -> str:
    if "states" in proposal:
        state = proposal["states"][-1]
    else:
        state = proposal["state"]
    if isinstance(state, dict):
        state = state["state"]
    return str(state).capitalize()


def governance_item(proposal: dict[str, Any]) -> tuple[str, str, str, str, str]:
    """A governance proposal with its current state and vote tally."""
    for_votes = round(float(proposal["for_votes"]))
    against_votes = round(float(proposal["against_votes"]))
    return (
        f"#{proposal['id']}",
        str(proposal["title"]),
        proposal_state(proposal),
        to_locale_string(for_votes),
        to_locale_string(against_votes),
    )


def governance_table(proposals: Iterable[dict[str, Any]]) -> Table:
    rows = [governance_item(p) for p in proposals]
    return _table(
        [
            ("ID", "left"),
            ("Proposal", "left"),
            ("State", "left"),
            ("For", "right"),
            ("Against", "right"),
        ],
        rows,
    )
