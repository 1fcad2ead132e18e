"""Card containers: titled panels laid out in ratio grids."""
from __future__ import annotations

from rich.console import RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

BORDER_STYLE = "grey50"


def card(name: str, body: RenderableType) -> Panel:
    """A titled panel that fills whatever grid cell it is placed in."""
    return Panel(
        body,
        title=f"[bold]{escape(name)}[/bold]",
        title_align="left",
        border_style=BORDER_STYLE,
        expand=True,
    )


def small_card(name: str, content: RenderableType) -> Panel:
    """Headline figure card; four fit on a row."""
    return card(name, content)


def mid_card(name: str, body: RenderableType) -> Panel:
    """One third of the page."""
    return card(name, body)


def wide_card(name: str, body: RenderableType) -> Panel:
    """Two thirds of the page."""
    return card(name, body)


def xwide_card(name: str, body: RenderableType) -> Panel:
    """Full page width."""
    return card(name, body)


def row(*cards: tuple[Panel, int]) -> Table:
    """Place ``(panel, ratio)`` pairs side by side in a grid."""
    grid = Table.grid(expand=True, padding=(0, 1))
    for _, ratio in cards:
        grid.add_column(ratio=ratio)
    grid.add_row(*(panel for panel, _ in cards))
    return grid
