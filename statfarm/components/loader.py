"""Loading placeholder."""
from rich.align import Align
from rich.text import Text

LOADER = "● ● ●"
LOADER_STYLE = "#F01716"


def loader(text: str = LOADER) -> Align:
    """The beat-loader placeholder shown while a payload is absent."""
    style = LOADER_STYLE if text == LOADER else "dim"
    return Align.center(Text(text, style=style))
