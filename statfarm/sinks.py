"""Frame sinks."""
from __future__ import annotations

import io

from rich.console import Console, RenderableType
from rich.live import Live


def render_text(frame: RenderableType, width: int = 96) -> str:
    """Draw ``frame`` off-screen and return it as plain text."""
    console = Console(
        width=width,
        file=io.StringIO(),
        record=True,
        color_system=None,
        legacy_windows=False,
    )
    console.print(frame)
    return console.export_text().rstrip("\n")


class TerminalSink:
    """Draw frames on the terminal.

    With ``clear`` on, frames are redrawn in place on the alternate screen
    through a ``Live`` display started by the first frame. Otherwise each
    frame is printed below the previous one.
    """

    def __init__(
        self,
        width: int | None = None,
        clear: bool = True,
        console: Console | None = None,
    ) -> None:
        self.console = console or Console(width=width)
        self.clear = clear
        self._live: Live | None = None

    def show(self, frame: RenderableType) -> None:
        if not self.clear:
            self.console.print(frame)
            return
        if self._live is None:
            self._live = Live(
                frame,
                console=self.console,
                screen=True,
                auto_refresh=False,
                redirect_stdout=False,
                redirect_stderr=False,
            )
            self._live.start(refresh=True)
        else:
            self._live.update(frame, refresh=True)

    def close(self) -> None:
        if self._live is not None:
            self._live.stop()
            self._live = None


class MemorySink:
    """Keep frames in memory, as plain text, instead of drawing them."""

    def __init__(self, width: int = 96) -> None:
        self.width = width
        self.frames: list[str] = []
        self.closed = False

    @property
    def last(self) -> str | None:
        return self.frames[-1] if self.frames else None

    def show(self, frame: RenderableType) -> None:
        self.frames.append(render_text(frame, self.width))

    def close(self) -> None:
        self.closed = True
