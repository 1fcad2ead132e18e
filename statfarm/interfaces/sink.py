"""Frame sink protocol."""
from typing import Protocol

from rich.console import RenderableType


class FrameSink(Protocol):
    """Abstract interface for displaying a rendered frame."""

    def show(self, frame: RenderableType) -> None: ...

    def close(self) -> None: ...
