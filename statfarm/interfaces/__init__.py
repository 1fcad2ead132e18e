"""Protocol interfaces for the dashboard."""
from .fetcher import Fetcher
from .sink import FrameSink

__all__ = ["Fetcher", "FrameSink"]
