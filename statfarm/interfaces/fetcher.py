"""Fetcher protocol — JSON-over-HTTP abstraction."""
from typing import Any, Protocol


class Fetcher(Protocol):
    """Abstract interface for retrieving a decoded JSON payload."""

    async def fetch_json(self, path: str) -> Any: ...
