"""HTTP fetchers."""
from .json_fetcher import FetchError, JsonFetcher

__all__ = ["FetchError", "JsonFetcher"]
