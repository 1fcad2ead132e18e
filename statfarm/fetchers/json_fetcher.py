"""JSON-over-HTTP fetcher shared by every poller."""
import asyncio
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ..config import ApiConfig

logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """Raised when a payload could not be retrieved or decoded."""


class JsonFetcher:
    """GET an API path and decode the body as JSON."""

    def __init__(self, config: ApiConfig) -> None:
        self.base_url = config.base_url.rstrip("/")
        self.timeout = config.timeout_seconds

    def url_for(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    async def fetch_json(self, path: str) -> Any:
        """Fetch ``path`` and return the decoded JSON body.

        Raises:
            FetchError: on network failure, timeout, HTTP status >= 400 or a
                body that is not JSON.
        """
        url = self.url_for(path)

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(
                    url, timeout=aiohttp.ClientTimeout(total=self.timeout)
                ) as response:
                    if response.status >= 400:
                        raise FetchError(f"GET {url} returned HTTP {response.status}")
                    # Endpoints do not always label their bodies as JSON.
                    return await response.json(content_type=None)
        except FetchError:
            raise
        except asyncio.TimeoutError as e:
            raise FetchError(f"GET {url} timed out after {self.timeout}s") from e
        except (aiohttp.ClientError, OSError, ValueError) as e:
            raise FetchError(f"GET {url} failed: {e}") from e
