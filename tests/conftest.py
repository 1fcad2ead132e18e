"""Shared test fixtures and sample data."""
from __future__ import annotations

import asyncio
import textwrap
from pathlib import Path
from typing import Any

import pytest

from statfarm.config import (
    DEFAULT_SOURCES,
    ApiConfig,
    AppConfig,
    DisplayConfig,
    PollingConfig,
)
from statfarm.fetchers import FetchError


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_api_config() -> ApiConfig:
    return ApiConfig(base_url="https://api.example.com", timeout_seconds=5.0)


@pytest.fixture()
def sample_app_config(sample_api_config: ApiConfig) -> AppConfig:
    return AppConfig(
        api=sample_api_config,
        sources=dict(DEFAULT_SOURCES),
        polling=PollingConfig(discard_stale=False),
        display=DisplayConfig(width=200, clear_screen=False),
    )


# ---------------------------------------------------------------------------
# Payload fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_info() -> dict[str, Any]:
    return {
        "current_price": 150,
        "total_supply": 10000,
        "total_comp_distributed": 2000000,
        "total_volume": 5000000,
        "tickers": [],
    }


@pytest.fixture()
def sample_ticker() -> dict[str, Any]:
    return {
        "market": {"name": "Binance"},
        "base": "COMP",
        "target": "USDT",
        "converted_volume": {"usd": 1234567.8},
        "converted_last": {"usd": 150.25},
    }


@pytest.fixture()
def sample_markets() -> dict[str, Any]:
    return {
        "total_supply": "1234567890.55",
        "total_borrow": "456789012.1",
        "earned_interest": "34567890",
        "paid_interest": 41234567.9,
        "comp_price": 150,
        "tokens": [
            {
                "symbol": "cDAI",
                "underlying_symbol": "DAI",
                "comp_speed": "0.1",
                "total_supply": "1000000",
                "total_borrow": 500000,
            },
            {
                "symbol": "cUSDC",
                "underlying_symbol": "USDC",
                "comp_speed": 0.05,
                "total_supply": "2000000",
                "total_borrow": "1000000",
            },
        ],
    }


@pytest.fixture()
def sample_governance() -> dict[str, Any]:
    return {
        "current_price": 150,
        "addresses": [
            {
                "address": "0x1234567890abcdef5678",
                "display_name": "Polychain",
                "votes": "120345.4",
                "proportion": 0.0421,
            },
        ],
        "proposals": [
            {
                "id": 12,
                "title": "Add WBTC",
                "states": [{"state": "pending"}, {"state": "executed"}],
                "for_votes": "500000.4",
                "against_votes": "0",
            },
        ],
    }


@pytest.fixture()
def sample_candles() -> list[list[float]]:
    # Coinbase order: newest first, [time, low, high, open, close, volume]
    return [
        [3, 9.0, 11.0, 9.5, 10.0, 500.0],
        [2, 7.0, 8.0, 7.2, 7.5, 400.0],
        [1, 4.0, 6.0, 4.5, 5.0, 300.0],
    ]


@pytest.fixture()
def sample_payloads(
    sample_info: dict,
    sample_markets: dict,
    sample_governance: dict,
    sample_candles: list,
) -> dict[str, Any]:
    return {
        "/api/compound/info": sample_info,
        "/api/compound/markets": sample_markets,
        "/api/compound/governance": sample_governance,
        "/api/compound/chart": sample_candles,
    }


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeFetcher:
    """Fetcher returning canned payloads per path; exceptions are raised."""

    def __init__(self, responses: dict[str, Any]) -> None:
        self.responses = dict(responses)
        self.calls: list[str] = []

    async def fetch_json(self, path: str) -> Any:
        self.calls.append(path)
        await asyncio.sleep(0)
        result = self.responses.get(path, FetchError(f"no route for {path}"))
        if isinstance(result, Exception):
            raise result
        return result


async def park(_seconds: float) -> None:
    """Sleep replacement that never returns, so pollers fetch exactly once."""
    await asyncio.Event().wait()


@pytest.fixture()
def fake_fetcher(sample_payloads: dict[str, Any]) -> FakeFetcher:
    return FakeFetcher(sample_payloads)


@pytest.fixture()
def fetcher_factory() -> type[FakeFetcher]:
    return FakeFetcher


@pytest.fixture()
def park_sleep():
    return park


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    api:
      base_url: "https://api.example.com/"
      timeout_seconds: 7
    sources:
      info:
        path: /api/compound/info
        refresh_interval_ms: 2000
      markets:
        path: /api/compound/markets
        refresh_interval_ms: 5000
      governance:
        path: /api/compound/governance
        refresh_interval_ms: 20000
      chart:
        path: /api/compound/chart
        refresh_interval_ms: null
    polling:
      discard_stale: true
    display:
      width: 120
      clear_screen: false
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
