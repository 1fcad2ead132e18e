"""One-shot reward estimates against the live markets payload."""
from __future__ import annotations

import logging

from ..components import DistributionCalculator
from ..config import SourceConfig
from ..interfaces.fetcher import Fetcher
from ..models import Estimate

logger = logging.getLogger(__name__)


async def estimate_rewards(
    fetcher: Fetcher,
    source: SourceConfig,
    symbol: str,
    supplied_usd: float = 0.0,
    borrowed_usd: float = 0.0,
) -> Estimate:
    """Fetch the markets source once and estimate the rewards of a position.

    Raises:
        FetchError: if the markets request fails.
        KeyError: if ``symbol`` is not a listed market, or the payload lacks
            ``tokens`` / ``comp_price``.
    """
    payload = await fetcher.fetch_json(source.path)
    calculator = DistributionCalculator(payload["tokens"], payload["comp_price"])
    estimate = calculator.estimate(symbol, supplied_usd, borrowed_usd)
    logger.debug(
        "%s: %.4f COMP/day for $%s supplied, $%s borrowed",
        symbol, estimate.comp_per_day, supplied_usd, borrowed_usd,
    )
    return estimate
