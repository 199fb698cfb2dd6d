"""Per-asset USD pricing with zero fallback."""
from __future__ import annotations

import logging

from ..interfaces.price_oracle import PriceOracle
from ..models import NATIVE_ASSET

logger = logging.getLogger(__name__)


class PriceService:
    """Route price lookups to the native or token oracle.

    One attempt per call, no retry. Failures never propagate: the price
    degrades to 0.0 and the asset is later dropped by the value floor.
    """

    def __init__(self, native_oracle: PriceOracle, token_oracle: PriceOracle) -> None:
        self._native_oracle = native_oracle
        self._token_oracle = token_oracle

    async def fetch_price(self, asset_id: str) -> float:
        try:
            if asset_id == NATIVE_ASSET:
                price = await self._native_oracle.fetch_price(NATIVE_ASSET)
            else:
                price = await self._token_oracle.fetch_price(asset_id)
        except Exception as e:
            logger.warning("Price unavailable for %s, using 0.0: %s", asset_id, e)
            return 0.0

        if price < 0:
            logger.warning("Negative price %s for %s, using 0.0", price, asset_id)
            return 0.0
        return price
