"""Balance source: native balance via RPC, ERC-20 balances via the indexer."""
from __future__ import annotations

import logging

from ..config import ChainConfig
from ..errors import AggregationFailed
from ..interfaces.balance_source import TokenBalanceSource
from ..interfaces.chain import ChainClient
from ..models import RawTokenBalance
from ..normalizer import normalize

logger = logging.getLogger(__name__)


class BalanceService:
    """Mandatory balance reads. Any failure aborts the aggregation run."""

    def __init__(
        self,
        chain_client: ChainClient,
        token_source: TokenBalanceSource,
        config: ChainConfig,
    ) -> None:
        self._chain_client = chain_client
        self._token_source = token_source
        self._native_decimals = config.native_decimals

    async def fetch_native_balance(self, wallet_address: str) -> float:
        try:
            wei = await self._chain_client.get_balance(wallet_address)
            quantity = normalize(wei, self._native_decimals)
        except Exception as e:
            logger.error("Native balance fetch failed for %s: %s", wallet_address, e)
            raise AggregationFailed("Failed to fetch native balance.") from e

        logger.info("Native balance for %s: %.6f", wallet_address, quantity)
        return quantity

    async def fetch_token_balances(self, wallet_address: str) -> list[RawTokenBalance]:
        try:
            return await self._token_source.fetch_token_balances(wallet_address)
        except Exception as e:
            logger.error("Token balance fetch failed for %s: %s", wallet_address, e)
            raise AggregationFailed("Failed to fetch tokens or prices.") from e
