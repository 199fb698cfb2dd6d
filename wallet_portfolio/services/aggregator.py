"""Portfolio aggregation: balances → normalize → price fan-out → filter."""
from __future__ import annotations

import asyncio
import logging

from ..chains.evm import EvmClient
from ..config import AppConfig
from ..errors import AggregationFailed, MalformedBalance, MissingCredential
from ..filters import filter_by_name, filter_by_value
from ..models import (
    NATIVE_ASSET,
    NormalizedBalance,
    Portfolio,
    PricedAsset,
    RawTokenBalance,
    normalize_address,
)
from ..normalizer import normalize_token
from ..oracles import CoinGeckoOracle
from ..sources import MoralisClient
from .balance_service import BalanceService
from .price_service import PriceService

logger = logging.getLogger(__name__)


class PortfolioAggregator:
    """Build a priced, filtered portfolio for one wallet address.

    Stateless between calls: every ``aggregate`` run fetches fresh data and
    either returns a complete Portfolio or raises.
    """

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._api_key = config.indexer.api_key
        self._min_value_usd = config.portfolio.min_value_usd
        self._excluded_prefixes = config.portfolio.excluded_name_prefixes
        self._native_name = config.chain.native_name
        self._native_symbol = config.chain.native_symbol

        indexer = MoralisClient(config.indexer, config.chain.name)
        self._balances = BalanceService(
            EvmClient(config.chain), indexer, config.chain
        )
        self._prices = PriceService(CoinGeckoOracle(config.price_oracle), indexer)

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    async def _fetch_balances(
        self, address: str
    ) -> tuple[float, list[RawTokenBalance]]:
        """Native and token balances, fetched concurrently. Both are mandatory."""
        native_result, tokens_result = await asyncio.gather(
            self._balances.fetch_native_balance(address),
            self._balances.fetch_token_balances(address),
            return_exceptions=True,
        )
        for result in (native_result, tokens_result):
            if isinstance(result, AggregationFailed):
                raise result
            if isinstance(result, BaseException):
                raise AggregationFailed("Failed to fetch tokens or prices.") from result
        return native_result, tokens_result

    @staticmethod
    def _normalize_tokens(raw: list[RawTokenBalance]) -> list[NormalizedBalance]:
        """Normalize token balances, skipping malformed entries with a warning."""
        normalized: list[NormalizedBalance] = []
        for balance in raw:
            try:
                normalized.append(normalize_token(balance))
            except MalformedBalance as e:
                logger.warning(
                    "Skipping token %s (%s): %s",
                    balance.symbol or "N/A",
                    balance.token_address,
                    e,
                )
        return normalized

    async def _price_all(self, balances: list[NormalizedBalance]) -> list[float]:
        """Fan out one price request per asset and join on all of them."""
        results = await asyncio.gather(
            *(self._prices.fetch_price(b.asset_id) for b in balances),
            return_exceptions=True,
        )
        prices: list[float] = []
        for balance, result in zip(balances, results):
            if isinstance(result, BaseException):
                logger.warning(
                    "Price fetch for %s raised, using 0.0: %s", balance.symbol, result
                )
                prices.append(0.0)
            else:
                prices.append(result)
        return prices

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def aggregate(self, address: str) -> Portfolio:
        """Assemble the portfolio for ``address``.

        Raises:
            MissingCredential: no indexer API key is configured.
            AggregationFailed: the native or token balance fetch failed.
        """
        if not self._api_key:
            raise MissingCredential("Indexer API key is not configured.")

        address = normalize_address(address)
        logger.info("Aggregating portfolio for %s", address)

        native_quantity, raw_tokens = await self._fetch_balances(address)

        kept = filter_by_name(raw_tokens, self._excluded_prefixes)
        if len(kept) != len(raw_tokens):
            logger.info(
                "Excluded %d synthetic yield tokens before pricing",
                len(raw_tokens) - len(kept),
            )

        native = NormalizedBalance(
            asset_id=NATIVE_ASSET,
            name=self._native_name,
            symbol=self._native_symbol,
            quantity=native_quantity,
        )
        balances = [native, *self._normalize_tokens(kept)]

        prices = await self._price_all(balances)
        priced = [
            PricedAsset.from_balance(balance, price)
            for balance, price in zip(balances, prices)
        ]

        # native stays at index 0 when it survives
        assets = filter_by_value(priced, self._min_value_usd)

        portfolio = Portfolio(address=address, assets=tuple(assets))
        logger.info(
            "Portfolio for %s: %d assets, $%.2f total",
            address,
            len(portfolio.assets),
            portfolio.total_value_usd,
        )
        return portfolio
