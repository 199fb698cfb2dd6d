"""Moralis indexer client: ERC-20 balances and token prices."""
from __future__ import annotations

import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ..config import IndexerConfig
from ..errors import PriceUnavailable
from ..models import RawTokenBalance

logger = logging.getLogger(__name__)

# Upper bound on balance pages; a longer listing is treated as a failure.
MAX_PAGES = 100


class MoralisClient:
    """Query the Moralis deep-index API for a single configured chain."""

    def __init__(self, config: IndexerConfig, chain: str) -> None:
        self.base_url = config.base_url
        self.api_key = config.api_key
        self.timeout = config.timeout
        self.chain = chain

    async def _get(self, path: str, params: dict[str, str]) -> Any:
        """GET a JSON document; raises RuntimeError on non-200 responses."""
        url = f"{self.base_url}{path}"
        headers = {"X-API-Key": self.api_key, "accept": "application/json"}

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.get(
                url,
                params=params,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if response.status != 200:
                    raise RuntimeError(f"Moralis {path} returned HTTP {response.status}")
                return await response.json()

    async def fetch_token_balances(self, wallet_address: str) -> list[RawTokenBalance]:
        """List every ERC-20 balance of a wallet, exhausting all pages.

        The endpoint answers either with a plain array (complete result) or
        with ``{"cursor": ..., "result": [...]}`` pages. Errors propagate.
        """
        balances: list[RawTokenBalance] = []
        params = {"chain": self.chain}
        seen_cursors: set[str] = set()

        for _ in range(MAX_PAGES):
            data = await self._get(f"/{wallet_address}/erc20", params)

            if isinstance(data, list):
                items, cursor = data, None
            elif isinstance(data, dict) and isinstance(data.get("result"), list):
                items, cursor = data["result"], data.get("cursor")
            else:
                raise RuntimeError("Malformed Moralis erc20 response")

            balances.extend(_parse_token(item) for item in items)

            if not cursor:
                break
            if cursor in seen_cursors:
                raise RuntimeError(f"Moralis returned repeated cursor {cursor!r}")
            seen_cursors.add(cursor)
            params = {"chain": self.chain, "cursor": cursor}
        else:
            raise RuntimeError(
                f"Moralis balance listing exceeded {MAX_PAGES} pages"
            )

        logger.info("Fetched %d ERC-20 balances for %s", len(balances), wallet_address)
        return balances

    async def fetch_price(self, asset_id: str) -> float:
        """USD price of an ERC-20 token; 0.0 when ``usdPrice`` is absent.

        Raises:
            PriceUnavailable: on any transport, HTTP or body error.
        """
        try:
            data = await self._get(f"/erc20/{asset_id}/price", {"chain": self.chain})
        except Exception as e:
            raise PriceUnavailable(f"Moralis price for {asset_id} failed: {e}") from e

        if not isinstance(data, dict):
            raise PriceUnavailable(f"Malformed Moralis price response for {asset_id}")

        try:
            return float(data.get("usdPrice") or 0.0)
        except (TypeError, ValueError) as e:
            raise PriceUnavailable(f"Malformed Moralis price for {asset_id}") from e


def _parse_token(item: dict[str, Any]) -> RawTokenBalance:
    """Map one indexer entry to a RawTokenBalance; values are validated later."""
    return RawTokenBalance(
        token_address=str(item.get("token_address", "")).lower(),
        raw_balance=item.get("balance"),
        decimals=item.get("decimals"),
        name=item.get("name"),
        symbol=item.get("symbol"),
    )
