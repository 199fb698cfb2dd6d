"""CoinGecko price oracle for the chain's native coin."""
import logging
import ssl

import aiohttp
import certifi

from ..config import PriceOracleConfig
from ..errors import PriceUnavailable
from ..models import NATIVE_ASSET

logger = logging.getLogger(__name__)


class CoinGeckoOracle:
    """Fetch USD prices from the CoinGecko ``/simple/price`` endpoint."""

    def __init__(self, config: PriceOracleConfig) -> None:
        self.base_url = config.base_url
        self.coin_id = config.native_coin_id
        self.timeout = config.timeout

    async def fetch_price(self, asset_id: str | None = None) -> float:
        """Fetch the USD price of a CoinGecko coin id.

        Args:
            asset_id: CoinGecko coin id, or ``NATIVE_ASSET`` / None for the
                configured native coin (e.g. ``"ethereum"``).

        Raises:
            PriceUnavailable: on transport errors, non-200 responses or an
                unparseable body. A response without a ``usd`` field is 0.0.
        """
        coin_id = self.coin_id if asset_id in (None, NATIVE_ASSET) else asset_id
        url = f"{self.base_url}/simple/price"
        params = {"ids": coin_id, "vs_currencies": "usd"}

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(
                    url,
                    params=params,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    if response.status != 200:
                        raise PriceUnavailable(
                            f"CoinGecko returned HTTP {response.status} for {coin_id}"
                        )
                    data = await response.json()
        except PriceUnavailable:
            raise
        except Exception as e:
            raise PriceUnavailable(f"CoinGecko request for {coin_id} failed: {e}") from e

        if not isinstance(data, dict):
            raise PriceUnavailable(f"Malformed CoinGecko response for {coin_id}")

        entry = data.get(coin_id) or {}
        if not isinstance(entry, dict):
            raise PriceUnavailable(f"Malformed CoinGecko response for {coin_id}")

        try:
            price = float(entry.get("usd") or 0.0)
        except (TypeError, ValueError) as e:
            raise PriceUnavailable(f"Malformed CoinGecko price for {coin_id}") from e

        logger.debug("CoinGecko %s: $%.7f", coin_id, price)
        return price
