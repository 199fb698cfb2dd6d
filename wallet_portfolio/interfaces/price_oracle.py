"""Price oracle protocol: single-asset USD price abstraction."""
from typing import Protocol


class PriceOracle(Protocol):
    """Abstract interface for fetching one asset's USD price.

    Implementations raise ``PriceUnavailable`` on failure.
    """

    async def fetch_price(self, asset_id: str) -> float: ...
