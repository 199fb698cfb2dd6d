"""Protocol interfaces for the portfolio aggregator."""
from .balance_source import TokenBalanceSource
from .chain import ChainClient
from .price_oracle import PriceOracle

__all__ = ["ChainClient", "PriceOracle", "TokenBalanceSource"]
