"""Error kinds raised by the aggregation pipeline."""


class PortfolioError(Exception):
    """Base class for portfolio aggregation errors."""


class MissingCredential(PortfolioError):
    """Required API key is absent; aggregation must not start."""


class MalformedBalance(PortfolioError, ValueError):
    """A raw balance or decimals value cannot be parsed."""


class InvalidAddress(PortfolioError, ValueError):
    """Wallet address is empty."""


class AggregationFailed(PortfolioError):
    """A mandatory balance fetch failed; no portfolio is produced."""


class PriceUnavailable(PortfolioError):
    """A single asset price could not be fetched. Always recovered locally."""
