"""Balance and token-price indexers."""
from .moralis import MoralisClient

__all__ = ["MoralisClient"]
