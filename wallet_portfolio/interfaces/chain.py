"""Chain client protocol: blockchain RPC abstraction."""
from typing import Protocol


class ChainClient(Protocol):
    """Abstract interface for reading native-coin balances."""

    async def get_balance(self, wallet_address: str) -> int: ...
