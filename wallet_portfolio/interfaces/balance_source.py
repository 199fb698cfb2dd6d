"""Token balance source protocol: ERC-20 indexer abstraction."""
from typing import Protocol

from ..models import RawTokenBalance


class TokenBalanceSource(Protocol):
    """Abstract interface for listing the ERC-20 balances of a wallet."""

    async def fetch_token_balances(self, wallet_address: str) -> list[RawTokenBalance]: ...
