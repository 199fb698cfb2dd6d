"""Data models, all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidAddress

# Price identifier for the chain's base currency.
NATIVE_ASSET = "native"


def normalize_address(address: str) -> str:
    """Case-normalize a wallet or token address."""
    normalized = (address or "").strip().lower()
    if not normalized:
        raise InvalidAddress("Wallet address is required")
    return normalized


@dataclass(frozen=True)
class RawTokenBalance:
    """ERC-20 balance exactly as reported by the indexer."""

    token_address: str
    raw_balance: str
    decimals: int | str
    name: str | None = None
    symbol: str | None = None


@dataclass(frozen=True)
class NormalizedBalance:
    """Balance scaled by its decimals exponent."""

    asset_id: str
    name: str
    symbol: str
    quantity: float

    @property
    def is_native(self) -> bool:
        return self.asset_id == NATIVE_ASSET


@dataclass(frozen=True)
class PricedAsset:
    """Display-ready asset. ``unit_price_usd == 0.0`` means the price is unknown."""

    name: str
    symbol: str
    quantity: float
    unit_price_usd: float
    total_value_usd: float
    is_native: bool = False

    @classmethod
    def from_balance(cls, balance: NormalizedBalance, unit_price_usd: float) -> PricedAsset:
        return cls(
            name=balance.name,
            symbol=balance.symbol,
            quantity=balance.quantity,
            unit_price_usd=unit_price_usd,
            total_value_usd=balance.quantity * unit_price_usd,
            is_native=balance.is_native,
        )


@dataclass(frozen=True)
class Portfolio:
    """Ordered priced assets for one address; the native asset comes first."""

    address: str
    assets: tuple[PricedAsset, ...] = ()

    @property
    def total_value_usd(self) -> float:
        return sum(a.total_value_usd for a in self.assets)

    @property
    def native(self) -> PricedAsset | None:
        if self.assets and self.assets[0].is_native:
            return self.assets[0]
        return None

    def allocations(self) -> list[tuple[PricedAsset, float]]:
        """Each asset's share of the portfolio total, in portfolio order."""
        total = self.total_value_usd
        if total <= 0:
            return []
        return [(a, a.total_value_usd / total) for a in self.assets]
