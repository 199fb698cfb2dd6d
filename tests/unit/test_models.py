"""Unit tests for data models."""
from __future__ import annotations

import pytest

from wallet_portfolio.errors import InvalidAddress, PortfolioError
from wallet_portfolio.models import (
    NATIVE_ASSET,
    NormalizedBalance,
    Portfolio,
    PricedAsset,
    normalize_address,
)


class TestNormalizeAddress:
    def test_lowercases_and_strips(self) -> None:
        assert normalize_address("  0xABCdef ") == "0xabcdef"

    def test_empty_raises(self) -> None:
        with pytest.raises(ValueError, match="required"):
            normalize_address("   ")

    def test_empty_is_portfolio_error(self) -> None:
        with pytest.raises(InvalidAddress) as exc_info:
            normalize_address("")
        assert isinstance(exc_info.value, PortfolioError)


class TestPricedAsset:
    def test_total_is_computed(self) -> None:
        balance = NormalizedBalance(asset_id="0x1", name="USD Coin", symbol="USDC", quantity=0.5)
        asset = PricedAsset.from_balance(balance, 1.0)
        assert asset.total_value_usd == pytest.approx(0.5)
        assert asset.is_native is False

    def test_native_flag(self) -> None:
        balance = NormalizedBalance(
            asset_id=NATIVE_ASSET, name="Ethereum", symbol="ETH", quantity=1.5
        )
        asset = PricedAsset.from_balance(balance, 2000.0)
        assert asset.is_native is True
        assert asset.total_value_usd == pytest.approx(3000.0)

    def test_frozen(self) -> None:
        asset = PricedAsset("A", "A", 1.0, 1.0, 1.0)
        with pytest.raises(AttributeError):
            asset.quantity = 2.0  # type: ignore[misc]


class TestPortfolio:
    def test_total(self, sample_portfolio: Portfolio) -> None:
        assert sample_portfolio.total_value_usd == pytest.approx(3000.5)

    def test_native(self, sample_portfolio: Portfolio) -> None:
        assert sample_portfolio.native is not None
        assert sample_portfolio.native.symbol == "ETH"

    def test_native_absent(self) -> None:
        p = Portfolio(address="0x1", assets=(PricedAsset("A", "A", 1.0, 1.0, 1.0),))
        assert p.native is None

    def test_allocations_sum_to_one(self, sample_portfolio: Portfolio) -> None:
        shares = sample_portfolio.allocations()
        assert [a.symbol for a, _ in shares] == ["ETH", "USDC"]
        assert sum(s for _, s in shares) == pytest.approx(1.0)
        assert shares[0][1] == pytest.approx(3000.0 / 3000.5)

    def test_allocations_empty(self) -> None:
        assert Portfolio(address="0x1").allocations() == []
