"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from wallet_portfolio.config import (
    AppConfig,
    ChainConfig,
    IndexerConfig,
    PortfolioConfig,
    PriceOracleConfig,
    TrackerConfig,
)
from wallet_portfolio.models import Portfolio, PricedAsset, RawTokenBalance


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_chain_config() -> ChainConfig:
    return ChainConfig(
        name="eth",
        rpc_endpoints=("https://rpc1.example.com", "https://rpc2.example.com"),
        rpc_timeout=10,
    )


@pytest.fixture()
def sample_indexer_config() -> IndexerConfig:
    return IndexerConfig(
        base_url="https://indexer.example.com/api/v2",
        api_key="test-api-key",
        timeout=10,
    )


@pytest.fixture()
def sample_oracle_config() -> PriceOracleConfig:
    return PriceOracleConfig(
        base_url="https://prices.example.com/api/v3",
        native_coin_id="ethereum",
        timeout=10,
    )


@pytest.fixture()
def sample_app_config(
    sample_chain_config: ChainConfig,
    sample_indexer_config: IndexerConfig,
    sample_oracle_config: PriceOracleConfig,
) -> AppConfig:
    return AppConfig(
        chain=sample_chain_config,
        indexer=sample_indexer_config,
        price_oracle=sample_oracle_config,
        portfolio=PortfolioConfig(),
        tracker=TrackerConfig(refresh_interval_seconds=30),
    )


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def usdc_balance() -> RawTokenBalance:
    return RawTokenBalance(
        token_address="0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
        raw_balance="500000",
        decimals=6,
        name="USD Coin",
        symbol="USDC",
    )


@pytest.fixture()
def sample_portfolio() -> Portfolio:
    return Portfolio(
        address="0xabc",
        assets=(
            PricedAsset(
                name="Ethereum",
                symbol="ETH",
                quantity=1.5,
                unit_price_usd=2000.0,
                total_value_usd=3000.0,
                is_native=True,
            ),
            PricedAsset(
                name="USD Coin",
                symbol="USDC",
                quantity=0.5,
                unit_price_usd=1.0,
                total_value_usd=0.5,
            ),
        ),
    )


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    chain:
      name: eth
      rpc_endpoints: ["https://rpc.example.com"]
      rpc_timeout: 10
    indexer:
      base_url: "https://indexer.example.com/api/v2/"
      api_key: "key-123"
    price_oracle:
      base_url: "https://prices.example.com/api/v3"
      native_coin_id: ethereum
    portfolio:
      min_value_usd: 0.00002
      excluded_name_prefixes: ["YT ", "PT "]
    tracker:
      refresh_interval_seconds: 45
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file

