"""Configuration loader: reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_MIN_VALUE_USD = 0.00002
DEFAULT_EXCLUDED_PREFIXES = ("YT ", "PT ")

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChainConfig:
    name: str = "eth"
    rpc_endpoints: tuple[str, ...] = ()
    rpc_timeout: int = 30
    native_name: str = "Ethereum"
    native_symbol: str = "ETH"
    native_decimals: int = 18


@dataclass(frozen=True)
class IndexerConfig:
    base_url: str = "https://deep-index.moralis.io/api/v2"
    api_key: str = ""
    timeout: int = 30


@dataclass(frozen=True)
class PriceOracleConfig:
    base_url: str = "https://api.coingecko.com/api/v3"
    native_coin_id: str = "ethereum"
    timeout: int = 30


@dataclass(frozen=True)
class PortfolioConfig:
    min_value_usd: float = DEFAULT_MIN_VALUE_USD
    excluded_name_prefixes: tuple[str, ...] = DEFAULT_EXCLUDED_PREFIXES


@dataclass(frozen=True)
class TrackerConfig:
    refresh_interval_seconds: int = 60


@dataclass(frozen=True)
class AppConfig:
    chain: ChainConfig = field(default_factory=ChainConfig)
    indexer: IndexerConfig = field(default_factory=IndexerConfig)
    price_oracle: PriceOracleConfig = field(default_factory=PriceOracleConfig)
    portfolio: PortfolioConfig = field(default_factory=PortfolioConfig)
    tracker: TrackerConfig = field(default_factory=TrackerConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_chain(raw: dict[str, Any]) -> ChainConfig:
    return ChainConfig(
        name=str(raw.get("name", "eth")),
        rpc_endpoints=tuple(raw.get("rpc_endpoints", [])),
        rpc_timeout=int(raw.get("rpc_timeout", 30)),
        native_name=str(raw.get("native_name", "Ethereum")),
        native_symbol=str(raw.get("native_symbol", "ETH")),
        native_decimals=int(raw.get("native_decimals", 18)),
    )


def _build_indexer(raw: dict[str, Any]) -> IndexerConfig:
    return IndexerConfig(
        base_url=str(raw.get("base_url", IndexerConfig.base_url)).rstrip("/"),
        api_key=str(raw.get("api_key") or "").strip(),
        timeout=int(raw.get("timeout", 30)),
    )


def _build_price_oracle(raw: dict[str, Any]) -> PriceOracleConfig:
    return PriceOracleConfig(
        base_url=str(raw.get("base_url", PriceOracleConfig.base_url)).rstrip("/"),
        native_coin_id=str(raw.get("native_coin_id", "ethereum")),
        timeout=int(raw.get("timeout", 30)),
    )


def _build_portfolio(raw: dict[str, Any]) -> PortfolioConfig:
    return PortfolioConfig(
        min_value_usd=float(raw.get("min_value_usd", DEFAULT_MIN_VALUE_USD)),
        excluded_name_prefixes=tuple(
            raw.get("excluded_name_prefixes", DEFAULT_EXCLUDED_PREFIXES)
        ),
    )


def _build_tracker(raw: dict[str, Any]) -> TrackerConfig:
    return TrackerConfig(
        refresh_interval_seconds=int(raw.get("refresh_interval_seconds", 60)),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    cfg = AppConfig(
        chain=_build_chain(raw.get("chain") or {}),
        indexer=_build_indexer(raw.get("indexer") or {}),
        price_oracle=_build_price_oracle(raw.get("price_oracle") or {}),
        portfolio=_build_portfolio(raw.get("portfolio") or {}),
        tracker=_build_tracker(raw.get("tracker") or {}),
    )

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise on invalid configuration.

    The indexer API key is deliberately not checked here; a missing key is
    reported as ``MissingCredential`` when an aggregation is attempted.
    """
    if not cfg.chain.rpc_endpoints:
        raise ValueError("At least one RPC endpoint must be configured")
    if cfg.chain.native_decimals < 0:
        raise ValueError("native_decimals must not be negative")
    if cfg.portfolio.min_value_usd < 0:
        raise ValueError("min_value_usd must not be negative")
    if cfg.tracker.refresh_interval_seconds <= 0:
        raise ValueError("refresh_interval_seconds must be positive")
