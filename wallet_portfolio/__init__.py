"""Wallet portfolio aggregator: native + ERC-20 balances priced in USD."""

__version__ = "0.1.0"
