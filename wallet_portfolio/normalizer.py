"""Pure decimal normalization functions, no I/O."""
from __future__ import annotations

import re
from typing import Any

from .errors import MalformedBalance
from .models import NormalizedBalance, RawTokenBalance

_UNSIGNED_INT_RE = re.compile(r"^[0-9]+$")


def parse_decimals(decimals: Any) -> int:
    """Validate a decimals exponent.

    Indexers report decimals either as an int or as a digit string
    (``"18"``). Negative, fractional and boolean values are rejected.
    """
    if isinstance(decimals, bool):
        raise MalformedBalance(f"Invalid decimals: {decimals!r}")
    if isinstance(decimals, int):
        value = decimals
    elif isinstance(decimals, str) and _UNSIGNED_INT_RE.match(decimals.strip()):
        value = int(decimals.strip())
    else:
        raise MalformedBalance(f"Invalid decimals: {decimals!r}")

    if value < 0:
        raise MalformedBalance(f"Decimals must not be negative: {value}")
    return value


def parse_raw_balance(raw_balance: Any) -> int:
    """Parse a non-negative base-10 integer balance string."""
    if isinstance(raw_balance, bool):
        raise MalformedBalance(f"Invalid raw balance: {raw_balance!r}")
    if isinstance(raw_balance, int):
        if raw_balance < 0:
            raise MalformedBalance(f"Raw balance must not be negative: {raw_balance}")
        return raw_balance
    if isinstance(raw_balance, str) and _UNSIGNED_INT_RE.match(raw_balance.strip()):
        try:
            return int(raw_balance.strip())
        except ValueError as e:
            # interpreter limit on integer string length
            raise MalformedBalance(f"Raw balance too long: {len(raw_balance)} digits") from e
    raise MalformedBalance(f"Invalid raw balance: {raw_balance!r}")


def normalize(raw_balance: Any, decimals: Any) -> float:
    """Scale a raw integer amount: ``raw_balance / 10^decimals``.

    Integer true division is correctly rounded, so the result is the
    closest float to the exact quotient. No display rounding is applied.

    Examples:
        normalize("500000", 6) → 0.5
        normalize("1500000000000000000", 18) → 1.5
    """
    raw = parse_raw_balance(raw_balance)
    exponent = parse_decimals(decimals)
    try:
        return raw / (10 ** exponent)
    except OverflowError as e:
        raise MalformedBalance(
            f"Balance {raw_balance!r} with {exponent} decimals is out of range"
        ) from e


def normalize_token(balance: RawTokenBalance) -> NormalizedBalance:
    """Normalize an indexer balance, filling in missing name/symbol."""
    return NormalizedBalance(
        asset_id=balance.token_address,
        name=balance.name or "Unknown",
        symbol=balance.symbol or "N/A",
        quantity=normalize(balance.raw_balance, balance.decimals),
    )
