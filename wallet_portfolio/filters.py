"""Inclusion/exclusion predicates applied before and after pricing."""
from __future__ import annotations

from collections.abc import Iterable

from .config import DEFAULT_EXCLUDED_PREFIXES, DEFAULT_MIN_VALUE_USD
from .models import PricedAsset, RawTokenBalance


def is_excluded_name(
    name: str | None, prefixes: Iterable[str] = DEFAULT_EXCLUDED_PREFIXES
) -> bool:
    """True for synthetic yield wrappers such as ``"YT Pendle ETH"``.

    Matching is case-sensitive and done on the name with surrounding
    whitespace trimmed. Unnamed tokens are never excluded.
    """
    if not name:
        return False
    trimmed = name.strip()
    return any(trimmed.startswith(prefix) for prefix in prefixes)


def filter_by_name(
    balances: Iterable[RawTokenBalance],
    prefixes: Iterable[str] = DEFAULT_EXCLUDED_PREFIXES,
) -> list[RawTokenBalance]:
    prefixes = tuple(prefixes)
    return [b for b in balances if not is_excluded_name(b.name, prefixes)]


def meets_value_floor(
    asset: PricedAsset, min_value_usd: float = DEFAULT_MIN_VALUE_USD
) -> bool:
    # NaN totals fail the comparison and are dropped
    return asset.total_value_usd >= min_value_usd


def filter_by_value(
    assets: Iterable[PricedAsset], min_value_usd: float = DEFAULT_MIN_VALUE_USD
) -> list[PricedAsset]:
    return [a for a in assets if meets_value_floor(a, min_value_usd)]
