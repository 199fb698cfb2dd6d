"""Text rendering of a portfolio for the command line."""
from __future__ import annotations

from tabulate import tabulate

from .models import Portfolio

HEADERS = ["Name", "Symbol", "Balance", "Price", "Total", "Share"]


def format_quantity(quantity: float) -> str:
    return f"{quantity:.4f}"


def format_price(price: float) -> str:
    return f"${price:.7f}"


def format_total(total: float) -> str:
    return f"${total:.5f}"


def format_address(address: str) -> str:
    if len(address) > 16:
        return f"{address[:6]}...{address[-4:]}"
    return address


def render_portfolio(portfolio: Portfolio) -> str:
    """Render a portfolio as a table with allocation shares."""
    header = f"Portfolio · {format_address(portfolio.address)}"
    if not portfolio.assets:
        return f"{header}\n\nNo assets above the value floor."

    total = portfolio.total_value_usd
    table_data = []
    for asset in portfolio.assets:
        # zero-value portfolios (min_value_usd: 0) show 0% shares
        share = asset.total_value_usd / total if total > 0 else 0.0
        table_data.append(
            [
                asset.name,
                asset.symbol,
                format_quantity(asset.quantity),
                format_price(asset.unit_price_usd),
                format_total(asset.total_value_usd),
                f"{share * 100:.2f}%",
            ]
        )

    table = tabulate(
        table_data,
        headers=HEADERS,
        tablefmt="simple",
        disable_numparse=True,
        colalign=("left", "left", "right", "right", "right", "right"),
    )
    return f"{header}\n\n{table}\n\nTotal: ${total:,.2f}"
