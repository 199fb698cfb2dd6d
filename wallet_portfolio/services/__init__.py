"""Service modules"""
from .aggregator import PortfolioAggregator
from .balance_service import BalanceService
from .price_service import PriceService
from .tracker import PortfolioTracker

__all__ = ["BalanceService", "PriceService", "PortfolioAggregator", "PortfolioTracker"]
