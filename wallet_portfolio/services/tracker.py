"""Current-wallet state holder with stale-run protection."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from ..models import Portfolio, normalize_address
from .aggregator import PortfolioAggregator

logger = logging.getLogger(__name__)


class PortfolioTracker:
    """Keeps the displayed portfolio for the currently connected address.

    Every ``refresh`` is keyed by address and run number. A run that finishes
    after a newer run started (or after ``disconnect``) is discarded so an
    old address can never overwrite the state of a newer one.
    """

    def __init__(self, aggregator: PortfolioAggregator) -> None:
        self._aggregator = aggregator
        self._current_address: str | None = None
        self._run_id = 0
        self.portfolio: Portfolio | None = None
        self.error: str | None = None
        self.loading = False

    @property
    def current_address(self) -> str | None:
        return self._current_address

    def _is_current(self, run_id: int, address: str) -> bool:
        return run_id == self._run_id and address == self._current_address

    async def refresh(self, address: str, force: bool = False) -> Portfolio | None:
        """Aggregate ``address`` and publish the result if still current.

        Returns the published portfolio, or None when the run was superseded.
        Re-raises aggregation errors of the current run after recording them
        in ``error``.
        """
        address = normalize_address(address)

        if (
            not force
            and address == self._current_address
            and self.portfolio is not None
        ):
            logger.debug("Portfolio for %s already loaded, skipping refresh", address)
            return self.portfolio

        if address != self._current_address:
            self.portfolio = None
        self._run_id += 1
        run_id = self._run_id
        self._current_address = address
        self.error = None
        self.loading = True

        try:
            portfolio = await self._aggregator.aggregate(address)
        except Exception as e:
            if not self._is_current(run_id, address):
                logger.debug("Discarding error of superseded run for %s: %s", address, e)
                return None
            self.error = str(e)
            raise
        finally:
            # also covers cancellation of the current run
            if self._is_current(run_id, address):
                self.loading = False

        if not self._is_current(run_id, address):
            logger.info("Discarding stale portfolio for %s", address)
            return None

        self.portfolio = portfolio
        return portfolio

    def disconnect(self) -> None:
        """Forget the current wallet; in-flight results will be discarded."""
        self._run_id += 1
        self._current_address = None
        self.portfolio = None
        self.error = None
        self.loading = False

    async def watch(
        self,
        address: str,
        interval_seconds: int,
        on_update: Callable[[Portfolio], Awaitable[None] | None] | None = None,
    ) -> None:
        """Refresh ``address`` forever, every ``interval_seconds``."""
        address = normalize_address(address)
        logger.info(
            "Watching %s (refreshing every %d seconds)", address, interval_seconds
        )

        while True:
            try:
                portfolio = await self.refresh(address, force=True)
                if portfolio is not None and on_update is not None:
                    result = on_update(portfolio)
                    if asyncio.iscoroutine(result):
                        await result
            except Exception as e:
                logger.error("Error refreshing portfolio: %s", e)
            await asyncio.sleep(interval_seconds)
