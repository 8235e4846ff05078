"""
Signal Service Interface

Defines the contract for the composite signal engine.
"""

from abc import abstractmethod
from datetime import datetime
from typing import Optional

from cryptosignal.services.base import BaseService
from cryptosignal.schemas.market import PriceSeries
from cryptosignal.schemas.signals import CompositeSignalReport


class SignalServiceInterface(BaseService[str, CompositeSignalReport]):
    """
    Signal Service Contract.

    INPUT: str
        - ticker symbol; history is fetched from the data collaborator

    OUTPUT: CompositeSignalReport
        - overall signal, confidence, per-indicator breakdown, trend,
          volatility, support/resistance and summary

    ``analyze`` is the pure core: no I/O, no state between calls.
    """

    @property
    def name(self) -> str:
        return "SignalService"

    @abstractmethod
    async def execute(self, input_data: str) -> CompositeSignalReport:
        """Fetch history for a symbol and analyze it."""
        pass

    @abstractmethod
    def analyze(
        self,
        series: PriceSeries,
        generated_at: Optional[datetime] = None,
    ) -> CompositeSignalReport:
        """
        Analyze a supplied series.

        Args:
            series: Price history, oldest first, at least 14 points
            generated_at: Report timestamp (defaults to now, UTC)

        Raises:
            InsufficientHistoryError: fewer than 14 points
            MalformedSeriesError: timestamps out of order
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Signal engine is always healthy (pure computation)."""
        pass
