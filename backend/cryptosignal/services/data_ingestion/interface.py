"""
Data Ingestion Service Interface

Defines the contract for the price history collaborator.
"""

from abc import abstractmethod

from cryptosignal.services.base import BaseService
from cryptosignal.schemas.market import PriceSeries


class DataIngestionServiceInterface(BaseService[str, PriceSeries]):
    """
    Data Ingestion Service Contract.

    INPUT: str
        - ticker symbol (e.g. "BTC")

    OUTPUT: PriceSeries
        - daily (price, volume) points, oldest first

    Failures surface as UpstreamDataError and are not retried here.
    """

    @property
    def name(self) -> str:
        return "DataIngestionService"

    @abstractmethod
    async def execute(self, input_data: str) -> PriceSeries:
        """Fetch the price history for a symbol."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release any open HTTP session."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check connectivity to the data provider."""
        pass
