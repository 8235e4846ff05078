"""
Data Ingestion Service Implementation

Fetches daily price/volume history from CoinGecko.
"""

import asyncio
from typing import Optional
import logging

import aiohttp

from cryptosignal.core.config import Settings, settings as default_settings
from cryptosignal.schemas.market import PriceSeries
from cryptosignal.services.data_ingestion.interface import DataIngestionServiceInterface
from cryptosignal.services.data_ingestion.coingecko_adapter import fetch_coingecko_history

logger = logging.getLogger(__name__)


class DataIngestionService(DataIngestionServiceInterface):
    """
    Data Ingestion Service.

    Holds one aiohttp session, opened lazily and closed on shutdown.
    """

    def __init__(self, config: Optional[Settings] = None):
        self._settings = config or default_settings
        self._session: Optional[aiohttp.ClientSession] = None

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure we have an active HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._settings.request_timeout),
                headers={"Accept": "application/json"},
            )
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def execute(self, input_data: str) -> PriceSeries:
        """Fetch the configured window of daily history for a symbol."""
        session = await self._ensure_session()
        series = await fetch_coingecko_history(
            session,
            input_data,
            base_url=self._settings.coingecko_base_url,
            days=self._settings.history_days,
            vs_currency=self._settings.quote_currency,
            api_key=self._settings.coingecko_api_key,
        )
        logger.info(f"Got {len(series.points)} points for {series.symbol}")
        return series

    async def health_check(self) -> bool:
        """Ping the CoinGecko API."""
        try:
            session = await self._ensure_session()
            url = f"{self._settings.coingecko_base_url.rstrip('/')}/ping"
            async with session.get(url) as response:
                return response.status == 200
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"CoinGecko health check failed: {e}")
            return False


# Singleton instance
_service_instance: Optional[DataIngestionService] = None


def get_data_ingestion_service() -> DataIngestionService:
    """Get or create data ingestion service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = DataIngestionService()
    return _service_instance
