"""
Data Ingestion Service

CONTRACT:
    Input:  symbol
    Output: PriceSeries

RESPONSIBILITIES:
    - Resolve ticker symbols to CoinGecko ids
    - Fetch daily price/volume history
    - Normalize it into a PriceSeries
    - Surface provider failures as UpstreamDataError

Pure data fetching and transformation. No analysis happens here.
"""

from cryptosignal.services.data_ingestion.interface import DataIngestionServiceInterface
from cryptosignal.services.data_ingestion.service import (
    DataIngestionService,
    get_data_ingestion_service,
)

__all__ = [
    "DataIngestionServiceInterface",
    "DataIngestionService",
    "get_data_ingestion_service",
]
