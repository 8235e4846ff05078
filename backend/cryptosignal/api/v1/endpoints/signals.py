"""
Signal API Endpoints

Endpoints for composite trading signal generation.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, status

from cryptosignal.schemas.market import PriceSeries
from cryptosignal.schemas.signals import ApiResponse, CompositeSignalReport
from cryptosignal.services.base import (
    InsufficientHistoryError,
    MalformedSeriesError,
    UpstreamDataError,
)
from cryptosignal.services.data_ingestion import get_data_ingestion_service
from cryptosignal.services.signals import get_signal_service

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_SYMBOL_LENGTH = 10


def _envelope(report: CompositeSignalReport) -> ApiResponse[CompositeSignalReport]:
    return ApiResponse[CompositeSignalReport](
        success=True,
        data=report,
        timestamp=datetime.now(timezone.utc),
    )


@router.post("/analyze", response_model=ApiResponse[CompositeSignalReport])
async def analyze_series(series: PriceSeries):
    """
    Analyze a caller-supplied price series.

    No market data is fetched; the body must hold at least 14 points in
    chronological order.
    """
    try:
        report = get_signal_service().analyze(series)
    except (InsufficientHistoryError, MalformedSeriesError) as e:
        # The caller supplied the series, so both are client errors
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message)

    return _envelope(report)


@router.get("/{symbol}", response_model=ApiResponse[CompositeSignalReport])
async def get_signals(symbol: str):
    """
    Get the composite trading signal for a symbol.

    Returns:
        - Overall signal and confidence
        - RSI, SMA 20/50, MACD and volume trend breakdown
        - Support/resistance levels
        - Trend and volatility classification
        - Summary sentence
    """
    symbol = symbol.strip()
    if not symbol or len(symbol) > MAX_SYMBOL_LENGTH:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid symbol")

    try:
        series = await get_data_ingestion_service().execute(symbol)
        report = get_signal_service().analyze(series)
    except InsufficientHistoryError as e:
        logger.warning(f"Not enough history for {symbol}: {e.details}")
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.message)
    except UpstreamDataError as e:
        logger.error(f"Market data unavailable for {symbol}: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)

    return _envelope(report)
