"""
Signal Engine Service

CONTRACT:
    Input:  PriceSeries (or a symbol, fetched through Data Ingestion)
    Output: CompositeSignalReport

RESPONSIBILITIES:
    - Reject series shorter than the minimum history
    - Classify RSI, SMA 20, SMA 50, MACD and volume trend readings
    - Aggregate them into one signal with an agreement-based confidence
    - Classify trend and volatility, estimate support/resistance
    - Write the natural-language summary

Stateless: every call is a pure function of its input series.
"""

from cryptosignal.services.signals.interface import SignalServiceInterface
from cryptosignal.services.signals.service import (
    SignalService,
    build_summary,
    get_signal_service,
)
from cryptosignal.services.signals.validation import validate_series
from cryptosignal.services.signals.aggregation import (
    aggregate_signals,
    agreement_confidence,
    determine_trend,
    score_to_signal,
)

__all__ = [
    "SignalServiceInterface",
    "SignalService",
    "build_summary",
    "get_signal_service",
    "validate_series",
    "aggregate_signals",
    "agreement_confidence",
    "determine_trend",
    "score_to_signal",
]
