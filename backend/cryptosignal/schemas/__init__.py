"""
CryptoSignal Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from cryptosignal.schemas.market import (
    PricePoint,
    PriceSeries,
)
from cryptosignal.schemas.signals import (
    SignalStrength,
    TrendDirection,
    VolatilityLevel,
    Indicator,
    CompositeSignalReport,
    ApiResponse,
)

__all__ = [
    # Market
    "PricePoint",
    "PriceSeries",
    # Signals
    "SignalStrength",
    "TrendDirection",
    "VolatilityLevel",
    "Indicator",
    "CompositeSignalReport",
    "ApiResponse",
]
