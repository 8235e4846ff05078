"""
Indicator Engine

RESPONSIBILITIES:
    - Moving averages (SMA, EMA)
    - Momentum (RSI, MACD)
    - Volume trend
    - Support/resistance percentiles and return volatility
    - Classification of each reading into a SignalStrength

PURE PYTHON - Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from cryptosignal.services.indicators.calculations import (
    MACDResult,
    sma,
    ema,
    ema_series,
    rsi,
    macd,
    volume_trend,
    support_resistance,
    variance,
    returns_volatility,
)
from cryptosignal.services.indicators.classifier import (
    IndicatorReading,
    RSIReading,
    MovingAverageReading,
    MACDReading,
    VolumeTrendReading,
    classify_volatility,
)

__all__ = [
    "MACDResult",
    "sma",
    "ema",
    "ema_series",
    "rsi",
    "macd",
    "volume_trend",
    "support_resistance",
    "variance",
    "returns_volatility",
    "IndicatorReading",
    "RSIReading",
    "MovingAverageReading",
    "MACDReading",
    "VolumeTrendReading",
    "classify_volatility",
]
