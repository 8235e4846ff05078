"""
Technical Indicator Calculations

Pure Python/NumPy implementations of the signal engine's indicators.
All math is deterministic: every function returns a plain float for the
latest bar and never raises on flat prices or zero volume.
"""

import math
from typing import NamedTuple, Sequence, Union

import numpy as np

ArrayLike = Union[Sequence[float], np.ndarray]


class MACDResult(NamedTuple):
    """Latest MACD values."""

    macd: float
    signal: float
    histogram: float


def _as_array(values: ArrayLike) -> np.ndarray:
    return np.asarray(values, dtype=float)


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(prices: ArrayLike, period: int) -> float:
    """
    Simple Moving Average of the last ``period`` prices.

    When fewer than ``period`` prices are available the whole series is
    averaged instead, so a 50-period SMA still exists for a 20-bar series.
    """
    if period <= 0:
        raise ValueError("period must be > 0")
    data = _as_array(prices)
    if len(data) == 0:
        return 0.0
    return float(np.mean(data[-period:]))


def ema_series(prices: ArrayLike, period: int) -> np.ndarray:
    """Exponential Moving Average at every bar, seeded with the first price."""
    data = _as_array(prices)
    result = np.empty(len(data))
    if len(data) == 0:
        return result

    k = 2 / (period + 1)
    value = data[0]
    result[0] = value
    for i in range(1, len(data)):
        value = data[i] * k + value * (1 - k)
        result[i] = value
    return result


def ema(prices: ArrayLike, period: int) -> float:
    """
    Exponential Moving Average of the whole slice.

    Seeded with the first element rather than an SMA of the first
    ``period`` values, so early values carry the seed's bias.
    """
    data = _as_array(prices)
    if len(data) == 0:
        return 0.0

    k = 2 / (period + 1)
    value = float(data[0])
    for price in data[1:]:
        value = float(price) * k + value * (1 - k)
    return value


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(prices: ArrayLike, period: int = 14, neutral: float = 50.0) -> float:
    """
    Relative Strength Index over the last ``period`` deltas.

    Gains and losses are summed and divided by ``period`` (simple average,
    no Wilder smoothing). Returns ``neutral`` with fewer than ``period + 1``
    prices or when there was no movement at all, and 100 when there were
    no losses.
    """
    data = _as_array(prices)
    if len(data) < period + 1:
        return neutral

    deltas = np.diff(data[-(period + 1):])
    avg_gain = float(deltas[deltas > 0].sum()) / period
    avg_loss = float(-deltas[deltas < 0].sum()) / period

    if avg_loss == 0:
        return neutral if avg_gain == 0 else 100.0

    rs = avg_gain / avg_loss
    return 100 - (100 / (1 + rs))


def macd(
    prices: ArrayLike,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
    smooth_history: bool = False,
) -> MACDResult:
    """
    MACD (Moving Average Convergence Divergence).

    By default the signal line is the ``signal_period`` EMA of the raw
    prices minus their last ``signal_period`` values with the scalar MACD
    appended. This is not textbook MACD smoothing; it is kept so reports
    stay comparable with earlier releases.

    With ``smooth_history=True`` a MACD value is kept for every bar and the
    signal line is the EMA of that history instead.
    """
    data = _as_array(prices)

    if smooth_history:
        line = ema_series(data, fast_period) - ema_series(data, slow_period)
        macd_value = float(line[-1]) if len(line) else 0.0
        signal_value = ema(line, signal_period)
    else:
        macd_value = ema(data, fast_period) - ema(data, slow_period)
        blended = np.append(data[:-signal_period], macd_value)
        signal_value = ema(blended, signal_period)

    return MACDResult(
        macd=macd_value,
        signal=signal_value,
        histogram=macd_value - signal_value,
    )


# =============================================================================
# VOLUME INDICATORS
# =============================================================================


def volume_trend(volumes: ArrayLike, window: int = 5) -> float:
    """
    Relative change of the mean of the last ``window`` volumes against the
    ``window`` before them. 0 when history is short or the earlier window
    traded nothing.
    """
    data = _as_array(volumes)
    if len(data) < window * 2:
        return 0.0

    recent = float(np.mean(data[-window:]))
    previous = float(np.mean(data[-window * 2:-window]))
    if previous > 0:
        return (recent - previous) / previous
    return 0.0


# =============================================================================
# SUPPORT/RESISTANCE & VOLATILITY
# =============================================================================


def support_resistance(
    prices: ArrayLike,
    support_percentile: float = 0.1,
    resistance_percentile: float = 0.9,
) -> tuple[float, float]:
    """
    Percentile support/resistance over the whole window.

    Returns: (support, resistance) taken from the ascending-sorted prices at
    ``floor(p * n)``.
    """
    ordered = np.sort(_as_array(prices))
    n = len(ordered)
    if n == 0:
        return 0.0, 0.0

    low = min(int(math.floor(n * support_percentile)), n - 1)
    high = min(int(math.floor(n * resistance_percentile)), n - 1)
    return float(ordered[low]), float(ordered[high])


def variance(values: ArrayLike) -> float:
    """Population variance (0 for an empty input)."""
    data = _as_array(values)
    if len(data) == 0:
        return 0.0
    return float(np.var(data))


def returns_volatility(prices: ArrayLike) -> float:
    """Standard deviation of bar-over-bar fractional returns, in percent."""
    data = _as_array(prices)
    if len(data) < 2:
        return 0.0

    returns = np.diff(data) / data[:-1]
    return math.sqrt(variance(returns)) * 100
