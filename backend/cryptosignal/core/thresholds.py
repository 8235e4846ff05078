"""
Signal Thresholds

Fixed numeric constants of the signal engine. These are part of the output
contract and are deliberately not loaded from the environment; pass a
``SignalThresholds`` instance into the engine to override them in tests.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SignalThresholds:
    """Every window, cut-off and multiplier used by the signal engine."""

    # Series
    min_history: int = 14

    # RSI
    rsi_period: int = 14
    rsi_neutral: float = 50.0
    rsi_strong_oversold: float = 20.0
    rsi_oversold: float = 30.0
    rsi_overbought: float = 70.0
    rsi_strong_overbought: float = 80.0

    # Moving averages
    sma_short_period: int = 20
    sma_long_period: int = 50

    # MACD
    macd_fast_period: int = 12
    macd_slow_period: int = 26
    macd_signal_period: int = 9
    macd_strong_histogram: float = 0.01

    # Volume trend
    volume_window: int = 5
    volume_buy_above: float = 0.0
    volume_sell_below: float = -0.1
    volume_rising_above: float = 0.1

    # Support / resistance percentiles
    support_percentile: float = 0.1
    resistance_percentile: float = 0.9

    # Volatility (% standard deviation of daily returns)
    volatility_low_below: float = 2.0
    volatility_medium_below: float = 5.0

    # Aggregation
    strong_score: float = 1.5
    score: float = 0.5
    confidence_variance_multiplier: float = 20.0

    # Trend
    trend_lookback: int = 7
    trend_change: float = 0.02


THRESHOLDS = SignalThresholds()
