"""
Signal aggregation and trend classification.
"""

import math
from typing import Sequence

from cryptosignal.core.thresholds import THRESHOLDS, SignalThresholds
from cryptosignal.schemas.signals import Indicator, SignalStrength, TrendDirection
from cryptosignal.services.indicators.calculations import variance


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def score_to_signal(
    score: float, thresholds: SignalThresholds = THRESHOLDS
) -> SignalStrength:
    """Map a mean indicator score in [-2, 2] back to a SignalStrength."""
    if score >= thresholds.strong_score:
        return SignalStrength.STRONG_BUY
    if score >= thresholds.score:
        return SignalStrength.BUY
    if score <= -thresholds.strong_score:
        return SignalStrength.STRONG_SELL
    if score <= -thresholds.score:
        return SignalStrength.SELL
    return SignalStrength.NEUTRAL


def agreement_confidence(
    scores: Sequence[int], thresholds: SignalThresholds = THRESHOLDS
) -> int:
    """
    Confidence in [0, 100] from how much the indicators agree.

    100 when every score is identical; each unit of score variance costs
    ``confidence_variance_multiplier`` points.
    """
    if not scores:
        return 0
    raw = 100 - variance(scores) * thresholds.confidence_variance_multiplier
    return _round_half_up(max(0.0, min(100.0, raw)))


def aggregate_signals(
    indicators: Sequence[Indicator], thresholds: SignalThresholds = THRESHOLDS
) -> tuple[SignalStrength, int]:
    """
    Combine classified indicators into one signal.

    Returns: (overall_signal, confidence)
    """
    if not indicators:
        return SignalStrength.NEUTRAL, 0

    scores = [indicator.signal.score for indicator in indicators]
    mean_score = sum(scores) / len(scores)
    return score_to_signal(mean_score, thresholds), agreement_confidence(scores, thresholds)


def determine_trend(
    prices: Sequence[float],
    sma_short: float,
    sma_long: float,
    thresholds: SignalThresholds = THRESHOLDS,
) -> TrendDirection:
    """
    Bullish/bearish only when price, short SMA and long SMA are stacked in
    order AND the price moved more than ``trend_change`` over the lookback.
    """
    current = prices[-1]
    lookback = thresholds.trend_lookback + 1
    reference = prices[-lookback] if len(prices) >= lookback else prices[0]
    change = (current - reference) / reference

    if current > sma_short > sma_long and change > thresholds.trend_change:
        return TrendDirection.BULLISH
    if current < sma_short < sma_long and change < -thresholds.trend_change:
        return TrendDirection.BEARISH
    return TrendDirection.SIDEWAYS
