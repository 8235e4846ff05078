"""
Tests for the composite signal engine.

Covers validation, aggregation, trend classification, the golden 14-point
scenario and properties that must hold for any valid series.
"""

import random
from dataclasses import replace
from datetime import datetime, timezone

import pytest

from cryptosignal.core.thresholds import THRESHOLDS
from cryptosignal.schemas.market import PricePoint, PriceSeries
from cryptosignal.schemas.signals import (
    Indicator,
    SignalStrength,
    TrendDirection,
    VolatilityLevel,
)
from cryptosignal.services.base import InsufficientHistoryError, MalformedSeriesError
from cryptosignal.services.signals import (
    SignalService,
    aggregate_signals,
    agreement_confidence,
    build_summary,
    determine_trend,
    score_to_signal,
    validate_series,
)

FIXED_TIME = datetime(2024, 2, 4, 10, 30, tzinfo=timezone.utc)


def _indicator(signal: SignalStrength) -> Indicator:
    return Indicator(name="x", value=0.0, signal=signal, interpretation="")


def _random_walk(seed: int, length: int = 60) -> tuple[list[float], list[float]]:
    rng = random.Random(seed)
    price = 100.0
    prices, volumes = [], []
    for _ in range(length):
        price *= 1 + rng.uniform(-0.08, 0.08)
        prices.append(price)
        volumes.append(rng.choice([0.0, rng.uniform(1e3, 1e6)]))
    return prices, volumes


# =============================================================================
# VALIDATION
# =============================================================================


def test_thirteen_points_is_insufficient(make_series):
    series = make_series(list(range(100, 113)))
    with pytest.raises(InsufficientHistoryError) as exc_info:
        SignalService().analyze(series)
    assert exc_info.value.details["length"] == 13
    assert exc_info.value.details["required"] == 14


def test_fourteen_points_is_enough(make_series):
    report = SignalService().analyze(make_series(list(range(100, 114))))
    assert len(report.indicators) == 5


def test_timestamps_going_backwards_are_rejected():
    points = [PricePoint(timestamp=1000 * (20 - i), price=100.0) for i in range(20)]
    with pytest.raises(MalformedSeriesError):
        validate_series(PriceSeries(symbol="ETH", points=points))


def test_duplicate_timestamps_are_accepted():
    points = [PricePoint(timestamp=1000, price=100.0 + i) for i in range(14)]
    validate_series(PriceSeries(symbol="ETH", points=points))


# =============================================================================
# AGGREGATION
# =============================================================================


@pytest.mark.parametrize(
    "score, expected",
    [
        (2.0, SignalStrength.STRONG_BUY),
        (1.5, SignalStrength.STRONG_BUY),
        (1.4, SignalStrength.BUY),
        (0.5, SignalStrength.BUY),
        (0.4, SignalStrength.NEUTRAL),
        (0.0, SignalStrength.NEUTRAL),
        (-0.4, SignalStrength.NEUTRAL),
        (-0.5, SignalStrength.SELL),
        (-1.5, SignalStrength.STRONG_SELL),
        (-2.0, SignalStrength.STRONG_SELL),
    ],
)
def test_score_to_signal(score, expected):
    assert score_to_signal(score) == expected


def test_unanimous_indicators_give_full_confidence():
    indicators = [_indicator(SignalStrength.STRONG_BUY)] * 5
    assert aggregate_signals(indicators) == (SignalStrength.STRONG_BUY, 100)


def test_disagreement_lowers_confidence():
    signals = [
        SignalStrength.STRONG_BUY,
        SignalStrength.STRONG_BUY,
        SignalStrength.STRONG_SELL,
        SignalStrength.STRONG_SELL,
        SignalStrength.NEUTRAL,
    ]
    overall, confidence = aggregate_signals([_indicator(s) for s in signals])
    # variance 3.2 -> 100 - 64
    assert overall == SignalStrength.NEUTRAL
    assert confidence == 36


def test_aggregation_is_order_independent():
    signals = [
        SignalStrength.BUY,
        SignalStrength.STRONG_BUY,
        SignalStrength.SELL,
        SignalStrength.NEUTRAL,
        SignalStrength.BUY,
    ]
    forward = aggregate_signals([_indicator(s) for s in signals])
    backward = aggregate_signals([_indicator(s) for s in reversed(signals)])
    assert forward == backward == (SignalStrength.BUY, 79)


def test_confidence_is_clamped_to_zero():
    thresholds = replace(THRESHOLDS, confidence_variance_multiplier=50.0)
    assert agreement_confidence([2, -2], thresholds) == 0


# =============================================================================
# TREND
# =============================================================================


def test_trend_bullish_requires_stacked_averages_and_rise():
    prices = [100, 100, 100, 100, 100, 100, 100, 103]
    assert determine_trend(prices, 101.0, 100.5) == TrendDirection.BULLISH


def test_trend_partial_match_is_sideways():
    # Stacked but only +1% over the lookback
    prices = [100, 100, 100, 100, 100, 100, 100, 101]
    assert determine_trend(prices, 100.5, 100.2) == TrendDirection.SIDEWAYS
    # Big rise but averages not stacked
    prices = [100, 100, 100, 100, 100, 100, 100, 110]
    assert determine_trend(prices, 105.0, 106.0) == TrendDirection.SIDEWAYS


def test_trend_bearish():
    prices = [100, 100, 100, 100, 100, 100, 100, 95]
    assert determine_trend(prices, 98.0, 99.0) == TrendDirection.BEARISH


def test_trend_uses_series_start_when_shorter_than_lookback():
    prices = [100, 101, 102, 104]
    assert determine_trend(prices, 102.0, 101.0) == TrendDirection.BULLISH


def test_summary_wording():
    indicators = [
        _indicator(SignalStrength.BUY),
        _indicator(SignalStrength.STRONG_BUY),
        _indicator(SignalStrength.SELL),
        _indicator(SignalStrength.NEUTRAL),
    ]
    summary = build_summary("eth", SignalStrength.BUY, 81, TrendDirection.BULLISH, indicators)
    assert summary == (
        "ETH: Buy (81% confidence). The bullish trend is supported by 2 bullish "
        "and 1 bearish indicators out of 4 analyzed."
    )


# =============================================================================
# END TO END
# =============================================================================


def test_golden_fourteen_point_report(golden_series):
    report = SignalService().analyze(golden_series, generated_at=FIXED_TIME)
    by_name = {i.name: i for i in report.indicators}

    assert [i.name for i in report.indicators] == [
        "RSI (14)",
        "SMA 20",
        "SMA 50",
        "MACD",
        "Volume Trend",
    ]

    # 14 prices give only 13 deltas, so RSI falls back to neutral
    assert by_name["RSI (14)"].value == 50.0
    assert by_name["RSI (14)"].signal == SignalStrength.NEUTRAL
    assert by_name["RSI (14)"].interpretation == "Neutral momentum"

    # Both windows exceed the series, so both are the series mean
    mean = 1492 / 14
    assert by_name["SMA 20"].value == pytest.approx(mean)
    assert by_name["SMA 50"].value == pytest.approx(mean)
    assert by_name["SMA 20"].signal == SignalStrength.BUY
    assert by_name["SMA 50"].signal == SignalStrength.BUY

    assert by_name["MACD"].value < -0.01
    assert by_name["MACD"].signal == SignalStrength.STRONG_SELL

    assert by_name["Volume Trend"].value == 0.0
    assert by_name["Volume Trend"].signal == SignalStrength.NEUTRAL

    assert report.symbol == "BTC"
    assert report.current_price == 114
    assert report.overall_signal == SignalStrength.NEUTRAL
    assert report.confidence == 76
    assert report.support_level == 101
    assert report.resistance_level == 112
    assert report.trend == TrendDirection.SIDEWAYS
    assert report.volatility == VolatilityLevel.LOW
    assert report.generated_at == FIXED_TIME
    assert report.summary == (
        "BTC: Hold/Neutral (76% confidence). The sideways trend is supported by "
        "2 bullish and 1 bearish indicators out of 5 analyzed."
    )


def test_steady_uptrend_is_bullish(make_series):
    report = SignalService().analyze(make_series([100.0 + i for i in range(60)]))
    by_name = {i.name: i for i in report.indicators}

    assert by_name["RSI (14)"].value >= 70
    assert by_name["SMA 20"].signal == SignalStrength.BUY
    assert by_name["SMA 50"].signal == SignalStrength.BUY
    assert report.trend == TrendDirection.BULLISH


def test_steady_downtrend_is_bearish(make_series):
    report = SignalService().analyze(make_series([200.0 - i for i in range(60)]))
    by_name = {i.name: i for i in report.indicators}

    assert by_name["RSI (14)"].value == 0.0
    assert by_name["RSI (14)"].signal == SignalStrength.STRONG_BUY
    assert by_name["SMA 20"].signal == SignalStrength.SELL
    assert by_name["SMA 50"].signal == SignalStrength.SELL
    assert report.trend == TrendDirection.BEARISH


def test_flat_series(make_series):
    report = SignalService().analyze(make_series([250.0] * 30))
    by_name = {i.name: i for i in report.indicators}

    assert by_name["RSI (14)"].value == pytest.approx(50.0)
    assert report.volatility == VolatilityLevel.LOW
    assert report.trend == TrendDirection.SIDEWAYS
    assert report.support_level == report.resistance_level == 250.0


def test_flat_series_with_macd_history_has_zero_histogram(make_series):
    service = SignalService(smooth_macd_history=True)
    report = service.analyze(make_series([250.0] * 30))
    macd = next(i for i in report.indicators if i.name == "MACD")
    assert macd.value == pytest.approx(0.0, abs=1e-9)


def test_zero_volume_series_does_not_raise(make_series):
    report = SignalService().analyze(make_series([100.0 + i % 3 for i in range(20)], [0.0] * 20))
    volume = next(i for i in report.indicators if i.name == "Volume Trend")
    assert volume.value == 0.0
    assert volume.signal == SignalStrength.NEUTRAL


def test_rising_volume_is_bullish(make_series):
    volumes = [1000.0] * 15 + [2000.0] * 5
    report = SignalService().analyze(make_series([100.0] * 20, volumes))
    volume = next(i for i in report.indicators if i.name == "Volume Trend")
    assert volume.value == pytest.approx(1.0)
    assert volume.signal == SignalStrength.BUY
    assert volume.interpretation == "Volume increasing (confirms trend)"


@pytest.mark.parametrize("seed", range(25))
def test_bounds_hold_for_any_series(make_series, seed):
    prices, volumes = _random_walk(seed, length=14 + seed * 2)
    report = SignalService().analyze(make_series(prices, volumes))
    rsi = report.indicators[0]

    assert 0.0 <= rsi.value <= 100.0
    assert isinstance(report.confidence, int)
    assert 0 <= report.confidence <= 100
    ordered = sorted(prices)
    assert report.support_level == ordered[int(0.1 * len(prices))]
    assert report.resistance_level == ordered[int(0.9 * len(prices))]


def test_report_is_deterministic(golden_series):
    first = SignalService().analyze(golden_series, generated_at=FIXED_TIME)
    second = SignalService().analyze(golden_series, generated_at=FIXED_TIME)
    assert first.model_dump_json(by_alias=True) == second.model_dump_json(by_alias=True)


def test_report_serializes_with_contract_field_names(golden_series):
    payload = SignalService().analyze(golden_series, generated_at=FIXED_TIME).model_dump(
        by_alias=True, mode="json"
    )
    assert set(payload) == {
        "symbol",
        "currentPrice",
        "overallSignal",
        "confidence",
        "indicators",
        "supportLevel",
        "resistanceLevel",
        "trend",
        "volatility",
        "summary",
        "generatedAt",
    }
    assert payload["overallSignal"] == "neutral"
    assert payload["trend"] == "sideways"
    assert payload["volatility"] == "low"
    assert payload["indicators"][3]["signal"] == "strong_sell"
    assert set(payload["indicators"][0]) == {"name", "value", "signal", "interpretation"}


class FakeDataService:
    def __init__(self, series: PriceSeries):
        self.series = series
        self.requested = []

    async def execute(self, input_data: str) -> PriceSeries:
        self.requested.append(input_data)
        return self.series


@pytest.mark.asyncio
async def test_execute_fetches_then_analyzes(golden_series):
    data_service = FakeDataService(golden_series)
    report = await SignalService(data_service=data_service).execute("btc")

    assert data_service.requested == ["btc"]
    assert report.symbol == "BTC"
    assert report.confidence == 76


@pytest.mark.asyncio
async def test_health_check():
    assert await SignalService().health_check() is True
