"""
Signal Service Implementation

Turns a price/volume history into a CompositeSignalReport.
Pure Python/NumPy calculations; the only I/O is the optional fetch in
``execute``.
"""

from datetime import datetime, timezone
from typing import Optional, Sequence
import logging

from cryptosignal.core.thresholds import THRESHOLDS, SignalThresholds
from cryptosignal.schemas.market import PriceSeries
from cryptosignal.schemas.signals import (
    CompositeSignalReport,
    Indicator,
    SignalStrength,
    TrendDirection,
)
from cryptosignal.services.data_ingestion import (
    DataIngestionServiceInterface,
    get_data_ingestion_service,
)
from cryptosignal.services.indicators.calculations import (
    sma,
    rsi,
    macd,
    volume_trend,
    support_resistance,
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
from cryptosignal.services.signals.interface import SignalServiceInterface
from cryptosignal.services.signals.validation import validate_series
from cryptosignal.services.signals.aggregation import aggregate_signals, determine_trend

logger = logging.getLogger(__name__)


def build_summary(
    symbol: str,
    signal: SignalStrength,
    confidence: int,
    trend: TrendDirection,
    indicators: Sequence[Indicator],
) -> str:
    """One-sentence description of the report."""
    bullish = sum(1 for i in indicators if i.signal.is_bullish)
    bearish = sum(1 for i in indicators if i.signal.is_bearish)
    return (
        f"{symbol.upper()}: {signal.label} ({confidence}% confidence). "
        f"The {trend.value} trend is supported by {bullish} bullish and "
        f"{bearish} bearish indicators out of {len(indicators)} analyzed."
    )


class SignalService(SignalServiceInterface):
    """
    Composite Signal Service.

    All calculations are deterministic and reproducible: the same series
    and ``generated_at`` always give the same report.
    """

    def __init__(
        self,
        thresholds: SignalThresholds = THRESHOLDS,
        data_service: Optional[DataIngestionServiceInterface] = None,
        smooth_macd_history: bool = False,
    ):
        self._thresholds = thresholds
        self._data_service = data_service
        self._smooth_macd_history = smooth_macd_history

    @property
    def name(self) -> str:
        return "SignalService"

    @property
    def thresholds(self) -> SignalThresholds:
        return self._thresholds

    async def execute(self, input_data: str) -> CompositeSignalReport:
        """Fetch history for a symbol and analyze it."""
        if self._data_service is None:
            self._data_service = get_data_ingestion_service()

        series = await self._data_service.execute(input_data)
        return self.analyze(series)

    def analyze(
        self,
        series: PriceSeries,
        generated_at: Optional[datetime] = None,
    ) -> CompositeSignalReport:
        """Validate the series, compute every indicator and assemble the report."""
        t = self._thresholds
        validate_series(series, t)

        prices = series.prices
        volumes = series.volumes
        current = prices[-1]

        sma_short = sma(prices, t.sma_short_period)
        sma_long = sma(prices, t.sma_long_period)
        macd_result = macd(
            prices,
            t.macd_fast_period,
            t.macd_slow_period,
            t.macd_signal_period,
            smooth_history=self._smooth_macd_history,
        )

        readings: list[IndicatorReading] = [
            RSIReading(rsi(prices, t.rsi_period, t.rsi_neutral), t.rsi_period),
            MovingAverageReading(sma_short, current, t.sma_short_period),
            MovingAverageReading(sma_long, current, t.sma_long_period),
            MACDReading(macd_result.macd, macd_result.signal, macd_result.histogram),
            VolumeTrendReading(volume_trend(volumes, t.volume_window)),
        ]
        indicators = [reading.to_indicator(t) for reading in readings]

        support, resistance = support_resistance(
            prices, t.support_percentile, t.resistance_percentile
        )
        overall, confidence = aggregate_signals(indicators, t)
        trend = determine_trend(prices, sma_short, sma_long, t)
        volatility = classify_volatility(returns_volatility(prices), t)

        symbol = series.symbol.upper()
        logger.debug(
            f"{symbol}: {overall.value} ({confidence}%), trend={trend.value}, "
            f"volatility={volatility.value}, points={len(prices)}"
        )

        return CompositeSignalReport(
            symbol=symbol,
            current_price=current,
            overall_signal=overall,
            confidence=confidence,
            indicators=indicators,
            support_level=support,
            resistance_level=resistance,
            trend=trend,
            volatility=volatility,
            summary=build_summary(symbol, overall, confidence, trend, indicators),
            generated_at=generated_at or datetime.now(timezone.utc),
        )

    async def health_check(self) -> bool:
        """Signal service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[SignalService] = None


def get_signal_service() -> SignalService:
    """Get or create signal service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = SignalService()
    return _service_instance
