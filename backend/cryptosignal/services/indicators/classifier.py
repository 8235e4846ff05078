"""
Indicator Classification

Each raw reading maps to a SignalStrength and an interpretation sentence
using fixed thresholds. Readings are a closed set of types sharing one
``to_indicator`` contract; none of them looks at any other reading.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from cryptosignal.core.thresholds import THRESHOLDS, SignalThresholds
from cryptosignal.schemas.signals import Indicator, SignalStrength, VolatilityLevel


class IndicatorReading(ABC):
    """Raw value of one indicator, ready to be classified."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def value(self) -> float:
        pass

    @abstractmethod
    def signal(self, thresholds: SignalThresholds = THRESHOLDS) -> SignalStrength:
        pass

    @abstractmethod
    def interpretation(self, thresholds: SignalThresholds = THRESHOLDS) -> str:
        pass

    def to_indicator(self, thresholds: SignalThresholds = THRESHOLDS) -> Indicator:
        return Indicator(
            name=self.name,
            value=self.value,
            signal=self.signal(thresholds),
            interpretation=self.interpretation(thresholds),
        )


@dataclass(frozen=True)
class RSIReading(IndicatorReading):
    rsi: float
    period: int = 14

    @property
    def name(self) -> str:
        return f"RSI ({self.period})"

    @property
    def value(self) -> float:
        return self.rsi

    def signal(self, thresholds: SignalThresholds = THRESHOLDS) -> SignalStrength:
        if self.rsi < thresholds.rsi_strong_oversold:
            return SignalStrength.STRONG_BUY
        if self.rsi < thresholds.rsi_oversold:
            return SignalStrength.BUY
        if self.rsi > thresholds.rsi_strong_overbought:
            return SignalStrength.STRONG_SELL
        if self.rsi > thresholds.rsi_overbought:
            return SignalStrength.SELL
        return SignalStrength.NEUTRAL

    def interpretation(self, thresholds: SignalThresholds = THRESHOLDS) -> str:
        if self.rsi < thresholds.rsi_strong_oversold:
            return "Extremely oversold - potential reversal"
        if self.rsi < thresholds.rsi_oversold:
            return "Oversold territory"
        if self.rsi > thresholds.rsi_strong_overbought:
            return "Extremely overbought - potential reversal"
        if self.rsi > thresholds.rsi_overbought:
            return "Overbought territory"
        return "Neutral momentum"


@dataclass(frozen=True)
class MovingAverageReading(IndicatorReading):
    """Price position against an SMA. Binary: there is no neutral zone."""

    average: float
    price: float
    period: int

    @property
    def name(self) -> str:
        return f"SMA {self.period}"

    @property
    def value(self) -> float:
        return self.average

    def signal(self, thresholds: SignalThresholds = THRESHOLDS) -> SignalStrength:
        return SignalStrength.BUY if self.price > self.average else SignalStrength.SELL

    def interpretation(self, thresholds: SignalThresholds = THRESHOLDS) -> str:
        if self.price > self.average:
            return f"Price above {self.period}-day SMA (bullish)"
        return f"Price below {self.period}-day SMA (bearish)"


@dataclass(frozen=True)
class MACDReading(IndicatorReading):
    macd: float
    signal_line: float
    histogram: float

    @property
    def name(self) -> str:
        return "MACD"

    @property
    def value(self) -> float:
        return self.histogram

    def signal(self, thresholds: SignalThresholds = THRESHOLDS) -> SignalStrength:
        strong = thresholds.macd_strong_histogram
        if self.histogram > 0 and self.macd > self.signal_line:
            return SignalStrength.STRONG_BUY if self.histogram > strong else SignalStrength.BUY
        if self.histogram < 0 and self.macd < self.signal_line:
            return SignalStrength.STRONG_SELL if self.histogram < -strong else SignalStrength.SELL
        return SignalStrength.NEUTRAL

    def interpretation(self, thresholds: SignalThresholds = THRESHOLDS) -> str:
        if self.histogram > 0:
            return "MACD histogram positive (bullish momentum)"
        return "MACD histogram negative (bearish momentum)"


@dataclass(frozen=True)
class VolumeTrendReading(IndicatorReading):
    trend: float

    @property
    def name(self) -> str:
        return "Volume Trend"

    @property
    def value(self) -> float:
        return self.trend

    def signal(self, thresholds: SignalThresholds = THRESHOLDS) -> SignalStrength:
        if self.trend > thresholds.volume_buy_above:
            return SignalStrength.BUY
        if self.trend < thresholds.volume_sell_below:
            return SignalStrength.SELL
        return SignalStrength.NEUTRAL

    def interpretation(self, thresholds: SignalThresholds = THRESHOLDS) -> str:
        # Wording uses a wider band than the signal: small rises read as stable.
        if self.trend > thresholds.volume_rising_above:
            return "Volume increasing (confirms trend)"
        if self.trend < thresholds.volume_sell_below:
            return "Volume decreasing (weakening trend)"
        return "Volume stable"


def classify_volatility(
    volatility_percent: float, thresholds: SignalThresholds = THRESHOLDS
) -> VolatilityLevel:
    """Bucket the % standard deviation of returns."""
    if volatility_percent < thresholds.volatility_low_below:
        return VolatilityLevel.LOW
    if volatility_percent < thresholds.volatility_medium_below:
        return VolatilityLevel.MEDIUM
    return VolatilityLevel.HIGH
