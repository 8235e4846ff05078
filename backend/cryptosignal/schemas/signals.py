"""
CONTRACT 2: Composite Signal Report

Input: PriceSeries
Output: CompositeSignalReport

Field names are serialized in camelCase; the enumeration values and the
integer confidence are part of the stable output contract.
"""

from datetime import datetime
from enum import Enum
from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# ENUMS
# =============================================================================


class SignalStrength(str, Enum):
    """Ordered buy/sell strength. Compares by score, not by name."""

    STRONG_SELL = "strong_sell"
    SELL = "sell"
    NEUTRAL = "neutral"
    BUY = "buy"
    STRONG_BUY = "strong_buy"

    @property
    def score(self) -> int:
        return _SIGNAL_SCORES[self]

    @property
    def label(self) -> str:
        return _SIGNAL_LABELS[self]

    @property
    def is_bullish(self) -> bool:
        return self.score > 0

    @property
    def is_bearish(self) -> bool:
        return self.score < 0

    def __lt__(self, other):
        if isinstance(other, SignalStrength):
            return self.score < other.score
        return NotImplemented

    def __le__(self, other):
        if isinstance(other, SignalStrength):
            return self.score <= other.score
        return NotImplemented

    def __gt__(self, other):
        if isinstance(other, SignalStrength):
            return self.score > other.score
        return NotImplemented

    def __ge__(self, other):
        if isinstance(other, SignalStrength):
            return self.score >= other.score
        return NotImplemented


_SIGNAL_SCORES = {
    SignalStrength.STRONG_SELL: -2,
    SignalStrength.SELL: -1,
    SignalStrength.NEUTRAL: 0,
    SignalStrength.BUY: 1,
    SignalStrength.STRONG_BUY: 2,
}

_SIGNAL_LABELS = {
    SignalStrength.STRONG_SELL: "Strong Sell",
    SignalStrength.SELL: "Sell",
    SignalStrength.NEUTRAL: "Hold/Neutral",
    SignalStrength.BUY: "Buy",
    SignalStrength.STRONG_BUY: "Strong Buy",
}


class TrendDirection(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    SIDEWAYS = "sideways"


class VolatilityLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# =============================================================================
# OUTPUT: Indicator
# =============================================================================


class Indicator(BaseModel):
    """One classified indicator reading."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: float
    signal: SignalStrength
    interpretation: str


# =============================================================================
# OUTPUT: CompositeSignalReport (Complete Response)
# =============================================================================


class CompositeSignalReport(BaseModel):
    """
    Complete signal analysis for a symbol.
    Returned by: Signal Service
    Consumed by: API clients
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "symbol": "ETH",
                "currentPrice": 3250.45,
                "overallSignal": "buy",
                "confidence": 72,
                "indicators": [
                    {"name": "RSI (14)", "value": 58.3, "signal": "neutral", "interpretation": "Neutral momentum"},
                    {"name": "SMA 20", "value": 3180.5, "signal": "buy", "interpretation": "Price above 20-day SMA (bullish)"},
                ],
                "supportLevel": 3050.0,
                "resistanceLevel": 3420.0,
                "trend": "bullish",
                "volatility": "medium",
                "summary": "ETH: Buy (72% confidence). The bullish trend is supported by 3 bullish and 1 bearish indicators out of 5 analyzed.",
                "generatedAt": "2024-02-04T10:30:00Z",
            }
        },
    )

    symbol: str
    current_price: float
    overall_signal: SignalStrength
    confidence: int = Field(..., ge=0, le=100)
    indicators: list[Indicator]
    support_level: float
    resistance_level: float
    trend: TrendDirection
    volatility: VolatilityLevel
    summary: str
    generated_at: datetime


# =============================================================================
# API ENVELOPE
# =============================================================================

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every API payload."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    timestamp: datetime
