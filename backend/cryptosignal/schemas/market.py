"""
CONTRACT 1: Market Data

Input to the signal engine, produced by the data ingestion layer
(or supplied directly by an API caller).
"""

from pydantic import BaseModel, ConfigDict, Field


class PricePoint(BaseModel):
    """Single (price, volume) observation."""

    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(..., description="Epoch milliseconds")
    price: float = Field(..., gt=0, description="Price in quote currency")
    volume: float = Field(default=0.0, ge=0, description="Notional volume")


class PriceSeries(BaseModel):
    """
    Chronological price/volume history for one symbol.
    Sent by: Data Ingestion Service / API
    Received by: Signal Service

    Points are expected in ascending timestamp order; the signal service
    rejects anything else before computing.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "symbol": "ETH",
                "points": [
                    {"timestamp": 1706659200000, "price": 3180.5, "volume": 1.2e10},
                    {"timestamp": 1706745600000, "price": 3215.2, "volume": 1.4e10},
                ],
            }
        },
    )

    symbol: str = Field(..., min_length=1, max_length=10)
    points: list[PricePoint] = Field(default_factory=list)

    @property
    def prices(self) -> list[float]:
        return [p.price for p in self.points]

    @property
    def volumes(self) -> list[float]:
        return [p.volume for p in self.points]
