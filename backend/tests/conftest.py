"""Shared fixtures for the signal engine tests."""

from typing import Optional, Sequence

import pytest

from cryptosignal.schemas.market import PricePoint, PriceSeries

DAY_MS = 86_400_000
START_MS = 1_704_067_200_000  # 2024-01-01T00:00:00Z

GOLDEN_PRICES = [100, 102, 101, 103, 105, 104, 106, 108, 107, 109, 111, 110, 112, 114]


def build_series(
    prices: Sequence[float],
    volumes: Optional[Sequence[float]] = None,
    symbol: str = "BTC",
) -> PriceSeries:
    if volumes is None:
        volumes = [1000.0] * len(prices)
    points = [
        PricePoint(timestamp=START_MS + i * DAY_MS, price=price, volume=volume)
        for i, (price, volume) in enumerate(zip(prices, volumes))
    ]
    return PriceSeries(symbol=symbol, points=points)


@pytest.fixture
def make_series():
    return build_series


@pytest.fixture
def golden_series() -> PriceSeries:
    return build_series(GOLDEN_PRICES, symbol="btc")
