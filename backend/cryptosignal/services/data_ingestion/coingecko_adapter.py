"""
CoinGecko Data Adapter

Fetches daily price/volume history from the CoinGecko market_chart API
and normalizes it into a PriceSeries.
"""

import asyncio
import logging
from typing import Any, Optional

import aiohttp

from cryptosignal.schemas.market import PricePoint, PriceSeries
from cryptosignal.services.base import RateLimitError, UpstreamDataError

logger = logging.getLogger(__name__)

ADAPTER_NAME = "CoinGecko"

# Ticker symbol to CoinGecko coin id
COINGECKO_IDS = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "SOL": "solana",
    "USDC": "usd-coin",
    "USDT": "tether",
    "LINK": "chainlink",
    "UNI": "uniswap",
    "AAVE": "aave",
    "ARB": "arbitrum",
    "OP": "optimism",
    "MATIC": "matic-network",
    "AVAX": "avalanche-2",
    "DOGE": "dogecoin",
    "SHIB": "shiba-inu",
    "PEPE": "pepe",
}


def get_coingecko_id(symbol: str) -> str:
    """Resolve a ticker to a CoinGecko id; unknown tickers are tried as ids."""
    symbol = symbol.strip()
    return COINGECKO_IDS.get(symbol.upper(), symbol.lower())


def parse_market_chart(symbol: str, payload: dict[str, Any]) -> PriceSeries:
    """
    Convert a market_chart response into a PriceSeries.

    ``prices`` and ``total_volumes`` are parallel lists of ``[ms, value]``
    pairs; a missing or null volume becomes 0.
    """
    try:
        prices = payload["prices"]
        volumes = payload.get("total_volumes") or []

        points = []
        for i, (timestamp, price) in enumerate(prices):
            volume = volumes[i][1] if i < len(volumes) and volumes[i] else None
            points.append(
                PricePoint(
                    timestamp=int(timestamp),
                    price=float(price),
                    volume=float(volume or 0),
                )
            )
        return PriceSeries(symbol=symbol.upper(), points=points)
    except (KeyError, TypeError, ValueError, IndexError) as e:
        raise UpstreamDataError(
            ADAPTER_NAME,
            f"Malformed market chart for {symbol}: {e}",
            {"symbol": symbol},
        ) from e


async def fetch_coingecko_history(
    session: aiohttp.ClientSession,
    symbol: str,
    base_url: str,
    days: int = 60,
    vs_currency: str = "usd",
    api_key: Optional[str] = None,
) -> PriceSeries:
    """
    Fetch daily history for a symbol.

    Raises:
        RateLimitError: provider answered 429
        UpstreamDataError: any other HTTP, network or payload failure
    """
    coin_id = get_coingecko_id(symbol)
    url = f"{base_url.rstrip('/')}/coins/{coin_id}/market_chart"
    params = {"vs_currency": vs_currency, "days": str(days), "interval": "daily"}
    headers = {"x-cg-demo-api-key": api_key} if api_key else None

    logger.info(f"Fetching {days}d history for {symbol} ({coin_id}) from CoinGecko...")

    try:
        async with session.get(url, params=params, headers=headers) as response:
            if response.status == 429:
                raise RateLimitError(
                    ADAPTER_NAME,
                    "Rate limit exceeded",
                    {"symbol": symbol, "status": response.status},
                )
            if response.status >= 400:
                raise UpstreamDataError(
                    ADAPTER_NAME,
                    f"Failed to fetch price history: HTTP {response.status}",
                    {"symbol": symbol, "status": response.status},
                )
            payload = await response.json()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.error(f"CoinGecko request failed for {symbol}: {e}")
        raise UpstreamDataError(
            ADAPTER_NAME,
            f"Failed to fetch price history: {e}",
            {"symbol": symbol},
        ) from e

    if not isinstance(payload, dict):
        raise UpstreamDataError(
            ADAPTER_NAME,
            f"Unexpected market chart payload for {symbol}",
            {"symbol": symbol},
        )

    return parse_market_chart(symbol, payload)
