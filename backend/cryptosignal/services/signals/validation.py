"""
Series validation performed before any indicator is computed.
"""

from cryptosignal.core.thresholds import THRESHOLDS, SignalThresholds
from cryptosignal.schemas.market import PriceSeries
from cryptosignal.services.base import InsufficientHistoryError, MalformedSeriesError

VALIDATOR_NAME = "SeriesValidator"


def validate_series(
    series: PriceSeries, thresholds: SignalThresholds = THRESHOLDS
) -> None:
    """
    Reject series that cannot be analyzed.

    Raises:
        InsufficientHistoryError: fewer than ``min_history`` points
        MalformedSeriesError: timestamps go backwards

    Gaps and duplicate timestamps are accepted as-is.
    """
    length = len(series.points)
    if length < thresholds.min_history:
        raise InsufficientHistoryError(
            VALIDATOR_NAME,
            "Insufficient price history for technical analysis",
            {
                "symbol": series.symbol,
                "length": length,
                "required": thresholds.min_history,
            },
        )

    for index in range(1, length):
        if series.points[index].timestamp < series.points[index - 1].timestamp:
            raise MalformedSeriesError(
                VALIDATOR_NAME,
                "Price history is not in chronological order",
                {"symbol": series.symbol, "index": index},
            )
