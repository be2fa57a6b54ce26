"""Descriptive statistics of a clearing price series."""

from __future__ import annotations

import math
from typing import Sequence

from .types import DataPoint, SeriesStatistics


def prices_of(series: Sequence[DataPoint]) -> list[float]:
    """Return the Rs/kWh clearing prices in series order."""

    return [point.mcp_kwh for point in series]


def mean(values: Sequence[float]) -> float:
    total = 0.0
    for value in values:
        total += value
    return total / (len(values) or 1)


def population_std(values: Sequence[float]) -> float:
    """Standard deviation dividing by ``N``; 0 for an empty sequence."""

    if not values:
        return 0.0
    centre = mean(values)
    squared = 0.0
    for value in values:
        squared += (value - centre) ** 2
    return math.sqrt(squared / len(values))


def trend_slope(values: Sequence[float]) -> float:
    """Closed-form OLS slope of ``values`` against their zero-based index.

    A degenerate denominator (fewer than two points) is replaced by 1, which
    yields a slope of 0 instead of a division error.
    """

    n = len(values)
    x_sum = n * (n - 1) / 2
    x_squared_sum = (n * (n - 1) * (2 * n - 1)) / 6
    y_sum = 0.0
    xy_sum = 0.0
    for index, value in enumerate(values):
        y_sum += value
        xy_sum += index * value
    denominator = n * x_squared_sum - x_sum * x_sum
    return (n * xy_sum - x_sum * y_sum) / (denominator or 1)


def analyze(series: Sequence[DataPoint]) -> SeriesStatistics:
    """Compute mean, dispersion, volatility and trend of ``series``."""

    prices = prices_of(series)
    mean_price = mean(prices)
    std_dev = population_std(prices)
    volatility = 0.0 if mean_price == 0 else std_dev / mean_price
    return SeriesStatistics(
        mean=mean_price,
        std_dev=std_dev,
        volatility=volatility,
        trend_slope=trend_slope(prices),
    )


__all__ = ["analyze", "mean", "population_std", "prices_of", "trend_slope"]
