"""Synthesis of future intraday prices with widening confidence bounds."""

from __future__ import annotations

import logging
from datetime import date, timedelta

from .random_stream import create_stream
from .types import FutureForecast, ModelMetrics, SeriesStatistics

LOGGER = logging.getLogger(__name__)

Z_SCORES: dict[int, float] = {90: 1.645, 95: 1.96, 99: 2.576}
DEFAULT_Z_SCORE = 1.96

FORECAST_SEED_OFFSET = 9999
BLOCK_MINUTES = 15
BLOCKS_PER_DAY = 24 * 60 // BLOCK_MINUTES

MORNING_FACTOR = 1.25
EVENING_FACTOR = 1.4
NIGHT_FACTOR = 0.75
WEEKEND_FACTOR = 0.92
DAILY_UNCERTAINTY_GROWTH = 0.05
NOISE_AMPLITUDE = 0.1


def z_score(confidence_level: float) -> float:
    """Two-sided z-score for a confidence level in percent.

    Only 90, 95 and 99 are tabulated; any other level uses the 95% value.
    """

    if confidence_level == 90:
        return Z_SCORES[90]
    if confidence_level == 99:
        return Z_SCORES[99]
    return DEFAULT_Z_SCORE


def hourly_factor(hour: int) -> float:
    if 6 <= hour < 10:
        return MORNING_FACTOR
    if 18 <= hour < 22:
        return EVENING_FACTOR
    if hour < 6:
        return NIGHT_FACTOR
    return 1.0


def format_date(value: date) -> str:
    return value.strftime("%d-%m-%Y")


def forecast(
    last_date: date,
    winner_metrics: ModelMetrics,
    statistics: SeriesStatistics,
    forecast_days: int,
    confidence_level: float,
    seed: int,
    *,
    history_length: int,
) -> tuple[FutureForecast, ...]:
    """Generate ``forecast_days`` days of 15-minute forecasts after ``last_date``.

    The shape comes from the historical mean, an hourly profile, the linear
    trend extended past the history and a weekend discount. Noise and the
    confidence half-width (winner RMSE times the z-score) both grow by 5% per
    day ahead. Entries are ordered by day, hour and quarter.
    """

    z = z_score(confidence_level)
    stream = create_stream(seed + FORECAST_SEED_OFFSET)
    forecasts: list[FutureForecast] = []

    for day in range(1, int(forecast_days) + 1):
        current_date = last_date + timedelta(days=day)
        is_weekend = current_date.weekday() >= 5
        growth = 1 + (day * DAILY_UNCERTAINTY_GROWTH)
        interval = winner_metrics.rmse * z * growth
        date_str = format_date(current_date)

        for hour in range(24):
            for minute in range(0, 60, BLOCK_MINUTES):
                base_price = statistics.mean * hourly_factor(hour)
                base_price += statistics.trend_slope * (history_length + len(forecasts))
                if is_weekend:
                    base_price *= WEEKEND_FACTOR

                random_variation = (stream() - 0.5) * NOISE_AMPLITUDE * growth
                price = max(0.0, base_price * (1 + random_variation))
                forecasts.append(
                    FutureForecast(
                        date=current_date,
                        date_str=date_str,
                        time_block=f"{hour:02d}:{minute:02d}",
                        price=price,
                        upper_bound=price + interval,
                        lower_bound=max(0.0, price - interval),
                    )
                )

    LOGGER.debug(
        "Generated %d forecast blocks (z=%.3f, rmse=%.6f).",
        len(forecasts),
        z,
        winner_metrics.rmse,
    )
    return tuple(forecasts)


__all__ = [
    "BLOCKS_PER_DAY",
    "DEFAULT_Z_SCORE",
    "Z_SCORES",
    "forecast",
    "format_date",
    "hourly_factor",
    "z_score",
]
