"""End-to-end orchestration of a deterministic simulation run."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Sequence

from .fingerprint import fingerprint
from .forecast import forecast
from .metrics import select_winner
from .models import MODEL_PANEL, score
from .simulation import simulate
from .statistics import analyze
from .types import DataCharacteristics, DataPoint, PredictionResult, SimulationResult

LOGGER = logging.getLogger(__name__)


def run_simulation(
    series: Sequence[DataPoint],
    forecast_days: int,
    confidence_level: float,
) -> SimulationResult:
    """Score the model panel on ``series`` and forecast the days that follow.

    Every value in the result is a pure function of the series content and
    the two parameters, except for an empty series: there the seed falls back
    to the wall clock, every model reports empty predictions with zero
    metrics, the first panel model wins and no forecast is produced.
    """

    points = tuple(series)
    seed = fingerprint(points)
    statistics = analyze(points)
    length = len(points)

    penalties = score(statistics, length, seed)
    model_results: dict[str, PredictionResult] = {}
    for profile in MODEL_PANEL:
        model_results[profile.name] = simulate(points, profile, penalties[profile.name], seed)

    best_model = select_winner(model_results, default=MODEL_PANEL[0].name)
    characteristics = DataCharacteristics(
        volatility=statistics.volatility,
        trend=statistics.trend_slope,
        data_length=length,
    )

    if not points:
        LOGGER.warning("No data points supplied; skipping forecast synthesis.")
        return SimulationResult(
            processed_data=points,
            model_results=MappingProxyType(model_results),
            best_model=best_model,
            forecasts=(),
            data_characteristics=characteristics,
        )

    forecasts = forecast(
        points[-1].date_obj,
        model_results[best_model].metrics,
        statistics,
        forecast_days,
        confidence_level,
        seed,
        history_length=length,
    )
    LOGGER.info(
        "Simulation complete: %d points, best model %s (RMSE %.6f), %d forecast blocks.",
        length,
        best_model,
        model_results[best_model].metrics.rmse,
        len(forecasts),
    )
    return SimulationResult(
        processed_data=points,
        model_results=MappingProxyType(model_results),
        best_model=best_model,
        forecasts=forecasts,
        data_characteristics=characteristics,
    )


__all__ = ["run_simulation"]
