"""Accuracy metrics and winner selection for the simulated model panel."""

from __future__ import annotations

import math
from typing import Mapping, Sequence

from .types import ModelMetrics, PredictionResult


def root_mean_squared_error(errors: Sequence[float]) -> float:
    if not errors:
        return 0.0
    squared = 0.0
    for error in errors:
        squared += error * error
    return math.sqrt(squared / len(errors))


def mean_absolute_error(errors: Sequence[float]) -> float:
    if not errors:
        return 0.0
    total = 0.0
    for error in errors:
        total += error
    return total / len(errors)


def mean_absolute_percentage_error(errors: Sequence[float], actuals: Sequence[float]) -> float:
    """MAPE in percent; points with a zero actual price contribute 0."""

    if not errors:
        return 0.0
    total = 0.0
    for error, actual in zip(errors, actuals):
        total += 0.0 if actual == 0 else abs(error / actual)
    return (total / len(errors)) * 100


def r_squared(errors: Sequence[float], actuals: Sequence[float], actual_mean: float) -> float:
    """Coefficient of determination; 0 when the actual series has no variance."""

    ss_res = 0.0
    for error in errors:
        ss_res += error * error
    ss_tot = 0.0
    for actual in actuals:
        ss_tot += (actual - actual_mean) ** 2
    if ss_tot == 0:
        return 0.0
    return 1 - (ss_res / ss_tot)


def compute_metrics(
    errors: Sequence[float],
    actuals: Sequence[float],
    actual_mean: float,
    directional_accuracy: float,
) -> ModelMetrics:
    """Bundle every metric of a model into a :class:`ModelMetrics`."""

    return ModelMetrics(
        rmse=root_mean_squared_error(errors),
        mae=mean_absolute_error(errors),
        mape=mean_absolute_percentage_error(errors, actuals),
        r2=r_squared(errors, actuals, actual_mean),
        directional_accuracy=directional_accuracy,
    )


def select_winner(results: Mapping[str, PredictionResult], default: str | None = None) -> str:
    """Return the model with the lowest RMSE.

    Ties go to the model encountered first in iteration order. ``default`` is
    returned when ``results`` is empty.
    """

    best_model = default
    min_rmse = math.inf
    for name, result in results.items():
        if result.metrics.rmse < min_rmse:
            min_rmse = result.metrics.rmse
            best_model = name
    if best_model is None:
        raise ValueError("Cannot select a winner from an empty result set.")
    return best_model


__all__ = [
    "compute_metrics",
    "mean_absolute_error",
    "mean_absolute_percentage_error",
    "r_squared",
    "root_mean_squared_error",
    "select_winner",
]
