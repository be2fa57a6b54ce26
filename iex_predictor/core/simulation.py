"""Per-point prediction simulation for a single model profile."""

from __future__ import annotations

from typing import Sequence

from .directional import DirectionalStats
from .metrics import compute_metrics
from .models import ModelProfile
from .random_stream import create_stream
from .statistics import mean, prices_of
from .types import DataPoint, PredictionResult

EVENING_PEAK_MULTIPLIER = 1.3
MORNING_PEAK_MULTIPLIER = 1.15
MONDAY_NIGHT_MULTIPLIER = 1.2


def difficulty_multiplier(point: DataPoint) -> float:
    """How much harder than usual the interval is to predict.

    Evening (18-22h) and morning (7-10h) peaks, and the early hours of
    Monday when demand restarts after the weekend.
    """

    multiplier = 1.0
    if 18 <= point.hour <= 22:
        multiplier = EVENING_PEAK_MULTIPLIER
    if 7 <= point.hour <= 10:
        multiplier = MORNING_PEAK_MULTIPLIER
    if point.day_of_week == 1 and point.hour < 6:
        multiplier = MONDAY_NIGHT_MULTIPLIER
    return multiplier


def model_seed(seed: int, model: ModelProfile) -> int:
    """Seed of the stream dedicated to ``model`` for a dataset seed."""

    return seed + model.seed_offset


def simulate(
    series: Sequence[DataPoint],
    model: ModelProfile,
    penalty: float,
    seed: int,
) -> PredictionResult:
    """Simulate ``model``'s predictions over ``series`` and score them.

    Each prediction is the actual price perturbed by up to ``penalty`` (scaled
    by the interval difficulty) in either direction, using noise drawn from a
    stream owned by this model alone.
    """

    stream = create_stream(model_seed(seed, model))
    directional = DirectionalStats()
    predictions: list[float] = []
    errors: list[float] = []

    previous_actual: float | None = None
    for point in series:
        actual = point.mcp_kwh
        noise = (stream() - 0.5) * 2
        relative_error = penalty * difficulty_multiplier(point) * noise
        predicted = max(0.0, actual + actual * relative_error)
        predictions.append(predicted)
        errors.append(abs(actual - predicted))

        if previous_actual is not None:
            directional.record(previous_actual, actual, predicted)
        previous_actual = actual

    actuals = prices_of(series)
    metrics = compute_metrics(
        errors,
        actuals,
        mean(actuals),
        directional.accuracy,
    )
    return PredictionResult(
        model_name=model.name,
        predictions=tuple(predictions),
        errors=tuple(errors),
        metrics=metrics,
        color=model.color,
    )


__all__ = ["difficulty_multiplier", "model_seed", "simulate"]
