"""Tabular views of a simulation result for dashboards and exports."""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

from .forecast import BLOCKS_PER_DAY
from .types import SimulationResult

METRIC_COLUMNS: tuple[str, ...] = ("rmse", "mae", "mape", "r2", "directional_accuracy")
HIGH_VOLATILITY_THRESHOLD = 0.15


def leaderboard(
    result: SimulationResult,
    metric: str = "rmse",
    *,
    higher_is_better: bool = False,
) -> pd.DataFrame:
    """Rank the model panel by ``metric``.

    The sort is stable, so models with equal scores keep registry order.
    """

    if metric not in METRIC_COLUMNS:
        raise ValueError(f"Unknown metric '{metric}'. Expected one of {METRIC_COLUMNS}.")

    rows = []
    for name, prediction in result.model_results.items():
        row: dict[str, Any] = {"model": name}
        row.update(prediction.metrics.to_dict())
        row["color"] = prediction.color
        rows.append(row)
    frame = pd.DataFrame(rows, columns=["model", *METRIC_COLUMNS, "color"])
    frame = frame.sort_values(metric, ascending=not higher_is_better, kind="stable")
    return frame.reset_index(drop=True)


def validation_frame(result: SimulationResult, plot_days: int = 7) -> pd.DataFrame:
    """Actual versus best-model predictions over the last ``plot_days`` days.

    Windows longer than a week keep every fourth block (hourly resolution).
    """

    columns = ["date", "time", "actual", "predicted", "residual"]
    points = result.processed_data
    if not points:
        return pd.DataFrame(columns=columns)

    start = max(0, len(points) - int(plot_days) * BLOCKS_PER_DAY)
    positions = np.arange(start, len(points))
    if plot_days > 7:
        positions = positions[(positions - start) % 4 == 0]

    predictions = np.asarray(result.best_result.predictions, dtype=float)[positions]
    actual = np.asarray([points[i].mcp_kwh for i in positions], dtype=float)
    frame = pd.DataFrame(
        {
            "date": [points[i].date for i in positions],
            "time": [points[i].time_block.split("-")[0].strip() for i in positions],
            "actual": actual,
            "predicted": predictions,
            "residual": predictions - actual,
        },
        columns=columns,
    )
    return frame


def forecast_frame(result: SimulationResult) -> pd.DataFrame:
    columns = ["date", "date_str", "time_block", "price", "upper_bound", "lower_bound"]
    if not result.forecasts:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame([entry.to_dict() for entry in result.forecasts], columns=columns)


def summarize(result: SimulationResult) -> dict[str, Any]:
    """Headline figures shown alongside the winning model."""

    best = result.best_result
    characteristics = result.data_characteristics
    return {
        "best_model": result.best_model,
        "metrics": best.metrics.to_dict(),
        "volatility": characteristics.volatility,
        "volatility_label": (
            "High" if characteristics.volatility > HIGH_VOLATILITY_THRESHOLD else "Low"
        ),
        "trend": characteristics.trend,
        "data_length": characteristics.data_length,
        "confidence_score": min(99.9, best.metrics.r2 * 100),
        "forecast_blocks": len(result.forecasts),
    }


__all__ = [
    "HIGH_VOLATILITY_THRESHOLD",
    "METRIC_COLUMNS",
    "forecast_frame",
    "leaderboard",
    "summarize",
    "validation_frame",
]
