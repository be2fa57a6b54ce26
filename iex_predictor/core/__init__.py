"""Deterministic simulation and scoring engine."""

from iex_predictor.core.engine import run_simulation
from iex_predictor.core.fingerprint import fingerprint
from iex_predictor.core.forecast import forecast, z_score
from iex_predictor.core.metrics import compute_metrics, select_winner
from iex_predictor.core.models import (
    MODEL_NAMES,
    MODEL_PANEL,
    ModelCategory,
    ModelProfile,
    score,
)
from iex_predictor.core.random_stream import RandomStream, create_stream
from iex_predictor.core.reporting import (
    forecast_frame,
    leaderboard,
    summarize,
    validation_frame,
)
from iex_predictor.core.simulation import simulate
from iex_predictor.core.statistics import analyze
from iex_predictor.core.types import (
    DataCharacteristics,
    DataPoint,
    FutureForecast,
    ModelMetrics,
    PredictionResult,
    SeriesStatistics,
    SimulationResult,
)

__all__ = [
    "DataCharacteristics",
    "DataPoint",
    "FutureForecast",
    "MODEL_NAMES",
    "MODEL_PANEL",
    "ModelCategory",
    "ModelMetrics",
    "ModelProfile",
    "PredictionResult",
    "RandomStream",
    "SeriesStatistics",
    "SimulationResult",
    "analyze",
    "compute_metrics",
    "create_stream",
    "fingerprint",
    "forecast",
    "forecast_frame",
    "leaderboard",
    "run_simulation",
    "score",
    "select_winner",
    "simulate",
    "summarize",
    "validation_frame",
    "z_score",
]
