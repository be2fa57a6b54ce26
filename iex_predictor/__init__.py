"""Deterministic model comparison and price forecasting for IEX market data."""

from iex_predictor.app import IEXPredictorApplication, RunResult
from iex_predictor.config import PredictorConfig, build_config, load_environment
from iex_predictor.core import (
    DataPoint,
    SimulationResult,
    run_simulation,
)
from iex_predictor.data import load_market_file
from iex_predictor.exceptions import DataFormatError

__all__ = [
    "DataFormatError",
    "DataPoint",
    "IEXPredictorApplication",
    "PredictorConfig",
    "RunResult",
    "SimulationResult",
    "build_config",
    "load_environment",
    "load_market_file",
    "run_simulation",
]
