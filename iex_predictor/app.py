"""Top-level application orchestration for the IEX price predictor."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Sequence

from iex_predictor.config import PredictorConfig, build_config, load_environment
from iex_predictor.core import (
    DataPoint,
    SimulationResult,
    analyze,
    forecast_frame,
    leaderboard,
    run_simulation,
    summarize,
    validation_frame,
)
from iex_predictor.data import frame_from_points, load_market_file

LOGGER = logging.getLogger(__name__)

SUPPORTED_MODES: tuple[str, ...] = ("simulate", "summary", "inspect")


@dataclass(slots=True)
class RunResult:
    """Wrapper used by the application to provide consistent responses."""

    status: str
    payload: dict[str, Any]


class IEXPredictorApplication:
    """Coordinate data loading, the simulation engine and result exports."""

    def __init__(self, config: PredictorConfig) -> None:
        self.config = config
        self._points: tuple[DataPoint, ...] | None = None

    @classmethod
    def from_environment(cls, **overrides: Any) -> "IEXPredictorApplication":
        """Create an application instance using environment variables and overrides."""

        load_environment()
        config = build_config(**overrides)
        LOGGER.debug("Initialised configuration for %s", config.input_path)
        return cls(config)

    # ------------------------------------------------------------------
    # High level orchestration helpers
    # ------------------------------------------------------------------
    def load_data(self, *, force: bool = False) -> tuple[DataPoint, ...]:
        """Parse the configured input file, caching the points for later calls."""

        if self._points is not None and not force:
            return self._points
        if self.config.input_path is None:
            raise ValueError("No input file configured. Pass --input or set IEX_PREDICTOR_INPUT_PATH.")
        self._points = load_market_file(self.config.input_path)
        LOGGER.info("Loaded %d data points from %s", len(self._points), self.config.input_path)
        return self._points

    def update_input(self, path: str | Path) -> None:
        """Point the application at a new file and drop previously loaded data."""

        self.config = replace(self.config, input_path=Path(path))
        self._points = None

    def run_simulation(self, points: Sequence[DataPoint] | None = None) -> SimulationResult:
        """Run the engine on ``points`` (or the configured file) and export results."""

        series = tuple(points) if points is not None else self.load_data()
        result = run_simulation(
            series,
            self.config.forecast_days,
            self.config.confidence_level,
        )
        self._persist_outputs(result)
        return result

    def inspect(self, points: Sequence[DataPoint] | None = None) -> dict[str, Any]:
        """Describe the dataset without simulating any model."""

        series = tuple(points) if points is not None else self.load_data()
        statistics = analyze(series)
        frame = frame_from_points(series)
        return {
            "data_length": len(series),
            "first_date": series[0].date if series else None,
            "last_date": series[-1].date if series else None,
            "mean_price": statistics.mean,
            "std_dev": statistics.std_dev,
            "volatility": statistics.volatility,
            "trend": statistics.trend_slope,
            "days": int(frame["date_obj"].nunique()),
            "min_price": float(frame["mcp_kwh"].min()) if series else None,
            "max_price": float(frame["mcp_kwh"].max()) if series else None,
            "seasons": {str(key): int(value) for key, value in frame["season"].value_counts().items()},
        }

    def run(self, mode: str) -> RunResult:
        """Dispatch a CLI/API mode and wrap the outcome in a :class:`RunResult`."""

        normalized = str(mode).strip().lower()
        if normalized not in SUPPORTED_MODES:
            raise ValueError(f"Unsupported mode '{mode}'. Expected one of {SUPPORTED_MODES}.")

        if normalized == "inspect":
            return RunResult(status="ok", payload={"dataset": self.inspect()})

        result = self.run_simulation()
        payload: dict[str, Any] = {
            "summary": summarize(result),
            "leaderboard": leaderboard(result).to_dict(orient="records"),
        }
        if normalized == "simulate":
            payload["forecasts"] = [entry.to_dict() for entry in result.forecasts]
            payload["validation"] = validation_frame(result, self.config.plot_days).to_dict(
                orient="records"
            )
        outputs = self._output_paths()
        if outputs:
            payload["outputs"] = outputs
        return RunResult(status="ok", payload=payload)

    # ------------------------------------------------------------------
    # Persistence of run artefacts
    # ------------------------------------------------------------------
    def _output_paths(self) -> dict[str, str]:
        if self.config.output_dir is None:
            return {}
        return {
            "simulation": str(self.config.simulation_path),
            "forecast": str(self.config.forecast_path),
        }

    def _persist_outputs(self, result: SimulationResult) -> None:
        if self.config.output_dir is None:
            return
        self.config.ensure_directories()
        simulation_path = self.config.simulation_path
        forecast_path = self.config.forecast_path
        with simulation_path.open("w", encoding="utf-8") as handle:
            json.dump(result.to_dict(), handle, indent=2)
        forecast_frame(result).to_csv(forecast_path, index=False)
        LOGGER.info("Wrote simulation outputs to %s", self.config.output_dir)


__all__ = ["IEXPredictorApplication", "RunResult", "SUPPORTED_MODES"]
