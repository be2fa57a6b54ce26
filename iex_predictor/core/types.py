"""Data containers shared by the ingestion layer and the simulation engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Literal, Mapping

Season = Literal["winter", "spring", "summer", "monsoon"]
TimeOfDay = Literal["morning", "afternoon", "evening", "night"]


@dataclass(frozen=True)
class DataPoint:
    """A single 15-minute market interval from an IEX snapshot export.

    ``day_of_week`` counts from Sunday (0) to Saturday (6). Prices are kept
    in both Rs/MWh (as published) and Rs/kWh; the engine works in Rs/kWh.
    """

    date: str
    date_obj: date
    time_block: str
    purchase_bid: float
    sell_bid: float
    mcv: float
    mcp_mwh: float
    mcp_kwh: float
    hour: int
    minute: int
    day_of_week: int
    is_weekend: bool
    season: Season
    time_of_day: TimeOfDay

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["date_obj"] = self.date_obj.isoformat()
        return payload


@dataclass(frozen=True)
class SeriesStatistics:
    """Descriptive statistics of the clearing price series."""

    mean: float = 0.0
    std_dev: float = 0.0
    volatility: float = 0.0
    trend_slope: float = 0.0

    @property
    def trend_strength(self) -> float:
        """Absolute slope scaled so it reads against the scoring thresholds."""

        return abs(self.trend_slope) * 1000


@dataclass(frozen=True)
class ModelMetrics:
    """Accuracy metrics for one simulated model."""

    rmse: float = 0.0
    mae: float = 0.0
    mape: float = 0.0
    r2: float = 0.0
    directional_accuracy: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class PredictionResult:
    """Simulated predictions and errors of a model, aligned with the input series."""

    model_name: str
    predictions: tuple[float, ...]
    errors: tuple[float, ...]
    metrics: ModelMetrics
    color: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "model_name": self.model_name,
            "predictions": list(self.predictions),
            "errors": list(self.errors),
            "metrics": self.metrics.to_dict(),
            "color": self.color,
        }


@dataclass(frozen=True)
class FutureForecast:
    """Forecast for one future time block with its confidence band."""

    date: date
    date_str: str
    time_block: str
    price: float
    upper_bound: float
    lower_bound: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "date_str": self.date_str,
            "time_block": self.time_block,
            "price": self.price,
            "upper_bound": self.upper_bound,
            "lower_bound": self.lower_bound,
        }


@dataclass(frozen=True)
class DataCharacteristics:
    volatility: float = 0.0
    trend: float = 0.0
    data_length: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SimulationResult:
    """Complete output of a single engine run."""

    processed_data: tuple[DataPoint, ...]
    model_results: Mapping[str, PredictionResult]
    best_model: str
    forecasts: tuple[FutureForecast, ...]
    data_characteristics: DataCharacteristics = field(default_factory=DataCharacteristics)

    @property
    def best_result(self) -> PredictionResult:
        return self.model_results[self.best_model]

    def to_dict(self, *, include_data: bool = False) -> dict[str, Any]:
        """Return a JSON-serialisable representation of the run."""

        payload: dict[str, Any] = {
            "best_model": self.best_model,
            "model_results": {
                name: result.to_dict() for name, result in self.model_results.items()
            },
            "forecasts": [entry.to_dict() for entry in self.forecasts],
            "data_characteristics": self.data_characteristics.to_dict(),
        }
        if include_data:
            payload["processed_data"] = [point.to_dict() for point in self.processed_data]
        return payload


__all__ = [
    "DataCharacteristics",
    "DataPoint",
    "FutureForecast",
    "ModelMetrics",
    "PredictionResult",
    "Season",
    "SeriesStatistics",
    "SimulationResult",
    "TimeOfDay",
]
