"""Configuration utilities for the IEX price predictor."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import load_dotenv

LOGGER = logging.getLogger(__name__)

SUPPORTED_FORECAST_DAYS: tuple[int, ...] = (1, 3, 5, 7)
SUPPORTED_CONFIDENCE_LEVELS: tuple[int, ...] = (90, 95, 99)

DEFAULT_FORECAST_DAYS = 7
DEFAULT_CONFIDENCE_LEVEL = 95
DEFAULT_PLOT_DAYS = 7
DEFAULT_LOG_LEVEL = "INFO"

ENV_PREFIX = "IEX_PREDICTOR_"


@dataclass
class PredictorConfig:
    """Runtime configuration for :class:`IEXPredictorApplication`."""

    input_path: Optional[Path] = None
    forecast_days: int = DEFAULT_FORECAST_DAYS
    confidence_level: int = DEFAULT_CONFIDENCE_LEVEL
    plot_days: int = DEFAULT_PLOT_DAYS
    output_dir: Optional[Path] = None
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if self.input_path is not None:
            self.input_path = Path(self.input_path).expanduser()
        if self.output_dir is not None:
            self.output_dir = Path(self.output_dir).expanduser()
        self.forecast_days = _coerce_int(self.forecast_days, "forecast_days")
        self.confidence_level = _coerce_int(self.confidence_level, "confidence_level")
        self.plot_days = _coerce_int(self.plot_days, "plot_days")
        self.log_level = str(self.log_level or DEFAULT_LOG_LEVEL).strip().upper()

        if self.forecast_days < 0:
            raise ValueError("forecast_days must not be negative.")
        if self.plot_days <= 0:
            raise ValueError("plot_days must be positive.")
        if self.forecast_days not in SUPPORTED_FORECAST_DAYS:
            LOGGER.warning(
                "forecast_days=%s is outside the supported set %s.",
                self.forecast_days,
                SUPPORTED_FORECAST_DAYS,
            )
        if self.confidence_level not in SUPPORTED_CONFIDENCE_LEVELS:
            LOGGER.warning(
                "confidence_level=%s is not tabulated; the 95%% z-score will be used.",
                self.confidence_level,
            )

    def ensure_directories(self) -> None:
        """Create the output directory when one is configured."""

        if self.output_dir is not None:
            self.output_dir.mkdir(parents=True, exist_ok=True)

    @property
    def simulation_path(self) -> Optional[Path]:
        return self.output_dir / "simulation.json" if self.output_dir else None

    @property
    def forecast_path(self) -> Optional[Path]:
        return self.output_dir / "forecast.csv" if self.output_dir else None


def _coerce_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer.")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be an integer.") from exc
    if not number.is_integer():
        raise ValueError(f"{name} must be an integer.")
    return int(number)


def load_environment() -> None:
    """Load configuration from an optional ``.env`` file."""

    load_dotenv()


def _env(name: str) -> Optional[str]:
    value = os.getenv(f"{ENV_PREFIX}{name}")
    return value if value not in (None, "") else None


def build_config(
    input_path: Optional[str | Path] = None,
    forecast_days: Optional[int] = None,
    confidence_level: Optional[int] = None,
    plot_days: Optional[int] = None,
    output_dir: Optional[str | Path] = None,
    log_level: Optional[str] = None,
) -> PredictorConfig:
    """Build a :class:`PredictorConfig` from overrides, the environment and defaults."""

    load_environment()

    config = PredictorConfig(
        input_path=input_path or _env("INPUT_PATH"),
        forecast_days=forecast_days
        if forecast_days is not None
        else _env("FORECAST_DAYS") or DEFAULT_FORECAST_DAYS,
        confidence_level=confidence_level
        if confidence_level is not None
        else _env("CONFIDENCE_LEVEL") or DEFAULT_CONFIDENCE_LEVEL,
        plot_days=plot_days if plot_days is not None else _env("PLOT_DAYS") or DEFAULT_PLOT_DAYS,
        output_dir=output_dir or _env("OUTPUT_DIR"),
        log_level=log_level or _env("LOG_LEVEL") or DEFAULT_LOG_LEVEL,
    )
    config.ensure_directories()
    return config


def load_config_from_mapping(payload: Mapping[str, Any]) -> PredictorConfig:
    """Create a :class:`PredictorConfig` from a mapping (JSON/YAML)."""

    load_environment()

    known_fields = {field.name for field in fields(PredictorConfig)}
    data: dict[str, Any] = {
        key: value for key, value in payload.items() if key in known_fields and value is not None
    }
    ignored = sorted(set(payload) - known_fields)
    if ignored:
        LOGGER.debug("Ignoring unknown configuration keys: %s", ", ".join(map(str, ignored)))

    config = PredictorConfig(**data)
    config.ensure_directories()
    return config


def load_config_from_file(path: str | Path) -> PredictorConfig:
    """Load configuration from a JSON or YAML file."""

    resolved = Path(path).expanduser().resolve()
    with resolved.open("r", encoding="utf-8") as handle:
        if resolved.suffix.lower() in {".yaml", ".yml"}:
            payload = yaml.safe_load(handle) or {}
        else:
            payload = json.load(handle)

    if not isinstance(payload, Mapping):
        raise TypeError("Configuration file must define a mapping of values.")

    return load_config_from_mapping(payload)


__all__ = [
    "DEFAULT_CONFIDENCE_LEVEL",
    "DEFAULT_FORECAST_DAYS",
    "DEFAULT_PLOT_DAYS",
    "PredictorConfig",
    "SUPPORTED_CONFIDENCE_LEVELS",
    "SUPPORTED_FORECAST_DAYS",
    "build_config",
    "load_config_from_file",
    "load_config_from_mapping",
    "load_environment",
]
