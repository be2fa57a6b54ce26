"""Command line entry point for the IEX price predictor."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import replace
from typing import Any

from iex_predictor.app import SUPPORTED_MODES, IEXPredictorApplication
from iex_predictor.config import load_config_from_file


def configure_logging(level: str) -> None:
    logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    default_mode = os.getenv("IEX_PREDICTOR_DEFAULT_MODE", "simulate")

    parser = argparse.ArgumentParser(
        description=(
            "Compare a panel of forecasting models on IEX market clearing prices "
            "and forecast the coming days."
        ),
    )
    parser.add_argument("--input", help="IEX market snapshot export (.xlsx, .xls or .csv).")
    parser.add_argument(
        "--mode",
        choices=list(SUPPORTED_MODES),
        default=default_mode,
        help="What to run (default: %(default)s).",
    )
    parser.add_argument(
        "--forecast-days",
        type=int,
        help="Number of days to forecast (1, 3, 5 or 7; default 7).",
    )
    parser.add_argument(
        "--confidence-level",
        type=int,
        help="Confidence level of the forecast band in percent (90, 95 or 99; default 95).",
    )
    parser.add_argument(
        "--plot-days",
        type=int,
        help="Days of history included in validation views (default 7).",
    )
    parser.add_argument("--config", help="JSON or YAML configuration file.")
    parser.add_argument("--output-dir", help="Directory for simulation.json and forecast.csv.")
    parser.add_argument(
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ...; default INFO).",
    )
    return parser.parse_args(argv)


def build_application(args: argparse.Namespace) -> IEXPredictorApplication:
    overrides: dict[str, Any] = {
        "input_path": args.input,
        "forecast_days": args.forecast_days,
        "confidence_level": args.confidence_level,
        "plot_days": args.plot_days,
        "output_dir": args.output_dir,
        "log_level": args.log_level,
    }
    if not args.config:
        return IEXPredictorApplication.from_environment(**overrides)

    config = load_config_from_file(args.config)
    explicit = {key: value for key, value in overrides.items() if value is not None}
    config = replace(config, **explicit)
    config.ensure_directories()
    return IEXPredictorApplication(config)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level or os.getenv("IEX_PREDICTOR_LOG_LEVEL") or "INFO")

    try:
        app = build_application(args)
        configure_logging(app.config.log_level)
        result = app.run(args.mode)
    except Exception as exc:  # pylint: disable=broad-except
        logging.exception("Simulation run failed")
        print(json.dumps({"status": "error", "message": str(exc)}), file=sys.stderr)
        return 1

    output = {"status": result.status, **result.payload}
    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
