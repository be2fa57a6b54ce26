import json

import pandas as pd
import pytest
from conftest import daily_profile, make_series, write_export

from iex_predictor.app import IEXPredictorApplication, RunResult
from iex_predictor.config import PredictorConfig


@pytest.fixture
def export_path(tmp_path):
    path = tmp_path / "snapshot.csv"
    write_export(path, daily_profile(3))
    return path


def test_simulate_mode_writes_outputs(export_path, tmp_path) -> None:
    output_dir = tmp_path / "out"
    app = IEXPredictorApplication(
        PredictorConfig(input_path=export_path, forecast_days=1, output_dir=output_dir)
    )

    result = app.run("simulate")

    assert isinstance(result, RunResult)
    assert result.status == "ok"
    assert len(result.payload["forecasts"]) == 96
    assert len(result.payload["leaderboard"]) == 6
    assert result.payload["summary"]["data_length"] == 3 * 96
    assert result.payload["outputs"]["forecast"] == str(output_dir / "forecast.csv")

    saved = json.loads((output_dir / "simulation.json").read_text(encoding="utf-8"))
    assert saved["best_model"] == result.payload["summary"]["best_model"]
    assert "processed_data" not in saved
    forecast = pd.read_csv(output_dir / "forecast.csv")
    assert len(forecast) == 96
    json.dumps(result.payload)


def test_summary_mode_omits_forecast_rows(export_path) -> None:
    app = IEXPredictorApplication(PredictorConfig(input_path=export_path, forecast_days=3))
    payload = app.run("Summary").payload
    assert "forecasts" not in payload
    assert "outputs" not in payload
    assert payload["summary"]["forecast_blocks"] == 3 * 96


def test_inspect_mode_describes_dataset(export_path) -> None:
    app = IEXPredictorApplication(PredictorConfig(input_path=export_path))
    dataset = app.run("inspect").payload["dataset"]
    assert dataset["data_length"] == 3 * 96
    assert dataset["first_date"] == "01-04-2024"
    assert dataset["last_date"] == "03-04-2024"
    assert dataset["mean_price"] > 0


def test_loaded_points_are_cached(export_path, tmp_path) -> None:
    app = IEXPredictorApplication(PredictorConfig(input_path=export_path))
    first = app.load_data()
    assert app.load_data() is first

    other = tmp_path / "other.csv"
    write_export(other, daily_profile(1))
    app.update_input(other)
    assert len(app.load_data()) == 96


def test_points_can_be_passed_directly() -> None:
    app = IEXPredictorApplication(PredictorConfig(forecast_days=1))
    series = make_series(daily_profile(2))
    result = app.run_simulation(series)
    assert len(result.processed_data) == 2 * 96
    assert app.inspect(series)["data_length"] == 2 * 96


def test_missing_input_is_reported() -> None:
    app = IEXPredictorApplication(PredictorConfig())
    with pytest.raises(ValueError, match="No input file"):
        app.run("simulate")


def test_unknown_mode_is_rejected(export_path) -> None:
    app = IEXPredictorApplication(PredictorConfig(input_path=export_path))
    with pytest.raises(ValueError, match="Unsupported mode"):
        app.run("train")


@pytest.mark.parametrize(("plot_days", "expected_rows"), [(1, 96), (2, 2 * 96), (7, 3 * 96)])
def test_simulate_payload_includes_validation_window(export_path, plot_days, expected_rows) -> None:
    app = IEXPredictorApplication(
        PredictorConfig(input_path=export_path, forecast_days=1, plot_days=plot_days)
    )
    validation = app.run("simulate").payload["validation"]
    assert len(validation) == min(3 * 96, plot_days * 96) == expected_rows
    assert set(validation[0]) == {"date", "time", "actual", "predicted", "residual"}
    assert validation[-1]["date"] == "03-04-2024"


def test_long_validation_windows_are_hourly(export_path) -> None:
    app = IEXPredictorApplication(PredictorConfig(input_path=export_path, plot_days=14))
    validation = app.run("simulate").payload["validation"]
    assert len(validation) == 3 * 96 // 4
    assert {row["time"][-2:] for row in validation} == {"00"}


def test_inspect_reports_calendar_coverage(export_path) -> None:
    app = IEXPredictorApplication(PredictorConfig(input_path=export_path))
    dataset = app.inspect()
    assert dataset["days"] == 3
    assert dataset["seasons"] == {"spring": 3 * 96}
    assert dataset["min_price"] <= dataset["mean_price"] <= dataset["max_price"]
    json.dumps(dataset)


def test_inspect_of_empty_dataset() -> None:
    dataset = IEXPredictorApplication(PredictorConfig()).inspect(())
    assert dataset["data_length"] == 0
    assert dataset["days"] == 0
    assert dataset["min_price"] is None
    assert dataset["seasons"] == {}
