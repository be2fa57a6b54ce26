import pytest
from conftest import daily_profile, make_series

from iex_predictor.core import run_simulation
from iex_predictor.core.reporting import (
    forecast_frame,
    leaderboard,
    summarize,
    validation_frame,
)


@pytest.fixture(scope="module")
def result():
    return run_simulation(make_series(daily_profile(10)), 3, 95)


def test_leaderboard_orders_by_rmse(result) -> None:
    board = leaderboard(result)
    assert list(board["rmse"]) == sorted(board["rmse"])
    assert board.loc[0, "model"] == result.best_model
    assert list(board.columns) == ["model", "rmse", "mae", "mape", "r2", "directional_accuracy", "color"]


def test_leaderboard_higher_is_better(result) -> None:
    board = leaderboard(result, "directional_accuracy", higher_is_better=True)
    values = list(board["directional_accuracy"])
    assert values == sorted(values, reverse=True)


def test_leaderboard_rejects_unknown_metric(result) -> None:
    with pytest.raises(ValueError):
        leaderboard(result, "sharpe")


def test_validation_frame_keeps_recent_window(result) -> None:
    frame = validation_frame(result, plot_days=2)
    assert len(frame) == 2 * 96
    assert frame["date"].iloc[-1] == result.processed_data[-1].date
    assert frame["time"].iloc[0] == "00:00"
    assert (frame["residual"] == frame["predicted"] - frame["actual"]).all()


def test_validation_frame_downsamples_long_windows(result) -> None:
    frame = validation_frame(result, plot_days=14)
    # Ten days are available; every fourth block is kept.
    assert len(frame) == 10 * 96 // 4
    assert set(frame["time"].str[-2:]) == {"00"}


def test_forecast_frame_matches_forecasts(result) -> None:
    frame = forecast_frame(result)
    assert len(frame) == 3 * 96
    assert frame.loc[0, "time_block"] == "00:00"
    assert (frame["lower_bound"] <= frame["price"]).all()


def test_summary_headlines(result) -> None:
    summary = summarize(result)
    best = result.best_result.metrics
    assert summary["best_model"] == result.best_model
    assert summary["confidence_score"] == min(99.9, best.r2 * 100)
    assert summary["volatility_label"] in {"High", "Low"}
    assert summary["volatility_label"] == ("High" if summary["volatility"] > 0.15 else "Low")
    assert summary["forecast_blocks"] == 3 * 96
    assert summary["data_length"] == 960


def test_empty_result_views() -> None:
    empty = run_simulation([], 1, 95)
    assert validation_frame(empty).empty
    assert forecast_frame(empty).empty
    assert len(leaderboard(empty)) == 6
