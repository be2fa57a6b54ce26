"""Shared builders for market data used across the test-suite."""

from __future__ import annotations

import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Callable, Sequence

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from iex_predictor.core.models import MODEL_PANEL, ModelProfile  # noqa: E402
from iex_predictor.core.types import DataPoint  # noqa: E402
from iex_predictor.data.parser import season_for_month, time_of_day_for_hour  # noqa: E402


def make_point(day: date, block: int, price_kwh: float) -> DataPoint:
    """Build the ``block``-th 15-minute interval of ``day``."""

    hour, quarter = divmod(block, 4)
    minute = quarter * 15
    end_minutes = hour * 60 + minute + 15
    end_label = f"{end_minutes // 60:02d}:{end_minutes % 60:02d}"
    day_of_week = day.isoweekday() % 7
    return DataPoint(
        date=day.strftime("%d-%m-%Y"),
        date_obj=day,
        time_block=f"{hour:02d}:{minute:02d} - {end_label}",
        purchase_bid=1000.0,
        sell_bid=1200.0,
        mcv=900.0,
        mcp_mwh=price_kwh * 1000,
        mcp_kwh=price_kwh,
        hour=hour,
        minute=minute,
        day_of_week=day_of_week,
        is_weekend=day_of_week in (0, 6),
        season=season_for_month(day.month),
        time_of_day=time_of_day_for_hour(hour),
    )


def make_series(prices: Sequence[float], start: date = date(2024, 4, 1)) -> tuple[DataPoint, ...]:
    """Lay ``prices`` out as consecutive 15-minute blocks starting at midnight."""

    points = []
    for index, price in enumerate(prices):
        day_offset, block = divmod(index, 96)
        points.append(make_point(start + timedelta(days=day_offset), block, price))
    return tuple(points)


def daily_profile(days: int, base: float = 4.0) -> list[float]:
    """A repeating intraday shape with a gentle upward drift."""

    prices = []
    for index in range(days * 96):
        hour = (index % 96) // 4
        shape = 1.4 if 18 <= hour < 22 else 0.8 if hour < 6 else 1.0
        prices.append(round(base * shape + 0.0005 * index + 0.05 * ((index * 7) % 11), 4))
    return prices


@pytest.fixture
def series_factory() -> Callable[..., tuple[DataPoint, ...]]:
    return make_series


@pytest.fixture
def constant_day() -> tuple[DataPoint, ...]:
    """One full day at a flat Rs 3.0/kWh."""

    return make_series([3.0] * 96)


@pytest.fixture
def two_week_series() -> tuple[DataPoint, ...]:
    return make_series(daily_profile(14))


def write_export(path: Path, prices: Sequence[float]) -> None:
    """Write ``prices`` (Rs/kWh) as a CSV market snapshot with a title line."""

    lines = [
        "IEX Market Snapshot",
        "Date,Hour,Time Block,Purchase Bid (MW),Sell Bid (MW),MCV (MW),MCP (Rs/MWh)",
    ]
    for point in make_series(prices):
        lines.append(
            f"{point.date},{point.hour + 1},{point.time_block},1000,1200,900,{point.mcp_kwh * 1000:.2f}"
        )
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def stepped_series() -> tuple[DataPoint, ...]:
    """Two days whose prices are exact binary fractions, with a raised evening."""

    prices = [3 + (index % 7) * 0.25 + (1.5 if index % 96 >= 72 else 0.0) for index in range(192)]
    return make_series(prices)


def panel_profile(name: str) -> ModelProfile:
    return {profile.name: profile for profile in MODEL_PANEL}[name]
