"""Load IEX market snapshot exports into :class:`DataPoint` records."""

from __future__ import annotations

import csv
import logging
import math
from dataclasses import asdict
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable, Sequence

import pandas as pd

from ..core.types import DataPoint, Season, TimeOfDay
from ..exceptions import DataFormatError

LOGGER = logging.getLogger(__name__)

HEADER_SCAN_ROWS = 20
SUMMARY_MARKERS: tuple[str, ...] = ("Total", "Max", "Min", "Avg")
EXCEL_ENGINES: dict[str, str] = {".xlsx": "openpyxl", ".xlsm": "openpyxl", ".xls": "xlrd"}
CSV_SUFFIXES = {".csv", ".txt"}

COLUMN_PATTERNS: dict[str, str] = {
    "date": "Date",
    "time_block": "Time Block",
    "purchase_bid": "Purchase",
    "sell_bid": "Sell",
    "mcv": "MCV",
    "mcp": "MCP",
}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _cell_text(value: Any) -> str:
    return "" if _is_blank(value) else str(value).strip()


def _to_float(value: Any) -> float | None:
    """Interpret a spreadsheet cell as a float, or ``None`` when it is not numeric."""

    if _is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).replace(",", "").strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def find_header_row(rows: Sequence[Sequence[Any]]) -> int:
    """Index of the first row naming both a ``Date`` and an ``MCP`` column."""

    for index, row in enumerate(rows[:HEADER_SCAN_ROWS]):
        cells = [_cell_text(cell) for cell in row]
        if any("Date" in cell for cell in cells) and any("MCP" in cell for cell in cells):
            return index
    raise DataFormatError('Could not find header row (must contain "Date" and "MCP").')


def map_columns(header: Sequence[Any]) -> dict[str, int | None]:
    """Map each known field to the first header cell containing its pattern."""

    labels = [_cell_text(cell) for cell in header]
    mapping: dict[str, int | None] = {}
    for key, pattern in COLUMN_PATTERNS.items():
        mapping[key] = next(
            (position for position, label in enumerate(labels) if pattern in label),
            None,
        )
    return mapping


def _cell(row: Sequence[Any], position: int | None) -> Any:
    if position is None or position >= len(row):
        return None
    return row[position]


def parse_date(value: Any) -> tuple[str, date] | None:
    """Return the ``DD-MM-YYYY`` label and calendar date of a date cell."""

    if isinstance(value, datetime):
        parsed = value.date()
        return parsed.strftime("%d-%m-%Y"), parsed
    if isinstance(value, date):
        return value.strftime("%d-%m-%Y"), value

    label = _cell_text(value)
    parts = label.replace("/", "-").split("-")
    if len(parts) != 3:
        return None
    try:
        day, month, year = (int(part) for part in parts)
    except ValueError:
        return None
    if year < 100:
        year += 2000
    try:
        return label, date(year, month, day)
    except ValueError:
        return None


def parse_time_block(label: str) -> tuple[int, int]:
    """Start hour and minute of a ``"HH:MM - HH:MM"`` block label."""

    start = label.split("-")[0].strip()
    pieces = start.split(":")
    values: list[int] = []
    for piece in pieces[:2]:
        try:
            values.append(int(piece))
        except ValueError:
            values.append(0)
    while len(values) < 2:
        values.append(0)
    return values[0], values[1]


def season_for_month(month: int) -> Season:
    if month >= 12 or month <= 2:
        return "winter"
    if 3 <= month <= 5:
        return "spring"
    if 6 <= month <= 8:
        return "summer"
    return "monsoon"


def time_of_day_for_hour(hour: int) -> TimeOfDay:
    if 6 <= hour < 12:
        return "morning"
    if 12 <= hour < 18:
        return "afternoon"
    if 18 <= hour < 22:
        return "evening"
    return "night"


def _is_summary_row(date_label: str) -> bool:
    return any(marker in date_label for marker in SUMMARY_MARKERS)


def parse_rows(rows: Iterable[Sequence[Any]], *, require_rows: bool = False) -> tuple[DataPoint, ...]:
    """Turn raw spreadsheet rows (header included) into data points.

    Summary lines (Total/Max/Min/Avg), blank dates and rows without a numeric
    MCP are skipped. ``require_rows`` turns an empty result into an error.
    """

    materialised = [list(row) for row in rows]
    header_index = find_header_row(materialised)
    columns = map_columns(materialised[header_index])

    points: list[DataPoint] = []
    skipped = 0
    for row in materialised[header_index + 1 :]:
        raw_date = _cell(row, columns["date"])
        date_label = _cell_text(raw_date)
        mcp_value = _to_float(_cell(row, columns["mcp"]))
        if not date_label or _is_summary_row(date_label) or mcp_value is None:
            skipped += 1
            continue

        parsed_date = parse_date(raw_date)
        if parsed_date is None:
            LOGGER.warning("Skipping row with unparseable date %r.", date_label)
            skipped += 1
            continue
        label, calendar_date = parsed_date

        time_block = _cell_text(_cell(row, columns["time_block"]))
        hour, minute = parse_time_block(time_block)
        day_of_week = calendar_date.isoweekday() % 7

        points.append(
            DataPoint(
                date=label,
                date_obj=calendar_date,
                time_block=time_block,
                purchase_bid=_to_float(_cell(row, columns["purchase_bid"])) or 0.0,
                sell_bid=_to_float(_cell(row, columns["sell_bid"])) or 0.0,
                mcv=_to_float(_cell(row, columns["mcv"])) or 0.0,
                mcp_mwh=mcp_value,
                mcp_kwh=mcp_value / 1000,
                hour=hour,
                minute=minute,
                day_of_week=day_of_week,
                is_weekend=day_of_week in (0, 6),
                season=season_for_month(calendar_date.month),
                time_of_day=time_of_day_for_hour(hour),
            )
        )

    LOGGER.debug("Parsed %d data points (%d rows skipped).", len(points), skipped)
    if require_rows and not points:
        raise DataFormatError("No market data rows found below the header.")
    return tuple(points)


def read_raw_rows(path: str | Path) -> list[list[Any]]:
    """Read the first sheet of ``path`` without interpreting a header.

    Exports start with free-text title lines that are narrower than the data
    table, so CSV files are read row by row rather than as a rectangular frame.
    """

    resolved = Path(path).expanduser()
    suffix = resolved.suffix.lower()
    if suffix in EXCEL_ENGINES:
        frame = pd.read_excel(resolved, sheet_name=0, header=None, engine=EXCEL_ENGINES[suffix])
        return frame.values.tolist()
    if suffix in CSV_SUFFIXES:
        with resolved.open("r", encoding="utf-8-sig", newline="") as handle:
            return [row for row in csv.reader(handle)]
    raise DataFormatError(f"Unsupported file type '{suffix or resolved.name}'.", source=resolved)


def load_market_file(path: str | Path, *, require_rows: bool = True) -> tuple[DataPoint, ...]:
    """Load and parse an IEX export from disk."""

    LOGGER.info("Loading market data from %s", path)
    rows = read_raw_rows(path)
    try:
        return parse_rows(rows, require_rows=require_rows)
    except DataFormatError as exc:
        if exc.source is None:
            raise DataFormatError(str(exc), source=path) from exc
        raise


def frame_from_points(points: Sequence[DataPoint]) -> pd.DataFrame:
    """Tabulate parsed points, one column per field."""

    columns = list(DataPoint.__dataclass_fields__)
    if not points:
        return pd.DataFrame(columns=columns)
    frame = pd.DataFrame([asdict(point) for point in points], columns=columns)
    frame["date_obj"] = pd.to_datetime(frame["date_obj"])
    return frame


__all__ = [
    "find_header_row",
    "frame_from_points",
    "load_market_file",
    "map_columns",
    "parse_date",
    "parse_rows",
    "parse_time_block",
    "read_raw_rows",
    "season_for_month",
    "time_of_day_for_hour",
]
