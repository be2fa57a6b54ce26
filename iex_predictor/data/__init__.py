"""Ingestion of IEX market snapshot exports."""

from .parser import frame_from_points, load_market_file, parse_rows

__all__ = ["frame_from_points", "load_market_file", "parse_rows"]
