"""Custom exceptions for the IEX price predictor."""

from __future__ import annotations

from pathlib import Path


class DataFormatError(ValueError):
    """Raised when a market data export cannot be interpreted."""

    def __init__(self, message: str, *, source: str | Path | None = None) -> None:
        self.source = str(source) if source is not None else None
        detail = f"{message} (source: {self.source})" if self.source else message
        super().__init__(detail)


__all__ = ["DataFormatError"]
