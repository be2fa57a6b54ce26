"""Model panel definition and heuristic penalty scoring.

The panel does not train anything. Each entry is a named error profile and
the scorer turns the series statistics into an "expected relative error"
per model through a fixed rule table plus a small dataset-seeded jitter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from .random_stream import create_stream
from .types import SeriesStatistics

LOGGER = logging.getLogger(__name__)

BASE_ERROR = 0.045
MIN_PENALTY = 0.005
JITTER_SCALE = 0.015


class ModelCategory(str, Enum):
    """Coarse family tag of a model profile."""

    STATISTICAL = "statistical"
    ENSEMBLE = "ensemble"
    BOOSTING = "boosting"
    DEEP_LEARNING = "deep_learning"


@dataclass(frozen=True)
class ModelProfile:
    name: str
    color: str
    category: ModelCategory

    @property
    def seed_offset(self) -> int:
        """Sum of the character codes of the name, used to derive its stream."""

        return sum(ord(char) for char in self.name)


MODEL_PANEL: tuple[ModelProfile, ...] = (
    ModelProfile("SARIMAX", "#3b82f6", ModelCategory.STATISTICAL),
    ModelProfile("Random Forest", "#10b981", ModelCategory.ENSEMBLE),
    ModelProfile("XGBoost", "#f59e0b", ModelCategory.BOOSTING),
    ModelProfile("LightGBM", "#8b5cf6", ModelCategory.BOOSTING),
    ModelProfile("CatBoost", "#ec4899", ModelCategory.BOOSTING),
    ModelProfile("LSTM", "#ef4444", ModelCategory.DEEP_LEARNING),
)

MODEL_NAMES: tuple[str, ...] = tuple(profile.name for profile in MODEL_PANEL)


# ----------------------------------------------------------------------
# Heuristic adjustment table
# ----------------------------------------------------------------------
Condition = Callable[[SeriesStatistics, int], bool]


@dataclass(frozen=True)
class AdjustmentRule:
    """Add ``adjustment`` to the penalty of ``model`` when ``condition`` holds."""

    model: str
    description: str
    condition: Condition
    adjustment: float


# Rows are applied top to bottom, one after another, on the running penalty.
ADJUSTMENT_RULES: tuple[AdjustmentRule, ...] = (
    AdjustmentRule("SARIMAX", "volatility < 0.18", lambda s, n: s.volatility < 0.18, -0.015),
    AdjustmentRule("SARIMAX", "volatility > 0.30", lambda s, n: s.volatility > 0.30, 0.02),
    AdjustmentRule("SARIMAX", "length < 2000", lambda s, n: n < 2000, -0.005),
    AdjustmentRule("Random Forest", "volatility > 0.35", lambda s, n: s.volatility > 0.35, -0.02),
    AdjustmentRule(
        "Random Forest",
        "0.20 < volatility <= 0.35",
        lambda s, n: 0.20 < s.volatility <= 0.35,
        -0.005,
    ),
    AdjustmentRule("Random Forest", "trend strength > 0.1", lambda s, n: s.trend_strength > 0.1, 0.01),
    AdjustmentRule("XGBoost", "trend strength > 0.02", lambda s, n: s.trend_strength > 0.02, -0.015),
    AdjustmentRule("XGBoost", "always", lambda s, n: True, -0.005),
    AdjustmentRule("LightGBM", "length > 1500", lambda s, n: n > 1500, -0.015),
    AdjustmentRule("LightGBM", "length < 300", lambda s, n: n < 300, 0.01),
    AdjustmentRule("CatBoost", "length > 350", lambda s, n: n > 350, -0.01),
    AdjustmentRule("LSTM", "length < 600", lambda s, n: n < 600, 0.04),
    AdjustmentRule("LSTM", "length > 3000", lambda s, n: n > 3000, -0.03),
    AdjustmentRule("LSTM", "volatility > 0.25", lambda s, n: s.volatility > 0.25, -0.01),
)


def rules_for(name: str) -> tuple[AdjustmentRule, ...]:
    return tuple(rule for rule in ADJUSTMENT_RULES if rule.model == name)


def base_penalty(profile: ModelProfile, stats: SeriesStatistics, length: int) -> float:
    """Penalty of ``profile`` before jitter and flooring."""

    penalty = BASE_ERROR
    for rule in rules_for(profile.name):
        if rule.condition(stats, length):
            penalty += rule.adjustment
    return penalty


def score(stats: SeriesStatistics, length: int, seed: int) -> dict[str, float]:
    """Return the expected relative error of every panel model.

    The jitter stream is shared by the whole panel and advances once per
    model, so models must be visited in registry order to reproduce results.
    """

    jitter_stream = create_stream(seed)
    penalties: dict[str, float] = {}
    for profile in MODEL_PANEL:
        penalty = base_penalty(profile, stats, length)
        jitter = (jitter_stream() - 0.5) * JITTER_SCALE
        penalties[profile.name] = max(MIN_PENALTY, penalty + jitter)
    LOGGER.debug("Model penalties: %s", penalties)
    return penalties


__all__ = [
    "ADJUSTMENT_RULES",
    "AdjustmentRule",
    "BASE_ERROR",
    "JITTER_SCALE",
    "MIN_PENALTY",
    "MODEL_NAMES",
    "MODEL_PANEL",
    "ModelCategory",
    "ModelProfile",
    "base_penalty",
    "rules_for",
    "score",
]
