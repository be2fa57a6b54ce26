"""Bookkeeping for directional prediction quality.

A prediction is directionally correct when it moves away from the previous
actual price in the same direction as the actual price did. Flat moves
only match flat predictions.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass
class DirectionalStats:
    """Running counts of directional checks for one model."""

    n_predictions: int = 0
    n_correct: int = 0

    def record(self, previous_actual: float, actual: float, predicted: float) -> bool:
        """Register one comparison and return whether the direction matched."""

        matched = bool(np.sign(actual - previous_actual) == np.sign(predicted - previous_actual))
        self.n_predictions += 1
        if matched:
            self.n_correct += 1
        return matched

    @property
    def accuracy(self) -> float:
        """Percentage of correct checks, 0 when nothing was checked."""

        if not self.n_predictions:
            return 0.0
        return (self.n_correct / self.n_predictions) * 100


__all__ = ["DirectionalStats"]
