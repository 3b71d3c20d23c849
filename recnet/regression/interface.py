"""Online regression interface for recnet."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np


class OnlineRegression(ABC):
    """Regression model that can be updated one sample at a time."""

    @abstractmethod
    def predict(self, x: Sequence[float]) -> float:
        """Return the model's prediction for ``x``."""

    @abstractmethod
    def learn(self, x: Sequence[float], y: float, weight: float = 1.0):
        """Update the model with a single ``(x, y)`` instance."""

    def predict_batch(self, xs: Sequence[Sequence[float]]) -> np.ndarray:
        """Predict every row of ``xs`` in order."""
        return np.array([self.predict(x) for x in xs])
