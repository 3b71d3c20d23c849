# core/memory.py - Step counting and training-validity window
import numpy as np

from .layer import TimeRing


class MemoryController:
    """Tracks how far the current sequence has advanced.

    ``validity`` records, for each windowed sample, whether it came from a
    training call. A prediction-only sample in the window marks a sequence
    discontinuity; once such a sample reaches the oldest slot the next
    ``learn`` resets memory before propagating.
    """

    def __init__(self, steps: int):
        self.steps = steps
        self.validity = TimeRing(steps, dtype=bool)
        self.current_step = 1
        self.validity.fill(True)

    @property
    def active(self) -> bool:
        """True once the window is full and every learn call runs TBPTT."""
        return self.current_step >= self.steps

    def needs_reset(self) -> bool:
        return not bool(self.validity.oldest)

    def record(self, training: bool) -> None:
        self.validity.push(training)

    def advance(self) -> None:
        self.current_step += 1

    def reset(self) -> None:
        self.current_step = 1
        self.validity.fill(True)

    def window(self) -> np.ndarray:
        """Validity flags oldest first."""
        return self.validity.to_array()
