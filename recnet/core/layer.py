# core/layer.py - Per-layer state: output history, errors, weights and momentum buffers
import copy
import math
from typing import Optional, Tuple, Union

import numpy as np


class TimeRing:
    """Fixed-length time window addressed by logical lag.

    Logical index ``0`` is the oldest slot and ``steps - 1`` the newest.
    Rotation moves the head instead of shifting rows, so dropping the oldest
    entry is O(1); the slot that becomes newest still holds the dropped
    values until it is written.
    """

    def __init__(self, steps: int, shape: Union[int, Tuple[int, ...]] = (), dtype=np.float64):
        if isinstance(shape, int):
            shape = (shape,)
        self.steps = steps
        self._data = np.zeros((steps,) + tuple(shape), dtype=dtype)
        self._head = steps - 1

    def _row(self, t: int) -> int:
        if not -self.steps <= t < self.steps:
            raise IndexError(f"lag {t} outside window of {self.steps} steps")
        return (self._head + 1 + t) % self.steps

    def __len__(self) -> int:
        return self.steps

    def __getitem__(self, t: int):
        return self._data[self._row(t)]

    def __setitem__(self, t: int, value) -> None:
        self._data[self._row(t)] = value

    @property
    def newest(self):
        return self._data[self._head]

    @property
    def oldest(self):
        return self._data[(self._head + 1) % self.steps]

    def rotate(self) -> None:
        """Drop the oldest slot; it becomes the (stale) newest slot."""
        self._head = (self._head + 1) % self.steps

    def push(self, value) -> None:
        self.rotate()
        self._data[self._head] = value

    def fill(self, value) -> None:
        self._data.fill(value)

    def to_array(self) -> np.ndarray:
        """Chronological copy, oldest first."""
        return np.roll(self._data, -(self._head + 1), axis=0)


class Layer:
    """Feed-forward layer state.

    The input layer carries no weights (``weight is None``); every other
    layer owns the matrix of connections from its predecessor, shaped
    ``[units, previous_units]``, with a matching momentum ``delta`` (last
    applied update) and the in-window ``accumulator``.
    """

    recurrent = False

    def __init__(self,
                 units: int,
                 steps: int,
                 fan_in: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None):
        self.units = units
        self.output = TimeRing(steps, units)
        self.error = np.zeros(units)

        self.weight = None
        self.delta = None
        self.accumulator = None
        if fan_in is not None:
            rng = rng if rng is not None else np.random.default_rng()
            r = 1.0 / math.sqrt(fan_in)
            self.weight = rng.uniform(-r, r, size=(units, fan_in))
            self.delta = np.zeros((units, fan_in))
            self.accumulator = np.zeros((units, fan_in))

    @property
    def has_weights(self) -> bool:
        return self.weight is not None

    def reset(self) -> None:
        """Zero transient state; weights are kept."""
        self.output.fill(0.0)
        if self.has_weights:
            self.delta.fill(0.0)
            self.accumulator.fill(0.0)

    def clone(self) -> "Layer":
        twin = copy.deepcopy(self)
        if self.has_weights:
            # Accumulator is seeded from the last applied delta, not the live buffer.
            twin.accumulator = self.delta.copy()
        return twin

    def __repr__(self) -> str:
        return f"{type(self).__name__}(units={self.units})"


class RecurrentLayer(Layer):
    """Hidden layer with a self connection from its previous-step output.

    Adds ``recurrent_weight`` ``[units, units]``, its momentum and
    accumulator buffers, and ``next_error``, the error carried from one lag
    into the next-older lag of a backward sweep.
    """

    recurrent = True

    def __init__(self,
                 units: int,
                 steps: int,
                 fan_in: int,
                 rng: Optional[np.random.Generator] = None):
        rng = rng if rng is not None else np.random.default_rng()
        super().__init__(units, steps, fan_in=fan_in, rng=rng)
        r = 1.0 / math.sqrt(units)
        self.recurrent_weight = rng.uniform(-r, r, size=(units, units))
        self.recurrent_delta = np.zeros((units, units))
        self.recurrent_accumulator = np.zeros((units, units))
        self.next_error = np.zeros(units)

    def reset(self) -> None:
        super().reset()
        self.next_error.fill(0.0)
        self.recurrent_delta.fill(0.0)
        self.recurrent_accumulator.fill(0.0)
