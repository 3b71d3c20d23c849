# core/tbptt.py - Truncated backpropagation through time and weight updates
from typing import Sequence

import numpy as np

from .gradients import GradientHistory
from .layer import Layer
from .propagation import derivative
from .topology import ActivationFunction


def backpropagate_layer(upper: Layer, lower: Layer, t: int, activation: ActivationFunction) -> None:
    """Propagate errors from ``upper`` into ``lower`` at lag ``t``."""
    raw = upper.weight.T @ upper.error
    if lower.recurrent:
        raw = raw + lower.next_error
    lower.error[:] = derivative(lower.output[t], activation) * raw

    if lower.recurrent:
        # carried into the next-older lag
        lower.next_error[:] = lower.recurrent_weight.T @ lower.error


def backpropagate(layers: Sequence[Layer], t: int, activation: ActivationFunction) -> None:
    for l in range(len(layers) - 1, 0, -1):
        backpropagate_layer(layers[l], layers[l - 1], t, activation)


def apply_update(weight: np.ndarray,
                 delta: np.ndarray,
                 accumulator: np.ndarray,
                 eta: float,
                 alpha: float,
                 lam: float) -> None:
    """Momentum step from the accumulated window gradient, then decay."""
    weight += (1.0 - alpha) * eta * accumulator + alpha * delta
    delta[...] = accumulator
    accumulator.fill(0.0)
    if lam != 0.0:
        weight *= (1.0 - eta * lam)


def adjust_weights(layers: Sequence[Layer],
                   t: int,
                   eta: float,
                   alpha: float,
                   lam: float) -> None:
    """Accumulate lag ``t`` gradients; apply them at the oldest usable lag.

    Feed-forward weights are applied at ``t == 0``. Recurrent weights need
    the output one step earlier, so they accumulate from ``t >= 1`` and are
    applied at ``t == 1``.
    """
    for l in range(1, len(layers)):
        layer = layers[l]
        layer.accumulator += np.outer(layer.error, layers[l - 1].output[t])
        if t == 0:
            apply_update(layer.weight, layer.delta, layer.accumulator, eta, alpha, lam)

        if layer.recurrent and t >= 1:
            layer.recurrent_accumulator += np.outer(layer.error, layer.output[t - 1])
            if t == 1:
                apply_update(layer.recurrent_weight, layer.recurrent_delta,
                             layer.recurrent_accumulator, eta, alpha, lam)


def sweep(layers: Sequence[Layer],
          history: GradientHistory,
          activation: ActivationFunction,
          eta: float,
          alpha: float,
          lam: float) -> None:
    """Full backward pass over the window, newest lag to oldest."""
    output_layer = layers[-1]
    steps = history.steps
    for t in range(steps - 1, -1, -1):
        output_layer.error[0] = history[t]
        backpropagate(layers, t, activation)
        adjust_weights(layers, t, eta, alpha, lam)
    output_layer.error[0] = history[steps - 1]
