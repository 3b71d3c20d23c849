# core/propagation.py - Forward signal propagation through the layer stack
from typing import Sequence

import numpy as np

from .layer import Layer
from .topology import ActivationFunction


def logistic(v):
    """Logistic sigmoid 1 / (1 + e^-v)."""
    return 1.0 / (1.0 + np.exp(-v))


def activate(v, activation: ActivationFunction):
    if activation is ActivationFunction.LOGISTIC_SIGMOID:
        return logistic(v)
    # tanh expressed through the logistic function
    return 2.0 * logistic(2.0 * v) - 1.0


def derivative(out, activation: ActivationFunction):
    """Activation derivative written in terms of the unit's output."""
    if activation is ActivationFunction.LOGISTIC_SIGMOID:
        return out * (1.0 - out)
    return 1.0 - out * out


def set_input(input_layer: Layer, x: np.ndarray) -> None:
    input_layer.output.push(x)


def propagate_layer(lower: Layer,
                    upper: Layer,
                    activation: ActivationFunction,
                    linear: bool = False) -> None:
    """Advance ``upper`` one timestep from the newest output of ``lower``."""
    upper.output.rotate()
    steps = upper.output.steps

    total = upper.weight @ lower.output[steps - 1]
    if upper.recurrent:
        total = total + upper.recurrent_weight @ upper.output[steps - 2]

    upper.output[steps - 1] = total if linear else activate(total, activation)


def propagate(layers: Sequence[Layer], activation: ActivationFunction) -> float:
    """Run one forward step input -> output and return the newest output."""
    last = len(layers) - 1
    for l in range(last):
        propagate_layer(layers[l], layers[l + 1], activation, linear=(l + 1 == last))
    return float(layers[last].output.newest[0])
