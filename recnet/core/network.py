# core/network.py - Recurrent network for sequence regression trained with truncated BPTT
import copy
import logging
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .exceptions import InputShapeError
from .gradients import GradientHistory, compute_output_error
from .layer import Layer, RecurrentLayer
from .memory import MemoryController
from .propagation import propagate, set_input
from .tbptt import sweep
from .topology import (
    ActivationFunction,
    Topology,
    validate_learning_rate,
    validate_momentum,
    validate_steps,
    validate_weight_decay,
)
from ..regression.interface import OnlineRegression
from ..utils import load_network, save_network

logger = logging.getLogger(__name__)


class RecurrentNetwork(OnlineRegression):
    """
    Recurrent neural network for regression.

    Layers are fully connected to their predecessor; hidden layers flagged
    as recurrent also feed their previous-step output back into themselves.
    Hidden units use the configured activation, the single output unit is
    linear.

    Training is online truncated backpropagation through time: gradients of
    the last ``steps`` samples are buffered, and once the window is full
    every ``learn`` call unrolls the network over the whole window and
    applies momentum/decay weight updates. Call :meth:`reset_memory` when
    the training data loses its sequential order.

    Inputs should be scaled, e.g. into [0, 1] or to zero mean and unit
    variance.

    Not safe for concurrent use: every call mutates the network's state.
    """

    def __init__(self,
                 num_units: Sequence[int],
                 recurrent_layers: Sequence[bool],
                 activation: Union[ActivationFunction, str] = ActivationFunction.LOGISTIC_SIGMOID,
                 learning_rate: float = 0.05,
                 momentum: float = 0.0,
                 weight_decay: float = 0.0,
                 steps: int = 3,
                 seed: Optional[int] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Build and randomly initialize the network.

        Args:
            num_units: Number of units of each layer, input layer first. The
                output layer must have exactly one unit.
            recurrent_layers: Per-layer recurrence flags. Only hidden layers
                may be recurrent and at least one must be.
            activation: Hidden-layer activation function.
            learning_rate: Step size, > 0.
            momentum: Momentum factor in [0, 1).
            weight_decay: Weight decay factor in [0, 0.1].
            steps: Window length of truncated BPTT, >= 2.
            seed: Seed for weight initialization (ignored if ``rng`` is given).
            rng: Random generator used for weight initialization.

        Raises:
            ConfigurationError: if any argument is invalid. Nothing is
                allocated in that case.
        """
        topology = Topology.from_layers(num_units, recurrent_layers)
        self._steps = validate_steps(steps)
        self._activation = ActivationFunction.coerce(activation)
        self._eta = validate_learning_rate(learning_rate)
        self._alpha = validate_momentum(momentum)
        self._lambda = validate_weight_decay(weight_decay)
        self.topology = topology

        if rng is None:
            rng = np.random.default_rng(seed)

        self.layers: List[Layer] = [Layer(topology.num_units[0], self._steps)]
        for l in range(1, topology.num_layers):
            units = topology.num_units[l]
            fan_in = topology.num_units[l - 1]
            if topology.recurrent_layers[l]:
                self.layers.append(RecurrentLayer(units, self._steps, fan_in=fan_in, rng=rng))
            else:
                self.layers.append(Layer(units, self._steps, fan_in=fan_in, rng=rng))

        self.gradients = GradientHistory(self._steps)
        self.memory = MemoryController(self._steps)

        logger.info(f"RecurrentNetwork initialized: units={list(topology.num_units)}, "
                    f"recurrent={list(topology.recurrent_layers)}, "
                    f"activation={self._activation.value}, steps={self._steps}")

    # ------------------------------------------------------------------
    # Hyperparameters
    # ------------------------------------------------------------------

    @property
    def learning_rate(self) -> float:
        return self._eta

    @learning_rate.setter
    def learning_rate(self, eta: float) -> None:
        self._eta = validate_learning_rate(eta)

    @property
    def momentum(self) -> float:
        return self._alpha

    @momentum.setter
    def momentum(self, alpha: float) -> None:
        self._alpha = validate_momentum(alpha)

    @property
    def weight_decay(self) -> float:
        return self._lambda

    @weight_decay.setter
    def weight_decay(self, lam: float) -> None:
        self._lambda = validate_weight_decay(lam)

    def set_learning_rate(self, eta: float) -> None:
        """Sets the learning rate."""
        self.learning_rate = eta

    def set_momentum(self, alpha: float) -> None:
        """Sets the momentum factor."""
        self.momentum = alpha

    def set_weight_decay(self, lam: float) -> None:
        """Sets the weight decay factor.

        After each weight update every weight is shrunk according to
        ``w = w * (1 - learning_rate * weight_decay)``.
        """
        self.weight_decay = lam

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def activation(self) -> ActivationFunction:
        return self._activation

    @property
    def steps(self) -> int:
        return self._steps

    @property
    def current_step(self) -> int:
        return self.memory.current_step

    @property
    def num_units(self) -> Tuple[int, ...]:
        return self.topology.num_units

    @property
    def recurrent_layers(self) -> Tuple[bool, ...]:
        return self.topology.recurrent_layers

    @property
    def dimension(self) -> int:
        """Input vector length."""
        return self.topology.dimension

    @property
    def input_layer(self) -> Layer:
        return self.layers[0]

    @property
    def output_layer(self) -> Layer:
        return self.layers[-1]

    def get_weight(self, layer: int) -> np.ndarray:
        """Copy of the connection weights into ``layer`` from its predecessor.

        Raises:
            IndexError: for the input layer, which has no incoming weights.
        """
        target = self.layers[layer]
        if not target.has_weights:
            raise IndexError(f"Layer {layer} has no incoming weights")
        return target.weight.copy()

    def get_recurrent_weight(self, layer: int) -> np.ndarray:
        """Copy of the self-connection weights of a recurrent ``layer``."""
        target = self.layers[layer]
        if not target.recurrent:
            raise IndexError(f"Layer {layer} is not recurrent")
        return target.recurrent_weight.copy()

    # ------------------------------------------------------------------
    # Learning and prediction
    # ------------------------------------------------------------------

    def _check_input(self, x) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        if x.ndim != 1 or x.shape[0] != self.dimension:
            actual = x.shape[0] if x.ndim == 1 else int(x.size)
            raise InputShapeError(actual, self.dimension)
        return x

    def predict(self, x: Sequence[float]) -> float:
        """Predict the target of ``x`` without learning from it.

        The sample still enters the time window, flagged as prediction-only,
        with a zero output gradient.
        """
        x = self._check_input(x)
        self.memory.record(False)
        self.gradients.push(0.0)
        set_input(self.input_layer, x)
        return propagate(self.layers, self._activation)

    def learn(self, x, y, weight: float = 1.0) -> Optional[float]:
        """
        Update the network with one instance and its target value.

        A 2-D ``x`` is treated as a sequence and forwarded to
        :meth:`learn_batch`.

        Args:
            x: Training instance.
            y: Target value.
            weight: Positive weight of the instance.

        Returns:
            The weighted training error before back-propagation.
        """
        if np.ndim(x) == 2:
            self.learn_batch(x, y)
            return None

        x = self._check_input(x)
        if self.memory.needs_reset():
            logger.debug("Prediction-only sample left the window; resetting memory")
            self.reset_memory()

        self.memory.record(True)
        set_input(self.input_layer, x)
        propagate(self.layers, self._activation)

        err = weight * compute_output_error(self.output_layer, float(y), self.gradients)
        if weight != 1.0:
            self.output_layer.error[0] *= weight

        if self.memory.active:
            sweep(self.layers, self.gradients, self._activation,
                  self._eta, self._alpha, self._lambda)

        self.memory.advance()
        return err

    def learn_batch(self, xs, ys) -> None:
        """Train on a sequence for one pass, strictly in input order."""
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64).reshape(-1)
        if xs.ndim != 2 or xs.shape[1] != self.dimension:
            width = xs.shape[1] if xs.ndim == 2 else int(xs.size)
            raise InputShapeError(width, self.dimension)
        if xs.shape[0] != ys.shape[0]:
            raise InputShapeError(
                ys.shape[0], xs.shape[0],
                message=f"Number of targets {ys.shape[0]} does not match number of instances {xs.shape[0]}")

        for x, y in zip(xs, ys):
            self.learn(x, y)

    def reset_memory(self) -> None:
        """Forget the current sequence. Weights are kept."""
        self.memory.reset()
        self.gradients.clear()
        for layer in self.layers:
            layer.reset()
        logger.debug("Network memory reset")

    # ------------------------------------------------------------------
    # Copying and persistence
    # ------------------------------------------------------------------

    def clone(self) -> "RecurrentNetwork":
        """Independent deep copy of this network."""
        copycat = object.__new__(type(self))
        copycat.__dict__.update({
            key: value for key, value in self.__dict__.items()
            if key not in ('layers', 'gradients', 'memory')
        })
        copycat.layers = [layer.clone() for layer in self.layers]
        copycat.gradients = copy.deepcopy(self.gradients)
        copycat.memory = copy.deepcopy(self.memory)
        return copycat

    def save(self, filepath: str) -> None:
        save_network(self, filepath)

    @classmethod
    def load(cls, filepath: str) -> "RecurrentNetwork":
        net = load_network(filepath)
        if not isinstance(net, cls):
            raise TypeError(f"{filepath} does not contain a {cls.__name__}")
        return net

    def __repr__(self) -> str:
        return (f"RecurrentNetwork(num_units={list(self.num_units)}, "
                f"recurrent_layers={list(self.recurrent_layers)}, "
                f"activation={self._activation.name}, steps={self._steps})")
