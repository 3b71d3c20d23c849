# training/trainer.py - Epoch-driven training of recurrent networks
import logging
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from ..core.exceptions import ConfigurationError, InputShapeError
from ..core.network import RecurrentNetwork
from ..core.topology import (
    ActivationFunction,
    Topology,
    validate_learning_rate,
    validate_momentum,
    validate_steps,
    validate_weight_decay,
)

logger = logging.getLogger(__name__)

@dataclass
class TrainerConfig:
    """Configuration parameters for a training run."""
    num_units: List[int] = field(default_factory=lambda: [1, 2, 1])
    recurrent_layers: List[bool] = field(default_factory=lambda: [False, True, False])
    activation: str = ActivationFunction.LOGISTIC_SIGMOID.value
    steps: int = 3
    learning_rate: float = 0.05
    momentum: float = 0.0
    weight_decay: float = 0.0
    epochs: int = 25
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "TrainerConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            logger.warning(f"Ignoring unknown training options: {sorted(unknown)}")
        return cls(**{k: v for k, v in values.items() if k in known})


class Trainer:
    """
    Trainer for recurrent networks.

    Each epoch feeds the whole sequence to the network in order and then
    resets its memory, so every epoch starts a fresh sequence with the
    weights learned so far.
    """

    def __init__(self,
                 num_units: Sequence[int],
                 recurrent_layers: Sequence[bool],
                 activation: Union[ActivationFunction, str] = ActivationFunction.LOGISTIC_SIGMOID,
                 steps: int = 3,
                 seed: Optional[int] = None):
        """
        Args:
            num_units: Number of units in each layer.
            recurrent_layers: Booleans determining if the i-th layer is recurrent.
            activation: Hidden-layer activation function.
            steps: Window length of truncated BPTT.
            seed: Seed for weight initialization.
        """
        self.topology = Topology.from_layers(num_units, recurrent_layers)
        self.activation = ActivationFunction.coerce(activation)
        self.steps = validate_steps(steps)
        self.seed = seed

        self.eta = 0.05
        self.alpha = 0.0
        self.lam = 0.0
        self.epochs = 25

        self.history: List[float] = []

    @classmethod
    def from_config(cls, config: TrainerConfig) -> "Trainer":
        return (cls(config.num_units, config.recurrent_layers,
                    activation=config.activation, steps=config.steps, seed=config.seed)
                .set_learning_rate(config.learning_rate)
                .set_momentum(config.momentum)
                .set_weight_decay(config.weight_decay)
                .set_num_epochs(config.epochs))

    def set_learning_rate(self, eta: float) -> "Trainer":
        self.eta = validate_learning_rate(eta)
        return self

    def set_momentum(self, alpha: float) -> "Trainer":
        self.alpha = validate_momentum(alpha)
        return self

    def set_weight_decay(self, lam: float) -> "Trainer":
        """Sets the weight decay factor. After each weight update every weight
        is shrunk according to w = w * (1 - eta * lambda)."""
        self.lam = validate_weight_decay(lam)
        return self

    def set_num_epochs(self, epochs: int) -> "Trainer":
        if isinstance(epochs, bool) or not isinstance(epochs, (int, np.integer)) or epochs < 1:
            raise ConfigurationError('epochs', f"Invalid number of epochs of stochastic learning: {epochs}")
        self.epochs = int(epochs)
        return self

    def build(self) -> RecurrentNetwork:
        return RecurrentNetwork(
            self.topology.num_units,
            self.topology.recurrent_layers,
            activation=self.activation,
            learning_rate=self.eta,
            momentum=self.alpha,
            weight_decay=self.lam,
            steps=self.steps,
            seed=self.seed,
        )

    def train(self, x, y) -> RecurrentNetwork:
        """Train a new network on the sequence ``x`` with targets ``y``."""
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64).reshape(-1)
        if x.ndim != 2 or x.shape[1] != self.topology.dimension:
            width = x.shape[1] if x.ndim == 2 else int(x.size)
            raise InputShapeError(width, self.topology.dimension)
        if x.shape[0] == 0 or x.shape[0] != y.shape[0]:
            raise InputShapeError(
                y.shape[0], x.shape[0],
                message=f"Need matching, non-empty instances and targets: {x.shape[0]} vs {y.shape[0]}")

        net = self.build()
        self.history = []

        for epoch in range(1, self.epochs + 1):
            losses = [net.learn(xi, yi) for xi, yi in zip(x, y)]
            net.reset_memory()

            mean_loss = float(np.mean(losses))
            self.history.append(mean_loss)

            logger.info(f"RNN learns epoch {epoch}: mean loss {mean_loss:.6f}")

        return net
