# core/topology.py - Layer topology and hyperparameter validation
import numbers
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple, Union

from .exceptions import ConfigurationError


class ActivationFunction(Enum):
    """Nonlinearity applied by hidden layers. The output layer is always linear."""

    LOGISTIC_SIGMOID = "logistic_sigmoid"
    TANH = "tanh"

    @classmethod
    def coerce(cls, value: Union["ActivationFunction", str]) -> "ActivationFunction":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key or member.name.lower() == key:
                    return member
        raise ConfigurationError('activation', f"Unknown activation function: {value!r}")


def validate_learning_rate(eta: float) -> float:
    if not eta > 0:
        raise ConfigurationError('learning_rate', f"Invalid learning rate: {eta}")
    return float(eta)


def validate_momentum(alpha: float) -> float:
    if not 0.0 <= alpha < 1.0:
        raise ConfigurationError('momentum', f"Invalid momentum factor: {alpha}")
    return float(alpha)


def validate_weight_decay(lam: float) -> float:
    if not 0.0 <= lam <= 0.1:
        raise ConfigurationError('weight_decay', f"Invalid weight decay factor: {lam}")
    return float(lam)


def validate_steps(steps: int) -> int:
    if isinstance(steps, bool) or not isinstance(steps, numbers.Integral) or steps < 2:
        raise ConfigurationError('steps', f"Invalid number of truncated BPTT steps: {steps}")
    return int(steps)


@dataclass(frozen=True)
class Topology:
    """Validated layer layout of a network.

    Build instances with :meth:`from_layers`; the constructor itself does not
    validate.
    """

    num_units: Tuple[int, ...]
    recurrent_layers: Tuple[bool, ...]

    @classmethod
    def from_layers(cls, num_units: Sequence[int], recurrent_layers: Sequence[bool]) -> "Topology":
        num_units = list(num_units)
        recurrent_layers = [bool(flag) for flag in recurrent_layers]
        num_layers = len(num_units)

        if num_layers < 2:
            raise ConfigurationError('num_units', f"Invalid number of layers: {num_layers}")

        if len(recurrent_layers) != num_layers:
            raise ConfigurationError(
                'recurrent_layers',
                f"Number of layers {num_layers} not equal to number of recurrent layers "
                f"specified {len(recurrent_layers)}")

        if recurrent_layers[0] or recurrent_layers[-1]:
            raise ConfigurationError('recurrent_layers', "Only hidden layers can be recurrent")

        for i, units in enumerate(num_units):
            if isinstance(units, bool) or not isinstance(units, numbers.Integral) or units < 1:
                raise ConfigurationError(
                    'num_units', f"Invalid number of units of layer {i + 1}: {units}")

        recurrent_count = sum(recurrent_layers)
        if recurrent_count < 1:
            raise ConfigurationError(
                'recurrent_layers', f"Invalid number of recurrent layers: {recurrent_count}")

        if num_units[-1] != 1:
            raise ConfigurationError(
                'num_units', f"Invalid number of units in output layer {num_units[-1]}")

        return cls(tuple(int(u) for u in num_units), tuple(recurrent_layers))

    @property
    def num_layers(self) -> int:
        return len(self.num_units)

    @property
    def dimension(self) -> int:
        return self.num_units[0]

    def weight_shape(self, layer: int) -> Tuple[int, int]:
        """Shape of the feed-forward matrix into ``layer`` (layer >= 1)."""
        return self.num_units[layer], self.num_units[layer - 1]

    def weight_shapes(self) -> List[Tuple[int, int]]:
        return [self.weight_shape(l) for l in range(1, self.num_layers)]
