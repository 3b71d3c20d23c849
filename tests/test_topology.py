import pytest

from recnet.core.exceptions import ConfigurationError
from recnet.core.network import RecurrentNetwork
from recnet.core.topology import (
    ActivationFunction,
    Topology,
    validate_learning_rate,
    validate_momentum,
    validate_steps,
    validate_weight_decay,
)

BOUNDARY_SHAPES = [
    [1, 1],
    [1, 2, 1],
    [3, 4, 1],
    [2, 3, 5, 1],
    [4, 2, 2, 2, 1],
]


def test_from_layers_derives_weight_shapes():
    topology = Topology.from_layers([3, 4, 2, 1], [False, True, False, False])
    assert topology.num_layers == 4
    assert topology.dimension == 3
    assert topology.weight_shapes() == [(4, 3), (2, 4), (1, 2)]


@pytest.mark.parametrize("units", BOUNDARY_SHAPES)
def test_recurrent_input_layer_rejected(units):
    flags = [False] * len(units)
    flags[0] = True
    if len(units) > 2:
        flags[1] = True
    with pytest.raises(ConfigurationError) as excinfo:
        RecurrentNetwork(units, flags, steps=3)
    assert excinfo.value.field == 'recurrent_layers'


@pytest.mark.parametrize("units", BOUNDARY_SHAPES)
def test_recurrent_output_layer_rejected(units):
    flags = [False] * len(units)
    flags[-1] = True
    if len(units) > 2:
        flags[1] = True
    with pytest.raises(ConfigurationError) as excinfo:
        RecurrentNetwork(units, flags, steps=3)
    assert excinfo.value.field == 'recurrent_layers'


@pytest.mark.parametrize("units, flags, field", [
    ([1], [False], 'num_units'),
    ([1, 2, 1], [False, True], 'recurrent_layers'),
    ([1, 2, 1], [False, False, False], 'recurrent_layers'),
    ([1, 0, 1], [False, True, False], 'num_units'),
    ([1, 2, 2], [False, True, False], 'num_units'),
    ([1, 2.5, 1], [False, True, False], 'num_units'),
])
def test_invalid_topology_names_field(units, flags, field):
    with pytest.raises(ConfigurationError) as excinfo:
        Topology.from_layers(units, flags)
    assert excinfo.value.field == field


@pytest.mark.parametrize("kwargs, field", [
    ({'steps': 1}, 'steps'),
    ({'steps': 0}, 'steps'),
    ({'learning_rate': 0.0}, 'learning_rate'),
    ({'learning_rate': -0.1}, 'learning_rate'),
    ({'momentum': 1.0}, 'momentum'),
    ({'momentum': -0.01}, 'momentum'),
    ({'weight_decay': 0.2}, 'weight_decay'),
    ({'weight_decay': -0.01}, 'weight_decay'),
    ({'activation': 'relu'}, 'activation'),
])
def test_invalid_hyperparameters_rejected(kwargs, field):
    with pytest.raises(ConfigurationError) as excinfo:
        RecurrentNetwork([1, 2, 1], [False, True, False], **kwargs)
    assert excinfo.value.field == field


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        validate_steps(1)


def test_validators_accept_boundaries():
    assert validate_momentum(0.0) == 0.0
    assert validate_weight_decay(0.0) == 0.0
    assert validate_weight_decay(0.1) == 0.1
    assert validate_learning_rate(1e-6) == 1e-6
    assert validate_steps(2) == 2


@pytest.mark.parametrize("name, expected", [
    ("tanh", ActivationFunction.TANH),
    ("TANH", ActivationFunction.TANH),
    ("logistic_sigmoid", ActivationFunction.LOGISTIC_SIGMOID),
    (ActivationFunction.TANH, ActivationFunction.TANH),
])
def test_activation_coercion(name, expected):
    assert ActivationFunction.coerce(name) is expected
