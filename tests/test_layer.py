import math

import numpy as np
import pytest

from recnet.core.gradients import GradientHistory
from recnet.core.layer import Layer, RecurrentLayer, TimeRing


def test_ring_push_keeps_newest_last():
    ring = TimeRing(3)
    for value in (1.0, 2.0, 3.0, 4.0):
        ring.push(value)
    assert list(ring.to_array()) == [2.0, 3.0, 4.0]
    assert ring[0] == 2.0
    assert ring[2] == 4.0
    assert ring.newest == 4.0
    assert ring.oldest == 2.0


def test_ring_rotate_exposes_stale_oldest_as_newest():
    ring = TimeRing(3, 2)
    ring.push([1.0, 1.0])
    ring.push([2.0, 2.0])
    ring.push([3.0, 3.0])
    ring.rotate()
    np.testing.assert_array_equal(ring[2], [1.0, 1.0])
    np.testing.assert_array_equal(ring[1], [3.0, 3.0])


def test_ring_rejects_out_of_window_lag():
    ring = TimeRing(2)
    with pytest.raises(IndexError):
        ring[2]


def test_gradient_history_returns_floats():
    history = GradientHistory(2)
    history.push(0.5)
    assert history[1] == 0.5
    assert isinstance(history[0], float)
    history.clear()
    assert history[1] == 0.0


def test_weights_initialized_within_fan_in_bound():
    rng = np.random.default_rng(7)
    layer = RecurrentLayer(4, steps=3, fan_in=9, rng=rng)
    assert layer.weight.shape == (4, 9)
    assert np.all(np.abs(layer.weight) <= 1.0 / math.sqrt(9))
    assert layer.recurrent_weight.shape == (4, 4)
    assert np.all(np.abs(layer.recurrent_weight) <= 1.0 / math.sqrt(4))
    assert not np.any(layer.delta)
    assert not np.any(layer.recurrent_accumulator)


def test_input_layer_has_no_weights():
    layer = Layer(3, steps=2)
    assert not layer.has_weights
    assert not layer.recurrent
    layer.reset()
    assert layer.output.to_array().shape == (2, 3)


def test_recurrent_reset_zeroes_transient_state_only():
    layer = RecurrentLayer(2, steps=2, fan_in=1, rng=np.random.default_rng(0))
    weight = layer.weight.copy()
    layer.output.push([0.3, 0.4])
    layer.next_error[:] = 1.0
    layer.delta[:] = 1.0
    layer.recurrent_delta[:] = 1.0
    layer.accumulator[:] = 1.0

    layer.reset()

    assert not np.any(layer.output.to_array())
    assert not np.any(layer.next_error)
    assert not np.any(layer.delta)
    assert not np.any(layer.recurrent_delta)
    assert not np.any(layer.accumulator)
    np.testing.assert_array_equal(layer.weight, weight)


def test_clone_seeds_accumulator_from_previous_delta():
    layer = RecurrentLayer(2, steps=2, fan_in=2, rng=np.random.default_rng(1))
    layer.delta[:] = 0.25
    layer.accumulator[:] = 0.75
    layer.recurrent_accumulator[:] = 0.5

    twin = layer.clone()

    np.testing.assert_array_equal(twin.accumulator, layer.delta)
    np.testing.assert_array_equal(twin.recurrent_accumulator, layer.recurrent_accumulator)
    twin.weight[:] = 0.0
    assert np.any(layer.weight)
