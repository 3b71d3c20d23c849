import logging

import numpy as np
import pytest

from recnet.core.exceptions import ConfigurationError, InputShapeError
from recnet.core.network import RecurrentNetwork
from recnet.training.trainer import Trainer, TrainerConfig
from recnet.utils import make_sine_sequence


def test_sine_sequence_targets_are_one_step_ahead():
    x, y = make_sine_sequence(num_samples=5, step=0.5)
    assert x.shape == (5, 1)
    np.testing.assert_allclose(y[:-1], x[1:, 0])


def test_training_reduces_loss_on_sine_sequence():
    x, y = make_sine_sequence(num_samples=30, step=0.3)
    trainer = (Trainer([1, 2, 1], [False, True, False], steps=3, seed=2024)
               .set_learning_rate(0.1)
               .set_momentum(0.0)
               .set_weight_decay(0.0)
               .set_num_epochs(200))

    net = trainer.train(x, y)

    assert isinstance(net, RecurrentNetwork)
    assert len(trainer.history) == 200
    assert trainer.history[-1] < trainer.history[0]
    assert net.current_step == 1


def test_train_logs_each_epoch(caplog):
    x, y = make_sine_sequence(num_samples=6)
    trainer = Trainer([1, 2, 1], [False, True, False], seed=1).set_num_epochs(3)
    with caplog.at_level(logging.INFO, logger="recnet.training.trainer"):
        trainer.train(x, y)
    epoch_lines = [r for r in caplog.records if "RNN learns epoch" in r.getMessage()]
    assert len(epoch_lines) == 3
    assert trainer.history == pytest.approx([float(r.getMessage().split()[-1]) for r in epoch_lines], abs=1e-6)


def test_trainer_validates_eagerly():
    with pytest.raises(ConfigurationError):
        Trainer([1, 2, 1], [True, True, False])
    trainer = Trainer([1, 2, 1], [False, True, False])
    with pytest.raises(ConfigurationError) as excinfo:
        trainer.set_num_epochs(0)
    assert excinfo.value.field == 'epochs'
    with pytest.raises(ConfigurationError):
        trainer.set_momentum(1.5)


def test_train_rejects_bad_data():
    trainer = Trainer([2, 2, 1], [False, True, False]).set_num_epochs(1)
    with pytest.raises(InputShapeError):
        trainer.train(np.zeros((4, 3)), np.zeros(4))
    with pytest.raises(InputShapeError):
        trainer.train(np.zeros((4, 2)), np.zeros(3))
    with pytest.raises(InputShapeError):
        trainer.train(np.zeros((0, 2)), np.zeros(0))


def test_from_config_applies_every_setting():
    config = TrainerConfig.from_dict({
        'num_units': [2, 3, 1],
        'recurrent_layers': [False, True, False],
        'activation': 'tanh',
        'steps': 4,
        'learning_rate': 0.02,
        'momentum': 0.3,
        'weight_decay': 0.001,
        'epochs': 7,
        'seed': 5,
    })
    trainer = Trainer.from_config(config)
    net = trainer.build()
    assert trainer.epochs == 7
    assert net.steps == 4
    assert net.activation.value == 'tanh'
    assert (net.learning_rate, net.momentum, net.weight_decay) == (0.02, 0.3, 0.001)


def test_config_ignores_unknown_keys(caplog):
    with caplog.at_level(logging.WARNING):
        config = TrainerConfig.from_dict({'epochs': 2, 'batch_size': 32})
    assert config.epochs == 2
    assert "batch_size" in caplog.text

