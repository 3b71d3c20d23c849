# main.py - recnet training entry point
import argparse
import copy
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import yaml

from . import configure_logging
from .core.exceptions import RecnetError
from .training.trainer import Trainer, TrainerConfig
from .utils import make_sine_sequence, save_network

logger = logging.getLogger(__name__)


def default_config() -> Dict[str, Any]:
    """Complete default configuration so every key is present."""
    return {
        'network': {
            'num_units': [1, 2, 1],
            'recurrent_layers': [False, True, False],
            'activation': 'logistic_sigmoid',
            'steps': 3,
            'seed': None,
        },
        'training': {
            'learning_rate': 0.05,
            'momentum': 0.0,
            'weight_decay': 0.0,
            'epochs': 25,
        },
        'data': {
            'num_samples': 50,
            'step': 0.2,
            'lag': 1,
        },
    }


def deep_merge(base: Dict, update: Dict) -> Dict:
    """Recursively merge ``update`` into ``base`` in place."""
    for key, value in update.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def check_user_config(user_config: Any, defaults: Dict[str, Any]) -> None:
    """Raise ValueError unless every section is a mapping where the defaults have one."""
    if not isinstance(user_config, dict):
        raise ValueError(f"top level must be a mapping, got {type(user_config).__name__}")
    for key, value in user_config.items():
        if isinstance(defaults.get(key), dict) and not isinstance(value, dict):
            raise ValueError(f"section '{key}' must be a mapping, got {type(value).__name__}")


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration by merging defaults with a user-provided file."""
    defaults = default_config()
    config = defaults

    if config_path and Path(config_path).exists():
        try:
            with open(config_path, 'r') as f:
                # Support both YAML and JSON
                if config_path.endswith(('.yaml', '.yml')):
                    user_config = yaml.safe_load(f) or {}
                else:
                    user_config = json.load(f)

            check_user_config(user_config, defaults)
            config = deep_merge(copy.deepcopy(defaults), user_config)
            logger.info(f"Loaded and merged configuration from {config_path}")

        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Error loading config from {config_path}: {e}. Using default configuration.")
    elif config_path:
        logger.warning(f"Config file {config_path} not found. Using default configuration.")

    return config


def trainer_config(config: Dict[str, Any]) -> TrainerConfig:
    return TrainerConfig.from_dict({**config['network'], **config['training']})


def load_dataset(data_path: Optional[str], config: Dict[str, Any]):
    """Read a CSV sequence (last column is the target) or build the sine demo."""
    if data_path is None:
        data = config['data']
        return make_sine_sequence(num_samples=data['num_samples'], step=data['step'], lag=data['lag'])

    table = np.loadtxt(data_path, delimiter=',', ndmin=2)
    logger.info(f"Loaded {table.shape[0]} samples from {data_path}")
    return table[:, :-1], table[:, -1]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="recnet - train a recurrent network with truncated BPTT")
    parser.add_argument('--config', type=str, help='Path to configuration file (YAML or JSON)')
    parser.add_argument('--data', type=str, help='CSV sequence; the last column is the target')
    parser.add_argument('--epochs', type=int, help='Override the number of epochs')
    parser.add_argument('--save', type=str, help='Write the trained network to this path')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        help='Logging level')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    config = load_config(args.config)
    if args.epochs is not None:
        config['training']['epochs'] = args.epochs

    try:
        trainer = Trainer.from_config(trainer_config(config))
        x, y = load_dataset(args.data, config)
        net = trainer.train(x, y)
    except RecnetError as e:
        logger.error(f"Training failed: {e}")
        return 1

    if args.save:
        save_network(net, args.save, metadata={'config': config, 'history': trainer.history})

    print(f"Final epoch mean loss: {trainer.history[-1]:.6f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
