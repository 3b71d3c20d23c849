# __init__.py - Main recnet package initialization
"""
recnet - Recurrent networks for sequence regression

Single-output recurrent neural networks trained online with truncated
backpropagation through time, momentum and weight decay.
"""

__version__ = "1.0.0"
__author__ = "recnet Team"
__description__ = "Truncated BPTT recurrent networks for sequence regression"

import logging
from typing import Dict, Any, Optional

# Configure default logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

from .core.exceptions import RecnetError, ConfigurationError, InputShapeError
from .core.topology import ActivationFunction, Topology
from .core.network import RecurrentNetwork
from .regression.interface import OnlineRegression
from .training.trainer import Trainer, TrainerConfig

# Define public API
__all__ = [
    # Core components
    'RecurrentNetwork',
    'ActivationFunction',
    'Topology',
    'OnlineRegression',

    # Errors
    'RecnetError',
    'ConfigurationError',
    'InputShapeError',

    # Training
    'Trainer',
    'TrainerConfig',

    # Utilities
    'get_version',
    'get_system_info',
    'configure_logging',
]

def get_version() -> str:
    """Get recnet version string."""
    return __version__

def get_system_info() -> Dict[str, Any]:
    """Get system information and library versions."""
    import numpy
    import sys
    import platform

    return {
        'recnet_version': __version__,
        'python_version': sys.version,
        'platform': platform.platform(),
        'numpy_version': numpy.__version__,
    }

def configure_logging(level: str = "INFO",
                     format_str: Optional[str] = None,
                     filename: Optional[str] = None) -> None:
    """Configure recnet logging."""
    if format_str is None:
        format_str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    level_map = {
        'DEBUG': logging.DEBUG,
        'INFO': logging.INFO,
        'WARNING': logging.WARNING,
        'ERROR': logging.ERROR,
        'CRITICAL': logging.CRITICAL,
    }

    log_level = level_map.get(level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]
    if filename:
        handlers.append(logging.FileHandler(filename))

    logging.basicConfig(
        level=log_level,
        format=format_str,
        handlers=handlers
    )
