# utils/__init__.py - Utility functions package
"""
recnet Utility Functions

Persistence and sequence helpers.
"""

import pickle
import logging
from typing import Any, Dict, Optional, Tuple
from pathlib import Path

import numpy as np

logger = logging.getLogger(__name__)

def make_sine_sequence(num_samples: int = 50,
                       step: float = 0.2,
                       lag: int = 1,
                       phase: float = 0.0) -> Tuple[np.ndarray, np.ndarray]:
    """Samples of sin at regular intervals, each paired with the value ``lag`` steps ahead.

    Returns ``(x, y)`` with ``x`` shaped ``(num_samples, 1)``.
    """
    t = phase + step * np.arange(num_samples + lag)
    wave = np.sin(t)
    x = wave[:num_samples].reshape(-1, 1)
    y = wave[lag:num_samples + lag]
    return x, y

def save_network(network: Any,
                 filepath: str,
                 metadata: Optional[Dict[str, Any]] = None):
    """Pickle a network, with optional metadata, to ``filepath``."""
    data = {'network': network}
    if metadata:
        data['metadata'] = metadata

    Path(filepath).parent.mkdir(parents=True, exist_ok=True)
    with open(filepath, 'wb') as f:
        pickle.dump(data, f)
    logger.info(f"Saved network to {filepath}")

def load_network(filepath: str) -> Any:
    """Load a network written by :func:`save_network`."""
    with open(filepath, 'rb') as f:
        data = pickle.load(f)
    logger.info(f"Loaded network from {filepath}")
    return data['network']

__all__ = [
    'make_sine_sequence',
    'save_network',
    'load_network',
]
