# core/__init__.py - Core components package
"""
recnet Core Components

Contains the building blocks of the recurrent network:
- Topology validation and activation functions
- Layer state with time-windowed output rings
- Forward propagation
- Output gradient history
- Truncated backpropagation through time
- Sequence memory control
"""

from .exceptions import RecnetError, ConfigurationError, InputShapeError
from .topology import ActivationFunction, Topology
from .layer import TimeRing, Layer, RecurrentLayer
from .gradients import GradientHistory
from .memory import MemoryController
from .network import RecurrentNetwork

__all__ = [
    'RecnetError',
    'ConfigurationError',
    'InputShapeError',
    'ActivationFunction',
    'Topology',
    'TimeRing',
    'Layer',
    'RecurrentLayer',
    'GradientHistory',
    'MemoryController',
    'RecurrentNetwork',
]
