# training/__init__.py - Training components package
"""
recnet Training

Epoch-driven training loop over a single ordered sequence.
"""

from .trainer import Trainer, TrainerConfig

__all__ = [
    'Trainer',
    'TrainerConfig',
]
