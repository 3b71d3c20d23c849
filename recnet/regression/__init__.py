# regression/__init__.py - Regression interfaces package
"""
recnet Regression Interfaces

Abstract contracts shared by recnet's online regression models.
"""

from .interface import OnlineRegression

__all__ = [
    'OnlineRegression',
]
