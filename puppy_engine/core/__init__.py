"""
Core of the engine.
"""

from .engine import Engine

__all__ = ['Engine']
