"""
Training module for Minesweeper agents.

Provides evaluation of agents against the environment.
"""
from .evaluator import Evaluator

__all__ = [
    "Evaluator",
]
