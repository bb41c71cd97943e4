"""
Minesweeper AI agents module.

Provides agents for playing N-dimensional Minesweeper:
- RandomAgent: Baseline random selection
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent

__all__ = [
    "BaseAgent",
    "RandomAgent",
]
