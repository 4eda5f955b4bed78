# Execution strategies
"""Execution strategies"""
from .parallel import ParallelStrategy, Settled

__all__ = [
    "ParallelStrategy",
    "Settled",
]
