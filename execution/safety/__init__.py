# Resilience & safety mechanisms
"""Safety and resilience mechanisms"""
from .timeout import TimeoutHandler

__all__ = [
    "TimeoutHandler",
]
