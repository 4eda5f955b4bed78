# Execution data models
"""Execution models"""
from .status import ToolStatus
from .errors import (
    ToolError,
    ValidationError,
    TimeoutError,
    TransportNotConfiguredError,
)
from .tool import ToolResult, ToolCategory

__all__ = [
    # Status
    "ToolStatus",
    # Errors
    "ToolError",
    "ValidationError",
    "TimeoutError",
    "TransportNotConfiguredError",
    # Tool
    "ToolResult",
    "ToolCategory",
]
