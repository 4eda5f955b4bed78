# ToolStatus enum
"""Tool execution status enums"""
from enum import Enum


class ToolStatus(str, Enum):
    """Individual tool execution status"""
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"
    TIMEOUT = "timeout"
