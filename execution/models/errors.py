# ToolError and subclasses
"""Error models for execution layer"""
from typing import Optional, Dict, Any
from datetime import datetime


class ToolError(Exception):
    """Base exception for tool execution errors"""
    
    def __init__(
        self,
        message: str,
        tool_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.tool_name = tool_name
        self.original_error = original_error
        self.error_code = error_code
        self.timestamp = datetime.utcnow()
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "tool_name": self.tool_name,
            "error_code": self.error_code,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class ValidationError(ToolError):
    """Parameter validation failed"""
    pass


class TimeoutError(ToolError):
    """Execution timeout exceeded"""
    pass


class TransportNotConfiguredError(ToolError):
    """Provider credentials are missing"""
    pass
