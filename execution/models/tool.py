# ToolResult, ToolCategory
"""Tool-related models"""
from typing import Dict, Any, Optional
from pydantic import BaseModel, Field
from datetime import datetime
from enum import Enum

from .status import ToolStatus


class ToolCategory(str, Enum):
    """Tool categories"""
    NOTIFICATION = "notification"


class ToolResult(BaseModel):
    """Result from a tool execution"""
    tool_name: str
    status: ToolStatus
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    execution_time_ms: float = 0.0
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    
    @property
    def success(self) -> bool:
        return self.status == ToolStatus.SUCCESS
