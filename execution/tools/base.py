# base tool
"""Base class for execution tools"""
from abc import ABC, abstractmethod
from typing import Dict, Any, List
from datetime import datetime
import logging

from jsonschema import Draft7Validator

from execution.models import ToolResult, ToolStatus, ToolCategory, ValidationError

logger = logging.getLogger(__name__)


class BaseTool(ABC):
    """
    Base class for all tools.

    Tools wrap a single external side effect (send an email, send an SMS).
    They never raise to the caller: every outcome is reported as a ToolResult.
    """

    def __init__(
        self,
        name: str,
        description: str,
        category: ToolCategory,
        requires_auth: bool = True,
        timeout_seconds: float = 30,
        idempotent: bool = False,
    ):
        self.name = name
        self.description = description
        self.category = category
        self.requires_auth = requires_auth
        self.timeout_seconds = timeout_seconds
        self.idempotent = idempotent

    @abstractmethod
    async def execute(self, params: Dict[str, Any]) -> ToolResult:
        """
        Execute the tool.

        Args:
            params: Tool parameters, already validated

        Returns:
            ToolResult describing the outcome
        """
        pass

    @abstractmethod
    def get_parameter_schema(self) -> Dict[str, Any]:
        """JSON schema describing accepted parameters"""
        pass

    def validate_params(self, params: Dict[str, Any]) -> List[str]:
        """Return a list of schema violations (empty when valid)"""
        validator = Draft7Validator(self.get_parameter_schema())
        return [error.message for error in validator.iter_errors(params)]

    async def run(self, params: Dict[str, Any]) -> ToolResult:
        """Validate parameters, then execute with timing"""
        errors = self.validate_params(params)
        if errors:
            error = ValidationError(
                message=f"Parameter validation failed: {errors}",
                tool_name=self.name,
                error_code="VALIDATION_ERROR",
            )
            logger.warning(f"Tool {self.name} rejected parameters: {errors}")
            return self._result(ToolStatus.FAILED, error=error.message)

        return await self._execute_with_timing(params)

    async def _execute_with_timing(self, params: Dict[str, Any]) -> ToolResult:
        start_time = datetime.utcnow()
        result = await self.execute(params)
        if not result.execution_time_ms:
            result.execution_time_ms = (
                datetime.utcnow() - start_time
            ).total_seconds() * 1000
        return result

    def _result(
        self,
        status: ToolStatus,
        data: Dict[str, Any] = None,
        error: str = None,
        start_time: datetime = None,
    ) -> ToolResult:
        execution_time = 0.0
        if start_time is not None:
            execution_time = (datetime.utcnow() - start_time).total_seconds() * 1000
        return ToolResult(
            tool_name=self.name,
            status=status,
            data=data,
            error=error,
            execution_time_ms=execution_time,
        )
