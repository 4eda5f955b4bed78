# Timeout handling
"""Timeout handling for notification sends"""
import asyncio
from typing import Awaitable, Optional, TypeVar
from datetime import datetime

from execution.models import TimeoutError as ExecutionTimeoutError

T = TypeVar('T')


class TimeoutHandler:
    """Bounds a single awaitable by a per-key timeout"""

    def __init__(self, default_timeout_seconds: float = 10):
        self.default_timeout_seconds = default_timeout_seconds
        self._timeouts: dict[str, float] = {}

    def configure(self, key: str, timeout_seconds: float):
        """Configure timeout for a specific channel or tool"""
        self._timeouts[key] = timeout_seconds

    def get_timeout(self, key: Optional[str] = None) -> float:
        """Get timeout for a channel or tool"""
        if key and key in self._timeouts:
            return self._timeouts[key]
        return self.default_timeout_seconds

    async def execute_with_timeout(
        self,
        awaitable: Awaitable[T],
        key: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
    ) -> T:
        """
        Await with timeout

        Args:
            awaitable: Coroutine to await
            key: Channel or tool name for timeout lookup
            timeout_seconds: Override timeout

        Returns:
            Result of the awaitable

        Raises:
            ExecutionTimeoutError if timeout exceeded
        """
        timeout = timeout_seconds or self.get_timeout(key)
        start_time = datetime.utcnow()

        try:
            return await asyncio.wait_for(awaitable, timeout=timeout)

        except asyncio.TimeoutError:
            elapsed = (datetime.utcnow() - start_time).total_seconds()
            raise ExecutionTimeoutError(
                message=f"Execution exceeded timeout of {timeout}s (elapsed: {elapsed:.2f}s)",
                tool_name=key,
                error_code="TIMEOUT",
            )
