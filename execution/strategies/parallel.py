# Execute jobs in parallel
"""Parallel execution strategy with settle-all semantics"""
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, List, Optional, Set, TypeVar
import asyncio
import logging

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass
class Settled(Generic[T]):
    """Outcome of one job: either a value or the exception it raised"""
    index: int
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def success(self) -> bool:
        return self.error is None


class ParallelStrategy:
    """
    Execute jobs concurrently and wait for every one of them.

    A failing job never cancels its siblings; each outcome is reported
    individually. With ``shield=True`` cancelling the caller leaves the
    in-flight jobs running to completion in the background.
    """

    def __init__(self, max_concurrent: int = 10, shield: bool = True):
        self.semaphore = asyncio.Semaphore(max_concurrent)
        self.shield = shield
        self._background: Set[asyncio.Future] = set()

    async def execute(
        self,
        jobs: List[Callable[[], Awaitable[T]]],
    ) -> List[Settled[T]]:
        """
        Execute jobs in parallel

        Args:
            jobs: Zero-argument callables returning awaitables

        Returns:
            List of settled outcomes (in original order)
        """
        if not jobs:
            return []

        logger.info(f"Executing {len(jobs)} jobs in parallel")

        gathered = asyncio.gather(
            *(self._execute_with_semaphore(job) for job in jobs),
            return_exceptions=True,
        )

        if self.shield:
            self._background.add(gathered)
            gathered.add_done_callback(self._background.discard)
            try:
                outcomes = await asyncio.shield(gathered)
            except asyncio.CancelledError:
                logger.warning(
                    f"Caller cancelled; letting {len(jobs)} in-flight jobs finish"
                )
                raise
        else:
            outcomes = await gathered

        results: List[Settled[T]] = []
        for index, outcome in enumerate(outcomes):
            if isinstance(outcome, BaseException):
                results.append(Settled(index=index, error=outcome))
            else:
                results.append(Settled(index=index, value=outcome))

        success_count = sum(1 for r in results if r.success)
        logger.info(
            f"Parallel execution complete: "
            f"{success_count}/{len(results)} succeeded"
        )

        return results

    async def _execute_with_semaphore(self, job: Callable[[], Awaitable[Any]]) -> Any:
        """Execute single job with semaphore control"""
        async with self.semaphore:
            return await job()
