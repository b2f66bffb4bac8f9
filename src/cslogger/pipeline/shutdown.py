"""
Graceful draining of pipeline sinks.

Each sink is flushed and closed in a worker thread of a pool owned by the
coordinator, which waits for all of them together. The pool is released
without joining its threads, so a timed out drain returns to the caller
even while a sink is still stuck in close. A sink that fails to close is
logged and does not stop the others. Waiting is unbounded unless a timeout
is given.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, Sequence

from cslogger.core.exceptions.custom_exceptions import ShutdownTimeoutError
from cslogger.core.logging.logger import get_logger
from cslogger.sinks.base import Sink

logger = get_logger(__name__)


class ShutdownCoordinator:
    """
    Waits for every sink of a pipeline to flush and close.

    Attributes:
        sinks: Sinks to drain
        timeout: Seconds to wait for all of them, None to wait indefinitely
    """

    def __init__(self, sinks: Sequence[Sink], timeout: Optional[float] = None) -> None:
        self.sinks = list(sinks)
        self.timeout = timeout

    async def drain(self) -> None:
        """
        Close all sinks concurrently and wait for completion.

        Raises:
            ShutdownTimeoutError: If the sinks did not finish within timeout
        """
        if not self.sinks:
            return

        loop = asyncio.get_running_loop()
        executor = ThreadPoolExecutor(
            max_workers=len(self.sinks), thread_name_prefix="cslogger-drain"
        )
        tasks = [loop.run_in_executor(executor, sink.close) for sink in self.sinks]
        try:
            results = await asyncio.wait_for(
                asyncio.gather(*tasks, return_exceptions=True), self.timeout
            )
        except asyncio.TimeoutError as e:
            raise ShutdownTimeoutError(
                f"Sinks did not drain within {self.timeout} seconds",
                error_code="SHUTDOWN_TIMEOUT",
                details={"timeout": self.timeout, "sinks": len(self.sinks)},
            ) from e
        finally:
            executor.shutdown(wait=False)

        for sink, result in zip(self.sinks, results):
            if isinstance(result, Exception):
                logger.warning(
                    "Sink failed to close", sink=sink.kind.value, error=str(result)
                )

        logger.debug("Pipeline drained", sinks=len(self.sinks))
