"""UpdateScheduler: Re-runs the submission cycle on a fixed interval.

States:
    - RUNNING: execute one cycle, then wait ``max(min_delay, interval - elapsed)``
    - BACKOFF: entered when a cycle fails or raises; wait ``error_backoff``

There is no retry limit. The process is stopped externally.

.. code-block:: python

    >>> compute_next_delay(elapsed=5.0, success=True)
    40.0
    >>> compute_next_delay(elapsed=60.0, success=True)
    0.5
    >>> compute_next_delay(elapsed=1.0, success=False)
    10.0
"""

from __future__ import annotations

import asyncio
import enum
import logging
import time
from collections.abc import Awaitable
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .OperationResult import UpdateResult
    from .RelayerConfig import RelayerConfig

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SECONDS = 45.0
DEFAULT_MIN_DELAY_SECONDS = 0.5
DEFAULT_ERROR_BACKOFF_SECONDS = 10.0


class SchedulerState(enum.Enum):
    RUNNING = "running"
    BACKOFF = "backoff"


def compute_next_delay(
    elapsed: float,
    success: bool,
    interval: float = DEFAULT_INTERVAL_SECONDS,
    min_delay: float = DEFAULT_MIN_DELAY_SECONDS,
    error_backoff: float = DEFAULT_ERROR_BACKOFF_SECONDS,
) -> float:
    """Compute the wait before the next cycle.

    :param elapsed: Duration of the cycle that just finished, in seconds.
    :param success: Whether that cycle succeeded.
    :param interval: Target seconds between cycle starts.
    :param min_delay: Floor applied after a successful cycle.
    :param error_backoff: Fixed wait after a failed cycle.
    :returns: Delay in seconds.
    """
    if not success:
        return error_backoff
    return max(min_delay, interval - elapsed)


class UpdateScheduler:
    """Drives the submission cycle in-process.

    Each cycle is awaited to completion before the next one is scheduled, so
    at most one cycle is ever in flight.

    :ivar run_cycle: Coroutine function performing one cycle.
    :ivar interval: Target seconds between cycle starts.
    :ivar min_delay: Minimum wait after a successful cycle.
    :ivar error_backoff: Wait after a failed cycle.
    :ivar state: Current scheduler state.
    """

    def __init__(
        self,
        run_cycle: Callable[[], Awaitable[UpdateResult]],
        interval: float = DEFAULT_INTERVAL_SECONDS,
        min_delay: float = DEFAULT_MIN_DELAY_SECONDS,
        error_backoff: float = DEFAULT_ERROR_BACKOFF_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the scheduler.

        :param run_cycle: Coroutine function performing one cycle.
        :param interval: Target seconds between cycle starts (default: 45).
        :param min_delay: Minimum wait after success (default: 0.5).
        :param error_backoff: Wait after failure (default: 10).
        :param clock: Monotonic clock returning seconds.
        :param sleep: Coroutine function used to wait.
        """
        self.run_cycle = run_cycle
        self.interval = interval
        self.min_delay = min_delay
        self.error_backoff = error_backoff
        self._clock = clock
        self._sleep = sleep
        self.state = SchedulerState.RUNNING

    @classmethod
    def from_config(
        cls,
        config: RelayerConfig,
        run_cycle: Callable[[], Awaitable[UpdateResult]],
        **kwargs,
    ) -> UpdateScheduler:
        """Create a scheduler using the timing values from configuration."""
        return cls(
            run_cycle,
            interval=config.update_interval,
            min_delay=config.min_delay,
            error_backoff=config.error_backoff,
            **kwargs,
        )

    def next_delay(self, elapsed: float, success: bool) -> float:
        """Compute the wait before the next cycle with this scheduler's timing."""
        return compute_next_delay(
            elapsed,
            success,
            interval=self.interval,
            min_delay=self.min_delay,
            error_backoff=self.error_backoff,
        )

    async def run_once(self) -> float:
        """Run one cycle and return the delay before the next one.

        :returns: Seconds to wait before the next cycle.
        """
        self.state = SchedulerState.RUNNING
        start = self._clock()
        logger.info("Running price update...")

        try:
            result = await self.run_cycle()
            success = result.success
        except Exception:
            logger.exception("Error in continuous update loop")
            success = False

        elapsed = self._clock() - start
        delay = self.next_delay(elapsed, success)

        if success:
            logger.info(f"Update completed in {elapsed * 1000:.0f}ms")
            logger.info(f"Next update in {delay:.1f} seconds")
        else:
            self.state = SchedulerState.BACKOFF
            logger.warning(f"Update failed, retrying in {delay:.1f} seconds")
        return delay

    async def run_forever(self) -> None:
        """Run cycles until the process is stopped."""
        logger.info(
            f"Starting continuous update mode. Will update every "
            f"{self.interval:g} seconds"
        )
        while True:
            delay = await self.run_once()
            await self._sleep(delay)
