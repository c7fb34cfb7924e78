"""
Stability Poller - Wait for dynamic UI regions to settle.

Dropdown overlays in the application animate in and render their items
asynchronously. Instead of fixed sleeps, every wait in the suite goes
through this module:

- wait_for_stable(): poll a candidate list until it stops changing
- poll_until(): poll any condition until it yields a value

Both are bounded by a single timeout. When the budget runs out, including
while a fetch is still pending, StabilityTimeoutError is raised.
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, List, Optional, Sequence, TypeVar, Union

from barrier_report_qa.engine.match_strategy import OptionCandidate
from barrier_report_qa.exceptions import StabilityTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")

FetchCandidates = Callable[[], Union[Sequence[OptionCandidate], Awaitable[Sequence[OptionCandidate]]]]


@dataclass(frozen=True)
class StabilityOptions:
    """
    Polling parameters.

    Attributes:
        interval_ms: Delay between rounds
        timeout_ms: Total budget for the whole wait
        min_stable_rounds: Consecutive stable rounds required
    """
    interval_ms: int = 250
    timeout_ms: int = 10000
    min_stable_rounds: int = 2

    def __post_init__(self) -> None:
        if self.interval_ms < 0:
            raise ValueError("interval_ms must be non-negative")
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        if self.min_stable_rounds < 1:
            raise ValueError("min_stable_rounds must be at least 1")

    @classmethod
    def from_settings(cls, polling: Any, timeout_ms: Optional[int] = None) -> "StabilityOptions":
        """Build options from a PollingSettings section."""
        return cls(
            interval_ms=polling.interval_ms,
            timeout_ms=timeout_ms if timeout_ms is not None else polling.stability_timeout_ms,
            min_stable_rounds=polling.min_stable_rounds,
        )


async def _call(func: Callable[[], Any]) -> Any:
    result = func()
    if inspect.isawaitable(result):
        result = await result
    return result


def _signature(snapshot: Sequence[OptionCandidate]) -> tuple:
    return (len(snapshot), sum(1 for c in snapshot if c.visible))


class StabilityPoller:
    """
    Poll a dynamic region until it settles.

    A round is stable when the snapshot is non-empty and has the same size
    and visible-count as the previous round. The poller returns once
    ``min_stable_rounds`` consecutive stable rounds have been seen.

    Example:
        >>> poller = StabilityPoller(StabilityOptions(interval_ms=100, timeout_ms=5000))
        >>> options = await poller.wait_for_stable(read_options)
    """

    def __init__(self, options: Optional[StabilityOptions] = None):
        self.options = options or StabilityOptions()

    async def wait_for_stable(
        self,
        fetch: FetchCandidates,
        options: Optional[StabilityOptions] = None,
        description: str = "option list to stabilize",
    ) -> List[OptionCandidate]:
        """
        Poll fetch until its result is stable.

        Args:
            fetch: Sync or async callable returning the current candidates
            options: Overrides the poller's default options
            description: Used in timeout messages

        Returns:
            The last (stable) snapshot

        Raises:
            StabilityTimeoutError: If the budget elapses first
        """
        opts = options or self.options
        state = {"rounds": 0, "last_count": None}

        async def _poll() -> List[OptionCandidate]:
            previous: Optional[tuple] = None
            stable_rounds = 0
            while True:
                snapshot = list(await _call(fetch))
                state["rounds"] += 1
                state["last_count"] = len(snapshot)
                signature = _signature(snapshot)

                if snapshot and signature == previous:
                    stable_rounds += 1
                else:
                    stable_rounds = 0
                previous = signature

                logger.debug(
                    f"Round {state['rounds']}: {signature[0]} candidates "
                    f"({signature[1]} visible), stable rounds {stable_rounds}"
                )
                if stable_rounds >= opts.min_stable_rounds:
                    return snapshot
                await asyncio.sleep(opts.interval_ms / 1000)

        try:
            return await asyncio.wait_for(_poll(), timeout=opts.timeout_ms / 1000)
        except asyncio.TimeoutError:
            raise StabilityTimeoutError(
                description,
                opts.timeout_ms,
                rounds=state["rounds"],
                last_count=state["last_count"],
            ) from None

    async def poll_until(
        self,
        condition: Callable[[], Union[Optional[T], Awaitable[Optional[T]]]],
        options: Optional[StabilityOptions] = None,
        description: str = "condition",
    ) -> T:
        """
        Poll condition until it returns a truthy value.

        Args:
            condition: Sync or async callable; a falsy result means "not yet"
            options: Overrides the poller's default options (only interval
                and timeout are used)
            description: Used in timeout messages

        Returns:
            The first truthy value returned by condition

        Raises:
            StabilityTimeoutError: If the budget elapses first
        """
        opts = options or self.options
        state = {"rounds": 0}

        async def _poll() -> T:
            while True:
                result = await _call(condition)
                state["rounds"] += 1
                if result:
                    return result
                await asyncio.sleep(opts.interval_ms / 1000)

        try:
            return await asyncio.wait_for(_poll(), timeout=opts.timeout_ms / 1000)
        except asyncio.TimeoutError:
            raise StabilityTimeoutError(
                description,
                opts.timeout_ms,
                rounds=state["rounds"],
            ) from None


async def wait_for_stable(
    fetch: FetchCandidates,
    options: Optional[StabilityOptions] = None,
) -> List[OptionCandidate]:
    """Module-level shortcut for StabilityPoller().wait_for_stable()."""
    return await StabilityPoller(options).wait_for_stable(fetch)
