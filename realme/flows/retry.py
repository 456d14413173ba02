"""
Bounded retry policy shared by every flow.

Each invocation walks Idle -> Attempting -> (Success | RetryWait -> Attempting | Failed).
Attempts are strictly sequential; the delay before attempt n+1 is n * base_delay.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar

from realme.core.config import FLOW_MAX_ATTEMPTS, FLOW_RETRY_DELAY_SECONDS

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InvocationState(str, Enum):
    IDLE = "idle"
    ATTEMPTING = "attempting"
    RETRY_WAIT = "retry_wait"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = FLOW_MAX_ATTEMPTS
    base_delay: float = FLOW_RETRY_DELAY_SECONDS

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must not be negative")

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after the given (1-based) failed attempt."""
        return self.base_delay * attempt


DEFAULT_POLICY = RetryPolicy()


async def invoke_with_policy(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy = DEFAULT_POLICY,
    *,
    name: str = "flow",
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    on_transition: Optional[Callable[[InvocationState, int], None]] = None,
) -> T:
    """
    Run `operation` until it succeeds or the policy is exhausted.

    The last error is re-raised unchanged once the final attempt fails.

    Args:
        operation: Zero-argument coroutine factory, called once per attempt
        policy: Attempt count and backoff
        name: Used in log lines
        sleep: Awaitable sleep, replaceable in tests
        on_transition: Optional observer called with (state, attempt)
    """
    def _transition(state: InvocationState, attempt: int) -> None:
        logger.debug(f"{name}: {state.value} (attempt {attempt}/{policy.max_attempts})")
        if on_transition is not None:
            on_transition(state, attempt)

    _transition(InvocationState.IDLE, 0)
    attempt = 0
    while True:
        attempt += 1
        _transition(InvocationState.ATTEMPTING, attempt)
        try:
            result = await operation()
        except Exception as e:
            if attempt >= policy.max_attempts:
                _transition(InvocationState.FAILED, attempt)
                logger.error(f"{name} failed after {attempt} attempts: {e}")
                raise
            delay = policy.delay_for(attempt)
            logger.warning(f"Error in {name} (attempt {attempt}), retrying in {delay:.1f}s: {e}")
            _transition(InvocationState.RETRY_WAIT, attempt)
            await sleep(delay)
        else:
            _transition(InvocationState.SUCCESS, attempt)
            return result
