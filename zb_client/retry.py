"""Retry handling for gateway requests."""

from typing import Awaitable, Callable, TypeVar

import grpc
import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from zb_client.errors import GatewayRequestError

logger = structlog.get_logger()

T = TypeVar("T")

RetryPredicate = Callable[[BaseException], bool]

# Transient gateway states: no broker reachable, or backpressure
RETRYABLE_CODES = frozenset(
    {
        grpc.StatusCode.UNAVAILABLE,
        grpc.StatusCode.RESOURCE_EXHAUSTED,
    }
)

DEFAULT_WAIT = wait_exponential(multiplier=0.1, max=2)


def should_retry(error: BaseException) -> bool:
    """Default predicate: retry gateway errors with a transient status code."""
    return isinstance(error, GatewayRequestError) and error.code in RETRYABLE_CODES


def never_retry(error: BaseException) -> bool:
    """Predicate that surfaces every failure immediately."""
    return False


def _log_retry(retry_state: RetryCallState) -> None:
    error = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "Retrying gateway request",
        attempt=retry_state.attempt_number,
        error=str(error),
    )


async def call_with_retry(
    call: Callable[[], Awaitable[T]],
    predicate: RetryPredicate,
    max_attempts: int,
    wait: wait_base = DEFAULT_WAIT,
) -> T:
    """
    Await `call`, re-sending it while `predicate` accepts the raised error.

    Args:
        call: Zero-argument coroutine factory that performs one request
        predicate: Decides whether a raised error is retried
        max_attempts: Upper bound on the number of calls
        wait: tenacity wait strategy between attempts

    Returns:
        Result of the first successful call

    Raises:
        Exception: The last error once the predicate declines or attempts run out
    """
    async for attempt in AsyncRetrying(
        retry=retry_if_exception(predicate),
        stop=stop_after_attempt(max_attempts),
        wait=wait,
        before_sleep=_log_retry,
        reraise=True,
    ):
        with attempt:
            return await call()
    raise AssertionError("unreachable")  # pragma: no cover
