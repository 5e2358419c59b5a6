"""Shared plumbing for gateway commands."""

from typing import Awaitable, Callable, TypeVar

import structlog

from zb_client.gateway.protocol import GatewayStub
from zb_client.retry import DEFAULT_WAIT, RetryPredicate, call_with_retry

logger = structlog.get_logger()

T = TypeVar("T")


class Command:
    """
    Base class for commands sent through a gateway stub.

    Holds the gateway handle, the per-call timeout and the retry predicate. Subclasses
    build their request with fluent setters and dispatch it in `send`.
    """

    def __init__(
        self,
        gateway: GatewayStub,
        request_timeout: float,
        should_retry: RetryPredicate,
        max_retries: int = 3,
    ) -> None:
        """
        Initialize the command.

        Args:
            gateway: Gateway handle the request is dispatched through
            request_timeout: Call timeout in seconds
            should_retry: Predicate deciding whether a failed call is re-sent
            max_retries: Maximum number of calls per send
        """
        self.gateway = gateway
        self.timeout = request_timeout
        self.should_retry = should_retry
        self.max_retries = max_retries
        self.retry_wait = DEFAULT_WAIT

    async def _dispatch(self, name: str, call: Callable[[], Awaitable[T]]) -> T:
        logger.debug("Sending command", command=name, timeout=self.timeout)
        return await call_with_retry(
            call,
            self.should_retry,
            self.max_retries,
            wait=self.retry_wait,
        )
