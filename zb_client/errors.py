"""Exceptions raised by the gateway client."""

import grpc


class ZeebeClientError(Exception):
    """Base class for all client errors."""


class InvalidVariablesError(ZeebeClientError, ValueError):
    """Raised when a variables payload is not a JSON object."""


class GatewayRequestError(ZeebeClientError):
    """A gateway RPC failed.

    Attributes:
        method: Gateway method that was called
        code: gRPC status code returned by the gateway (None if unknown)
        details: Status details reported by the gateway
    """

    def __init__(
        self,
        method: str,
        code: grpc.StatusCode | None,
        details: str | None = None,
    ) -> None:
        self.method = method
        self.code = code
        self.details = details or ""
        status = code.name if code is not None else "UNKNOWN"
        super().__init__(f"{method} failed with {status}: {self.details}")

    @classmethod
    def from_rpc_error(cls, method: str, error: grpc.aio.AioRpcError) -> "GatewayRequestError":
        """Build the error from a failed grpc.aio call."""
        return cls(method, error.code(), error.details())
