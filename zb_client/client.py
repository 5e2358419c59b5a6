"""Client facade handing out gateway commands."""

from typing import Optional

import grpc
import structlog

from zb_client.commands.create_instance import CreateInstanceCommand
from zb_client.config import Settings, get_settings
from zb_client.gateway.grpc_gateway import GrpcGateway, open_channel
from zb_client.gateway.protocol import GatewayStub
from zb_client.retry import RetryPredicate, should_retry

logger = structlog.get_logger()


class ZeebeClient:
    """
    Entry point for sending commands to a workflow engine gateway.

    Opens the gRPC channel on first use unless a gateway handle is injected, and creates
    commands preconfigured with the timeouts and retry policy from settings.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        gateway: Optional[GatewayStub] = None,
        retry_predicate: RetryPredicate = should_retry,
    ):
        """
        Initialize the client.

        Args:
            settings: Optional settings instance (defaults to global settings)
            gateway: Optional gateway handle; when given no channel is opened
            retry_predicate: Decides which failed calls are re-sent
        """
        self.settings = settings or get_settings()
        self.retry_predicate = retry_predicate
        self._gateway = gateway
        self._channel: Optional[grpc.aio.Channel] = None

    @property
    def gateway(self) -> GatewayStub:
        """Gateway handle, opening the channel if needed."""
        if self._gateway is None:
            self._channel = open_channel(self.settings)
            self._gateway = GrpcGateway(self._channel)
        return self._gateway

    def new_create_instance_command(self) -> CreateInstanceCommand:
        """Start building a "create workflow instance" command."""
        return CreateInstanceCommand(
            self.gateway,
            self.settings.request_timeout,
            self.retry_predicate,
            max_retries=self.settings.max_retries,
            request_timeout_offset=self.settings.request_timeout_offset,
        )

    async def close(self) -> None:
        """Close the channel if this client opened it."""
        if self._channel is not None:
            await self._channel.close()
            logger.info("Gateway channel closed", address=self.settings.gateway_address)
            self._channel = None
            self._gateway = None

    async def __aenter__(self) -> "ZeebeClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
