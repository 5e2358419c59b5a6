"""grpc.aio implementation of the gateway stub."""

from pathlib import Path
from typing import Any, Callable, TypeVar

import grpc
import structlog
from google.protobuf import json_format
from pydantic import BaseModel

from zb_client.config import Settings
from zb_client.errors import GatewayRequestError
from zb_client.gateway import descriptors
from zb_client.gateway.messages import (
    CreateWorkflowInstanceRequest,
    CreateWorkflowInstanceResponse,
    CreateWorkflowInstanceWithResultRequest,
    CreateWorkflowInstanceWithResultResponse,
    GatewayMessage,
)

logger = structlog.get_logger()

ResponseT = TypeVar("ResponseT", bound=BaseModel)


def encode(message: GatewayMessage, pb_class: Any) -> bytes:
    """Serialize a pydantic gateway message with the matching protobuf class."""
    return json_format.ParseDict(message.to_wire(), pb_class()).SerializeToString()


def decoder(pb_class: Any, model: type[ResponseT]) -> Callable[[bytes], ResponseT]:
    """Build a deserializer turning wire bytes into a pydantic gateway message."""

    def decode(data: bytes) -> ResponseT:
        message = pb_class.FromString(data)
        # int64 fields come back as strings; pydantic coerces them
        return model.model_validate(json_format.MessageToDict(message))

    return decode


def open_channel(settings: Settings) -> grpc.aio.Channel:
    """
    Open a channel to the gateway described by settings.

    Args:
        settings: Client settings with address and TLS options

    Returns:
        An insecure channel when `plaintext` is set, otherwise a TLS channel
    """
    if settings.plaintext:
        logger.info("Opening plaintext gateway channel", address=settings.gateway_address)
        return grpc.aio.insecure_channel(settings.gateway_address)

    root_certificates = None
    if settings.ca_certificate_path:
        root_certificates = Path(settings.ca_certificate_path).read_bytes()
    credentials = grpc.ssl_channel_credentials(root_certificates=root_certificates)
    logger.info("Opening TLS gateway channel", address=settings.gateway_address)
    return grpc.aio.secure_channel(settings.gateway_address, credentials)


class GrpcGateway:
    """Gateway stub backed by a grpc.aio channel."""

    def __init__(self, channel: grpc.aio.Channel) -> None:
        self.channel = channel
        self._create_workflow_instance = channel.unary_unary(
            descriptors.CREATE_WORKFLOW_INSTANCE,
            request_serializer=lambda m: encode(m, descriptors.CreateWorkflowInstanceRequestPb),
            response_deserializer=decoder(
                descriptors.CreateWorkflowInstanceResponsePb,
                CreateWorkflowInstanceResponse,
            ),
        )
        self._create_workflow_instance_with_result = channel.unary_unary(
            descriptors.CREATE_WORKFLOW_INSTANCE_WITH_RESULT,
            request_serializer=lambda m: encode(
                m, descriptors.CreateWorkflowInstanceWithResultRequestPb
            ),
            response_deserializer=decoder(
                descriptors.CreateWorkflowInstanceWithResultResponsePb,
                CreateWorkflowInstanceWithResultResponse,
            ),
        )

    async def create_workflow_instance(
        self,
        request: CreateWorkflowInstanceRequest,
        timeout: float,
    ) -> CreateWorkflowInstanceResponse:
        return await self._call(
            descriptors.CREATE_WORKFLOW_INSTANCE,
            self._create_workflow_instance,
            request,
            timeout,
        )

    async def create_workflow_instance_with_result(
        self,
        request: CreateWorkflowInstanceWithResultRequest,
        timeout: float,
    ) -> CreateWorkflowInstanceWithResultResponse:
        return await self._call(
            descriptors.CREATE_WORKFLOW_INSTANCE_WITH_RESULT,
            self._create_workflow_instance_with_result,
            request,
            timeout,
        )

    async def _call(self, method: str, callable_: Any, request: Any, timeout: float) -> Any:
        try:
            return await callable_(request, timeout=timeout)
        except grpc.aio.AioRpcError as e:
            logger.error(
                "Gateway request failed",
                method=method,
                code=e.code().name,
                details=e.details(),
            )
            raise GatewayRequestError.from_rpc_error(method, e) from e

    async def close(self) -> None:
        """Close the underlying channel."""
        await self.channel.close()
