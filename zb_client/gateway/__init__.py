"""Gateway messages, stub interface and gRPC transport."""

from zb_client.gateway.grpc_gateway import GrpcGateway, open_channel
from zb_client.gateway.messages import (
    CreateWorkflowInstanceRequest,
    CreateWorkflowInstanceResponse,
    CreateWorkflowInstanceWithResultRequest,
    CreateWorkflowInstanceWithResultResponse,
)
from zb_client.gateway.protocol import GatewayStub

__all__ = [
    "GatewayStub",
    "GrpcGateway",
    "open_channel",
    "CreateWorkflowInstanceRequest",
    "CreateWorkflowInstanceResponse",
    "CreateWorkflowInstanceWithResultRequest",
    "CreateWorkflowInstanceWithResultResponse",
]
