"""Interface of the gateway handle that commands dispatch through."""

from typing import Protocol

from zb_client.gateway.messages import (
    CreateWorkflowInstanceRequest,
    CreateWorkflowInstanceResponse,
    CreateWorkflowInstanceWithResultRequest,
    CreateWorkflowInstanceWithResultResponse,
)


class GatewayStub(Protocol):
    """Typed interface for gateway clients."""

    async def create_workflow_instance(
        self,
        request: CreateWorkflowInstanceRequest,
        timeout: float,
    ) -> CreateWorkflowInstanceResponse:
        """Create a workflow instance; `timeout` is the call deadline in seconds."""
        ...

    async def create_workflow_instance_with_result(
        self,
        request: CreateWorkflowInstanceWithResultRequest,
        timeout: float,
    ) -> CreateWorkflowInstanceWithResultResponse:
        """Create a workflow instance and wait for its result."""
        ...
