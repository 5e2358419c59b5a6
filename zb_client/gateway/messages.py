"""Request and response messages exchanged with the gateway."""

from pydantic import BaseModel, ConfigDict, Field


class GatewayMessage(BaseModel):
    """Base model; aliases match the gateway protocol field names."""

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict:
        """Return the message as a dict keyed by protocol field names."""
        return self.model_dump(by_alias=True)


class CreateWorkflowInstanceRequest(GatewayMessage):
    """Create an instance by workflow key or by BPMN process id and version."""

    workflow_key: int = Field(default=0, alias="workflowKey")
    bpmn_process_id: str = Field(default="", alias="bpmnProcessId")
    version: int = Field(default=0, alias="version")
    variables: str = Field(
        default="",
        alias="variables",
        description="JSON object document with the instance's initial variables",
    )


class CreateWorkflowInstanceResponse(GatewayMessage):
    """Identifiers of the created workflow instance."""

    workflow_key: int = Field(default=0, alias="workflowKey")
    bpmn_process_id: str = Field(default="", alias="bpmnProcessId")
    version: int = Field(default=0, alias="version")
    workflow_instance_key: int = Field(default=0, alias="workflowInstanceKey")


class CreateWorkflowInstanceWithResultRequest(GatewayMessage):
    """Create an instance and wait for it to complete."""

    request: CreateWorkflowInstanceRequest = Field(
        default_factory=CreateWorkflowInstanceRequest, alias="request"
    )
    request_timeout: int = Field(
        default=0,
        alias="requestTimeout",
        description="Milliseconds the gateway waits for the instance to complete",
    )
    fetch_variables: list[str] = Field(
        default_factory=list,
        alias="fetchVariables",
        description="Names of the variables to return; empty returns all",
    )


class CreateWorkflowInstanceWithResultResponse(GatewayMessage):
    """Identifiers and final variables of a completed workflow instance."""

    workflow_key: int = Field(default=0, alias="workflowKey")
    bpmn_process_id: str = Field(default="", alias="bpmnProcessId")
    version: int = Field(default=0, alias="version")
    workflow_instance_key: int = Field(default=0, alias="workflowInstanceKey")
    variables: str = Field(default="", alias="variables")
