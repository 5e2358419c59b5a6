"""Commands creating workflow instances."""

from collections.abc import Mapping
from typing import Any

import structlog

from zb_client import variables
from zb_client.commands.base import Command
from zb_client.config import Settings
from zb_client.gateway.messages import (
    CreateWorkflowInstanceRequest,
    CreateWorkflowInstanceResponse,
    CreateWorkflowInstanceWithResultRequest,
    CreateWorkflowInstanceWithResultResponse,
)
from zb_client.gateway.protocol import GatewayStub
from zb_client.retry import RetryPredicate

logger = structlog.get_logger()

# Version sentinel resolved by the gateway to the latest deployed version
LATEST_VERSION = -1

# Extra time the client waits beyond the gateway-side result timeout (seconds)
REQUEST_TIMEOUT_OFFSET: float = Settings.model_fields["request_timeout_offset"].default


class CreateInstanceCommand(Command):
    """
    Builder for a "create workflow instance" request.

    Identify the workflow either by key or by BPMN process id and version; the last of
    these setters wins. Every setter returns the command so calls can be chained:

        response = await (
            client.new_create_instance_command()
            .bpmn_process_id("order-process")
            .latest_version()
            .variables_from_map({"orderId": 42})
            .send()
        )
    """

    def __init__(
        self,
        gateway: GatewayStub,
        request_timeout: float,
        should_retry: RetryPredicate,
        max_retries: int = 3,
        request_timeout_offset: float = REQUEST_TIMEOUT_OFFSET,
    ) -> None:
        super().__init__(gateway, request_timeout, should_retry, max_retries)
        self.request_timeout_offset = request_timeout_offset
        self.request = CreateWorkflowInstanceRequest()

    def workflow_key(self, key: int) -> "CreateInstanceCommand":
        """Identify the workflow by its deployed key."""
        self.request.workflow_key = key
        self.request.bpmn_process_id = ""
        self.request.version = 0
        return self

    def bpmn_process_id(self, process_id: str) -> "CreateInstanceCommand":
        """Identify the workflow by BPMN process id, defaulting to the latest version."""
        self.request.workflow_key = 0
        self.request.bpmn_process_id = process_id
        self.request.version = LATEST_VERSION
        return self

    def version(self, version: int) -> "CreateInstanceCommand":
        self.request.version = version
        return self

    def latest_version(self) -> "CreateInstanceCommand":
        return self.version(LATEST_VERSION)

    def variables_from_string(self, document: str) -> "CreateInstanceCommand":
        """
        Set the variables from a JSON object string.

        Raises:
            InvalidVariablesError: If the string is not a JSON object
        """
        self.request.variables = variables.validate_document(document)
        return self

    def variables_from_stringer(self, obj: Any) -> "CreateInstanceCommand":
        """Set the variables from `str(obj)`, which must render a JSON object."""
        return self.variables_from_string(str(obj))

    def variables_from_object(self, obj: Any) -> "CreateInstanceCommand":
        """Set the variables from a model, dataclass or mapping, skipping empty fields."""
        self.request.variables = variables.dump_object(obj, omit_empty=True)
        return self

    def variables_from_object_ignore_omitempty(self, obj: Any) -> "CreateInstanceCommand":
        """Set the variables from a model, dataclass or mapping, keeping every field."""
        self.request.variables = variables.dump_object(obj, omit_empty=False)
        return self

    def variables_from_map(self, mapping: Mapping[str, Any]) -> "CreateInstanceCommand":
        self.request.variables = variables.dump_mapping(mapping)
        return self

    def request_timeout(self, timeout: float) -> "CreateInstanceCommand":
        """Override the call timeout (seconds) for this command."""
        self.timeout = timeout
        return self

    def with_result(self) -> "CreateInstanceWithResultCommand":
        """Wait for the instance to complete and return its variables."""
        return CreateInstanceWithResultCommand(self)

    async def send(self) -> CreateWorkflowInstanceResponse:
        """
        Send the request to the gateway.

        Returns:
            The gateway's response, unchanged

        Raises:
            GatewayRequestError: If the call fails and is not retried
        """
        request = self.request.model_copy(deep=True)
        response = await self._dispatch(
            "CreateWorkflowInstance",
            lambda: self.gateway.create_workflow_instance(request, timeout=self.timeout),
        )
        logger.debug(
            "Workflow instance created",
            workflow_key=response.workflow_key,
            workflow_instance_key=response.workflow_instance_key,
        )
        return response


class CreateInstanceWithResultCommand(Command):
    """Create-instance command that waits for the instance to complete."""

    def __init__(self, command: CreateInstanceCommand) -> None:
        super().__init__(
            command.gateway,
            command.timeout,
            command.should_retry,
            command.max_retries,
        )
        self.retry_wait = command.retry_wait
        self.request_timeout_offset = command.request_timeout_offset
        self.request = command.request.model_copy(deep=True)
        self._fetch_variables: list[str] = []

    def fetch_variables(self, *names: str) -> "CreateInstanceWithResultCommand":
        """Restrict the returned variables to `names`; no names returns all."""
        self._fetch_variables = list(names)
        return self

    def request_timeout(self, timeout: float) -> "CreateInstanceWithResultCommand":
        """Override how long (seconds) the gateway waits for the instance to complete."""
        self.timeout = timeout
        return self

    def build_request(self) -> CreateWorkflowInstanceWithResultRequest:
        return CreateWorkflowInstanceWithResultRequest(
            request=self.request.model_copy(deep=True),
            request_timeout=round(self.timeout * 1000),
            fetch_variables=list(self._fetch_variables),
        )

    async def send(self) -> CreateWorkflowInstanceWithResultResponse:
        """
        Send the request and wait for the instance's result.

        The call deadline exceeds the gateway-side timeout by `request_timeout_offset`
        so a gateway timeout is reported by the gateway rather than cut off locally.

        Returns:
            The gateway's response, unchanged

        Raises:
            GatewayRequestError: If the call fails and is not retried
        """
        request = self.build_request()
        deadline = self.timeout + self.request_timeout_offset
        return await self._dispatch(
            "CreateWorkflowInstanceWithResult",
            lambda: self.gateway.create_workflow_instance_with_result(
                request, timeout=deadline
            ),
        )
