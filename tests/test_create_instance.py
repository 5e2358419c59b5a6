"""Tests for the create-instance commands."""

import json
from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from tests.conftest import DEFAULT_TEST_TIMEOUT, DEFAULT_TEST_TIMEOUT_MS
from zb_client.commands import LATEST_VERSION, CreateInstanceWithResultCommand
from zb_client.commands.create_instance import REQUEST_TIMEOUT_OFFSET
from zb_client.errors import InvalidVariablesError
from zb_client.gateway.messages import (
    CreateWorkflowInstanceRequest,
    CreateWorkflowInstanceWithResultRequest,
)


class DataType(BaseModel):
    foo: str = ""

    def __str__(self) -> str:
        return json.dumps({"foo": self.foo}, separators=(",", ":"))


@dataclass
class DataClassType:
    foo: str = ""
    count: int = 0


class TestCreateInstanceCommand:
    """Tests for CreateInstanceCommand."""

    @pytest.mark.asyncio
    async def test_by_workflow_key(self, command, gateway, stub_response):
        """Test creating an instance by workflow key."""
        response = await command.workflow_key(123).send()

        gateway.create_workflow_instance.assert_awaited_once_with(
            CreateWorkflowInstanceRequest(workflow_key=123),
            timeout=DEFAULT_TEST_TIMEOUT,
        )
        assert response is stub_response

    @pytest.mark.asyncio
    async def test_by_bpmn_process_id_latest_version(self, command, gateway, stub_response):
        """Test creating an instance of the latest version of a process."""
        response = await command.bpmn_process_id("foo").latest_version().send()

        gateway.create_workflow_instance.assert_awaited_once_with(
            CreateWorkflowInstanceRequest(bpmn_process_id="foo", version=LATEST_VERSION),
            timeout=DEFAULT_TEST_TIMEOUT,
        )
        assert response is stub_response

    @pytest.mark.asyncio
    async def test_by_bpmn_process_id_and_version(self, command, gateway, stub_response):
        """Test creating an instance of a specific process version."""
        response = await command.bpmn_process_id("foo").version(56).send()

        gateway.create_workflow_instance.assert_awaited_once_with(
            CreateWorkflowInstanceRequest(bpmn_process_id="foo", version=56),
            timeout=DEFAULT_TEST_TIMEOUT,
        )
        assert response is stub_response

    def test_bpmn_process_id_defaults_to_latest_version(self, command):
        """Test that the version defaults to the latest one."""
        command.bpmn_process_id("foo")

        assert command.request.version == LATEST_VERSION

    def test_last_identification_setter_wins(self, command):
        """Test that key and process id replace each other."""
        command.bpmn_process_id("foo").version(3).workflow_key(123)
        assert command.request == CreateWorkflowInstanceRequest(workflow_key=123)

        command.workflow_key(123).bpmn_process_id("bar")
        assert command.request == CreateWorkflowInstanceRequest(
            bpmn_process_id="bar", version=LATEST_VERSION
        )

    @pytest.mark.asyncio
    async def test_variables_from_string(self, command, gateway, stub_response):
        """Test setting variables from a JSON string."""
        variables = '{"foo":"bar"}'

        response = await command.workflow_key(123).variables_from_string(variables).send()

        gateway.create_workflow_instance.assert_awaited_once_with(
            CreateWorkflowInstanceRequest(workflow_key=123, variables=variables),
            timeout=DEFAULT_TEST_TIMEOUT,
        )
        assert response is stub_response

    @pytest.mark.asyncio
    async def test_variables_from_stringer(self, command, gateway):
        """Test setting variables from an object rendering JSON via str()."""
        await command.workflow_key(123).variables_from_stringer(DataType(foo="bar")).send()

        request = gateway.create_workflow_instance.await_args.args[0]
        assert request.variables == '{"foo":"bar"}'

    @pytest.mark.asyncio
    async def test_variables_from_object(self, command, gateway):
        """Test setting variables from a model."""
        await command.workflow_key(123).variables_from_object(DataType(foo="bar")).send()

        request = gateway.create_workflow_instance.await_args.args[0]
        assert request.variables == '{"foo":"bar"}'

    def test_variables_from_object_omits_empty_fields(self, command):
        """Test that empty fields are dropped by default."""
        command.variables_from_object(DataType(foo=""))
        assert command.request.variables == "{}"

        command.variables_from_object(DataClassType(foo="x"))
        assert command.request.variables == '{"foo":"x"}'

    def test_variables_from_object_ignore_omitempty(self, command):
        """Test that every field is kept when omitempty is ignored."""
        command.variables_from_object_ignore_omitempty(DataType(foo=""))
        assert command.request.variables == '{"foo":""}'

        command.variables_from_object_ignore_omitempty(DataClassType())
        assert command.request.variables == '{"foo":"","count":0}'

    @pytest.mark.asyncio
    async def test_variables_from_map(self, command, gateway):
        """Test setting variables from a dict."""
        await command.workflow_key(123).variables_from_map({"foo": "bar"}).send()

        request = gateway.create_workflow_instance.await_args.args[0]
        assert request.variables == '{"foo":"bar"}'

    def test_invalid_variables_rejected_before_send(self, command, gateway):
        """Test that non-object JSON is rejected by the setter."""
        documents = ["[1, 2]", '"foo"', "3", "{not json", '{"a": NaN}', '{"a": -Infinity}']
        for document in documents:
            with pytest.raises(InvalidVariablesError):
                command.variables_from_string(document)

        assert command.request.variables == ""
        gateway.create_workflow_instance.assert_not_called()

    def test_non_finite_and_non_mapping_variables_rejected(self, command):
        """Test that values without a JSON form and non-mappings are rejected."""
        with pytest.raises(InvalidVariablesError):
            command.variables_from_map({"a": float("nan")})
        with pytest.raises(InvalidVariablesError):
            command.variables_from_map([("a", 1)])
        with pytest.raises(InvalidVariablesError):
            command.variables_from_object_ignore_omitempty({"a": float("inf")})

        assert command.request.variables == ""

    @pytest.mark.asyncio
    async def test_request_timeout_override(self, command, gateway):
        """Test that the per-call timeout can be overridden."""
        await command.workflow_key(123).request_timeout(1.5).send()

        assert gateway.create_workflow_instance.await_args.kwargs["timeout"] == 1.5

    @pytest.mark.asyncio
    async def test_sent_request_is_isolated_from_later_setters(self, command, gateway):
        """Test that mutating the command after send does not alter the sent request."""
        await command.workflow_key(123).send()
        command.workflow_key(456)

        request = gateway.create_workflow_instance.await_args.args[0]
        assert request.workflow_key == 123


class TestCreateInstanceWithResultCommand:
    """Tests for CreateInstanceWithResultCommand."""

    @staticmethod
    def expected(request, fetch_variables=None):
        return CreateWorkflowInstanceWithResultRequest(
            request=request,
            request_timeout=DEFAULT_TEST_TIMEOUT_MS,
            fetch_variables=fetch_variables or [],
        )

    @pytest.mark.asyncio
    async def test_by_workflow_key(self, command, gateway, stub_result_response):
        """Test creating an instance with result by workflow key."""
        result_command = command.workflow_key(123).with_result()
        assert isinstance(result_command, CreateInstanceWithResultCommand)

        response = await result_command.send()

        gateway.create_workflow_instance_with_result.assert_awaited_once_with(
            self.expected(CreateWorkflowInstanceRequest(workflow_key=123)),
            timeout=DEFAULT_TEST_TIMEOUT + REQUEST_TIMEOUT_OFFSET,
        )
        gateway.create_workflow_instance.assert_not_called()
        assert response is stub_result_response

    @pytest.mark.asyncio
    async def test_by_bpmn_process_id(self, command, gateway, stub_result_response):
        """Test creating an instance with result by process id."""
        response = await command.bpmn_process_id("foo").latest_version().with_result().send()

        request = gateway.create_workflow_instance_with_result.await_args.args[0]
        assert request == self.expected(
            CreateWorkflowInstanceRequest(bpmn_process_id="foo", version=LATEST_VERSION)
        )
        assert response is stub_result_response

    @pytest.mark.asyncio
    async def test_by_bpmn_process_id_and_version(self, command, gateway):
        """Test creating an instance with result of a specific version."""
        await command.bpmn_process_id("foo").version(56).with_result().send()

        request = gateway.create_workflow_instance_with_result.await_args.args[0]
        assert request == self.expected(
            CreateWorkflowInstanceRequest(bpmn_process_id="foo", version=56)
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "setter, value, variables",
        [
            ("variables_from_string", '{"foo":"bar"}', '{"foo":"bar"}'),
            ("variables_from_stringer", DataType(foo="bar"), '{"foo":"bar"}'),
            ("variables_from_object", DataType(foo="bar"), '{"foo":"bar"}'),
            ("variables_from_object", DataType(foo=""), "{}"),
            ("variables_from_object_ignore_omitempty", DataType(foo=""), '{"foo":""}'),
            ("variables_from_map", {"foo": "bar"}, '{"foo":"bar"}'),
        ],
    )
    async def test_carries_variables(self, command, gateway, setter, value, variables):
        """Test that variables set before with_result are sent."""
        getattr(command.workflow_key(123), setter)(value)

        await command.with_result().send()

        request = gateway.create_workflow_instance_with_result.await_args.args[0]
        assert request == self.expected(
            CreateWorkflowInstanceRequest(workflow_key=123, variables=variables)
        )

    def test_request_is_isolated_from_original_command(self, command):
        """Test that setters on the original command do not leak into the result command."""
        result_command = command.workflow_key(1).with_result()

        command.workflow_key(999).variables_from_map({"late": True})

        assert result_command.build_request().request == CreateWorkflowInstanceRequest(
            workflow_key=1
        )

    @pytest.mark.parametrize(
        "timeout, milliseconds",
        [(1.001, 1001), (0.29, 290), (2.5, 2500)],
    )
    def test_request_timeout_rounds_to_milliseconds(self, command, timeout, milliseconds):
        """Test that float timeouts convert to the nearest millisecond."""
        result_command = command.workflow_key(1).with_result().request_timeout(timeout)

        assert result_command.build_request().request_timeout == milliseconds

    @pytest.mark.asyncio
    async def test_fetch_variables(self, command, gateway):
        """Test restricting the returned variables."""
        await command.workflow_key(123).with_result().fetch_variables("a", "b", "c").send()

        request = gateway.create_workflow_instance_with_result.await_args.args[0]
        assert request.fetch_variables == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_fetch_empty_variables_list(self, command, gateway):
        """Test that fetching no names sends an empty list."""
        await command.workflow_key(123).with_result().fetch_variables().send()

        request = gateway.create_workflow_instance_with_result.await_args.args[0]
        assert request.fetch_variables == []

    @pytest.mark.asyncio
    async def test_request_timeout_sets_gateway_timeout_and_deadline(self, command, gateway):
        """Test that the timeout is sent in milliseconds and the deadline is offset."""
        await command.workflow_key(123).with_result().request_timeout(2.5).send()

        call = gateway.create_workflow_instance_with_result.await_args
        assert call.args[0].request_timeout == 2500
        assert call.kwargs["timeout"] == 2.5 + REQUEST_TIMEOUT_OFFSET
