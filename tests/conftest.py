"""Shared fixtures for gateway client tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from tenacity import wait_none

from zb_client.commands import CreateInstanceCommand
from zb_client.config import Settings
from zb_client.gateway.messages import (
    CreateWorkflowInstanceResponse,
    CreateWorkflowInstanceWithResultResponse,
)
from zb_client.retry import never_retry

DEFAULT_TEST_TIMEOUT = 5.0
DEFAULT_TEST_TIMEOUT_MS = 5000


@pytest.fixture
def test_settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def stub_response():
    """Response returned by the fake gateway for plain creation."""
    return CreateWorkflowInstanceResponse(
        workflow_key=123,
        bpmn_process_id="foo",
        version=4545,
        workflow_instance_key=5632,
    )


@pytest.fixture
def stub_result_response():
    """Response returned by the fake gateway for creation with result."""
    return CreateWorkflowInstanceWithResultResponse(
        workflow_key=123,
        bpmn_process_id="foo",
        version=4545,
        workflow_instance_key=5632,
        variables="{}",
    )


@pytest.fixture
def gateway(stub_response, stub_result_response):
    """Fake gateway stub returning the stub responses."""
    gateway = MagicMock()
    gateway.create_workflow_instance = AsyncMock(return_value=stub_response)
    gateway.create_workflow_instance_with_result = AsyncMock(
        return_value=stub_result_response
    )
    return gateway


@pytest.fixture
def command(gateway):
    """Create-instance command that never retries."""
    command = CreateInstanceCommand(gateway, DEFAULT_TEST_TIMEOUT, never_retry)
    command.retry_wait = wait_none()
    return command
