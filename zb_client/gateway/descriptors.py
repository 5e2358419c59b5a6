"""Protobuf descriptors for the gateway messages used by this client.

Only the messages the commands send and receive are described. Field names and numbers
follow the gateway protocol (package ``gateway_protocol``, service ``Gateway``).
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE = "gateway_protocol"
SERVICE = f"{PACKAGE}.Gateway"

CREATE_WORKFLOW_INSTANCE = f"/{SERVICE}/CreateWorkflowInstance"
CREATE_WORKFLOW_INSTANCE_WITH_RESULT = f"/{SERVICE}/CreateWorkflowInstanceWithResult"

_Field = descriptor_pb2.FieldDescriptorProto

_INT32 = _Field.TYPE_INT32
_INT64 = _Field.TYPE_INT64
_STRING = _Field.TYPE_STRING
_MESSAGE = _Field.TYPE_MESSAGE

# message name -> [(field name, number, type, repeated, message type name)]
_MESSAGES: dict[str, list[tuple[str, int, int, bool, str | None]]] = {
    "CreateWorkflowInstanceRequest": [
        ("workflowKey", 1, _INT64, False, None),
        ("bpmnProcessId", 2, _STRING, False, None),
        ("version", 3, _INT32, False, None),
        ("variables", 4, _STRING, False, None),
    ],
    "CreateWorkflowInstanceResponse": [
        ("workflowKey", 1, _INT64, False, None),
        ("bpmnProcessId", 2, _STRING, False, None),
        ("version", 3, _INT32, False, None),
        ("workflowInstanceKey", 4, _INT64, False, None),
    ],
    "CreateWorkflowInstanceWithResultRequest": [
        ("request", 1, _MESSAGE, False, "CreateWorkflowInstanceRequest"),
        ("requestTimeout", 2, _INT64, False, None),
        ("fetchVariables", 3, _STRING, True, None),
    ],
    "CreateWorkflowInstanceWithResultResponse": [
        ("workflowKey", 1, _INT64, False, None),
        ("bpmnProcessId", 2, _STRING, False, None),
        ("version", 3, _INT32, False, None),
        ("workflowInstanceKey", 4, _INT64, False, None),
        ("variables", 5, _STRING, False, None),
    ],
}


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="zb_client/gateway.proto",
        package=PACKAGE,
        syntax="proto3",
    )
    for message_name, fields in _MESSAGES.items():
        message = file_proto.message_type.add(name=message_name)
        for name, number, field_type, repeated, type_name in fields:
            field = message.field.add(
                name=name,
                json_name=name,
                number=number,
                type=field_type,
                label=_Field.LABEL_REPEATED if repeated else _Field.LABEL_OPTIONAL,
            )
            if type_name:
                field.type_name = f".{PACKAGE}.{type_name}"
    return file_proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_build_file().SerializeToString())


def message_class(name: str):
    """Return the generated protobuf class for a gateway message name."""
    descriptor = _pool.FindMessageTypeByName(f"{PACKAGE}.{name}")
    return message_factory.GetMessageClass(descriptor)


CreateWorkflowInstanceRequestPb = message_class("CreateWorkflowInstanceRequest")
CreateWorkflowInstanceResponsePb = message_class("CreateWorkflowInstanceResponse")
CreateWorkflowInstanceWithResultRequestPb = message_class(
    "CreateWorkflowInstanceWithResultRequest"
)
CreateWorkflowInstanceWithResultResponsePb = message_class(
    "CreateWorkflowInstanceWithResultResponse"
)
