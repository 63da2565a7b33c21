import json

import pytest

from mcptoolkit.types import (
    BlobResourceContents,
    CallToolRequest,
    CallToolResult,
    Content,
    ContentType,
    ListToolsResult,
    Params,
    PluginError,
    Role,
    TextAnnotation,
    TextResourceContents,
    ToolDescription,
)


def test_enum_wire_values():
    assert [c.value for c in ContentType] == ["text", "image", "resource"]
    assert Role("user") is Role.USER
    assert Role("assistant") is Role.ASSISTANT


def test_content_omits_missing_fields():
    assert Content(text="hi").to_dict() == {"text": "hi", "type": "text"}


def test_content_round_trip_with_annotations():
    item = Content(
        type=ContentType.IMAGE,
        data="aGk=",
        mime_type="image/png",
        annotations=TextAnnotation(audience=[Role.USER, Role.ASSISTANT], priority=1.0),
    )
    encoded = item.to_dict()
    assert encoded["mimeType"] == "image/png"
    assert encoded["annotations"]["audience"] == ["user", "assistant"]
    assert Content.from_dict(encoded) == item


def test_content_requires_type():
    with pytest.raises(PluginError):
        Content.from_dict({"text": "hi"})


def test_content_rejects_unknown_type():
    with pytest.raises(PluginError):
        Content.from_dict({"type": "video"})


def test_annotation_rejects_unknown_role():
    with pytest.raises(PluginError):
        TextAnnotation.from_dict({"audience": ["robot"], "priority": 0.5})


def test_result_success_and_failure():
    ok = CallToolResult.success("done", "text/plain")
    assert ok.is_error is None
    assert ok.content[0].text == "done"
    assert ok.content[0].mime_type == "text/plain"
    bad = CallToolResult.failure("boom")
    assert bad.is_error is True
    assert bad.content[0].mime_type is None
    assert bad.to_dict()["isError"] is True


def test_result_json_round_trip():
    result = CallToolResult.failure("boom")
    again = CallToolResult.from_dict(json.loads(result.to_json()))
    assert again == result


def test_result_without_error_flag_omits_key():
    assert "isError" not in CallToolResult.success("x").to_dict()


def test_request_from_json():
    request = CallToolRequest.from_json(
        '{"method": "tools/call", "params": {"name": "hash", "arguments": {"data": "x"}}}'
    )
    assert request.method == "tools/call"
    assert request.params.name == "hash"
    assert request.params.arguments == {"data": "x"}


def test_request_round_trip():
    request = CallToolRequest(params=Params(name="fetch", arguments={"url": "https://example.com"}))
    assert CallToolRequest.from_dict(request.to_dict()) == request
    assert "method" not in request.to_dict()


def test_request_invalid_json():
    with pytest.raises(PluginError):
        CallToolRequest.from_json("{not json")


def test_request_requires_params_and_name():
    with pytest.raises(PluginError):
        CallToolRequest.from_dict({"method": "x"})
    with pytest.raises(PluginError):
        CallToolRequest.from_dict({"params": {}})


def test_params_rejects_non_object_arguments():
    with pytest.raises(PluginError):
        Params.from_dict({"name": "x", "arguments": [1, 2]})


def test_tool_list_round_trip():
    tools = ListToolsResult(
        tools=[ToolDescription(name="t", description="d", input_schema={"type": "object"})]
    )
    data = json.loads(tools.to_json())
    assert data["tools"][0]["inputSchema"] == {"type": "object"}
    assert ListToolsResult.from_dict(data) == tools


def test_blob_resource_round_trip():
    blob = BlobResourceContents(blob="AAE=", uri="file:///tmp/x", mime_type="application/pdf")
    assert BlobResourceContents.from_dict(blob.to_dict()) == blob
    with pytest.raises(PluginError):
        BlobResourceContents.from_dict({"blob": "AAE="})


def test_text_resource_round_trip():
    resource = TextResourceContents(text="hello", uri="file:///tmp/y")
    encoded = resource.to_dict()
    assert "mimeType" not in encoded
    assert TextResourceContents.from_dict(encoded) == resource