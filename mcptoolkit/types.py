"""Wire types shared by the tools: requests, results, content and tool descriptions."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PluginError(Exception):
    """Raised when a tool call cannot be carried out."""


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise PluginError(f"{what} must be a JSON object")
    return data


def _get(data: Mapping[str, Any], key: str, kinds: tuple[type, ...], *, required: bool = False) -> Any:
    value = data.get(key)
    if value is None:
        if required:
            raise PluginError(f"missing field `{key}`")
        return None
    if not isinstance(value, kinds) or (isinstance(value, bool) and bool not in kinds):
        raise PluginError(f"invalid type for field `{key}`")
    return value


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class ContentType(str, Enum):
    """Kind of a content item."""

    TEXT = "text"
    IMAGE = "image"
    RESOURCE = "resource"


class Role(str, Enum):
    """Intended audience of a piece of content."""

    ASSISTANT = "assistant"
    USER = "user"


def _enum(kind: type[Enum], value: Any, key: str) -> Any:
    try:
        return kind(value)
    except ValueError as exc:
        raise PluginError(f"unknown variant `{value}` for field `{key}`") from exc


@dataclass
class TextAnnotation:
    """Audience and priority hints attached to content."""

    audience: list[Role] = field(default_factory=list)
    priority: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"audience": [role.value for role in self.audience], "priority": self.priority}

    @classmethod
    def from_dict(cls, data: Any) -> TextAnnotation:
        data = _mapping(data, "annotations")
        audience = _get(data, "audience", (list,), required=True)
        priority = _get(data, "priority", (int, float), required=True)
        return cls(
            audience=[_enum(Role, role, "audience") for role in audience],
            priority=float(priority),
        )


@dataclass
class Content:
    """One item of a tool result."""

    type: ContentType = ContentType.TEXT
    text: str | None = None
    mime_type: str | None = None
    data: str | None = None
    annotations: TextAnnotation | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.annotations is not None:
            result["annotations"] = self.annotations.to_dict()
        if self.data is not None:
            result["data"] = self.data
        if self.mime_type is not None:
            result["mimeType"] = self.mime_type
        if self.text is not None:
            result["text"] = self.text
        result["type"] = self.type.value
        return result

    @classmethod
    def from_dict(cls, data: Any) -> Content:
        data = _mapping(data, "content")
        annotations = data.get("annotations")
        return cls(
            type=_enum(ContentType, _get(data, "type", (str,), required=True), "type"),
            text=_get(data, "text", (str,)),
            mime_type=_get(data, "mimeType", (str,)),
            data=_get(data, "data", (str,)),
            annotations=None if annotations is None else TextAnnotation.from_dict(annotations),
        )


@dataclass
class CallToolResult:
    """Outcome of a tool call."""

    content: list[Content] = field(default_factory=list)
    is_error: bool | None = None

    @classmethod
    def success(cls, text: str, mime_type: str | None = None) -> CallToolResult:
        """A successful result holding one text item."""
        return cls(content=[Content(text=text, mime_type=mime_type)])

    @classmethod
    def failure(cls, text: str) -> CallToolResult:
        """A result flagged as an error, holding one text message."""
        return cls(content=[Content(text=text)], is_error=True)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"content": [item.to_dict() for item in self.content]}
        if self.is_error is not None:
            result["isError"] = self.is_error
        return result

    @classmethod
    def from_dict(cls, data: Any) -> CallToolResult:
        data = _mapping(data, "result")
        items = _get(data, "content", (list,), required=True)
        return cls(
            content=[Content.from_dict(item) for item in items],
            is_error=_get(data, "isError", (bool,)),
        )

    def to_json(self) -> str:
        return _dumps(self.to_dict())


@dataclass
class Params:
    """Name of the tool to call and its arguments."""

    name: str
    arguments: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.arguments is not None:
            result["arguments"] = dict(self.arguments)
        result["name"] = self.name
        return result

    @classmethod
    def from_dict(cls, data: Any) -> Params:
        data = _mapping(data, "params")
        arguments = _get(data, "arguments", (Mapping,))
        return cls(
            name=_get(data, "name", (str,), required=True),
            arguments=None if arguments is None else dict(arguments),
        )


@dataclass
class CallToolRequest:
    """A request to run one tool."""

    params: Params
    method: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.method is not None:
            result["method"] = self.method
        result["params"] = self.params.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: Any) -> CallToolRequest:
        data = _mapping(data, "request")
        if data.get("params") is None:
            raise PluginError("missing field `params`")
        return cls(params=Params.from_dict(data["params"]), method=_get(data, "method", (str,)))

    @classmethod
    def from_json(cls, text: str | bytes) -> CallToolRequest:
        try:
            data = json.loads(text)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise PluginError(f"invalid request JSON: {exc}") from exc
        return cls.from_dict(data)


@dataclass
class ToolDescription:
    """Name, description and input schema of one tool."""

    name: str
    description: str
    input_schema: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "inputSchema": dict(self.input_schema),
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: Any) -> ToolDescription:
        data = _mapping(data, "tool")
        return cls(
            name=_get(data, "name", (str,), required=True),
            description=_get(data, "description", (str,), required=True),
            input_schema=dict(_get(data, "inputSchema", (Mapping,), required=True)),
        )


@dataclass
class ListToolsResult:
    """The tools a provider offers."""

    tools: list[ToolDescription] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"tools": [tool.to_dict() for tool in self.tools]}

    @classmethod
    def from_dict(cls, data: Any) -> ListToolsResult:
        data = _mapping(data, "tool list")
        tools = _get(data, "tools", (list,), required=True)
        return cls(tools=[ToolDescription.from_dict(tool) for tool in tools])

    def to_json(self) -> str:
        return _dumps(self.to_dict())


@dataclass
class BlobResourceContents:
    """A binary resource, base64 encoded."""

    blob: str
    uri: str
    mime_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"blob": self.blob}
        if self.mime_type is not None:
            result["mimeType"] = self.mime_type
        result["uri"] = self.uri
        return result

    @classmethod
    def from_dict(cls, data: Any) -> BlobResourceContents:
        data = _mapping(data, "resource")
        return cls(
            blob=_get(data, "blob", (str,), required=True),
            uri=_get(data, "uri", (str,), required=True),
            mime_type=_get(data, "mimeType", (str,)),
        )


@dataclass
class TextResourceContents:
    """A textual resource."""

    text: str
    uri: str
    mime_type: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.mime_type is not None:
            result["mimeType"] = self.mime_type
        result["text"] = self.text
        result["uri"] = self.uri
        return result

    @classmethod
    def from_dict(cls, data: Any) -> TextResourceContents:
        data = _mapping(data, "resource")
        return cls(
            text=_get(data, "text", (str,), required=True),
            uri=_get(data, "uri", (str,), required=True),
            mime_type=_get(data, "mimeType", (str,)),
        )