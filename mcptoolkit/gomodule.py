"""Look up Go module versions and details on the Go module proxy."""

from __future__ import annotations

import json
from typing import Any

import requests

from .types import CallToolRequest, CallToolResult, ListToolsResult, PluginError, ToolDescription

PROXY_URL = "https://proxy.go" "lang.org"
USER_AGENT = "hyper-mcp/1.0"


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, sort_keys=True)


def _fetch(name: str) -> Any:
    try:
        response = requests.get(
            f"{PROXY_URL}/{name}/@latest", headers={"User-Agent": USER_AGENT}, timeout=60
        )
    except requests.RequestException as exc:
        raise PluginError(f"HTTP request failed: {exc}") from exc
    text = response.content.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise PluginError(f"invalid JSON response: {exc}") from exc


def _names(arguments: dict[str, Any]) -> list[str] | None:
    names = arguments.get("module_names")
    if not isinstance(names, str):
        return None
    return [name.strip() for name in names.split(",")]


def _module_info(arguments: dict[str, Any]) -> CallToolResult:
    names = _names(arguments)
    if names is None:
        return CallToolResult.failure("Please provide module names")
    results = [_fetch(name) for name in names]
    if not results:
        return CallToolResult.failure("Failed to get module information")
    return CallToolResult.success(_dumps(results), "text/plain")


def _latest_version(arguments: dict[str, Any]) -> CallToolResult:
    names = _names(arguments)
    if names is None:
        return CallToolResult.failure("Please provide module names")
    versions: dict[str, str] = {}
    for name in names:
        data = _fetch(name)
        version = data.get("Version") if isinstance(data, dict) else None
        if isinstance(version, str):
            versions[name] = version
    if not versions:
        return CallToolResult.failure("Failed to get latest versions")
    return CallToolResult.success(_dumps(versions), "text/plain")


def call(request: CallToolRequest) -> CallToolResult:
    """Run the Go module tool named in the request."""
    arguments = request.params.arguments or {}
    if request.params.name == "gomodule_latest_version":
        return _latest_version(arguments)
    if request.params.name == "gomodule_info":
        return _module_info(arguments)
    return CallToolResult.failure(f"Unknown tool: {request.params.name}")


def describe() -> ListToolsResult:
    """Describe the Go module tools."""
    return ListToolsResult(
        tools=[
            ToolDescription(
                name="gomodule_latest_version",
                description=(
                    "Fetches the latest version of multiple Go modules. "
                    "Assume it's github.com if not specified"
                ),
                input_schema={
                    "type": "object",
                    "properties": {
                        "module_names": {
                            "type": "string",
                            "description": (
                                "Comma-separated list of Go module names to get the latest "
                                "versions for"
                            ),
                        },
                    },
                    "required": ["module_names"],
                },
            ),
            ToolDescription(
                name="gomodule_info",
                description=(
                    "Fetches detailed information about multiple Go modules. "
                    "Assume it's github.com if not specified"
                ),
                input_schema={
                    "type": "object",
                    "properties": {
                        "module_names": {
                            "type": "string",
                            "description": (
                                "Comma-separated list of Go module names to get information for"
                            ),
                        },
                    },
                    "required": ["module_names"],
                },
            ),
        ]
    )