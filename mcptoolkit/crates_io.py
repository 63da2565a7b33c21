"""Look up crate versions and details on crates.io."""

from __future__ import annotations

import json
from typing import Any

import requests

from .types import CallToolRequest, CallToolResult, ListToolsResult, PluginError, ToolDescription

API_URL = "https://crates.io/api/v1/crates"
USER_AGENT = "crates-io-tool/1.0"


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, sort_keys=True)


def _str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _i64(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool) and -(2**63) <= value < 2**63:
        return value
    return None


def _list(value: Any) -> list | None:
    return value if isinstance(value, list) else None


def _license(data: dict[str, Any]) -> str | None:
    versions = data.get("versions")
    if not isinstance(versions, list) or not versions:
        return None
    first = versions[0]
    return _str(first.get("license")) if isinstance(first, dict) else None


def summarize_crate(data: Any) -> dict[str, Any] | None:
    """Pick the interesting fields out of a crates.io crate response, or None if it has no crate."""
    if not isinstance(data, dict):
        return None
    crate = data.get("crate")
    if not isinstance(crate, dict):
        return None
    return {
        "name": _str(crate.get("name")),
        "description": _str(crate.get("description")),
        "latest_version": _str(crate.get("max_version")),
        "downloads": _i64(crate.get("downloads")),
        "repository": _str(crate.get("repository")),
        "documentation": _str(crate.get("documentation")),
        "homepage": _str(crate.get("homepage")),
        "keywords": _list(crate.get("keywords")),
        "categories": _list(crate.get("categories")),
        "license": _license(data),
        "created_at": _str(crate.get("created_at")),
        "updated_at": _str(crate.get("updated_at")),
    }


def _fetch(name: str) -> Any:
    try:
        response = requests.get(f"{API_URL}/{name}", headers={"User-Agent": USER_AGENT}, timeout=60)
    except requests.RequestException as exc:
        raise PluginError(f"HTTP request failed: {exc}") from exc
    text = response.content.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise PluginError(f"invalid JSON response: {exc}") from exc


def _names(arguments: dict[str, Any]) -> list[str] | None:
    names = arguments.get("crate_names")
    if not isinstance(names, str):
        return None
    return [name.strip() for name in names.split(",")]


def _crate_info(arguments: dict[str, Any]) -> CallToolResult:
    names = _names(arguments)
    if names is None:
        return CallToolResult.failure("Please provide crate names")
    results = [info for info in (summarize_crate(_fetch(name)) for name in names) if info is not None]
    if not results:
        return CallToolResult.failure("Failed to get crate information")
    return CallToolResult.success(_dumps(results), "text/plain")


def _latest_version(arguments: dict[str, Any]) -> CallToolResult:
    names = _names(arguments)
    if names is None:
        return CallToolResult.failure("Please provide crate names")
    versions: dict[str, str] = {}
    for name in names:
        data = _fetch(name)
        crate = data.get("crate") if isinstance(data, dict) else None
        version = crate.get("max_version") if isinstance(crate, dict) else None
        if isinstance(version, str):
            versions[name] = version
    if not versions:
        return CallToolResult.failure("Failed to get latest versions")
    return CallToolResult.success(_dumps(versions), "text/plain")


def call(request: CallToolRequest) -> CallToolResult:
    """Run the crates.io tool named in the request."""
    arguments = request.params.arguments or {}
    if request.params.name == "crates_io_latest_version":
        return _latest_version(arguments)
    if request.params.name == "crates_io_crate_info":
        return _crate_info(arguments)
    return CallToolResult.failure(f"Unknown tool: {request.params.name}")


def describe() -> ListToolsResult:
    """Describe the crates.io tools."""
    return ListToolsResult(
        tools=[
            ToolDescription(
                name="crates_io_latest_version",
                description="Fetches the latest version of multiple crates from crates.io",
                input_schema={
                    "type": "object",
                    "properties": {
                        "crate_names": {
                            "type": "string",
                            "description": (
                                "Comma-separated list of crate names to get the latest versions for"
                            ),
                        },
                    },
                    "required": ["crate_names"],
                },
            ),
            ToolDescription(
                name="crates_io_crate_info",
                description="Fetches detailed information about multiple crates from crates.io",
                input_schema={
                    "type": "object",
                    "properties": {
                        "crate_names": {
                            "type": "string",
                            "description": "Comma-separated list of crate names to get information for",
                        },
                    },
                    "required": ["crate_names"],
                },
            ),
        ]
    )