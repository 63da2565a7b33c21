"""File system tool: read, write, edit, list, move, search and inspect files."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable
from typing import Any

from .types import CallToolRequest, CallToolResult, ListToolsResult, PluginError, ToolDescription

logger = logging.getLogger(__name__)


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, sort_keys=True)


def _describe_error(exc: Exception) -> str:
    if isinstance(exc, UnicodeDecodeError):
        return "stream did not contain valid UTF-8"
    if isinstance(exc, OSError) and exc.errno is not None:
        return f"{exc.strerror} (os error {exc.errno})"
    return str(exc)


def _seconds(timestamp: float) -> int:
    if timestamp < 0:
        raise PluginError("time is before the Unix epoch")
    return int(timestamp)


def _created(info: os.stat_result) -> float:
    birth = getattr(info, "st_birthtime", None)
    return info.st_ctime if birth is None else birth


def _string(arguments: dict[str, Any], key: str) -> str | None:
    value = arguments.get(key)
    return value if isinstance(value, str) else None


def _read_text(path: str) -> str:
    with open(path, "rb") as handle:
        return handle.read().decode("utf-8")


def search_dir(directory: str, pattern: str) -> list[str]:
    """Recursively collect paths of files under ``directory`` whose name contains ``pattern``."""
    results: list[str] = []
    with os.scandir(directory) as entries:
        for entry in entries:
            if entry.is_dir():
                results.extend(search_dir(entry.path, pattern))
            elif pattern in entry.name:
                results.append(entry.path)
    return results


def _read_file(arguments: dict[str, Any]) -> CallToolResult:
    path = _string(arguments, "path")
    if path is None:
        return CallToolResult.failure("Please provide a path")
    try:
        text = _read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        return CallToolResult.failure(f"Failed to read file: {_describe_error(exc)}")
    return CallToolResult.success(text, "text/plain")


def _read_multiple_files(arguments: dict[str, Any]) -> CallToolResult:
    paths = arguments.get("paths")
    if not isinstance(paths, list):
        return CallToolResult.failure("Please provide an array of paths")
    results = []
    for path in paths:
        if not isinstance(path, str):
            continue
        try:
            results.append({"path": path, "content": _read_text(path), "error": None})
        except (OSError, UnicodeDecodeError) as exc:
            results.append({"path": path, "content": None, "error": _describe_error(exc)})
    return CallToolResult.success(_dumps(results), "application/json")


def _write_file(arguments: dict[str, Any]) -> CallToolResult:
    path = _string(arguments, "path")
    content = _string(arguments, "content")
    if path is None or content is None:
        return CallToolResult.failure("Please provide path and content")
    try:
        with open(path, "wb") as handle:
            handle.write(content.encode("utf-8"))
    except OSError as exc:
        return CallToolResult.failure(f"Failed to write file: {_describe_error(exc)}")
    return CallToolResult.success("File written successfully")


def _edit_file(arguments: dict[str, Any]) -> CallToolResult:
    path = _string(arguments, "path")
    content = _string(arguments, "content")
    if path is None or content is None:
        return CallToolResult.failure("Please provide path and content")
    try:
        descriptor = os.open(path, os.O_WRONLY | os.O_TRUNC)
        with open(descriptor, "wb") as handle:
            handle.write(content.encode("utf-8"))
    except OSError as exc:
        raise PluginError(_describe_error(exc)) from exc
    return CallToolResult.success("File edited successfully")


def _create_dir(arguments: dict[str, Any]) -> CallToolResult:
    path = _string(arguments, "path")
    if path is None:
        return CallToolResult.failure("Please provide a path")
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as exc:
        return CallToolResult.failure(f"Failed to create directory: {_describe_error(exc)}")
    return CallToolResult.success("Directory created successfully")


def _list_dir(arguments: dict[str, Any]) -> CallToolResult:
    path = _string(arguments, "path")
    if path is None:
        return CallToolResult.failure("Please provide a path")
    try:
        entries = list(os.scandir(path))
    except OSError as exc:
        return CallToolResult.failure(f"Failed to list directory: {_describe_error(exc)}")
    items = []
    for entry in entries:
        try:
            info = entry.stat(follow_symlinks=False)
        except OSError as exc:
            raise PluginError(_describe_error(exc)) from exc
        items.append(
            {
                "name": entry.name,
                "path": entry.path,
                "is_file": entry.is_file(follow_symlinks=False),
                "is_dir": entry.is_dir(follow_symlinks=False),
                "size": info.st_size,
                "modified": _seconds(info.st_mtime),
            }
        )
    return CallToolResult.success(_dumps(items), "application/json")


def _move_file(arguments: dict[str, Any]) -> CallToolResult:
    source = _string(arguments, "from")
    target = _string(arguments, "to")
    if source is None or target is None:
        return CallToolResult.failure("Please provide from and to paths")
    try:
        os.replace(source, target)
    except OSError as exc:
        return CallToolResult.failure(f"Failed to move file: {_describe_error(exc)}")
    return CallToolResult.success("File moved successfully")


def _search_files(arguments: dict[str, Any]) -> CallToolResult:
    directory = _string(arguments, "directory")
    pattern = _string(arguments, "pattern")
    if directory is None or pattern is None:
        return CallToolResult.failure("Please provide directory and pattern")
    try:
        results = search_dir(directory, pattern)
    except OSError as exc:
        return CallToolResult.failure(f"Failed to search files: {_describe_error(exc)}")
    return CallToolResult.success(_dumps(results), "application/json")


def _get_file_info(arguments: dict[str, Any]) -> CallToolResult:
    path = _string(arguments, "path")
    if path is None:
        return CallToolResult.failure("Please provide a path")
    try:
        info = os.stat(path)
    except OSError as exc:
        return CallToolResult.failure(f"Failed to get file info: {_describe_error(exc)}")
    details = {
        "size": info.st_size,
        "is_file": os.path.isfile(path),
        "is_dir": os.path.isdir(path),
        "modified": _seconds(info.st_mtime),
        "created": _seconds(_created(info)),
        "accessed": _seconds(info.st_atime),
    }
    return CallToolResult.success(_dumps(details), "application/json")


_OPERATIONS: dict[str, Callable[[dict[str, Any]], CallToolResult]] = {
    "read_file": _read_file,
    "read_multiple_files": _read_multiple_files,
    "write_file": _write_file,
    "edit_file": _edit_file,
    "create_dir": _create_dir,
    "list_dir": _list_dir,
    "move_file": _move_file,
    "search_files": _search_files,
    "get_file_info": _get_file_info,
}


def call(request: CallToolRequest) -> CallToolResult:
    """Run the file system operation named by the ``operation`` argument."""
    logger.info("call: %r", request)
    arguments = dict(request.params.arguments or {})
    operation = arguments.get("operation")
    handler = _OPERATIONS.get(operation) if isinstance(operation, str) else None
    if handler is None:
        return CallToolResult.failure(f"Unknown operation: {request.params.name}")
    return handler(arguments)


def _schema(properties: dict[str, dict[str, Any]], required: list[str]) -> dict[str, Any]:
    return {"type": "object", "properties": properties, "required": required}


def _text(description: str) -> dict[str, Any]:
    return {"type": "string", "description": description}


def describe() -> ListToolsResult:
    """Describe the file system tools."""
    return ListToolsResult(
        tools=[
            ToolDescription(
                name="read_file",
                description="Read the contents of a file",
                input_schema=_schema({"path": _text("Path to the file to read")}, ["path"]),
            ),
            ToolDescription(
                name="read_multiple_files",
                description="Read contents of multiple files",
                input_schema=_schema(
                    {
                        "paths": {
                            "type": "array",
                            "items": {"type": "string"},
                            "description": "Array of file paths to read",
                        }
                    },
                    ["paths"],
                ),
            ),
            ToolDescription(
                name="write_file",
                description="Write content to a file",
                input_schema=_schema(
                    {
                        "path": _text("Path where to write the file"),
                        "content": _text("Content to write to the file"),
                    },
                    ["path", "content"],
                ),
            ),
            ToolDescription(
                name="edit_file",
                description="Edit an existing file's content",
                input_schema=_schema(
                    {
                        "path": _text("Path to the file to edit"),
                        "content": _text("New content for the file"),
                    },
                    ["path", "content"],
                ),
            ),
            ToolDescription(
                name="create_dir",
                description="Create a new directory",
                input_schema=_schema({"path": _text("Path where to create the directory")}, ["path"]),
            ),
            ToolDescription(
                name="list_dir",
                description="List contents of a directory",
                input_schema=_schema({"path": _text("Path to the directory to list")}, ["path"]),
            ),
            ToolDescription(
                name="move_file",
                description="Move a file from one location to another",
                input_schema=_schema(
                    {
                        "from": _text("Source path of the file"),
                        "to": _text("Destination path for the file"),
                    },
                    ["from", "to"],
                ),
            ),
            ToolDescription(
                name="search_files",
                description="Search for files matching a pattern in a directory",
                input_schema=_schema(
                    {
                        "directory": _text("Directory to search in"),
                        "pattern": _text("Pattern to match against filenames"),
                    },
                    ["directory", "pattern"],
                ),
            ),
            ToolDescription(
                name="get_file_info",
                description="Get information about a file or directory",
                input_schema=_schema({"path": _text("Path to get information about")}, ["path"]),
            ),
        ]
    )