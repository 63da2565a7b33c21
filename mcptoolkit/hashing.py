"""Hashing and encoding tool."""

from __future__ import annotations

import base64
import hashlib
import logging

from .types import CallToolRequest, CallToolResult, ListToolsResult, PluginError, ToolDescription

logger = logging.getLogger(__name__)

ALGORITHMS = ("sha256", "sha512", "sha384", "sha224", "sha1", "md5", "base32", "base64")

_DIGESTS = {
    "sha256": hashlib.sha256,
    "sha512": hashlib.sha512,
    "sha384": hashlib.sha384,
    "sha224": hashlib.sha224,
    "sha1": hashlib.sha1,
    "md5": hashlib.md5,
}


def hash_data(data: str, algorithm: str) -> str:
    """Hash or encode ``data``; unknown algorithms fall back to base64."""
    raw = data.encode("utf-8")
    digest = _DIGESTS.get(algorithm)
    if digest is not None:
        return digest(raw).hexdigest()
    if algorithm == "base32":
        return base64.b32encode(raw).decode("ascii")
    return base64.b64encode(raw).decode("ascii")


def _string_argument(arguments: dict, key: str) -> str:
    if key not in arguments:
        raise PluginError(f"`{key}` is required")
    value = arguments[key]
    if not isinstance(value, str):
        raise PluginError(f"`{key}` must be a string")
    return value


def call(request: CallToolRequest) -> CallToolResult:
    """Run the hash tool."""
    logger.info("called with args: %r", request.params.arguments)
    arguments = request.params.arguments or {}
    data = _string_argument(arguments, "data")
    algorithm = _string_argument(arguments, "algorithm")
    return CallToolResult.success(hash_data(data, algorithm), "text/plain")


def describe() -> ListToolsResult:
    """Describe the hash tool."""
    return ListToolsResult(
        tools=[
            ToolDescription(
                name="hash",
                description=(
                    "Hash data using various algorithms:  "
                    "sha256, sha512, sha384, sha224, sha1, md5, base32, base64"
                ),
                input_schema={
                    "type": "object",
                    "properties": {
                        "data": {
                            "type": "string",
                            "description": "data to convert to hash or encoded format",
                        },
                        "algorithm": {
                            "type": "string",
                            "description": "algorithm to use for hashing or encoding",
                            "enum": list(ALGORITHMS),
                        },
                    },
                    "required": ["data", "algorithm"],
                },
            )
        ]
    )