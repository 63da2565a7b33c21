"""Fetch a URL and return its content as Markdown."""

from __future__ import annotations

import re

import requests
from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction

from .types import CallToolRequest, CallToolResult, ListToolsResult, PluginError, ToolDescription

USER_AGENT = "fetch-tool/1.0"

_SKIP_TAGS = {"script", "style"}
_BLOCK_TAGS = {
    "p", "div", "section", "article", "header", "footer", "main", "nav", "aside",
    "table", "tr", "form", "fieldset", "figure", "figcaption", "address", "dl", "dt", "dd",
}
_IGNORED_STRINGS = (Comment, Doctype, Declaration, ProcessingInstruction)


def _block(text: str) -> str:
    text = text.strip()
    return f"\n\n{text}\n\n" if text else ""


def _children(node: Tag, in_pre: bool) -> str:
    return "".join(_render(child, in_pre) for child in node.children)


def _list(node: Tag, ordered: bool) -> str:
    lines = []
    start = 1
    if ordered and str(node.get("start", "")).isdigit():
        start = int(node["start"])
    for number, item in enumerate(node.find_all("li", recursive=False), start):
        marker = f"{number}. " if ordered else "* "
        body = re.sub(r"\n{2,}", "\n", _children(item, False).strip())
        first, *rest = body.split("\n") if body else [""]
        indent = " " * len(marker)
        lines.append(marker + first + "".join(f"\n{indent}{line}" for line in rest))
    return _block("\n".join(lines))


def _render(node, in_pre: bool) -> str:
    if isinstance(node, _IGNORED_STRINGS):
        return ""
    if isinstance(node, (NavigableString, CData)):
        text = str(node)
        return text if in_pre else re.sub(r"\s+", " ", text)
    if not isinstance(node, Tag):
        return ""

    name = node.name.lower()
    if name in _SKIP_TAGS:
        return ""
    if re.fullmatch(r"h[1-6]", name):
        title = re.sub(r"\s+", " ", _children(node, False)).strip()
        return _block(f"{'#' * int(name[1])} {title}") if title else ""
    if name == "br":
        return "\n"
    if name == "hr":
        return "\n\n* * *\n\n"
    if name == "pre":
        code = node.get_text().strip("\n")
        return f"\n\n```\n{code}\n```\n\n"
    if name == "code":
        inner = _children(node, in_pre)
        return inner if in_pre else f"`{inner}`"
    if name in ("strong", "b"):
        inner = _children(node, in_pre).strip()
        return f"**{inner}**" if inner else ""
    if name in ("em", "i"):
        inner = _children(node, in_pre).strip()
        return f"_{inner}_" if inner else ""
    if name == "a":
        inner = _children(node, in_pre).strip()
        href = node.get("href")
        return f"[{inner}]({href})" if href else inner
    if name == "img":
        src = node.get("src")
        return f"![{node.get('alt', '')}]({src})" if src else ""
    if name in ("ul", "ol"):
        return _list(node, ordered=name == "ol")
    if name == "blockquote":
        inner = _children(node, False).strip()
        inner = re.sub(r"\n{3,}", "\n\n", inner)
        return _block("\n".join(f"> {line}".rstrip() for line in inner.split("\n")))
    if name in _BLOCK_TAGS:
        return _block(_children(node, in_pre))
    return _children(node, in_pre)


def html_to_markdown(html: str) -> str:
    """Convert an HTML document to Markdown, dropping scripts and styles."""
    soup = BeautifulSoup(html, "html.parser")
    text = _render(soup, False)
    text = "\n".join(line.rstrip() for line in text.split("\n"))
    return re.sub(r"\n{3,}", "\n\n", text).strip()


def _fetch(url: str) -> CallToolResult:
    try:
        response = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=60)
    except requests.RequestException as exc:
        raise PluginError(f"HTTP request failed: {exc}") from exc
    html = response.content.decode("utf-8", errors="replace")
    try:
        markdown = html_to_markdown(html)
    except (ValueError, RecursionError) as exc:
        return CallToolResult.failure(f"Failed to convert HTML to markdown: {exc}")
    return CallToolResult.success(markdown, "text/markdown")


def call(request: CallToolRequest) -> CallToolResult:
    """Run the fetch tool."""
    if request.params.name != "fetch":
        return CallToolResult.failure(f"Unknown tool: {request.params.name}")
    url = (request.params.arguments or {}).get("url")
    if not isinstance(url, str):
        return CallToolResult.failure("Please provide a url")
    return _fetch(url)


def describe() -> ListToolsResult:
    """Describe the fetch tool."""
    return ListToolsResult(
        tools=[
            ToolDescription(
                name="fetch",
                description=(
                    "Enables to open and access arbitrary text URLs. Fetches the contents "
                    "of a URL and returns its contents converted to markdown"
                ),
                input_schema={
                    "type": "object",
                    "properties": {
                        "url": {"type": "string", "description": "The URL to fetch"},
                    },
                    "required": ["url"],
                },
            )
        ]
    )