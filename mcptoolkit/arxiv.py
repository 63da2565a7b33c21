"""Search arXiv and download paper PDFs."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote
from xml.etree.ElementTree import Element, ParseError

import requests
from defusedxml import DefusedXmlException
from defusedxml.ElementTree import fromstring

from .types import (
    CallToolRequest,
    CallToolResult,
    Content,
    ListToolsResult,
    PluginError,
    Role,
    TextAnnotation,
    ToolDescription,
)

SEARCH_URL = "http://export.arxiv.org/api/query"
PDF_URL = "https://arxiv.org/pdf"
SEARCH_USER_AGENT = "hyper-mcp/1.0 (https://github.com/tuananh/hyper-mcp)"
PDF_USER_AGENT = "Mozilla/5.0 (compatible; hyper-mcp/1.0)"
DEFAULT_MAX_RESULTS = 10
DEFAULT_SAVE_PATH = "/tmp"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _rfc3339(moment: datetime) -> str:
    moment = moment.astimezone(timezone.utc)
    text = moment.strftime("%Y-%m-%dT%H:%M:%S")
    micro = moment.microsecond
    if micro:
        text += f".{micro // 1000:03d}" if micro % 1000 == 0 else f".{micro:06d}"
    return text + "Z"


@dataclass
class Paper:
    """One search hit from arXiv."""

    paper_id: str = ""
    title: str = ""
    authors: list[str] = field(default_factory=list)
    abstract_text: str = ""
    url: str = ""
    pdf_url: str = ""
    published_date: datetime = _EPOCH
    updated_date: datetime = _EPOCH
    source: str = "arxiv"
    categories: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)
    doi: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "paper_id": self.paper_id,
            "title": self.title,
            "authors": list(self.authors),
            "abstract_text": self.abstract_text,
            "url": self.url,
            "pdf_url": self.pdf_url,
            "published_date": _rfc3339(self.published_date),
            "updated_date": _rfc3339(self.updated_date),
            "source": self.source,
            "categories": list(self.categories),
            "keywords": list(self.keywords),
            "doi": self.doi,
        }


def _local(tag: Any) -> str | None:
    if not isinstance(tag, str):
        return None
    return tag.rsplit("}", 1)[-1]


def _children(element: Element, name: str) -> list[Element]:
    return [child for child in element if _local(child.tag) == name]


def _first(element: Element, name: str) -> Element | None:
    found = _children(element, name)
    return found[0] if found else None


def _text(element: Element | None) -> str | None:
    if element is None:
        return None
    return "".join(element.itertext())


def _timestamp(element: Element | None) -> datetime:
    text = _text(element)
    if not text:
        return _EPOCH
    text = text.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        moment = datetime.fromisoformat(text)
    except ValueError:
        return _EPOCH
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _paper(entry: Element) -> Paper:
    entry_id = _text(_first(entry, "id")) or ""
    authors = [_text(_first(author, "name")) or "" for author in _children(entry, "author")]
    categories = [category.get("term", "") for category in _children(entry, "category")]
    links = _children(entry, "link")
    url = next((link.get("href", "") for link in links if link.get("rel") == "alternate"), "")
    pdf_url = next(
        (link.get("href", "") for link in links if link.get("type") == "application/pdf"), ""
    )
    return Paper(
        paper_id=entry_id.split("/abs/")[-1],
        title=_text(_first(entry, "title")) or "",
        authors=authors,
        abstract_text=_text(_first(entry, "content")) or "",
        url=url,
        pdf_url=pdf_url,
        published_date=_timestamp(_first(entry, "published")),
        updated_date=_timestamp(_first(entry, "updated")),
        categories=categories,
    )


def parse_feed(xml_text: str | bytes) -> list[Paper]:
    """Parse an arXiv Atom feed into papers."""
    try:
        root = fromstring(xml_text)
    except (ParseError, DefusedXmlException) as exc:
        raise PluginError(f"Failed to parse arXiv feed: {exc}") from exc
    if _local(root.tag) != "feed":
        raise PluginError("Failed to parse arXiv feed: unsupported feed format")
    return [_paper(entry) for entry in _children(root, "entry")]


def _get(url: str, headers: dict[str, str]) -> bytes:
    try:
        response = requests.get(url, headers=headers, timeout=60)
    except requests.RequestException as exc:
        raise PluginError(f"HTTP request failed: {exc}") from exc
    return response.content


def _max_results(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value < 2**64:
        return value
    return DEFAULT_MAX_RESULTS


def _search(arguments: dict[str, Any]) -> CallToolResult:
    query = arguments.get("query")
    if not isinstance(query, str):
        raise PluginError("query parameter is required")
    max_results = _max_results(arguments.get("max_results"))
    url = (
        f"{SEARCH_URL}?search_query={quote(query, safe='')}&max_results={max_results}"
        "&sortBy=submittedDate&sortOrder=descending"
    )
    body = _get(url, {"User-Agent": SEARCH_USER_AGENT})
    papers = parse_feed(body.decode("utf-8", errors="replace"))
    text = json.dumps(
        [paper.to_dict() for paper in papers], separators=(",", ":"), ensure_ascii=False
    )
    return CallToolResult.success(text, "application/json")


def _download_pdf(arguments: dict[str, Any]) -> CallToolResult:
    paper_id = arguments.get("paper_id")
    if not isinstance(paper_id, str):
        raise PluginError("paper_id parameter is required")
    save_path = arguments.get("save_path")
    if not isinstance(save_path, str):
        save_path = DEFAULT_SAVE_PATH
    clean_id = paper_id.split("/")[-1] if "/" in paper_id else paper_id

    pdf = _get(
        f"{PDF_URL}/{clean_id}",
        {"User-Agent": PDF_USER_AGENT, "Accept": "application/pdf"},
    )
    if not pdf:
        raise PluginError("Received empty PDF data from arXiv")

    file_path = f"{save_path.rstrip('/')}/{clean_id}.pdf"
    try:
        with open(file_path, "wb") as handle:
            handle.write(pdf)
    except OSError as exc:
        detail = exc.strerror if exc.strerror else str(exc)
        raise PluginError(f"Failed to write PDF to {file_path}: {detail}") from exc

    return CallToolResult(
        content=[
            Content(
                text=f"PDF saved to: {os.fspath(file_path)}",
                annotations=TextAnnotation(audience=[Role.USER, Role.ASSISTANT], priority=1.0),
            )
        ]
    )


def call(request: CallToolRequest) -> CallToolResult:
    """Run the arXiv tool named in the request."""
    arguments = request.params.arguments or {}
    if request.params.name == "arxiv_search":
        return _search(arguments)
    if request.params.name == "arxiv_download_pdf":
        return _download_pdf(arguments)
    return CallToolResult.failure(f"Unknown tool: {request.params.name}")


def describe() -> ListToolsResult:
    """Describe the arXiv tools."""
    return ListToolsResult(
        tools=[
            ToolDescription(
                name="arxiv_search",
                description="Search for papers on arXiv",
                input_schema={
                    "type": "object",
                    "properties": {
                        "query": {"type": "string", "description": "The search query"},
                        "max_results": {
                            "type": "integer",
                            "description": "Maximum number of results to return (default: 10)",
                        },
                    },
                    "required": ["query"],
                },
            ),
            ToolDescription(
                name="arxiv_download_pdf",
                description="Download a paper's PDF from arXiv",
                input_schema={
                    "type": "object",
                    "properties": {
                        "paper_id": {"type": "string", "description": "The arXiv paper ID"},
                        "save_path": {
                            "type": "string",
                            "description": "Path to save the PDF file (default: /tmp)",
                        },
                    },
                    "required": ["paper_id"],
                },
            ),
        ]
    )