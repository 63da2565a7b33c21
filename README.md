# mcptoolkit

Ready-made tool handlers for Model Context Protocol (MCP) servers. Every
tool module has the same two functions:

- `describe()` returns a `ListToolsResult` listing the tools the module
  offers, each a `ToolDescription` with a name, a description and a JSON
  schema for its arguments.
- `call(request)` takes a `CallToolRequest` and returns a `CallToolResult`.

The wire types live in `mcptoolkit.types`. Each has `to_dict()` and a
`from_dict()` class method that use the MCP field names (`mimeType`,
`isError`, `inputSchema`). `CallToolRequest.from_json()` parses a request,
and `CallToolResult.to_json()` and `ListToolsResult.to_json()` give
compact JSON.

## Tools

| Module                  | Tools |
|-------------------------|-------|
| `mcptoolkit.hashing`    | `hash`: sha256, sha512, sha384, sha224, sha1, md5, base32 or base64 of a string |
| `mcptoolkit.fetch`      | `fetch`: download a URL and convert its HTML to Markdown |
| `mcptoolkit.filesystem` | `read_file`, `read_multiple_files`, `write_file`, `edit_file`, `create_dir`, `list_dir`, `move_file`, `search_files`, `get_file_info` |
| `mcptoolkit.arxiv`      | `arxiv_search`, `arxiv_download_pdf` |
| `mcptoolkit.crates_io`  | `crates_io_latest_version`, `crates_io_crate_info` |
| `mcptoolkit.gomodule`   | `gomodule_latest_version`, `gomodule_info` |

Some details worth knowing:

- `hashing`: an algorithm name that is not one of the eight listed falls
  back to base64. `hash_data(data, algorithm)` can be called directly.
- `fetch`: scripts and styles are dropped. `html_to_markdown(html)` can be
  called directly.
- `filesystem`: the operation is picked by the `operation` argument, not by
  the tool name, for example
  `{"operation": "read_file", "path": "notes.txt"}`. `search_files` matches
  file names that contain the pattern, walking subdirectories;
  `search_dir(directory, pattern)` does the same and returns the list.
- `arxiv`: `arxiv_search` returns up to `max_results` papers (default 10)
  as a JSON list; `parse_feed(xml_text)` turns an Atom feed into `Paper`
  objects. `arxiv_download_pdf` writes `<paper_id>.pdf` into `save_path`,
  which defaults to `/tmp`.
- `crates_io` and `gomodule`: names are given as one comma-separated
  string (`crate_names` or `module_names`). `summarize_crate(data)` picks
  the main fields out of a crates.io crate response.

## Installation

```
pip install mcptoolkit
```

## Usage

```python
from mcptoolkit import hashing
from mcptoolkit.types import CallToolRequest

request = CallToolRequest.from_json(
    '{"params": {"name": "hash", "arguments": {"data": "hello", "algorithm": "sha256"}}}'
)
result = hashing.call(request)
print(result.content[0].text)
print(result.to_json())
```

To list a module's tools:

```python
from mcptoolkit import crates_io

for tool in crates_io.describe().tools:
    print(tool.name, "-", tool.description)
```

## Errors

Many problems come back as a result with `is_error` set to `True` and a
message in its content. Examples are an unknown tool name, a missing
argument in `fetch`, `filesystem`, `crates_io` or `gomodule`, or a file
that cannot be read. Other failures raise `mcptoolkit.types.PluginError`:

- network errors;
- a response that is not valid JSON or not a valid feed;
- a missing `data` or `algorithm` in `hash`;
- a missing `query` or `paper_id` in the arXiv tools;
- an empty or unwritable PDF download;
- an `edit_file` on a file that cannot be opened;
- a malformed request passed to `from_json` or `from_dict`.

## What this package does not do

This package holds tool handlers only. It has no MCP server, no
transport (stdio, SSE or HTTP) and no command-line program. To expose the
tools to a client, call `describe()` and `call()` from your own server.

## Running the tests

```
pip install "mcptoolkit[test]"
pytest
```