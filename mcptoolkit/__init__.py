"""MCP tool handlers: hashing, fetch, filesystem, arXiv, crates.io and Go modules, plus shared wire types."""

__version__ = "0.1.0"
__all__ = ["types", "hashing", "fetch", "filesystem", "arxiv", "crates_io", "gomodule"]