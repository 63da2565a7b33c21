[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mcptoolkit"
version = "0.1.0"
description = "MCP tool handlers for hashing, web fetch, filesystem access, arXiv, crates.io and Go module lookups"
requires-python = ">=3.10"
keywords = ["mcp", "tools", "arxiv", "crates.io", "go modules", "hashing", "markdown"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "requests>=2.28",
    "beautifulsoup4>=4.11",
    "defusedxml>=0.7",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "responses>=0.23",
]

[tool.hatch.build.targets.wheel]
packages = ["mcptoolkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
