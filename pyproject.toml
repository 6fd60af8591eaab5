[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mcpclient"
version = "0.1.0"
description = "A Model Context Protocol (MCP) client over pluggable JSON-RPC transports"
requires-python = ">=3.10"
dependencies = []
keywords = ["mcp", "model context protocol", "json-rpc", "client", "llm"]
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
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mcpclient"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
