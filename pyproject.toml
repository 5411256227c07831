[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "claudeagent"
version = "0.1.0"
description = "Typed messages, options, hooks, permission results and control-protocol payloads for the Claude Code CLI"
requires-python = ">=3.10"
dependencies = []
keywords = ["claude", "agent", "cli", "hooks", "permissions", "mcp"]
classifiers = [
    "Development Status :: 4 - Beta",
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
packages = ["claudeagent"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
