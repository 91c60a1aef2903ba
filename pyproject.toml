[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "llmirc"
version = "0.1.0"
description = "An IRC bot that answers channel messages with replies from a local LLM server"
requires-python = ">=3.10"
dependencies = []
keywords = ["irc", "bot", "llm", "chat", "ollama"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
    "Topic :: Communications :: Chat :: Internet Relay Chat",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
llmirc = "llmirc.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["llmirc"]

[tool.pytest.ini_options]
addopts = "-ra"
