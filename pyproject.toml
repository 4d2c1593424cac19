[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "botrick"
version = "0.9.0"
description = "An IRC bot that learns how people talk, invents sentences in their style, and runs a channel word game"
requires-python = ">=3.11"
keywords = ["irc", "bot", "markov", "chat", "wordle", "sqlite"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Framework :: AsyncIO",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat :: Internet Relay Chat",
    "Topic :: Games/Entertainment :: Puzzle Games",
]
dependencies = [
    "httpx",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
    "respx",
]

[project.scripts]
botrick = "botrick.client:main"
spork = "botrick.spork_cli:main"
sporklike = "botrick.spork_cli:sporklike_main"
sporker-ingest = "botrick.ingest:main"

[tool.hatch.build.targets.wheel]
packages = ["botrick"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
