[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rapidtools"
version = "0.1.0"
description = "Command-line text search, directory listing and log tailing tools"
requires-python = ">=3.10"
dependencies = []
keywords = ["grep", "ls", "tail", "search", "log", "text-processing", "cli"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
    "Topic :: Text Processing :: Filters",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
rapid-grep = "rapidtools.grep_search:main"
rapid-ls = "rapidtools.ls:main"
rapid-tail = "rapidtools.tail_app:main"

[tool.hatch.build.targets.wheel]
packages = ["rapidtools"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
