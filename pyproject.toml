[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "pollhub"
version = "0.1.0"
description = "A small TCP server and interactive terminal client for surveys and votes"
requires-python = ">=3.10"
dependencies = []
keywords = ["survey", "vote", "poll", "tcp", "server", "client"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pollhub-server = "pollhub.server:main"
pollhub-client = "pollhub.client:main"

[tool.setuptools.packages.find]
include = ["pollhub*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
