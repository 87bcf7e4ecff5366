[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "roost"
version = "0.1.0"
description = "Building blocks for small HTTP servers: route tags, query strings, multipart bodies, CORS and middleware chains"
requires-python = ">=3.10"
dependencies = [
    "multidict",
]
keywords = ["http", "web", "server", "multipart", "query-string", "cors", "middleware", "base64", "mime"]
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
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["roost"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
