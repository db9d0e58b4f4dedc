[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "redislink"
version = "0.1.0"
description = "A small synchronous Redis client with a RESP codec and typed command builders"
requires-python = ">=3.10"
dependencies = []
keywords = ["redis", "resp", "client", "database", "protocol"]
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
    "Topic :: Database :: Front-Ends",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["redislink"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
