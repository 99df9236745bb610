[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "postcomments"
version = "0.1.0"
description = "Posts with threaded, cursor-paginated comments, backed by an in-memory store"
requires-python = ">=3.10"
dependencies = []
keywords = ["posts", "comments", "threads", "pagination", "message board"]
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
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: Message Boards",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["postcomments"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
