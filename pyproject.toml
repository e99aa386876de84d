[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "newsmime"
version = "0.1.0"
description = "Helpers for Internet mail and Usenet news: addresses, return receipts, multipart splitting, uuencode and yEnc extraction"
requires-python = ">=3.10"
dependencies = []
keywords = ["mime", "email", "usenet", "news", "mdn", "uuencode", "yenc", "rfc2822"]
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
    "Topic :: Communications :: Email",
    "Topic :: Communications :: Usenet News",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["newsmime"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
