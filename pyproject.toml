[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "regexdatagen"
version = "0.1.0"
description = "Generate random or sequential data from regex patterns and export it as CSV, JSON, XML or TSV"
requires-python = ">=3.11"
dependencies = []
keywords = ["regex", "test data", "data generation", "fixtures", "csv", "json", "xml", "tsv"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
regex-data-gen = "regexdatagen.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["regexdatagen"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"
