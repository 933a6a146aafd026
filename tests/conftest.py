"""Shared fixtures: a release-it style changelog and a repository on disk."""

from __future__ import annotations

from pathlib import Path

import pytest

SAMPLE_CHANGELOG = """
# Changelog

All notable changes to this project will be documented in this file.

The format is based on [Keep a Changelog](https://keepachangelog.com/en/1.0.0/),
and this project adheres to [Semantic Versioning](https://semver.org/).

## [1.0.1](https://github.com/example/spreadsheet-mcp/compare/v1.0.0...v1.0.1) (2025-04-22)


### Bug Fixes

* remove JSON formatting for output in server tool ([a08afaa](https://github.com/example/spreadsheet-mcp/commit/a08afaa5ed7962ee3f0e0db5747fcd9714ffee98))

# [1.0.0](https://github.com/example/spreadsheet-mcp/compare/v0.1.2...v1.0.0) (2025-04-22)


### Bug Fixes

* Change output to JSON, fix tests, update docs ([5553045](https://github.com/example/spreadsheet-mcp/commit/5553045ebe8cb0ca0aba7b5b75b53cb8e5a91116))


### Features

* **spreadsheet:** Change spreadsheet tool output format to JSON array ([20fe9a6](https://github.com/example/spreadsheet-mcp/commit/20fe9a6ad97e1ffd11027edfe20a95aaa2a1d657))


### BREAKING CHANGES

* **spreadsheet:** The output format of view_spreadsheet, filter_spreadsheet, and sort_spreadsheet tools has changed from a Markdown string to a JSON string.

## [0.1.2](https://github.com/example/spreadsheet-mcp/compare/v0.1.1...v0.1.2) (2025-04-17)


### Bug Fixes

* Resolve TS errors and enhance spreadsheet cell parsing ([1197cbf](https://github.com/example/spreadsheet-mcp/commit/1197cbf545b5d0c0a90e18e96f35a9f3dfe8d5b5))

## 0.1.1 (2025-04-16)


# 0.1.0 (2025-04-15)


### Features

* Allow view_spreadsheet to preview up to max rows ([8b93043](https://github.com/example/spreadsheet-mcp/commit/8b93043a4a17b27272b9a13dc58e45ad77c31470))
* initialize project with TypeScript, core scripts, and spreadsheet utilities ([b167527](https://github.com/example/spreadsheet-mcp/commit/b16752706c92b5cfd7b6d2b95693eda299103867))
"""

SAMPLE_README = """# spreadsheet-mcp

A Model Context Protocol server for reading and filtering spreadsheets.
"""


@pytest.fixture
def changelog_text() -> str:
    """The sample release-it changelog."""
    return SAMPLE_CHANGELOG


@pytest.fixture
def repo_dir(tmp_path: Path) -> Path:
    """A repository directory with CHANGELOG.md and README.md."""
    repo = tmp_path / "spreadsheet-mcp"
    repo.mkdir()
    (repo / "CHANGELOG.md").write_text(SAMPLE_CHANGELOG, encoding="utf-8")
    (repo / "README.md").write_text(SAMPLE_README, encoding="utf-8")
    return repo
