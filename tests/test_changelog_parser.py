"""Tests for the Markdown changelog parser.

These tests verify that the parser:
- Recognizes bare, link-wrapped and v-prefixed version headers at any depth
- Slices section bodies without leaking neighbouring headers
- Reads optional header dates and ignores malformed ones
- Reports missing versions with the file path and version in the message

Run with: pytest tests/test_changelog_parser.py -v
"""

from __future__ import annotations

from pathlib import Path

import pytest

from changelog_promoter.changelog_parser import (
    find_latest_version,
    find_latest_version_in_file,
    find_version_section,
    parse_header,
    parse_version_from_file,
)
from changelog_promoter.errors import ChangelogReadError, ParseNotFoundError


# ---------------------------------------------------------------------------
# Header Recognition Tests
# ---------------------------------------------------------------------------


class TestParseHeader:
    """Tests for parse_header."""

    def test_link_wrapped_with_date(self) -> None:
        header = parse_header(
            "## [1.0.1](https://github.com/o/r/compare/v1.0.0...v1.0.1) (2025-04-22)"
        )
        assert header is not None
        assert header.version == "1.0.1"
        assert header.date == "2025-04-22"

    def test_bare_with_date(self) -> None:
        header = parse_header("# 0.1.0 (2025-04-15)")
        assert header is not None
        assert header.version == "0.1.0"
        assert header.date == "2025-04-15"

    def test_bare_without_date(self) -> None:
        header = parse_header("### v2.3.0-rc.1")
        assert header is not None
        assert header.version == "v2.3.0-rc.1"
        assert header.date == ""

    def test_invalid_date_is_empty(self) -> None:
        header = parse_header("## 1.2.0 (2025-13-45)")
        assert header is not None
        assert header.date == ""

    @pytest.mark.parametrize(
        "line",
        [
            "# Changelog",
            "## [Unreleased]",
            "### Bug Fixes",
            "1.0.0 (2025-01-01)",
            "#1.0.0",
            "* fix 1.0.0 regression",
        ],
    )
    def test_non_headers(self, line: str) -> None:
        assert parse_header(line) is None


# ---------------------------------------------------------------------------
# Section Extraction Tests
# ---------------------------------------------------------------------------


class TestFindVersionSection:
    """Tests for find_version_section."""

    def test_linked_section_with_body(self, changelog_text: str) -> None:
        section = find_version_section(changelog_text, "1.0.1")
        assert section.version == "1.0.1"
        assert section.date == "2025-04-22"
        assert "Bug Fixes" in section.description
        assert "remove JSON formatting" in section.description
        assert "## [1.0.1]" not in section.description
        assert "# [1.0.0]" not in section.description

    def test_body_is_trimmed(self, changelog_text: str) -> None:
        section = find_version_section(changelog_text, "1.0.1")
        assert section.description.startswith("### Bug Fixes")
        assert section.description == section.description.strip()

    def test_empty_section_between_headers(self, changelog_text: str) -> None:
        section = find_version_section(changelog_text, "0.1.1")
        assert section.date == "2025-04-16"
        assert section.description == ""

    def test_last_section_runs_to_end(self, changelog_text: str) -> None:
        section = find_version_section(changelog_text, "0.1.0")
        assert section.date == "2025-04-15"
        assert "Allow view_spreadsheet" in section.description
        assert "initialize project" in section.description

    def test_no_date_means_empty_date(self) -> None:
        text = "## 2.0.0\n\nBig release\n\n## 1.0.0\n\nFirst\n"
        section = find_version_section(text, "2.0.0")
        assert section.date == ""
        assert section.description == "Big release"

    def test_exact_string_match(self) -> None:
        text = "## 1.0.10\n\nten\n\n## 1.0.1\n\none\n"
        assert find_version_section(text, "1.0.1").description == "one"
        with pytest.raises(ParseNotFoundError):
            find_version_section(text, "v1.0.1")

    def test_subheadings_stay_in_body(self) -> None:
        text = "# 3.0.0\n### Features\n* a\n### Bug Fixes\n* b\n# 2.0.0\n"
        section = find_version_section(text, "3.0.0")
        assert section.description == "### Features\n* a\n### Bug Fixes\n* b"

    def test_never_contains_neighbour_headers(self, changelog_text: str) -> None:
        lines = changelog_text.splitlines()
        headers = [line for line in lines if parse_header(line) is not None]
        for line in headers:
            version = parse_header(line).version
            description = find_version_section(changelog_text, version).description
            for other in headers:
                assert other not in description.splitlines()

    def test_missing_version(self, changelog_text: str) -> None:
        with pytest.raises(ParseNotFoundError) as exc_info:
            find_version_section(changelog_text, "9.9.9", source="repo/CHANGELOG.md")
        assert str(exc_info.value) == "Version 9.9.9 not found in repo/CHANGELOG.md"
        assert exc_info.value.version == "9.9.9"


# ---------------------------------------------------------------------------
# Latest Version Tests
# ---------------------------------------------------------------------------


class TestFindLatestVersion:
    """Tests for find_latest_version."""

    def test_first_header_wins(self, changelog_text: str) -> None:
        assert find_latest_version(changelog_text) == "1.0.1"

    def test_depth_is_ignored(self) -> None:
        text = "#### 0.3.0\n\n# 0.2.0\n\n## 0.1.0\n"
        assert find_latest_version(text) == "0.3.0"

    def test_no_headers(self) -> None:
        with pytest.raises(ParseNotFoundError):
            find_latest_version("# Changelog\n\nNothing released yet.\n")


# ---------------------------------------------------------------------------
# File Helper Tests
# ---------------------------------------------------------------------------


class TestFileHelpers:
    """Tests for the file based helpers."""

    def test_parse_from_file(self, repo_dir: Path) -> None:
        section = parse_version_from_file(repo_dir / "CHANGELOG.md", "0.1.2")
        assert section.date == "2025-04-17"
        assert "Resolve TS errors" in section.description

    def test_latest_from_file(self, repo_dir: Path) -> None:
        assert find_latest_version_in_file(repo_dir / "CHANGELOG.md") == "1.0.1"

    def test_error_names_file(self, repo_dir: Path) -> None:
        path = repo_dir / "CHANGELOG.md"
        with pytest.raises(ParseNotFoundError) as exc_info:
            parse_version_from_file(path, "9.9.9")
        assert str(path) in str(exc_info.value)
        assert "9.9.9" in str(exc_info.value)

    def test_byte_order_mark(self, tmp_path: Path) -> None:
        path = tmp_path / "CHANGELOG.md"
        path.write_text(
            "\ufeff## 1.2.0 (2025-05-01)\n\nbody\n\n## 1.1.0\n", encoding="utf-8"
        )

        assert find_latest_version_in_file(path) == "1.2.0"
        section = parse_version_from_file(path, "1.2.0")
        assert section.date == "2025-05-01"
        assert section.description == "body"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ChangelogReadError) as exc_info:
            parse_version_from_file(tmp_path / "CHANGELOG.md", "1.0.0")
        assert "CHANGELOG.md" in str(exc_info.value)
