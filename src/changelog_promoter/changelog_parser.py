"""Markdown changelog parser.

Locates release sections inside a static changelog such as the CHANGELOG.md
files written by release-it / conventional-changelog:

    ## [1.0.1](https://github.com/org/repo/compare/v1.0.0...v1.0.1) (2025-04-22)

    ### Bug Fixes

    * remove JSON formatting for output ...

    # [1.0.0](https://github.com/org/repo/compare/v0.1.2...v1.0.0) (2025-04-22)

A version header is any Markdown heading (any depth) whose first token is a
version, either bare (`## 0.1.1`) or wrapped in a link (`## [1.0.1](url)`),
optionally followed by a parenthesised date. Files are newest-first, so the
first header is the latest release. Versions are compared as plain strings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from changelog_promoter.errors import ChangelogReadError, ParseNotFoundError
from changelog_promoter.schemas import is_iso_date

# A version token starts with a digit, optionally prefixed with "v".
# "# Changelog" and "## [Unreleased]" are therefore not version headers.
VERSION_HEADER_RE = re.compile(
    r"^\s{0,3}#+\s+"
    r"(?:\[(?P<linked>v?\d[^\]\s]*)\]\([^)]*\)|(?P<bare>v?\d[^\s(\[]*))"
    r"(?:\s+\((?P<date>[^)]*)\))?"
)


@dataclass(frozen=True)
class VersionHeader:
    """A heading line that starts a release section.

    Attributes:
        index: Zero-based line index within the changelog text
        version: Version token, without link markup
        date: YYYY-MM-DD date from the header, or "" when absent/invalid
        line: The original header line
    """

    index: int
    version: str
    date: str
    line: str


@dataclass(frozen=True)
class VersionSection:
    """A parsed release section."""

    version: str
    date: str
    description: str


def parse_header(line: str, index: int = 0) -> VersionHeader | None:
    """Return the VersionHeader for a line, or None if it isn't one."""
    match = VERSION_HEADER_RE.match(line)
    if match is None:
        return None
    version = match.group("linked") or match.group("bare")
    date = (match.group("date") or "").strip()
    if not is_iso_date(date):
        date = ""
    return VersionHeader(index=index, version=version, date=date, line=line)


def iter_version_headers(lines: list[str]) -> Iterator[VersionHeader]:
    """Yield version headers in file order."""
    for index, line in enumerate(lines):
        header = parse_header(line, index)
        if header is not None:
            yield header


def find_latest_version(text: str, source: str | Path = "<text>") -> str:
    """Return the version of the first header in the changelog.

    Heading depth is ignored: whichever version header comes first wins.

    Raises:
        ParseNotFoundError: If the text contains no version header
    """
    for header in iter_version_headers(text.splitlines()):
        return header.version
    raise ParseNotFoundError(source, None)


def find_version_section(
    text: str, version: str, source: str | Path = "<text>"
) -> VersionSection:
    """Extract the section for one version.

    The description is everything between the matching header and the next
    version header (or end of text), with blank lines trimmed from both
    ends. A header immediately followed by another header yields an empty
    description.

    Args:
        text: Changelog content
        version: Exact version token to look for
        source: Name of the changelog, used in error messages

    Returns:
        The matching VersionSection

    Raises:
        ParseNotFoundError: If no header carries this version
    """
    lines = text.splitlines()
    headers = iter_version_headers(lines)

    for header in headers:
        if header.version != version:
            continue
        following = next(headers, None)
        end = following.index if following is not None else len(lines)
        body = _trim_blank_lines(lines[header.index + 1 : end])
        return VersionSection(
            version=header.version,
            date=header.date,
            description="\n".join(body),
        )

    raise ParseNotFoundError(source, version)


def _trim_blank_lines(lines: list[str]) -> list[str]:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


def read_changelog(path: str | Path) -> str:
    """Read a changelog file.

    A leading UTF-8 BOM is dropped so the first header is still recognized.

    Raises:
        ChangelogReadError: If the file is missing or unreadable
    """
    try:
        return Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        raise ChangelogReadError(path, reason) from exc


def parse_version_from_file(path: str | Path, version: str) -> VersionSection:
    """Read a changelog file and extract one version's section."""
    return find_version_section(read_changelog(path), version, source=path)


def find_latest_version_in_file(path: str | Path) -> str:
    """Read a changelog file and return its newest version."""
    return find_latest_version(read_changelog(path), source=path)
