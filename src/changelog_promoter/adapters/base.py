"""Shared contract and helpers for source adapters."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from changelog_promoter.diagnostics import WarningSink
from changelog_promoter.schemas import SourceAdapterName, VersionEntry

README_PLACEHOLDER = "README content could not be read."
README_TRUNCATION_MARKER = "\n...(README truncated)"


class SourceAdapter(Protocol):
    """Interface shared by every changelog source.

    Implementations must be stateless between calls so concurrent callers
    can each use their own instance safely.
    """

    name: SourceAdapterName

    def get_latest_entry(self, repo_path: str | Path) -> VersionEntry:
        """Return the entry for the newest release in the repository."""
        ...

    def get_version_entry(self, repo_path: str | Path, version: str) -> VersionEntry:
        """Return the entry for one named release."""
        ...


def project_name(repo_path: str | Path) -> str:
    """Project name is the repository directory name."""
    return Path(repo_path).resolve().name


def truncate_readme(content: str, max_chars: int, max_lines: int) -> str:
    """Reduce an oversized README to a short digest.

    READMEs at or under max_chars are returned unchanged. Longer ones keep
    their first max_lines non-blank lines (stripped), capped at max_chars,
    followed by a truncation marker.
    """
    if len(content) <= max_chars:
        return content

    kept: list[str] = []
    for line in content.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        kept.append(stripped)
        if len(kept) >= max_lines:
            break

    digest = "\n".join(kept)[:max_chars]
    return digest + README_TRUNCATION_MARKER


def read_readme(
    repo_path: str | Path,
    filename: str,
    max_chars: int,
    max_lines: int,
    warnings: WarningSink,
) -> str:
    """Read the repository README, degrading to a placeholder on failure."""
    readme_path = Path(repo_path) / filename
    try:
        content = readme_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        warnings.warn(
            "readme",
            f"Failed to read {readme_path}",
            path=str(readme_path),
            error=str(exc),
        )
        return README_PLACEHOLDER
    return truncate_readme(content, max_chars, max_lines)
