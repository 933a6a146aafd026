"""Static changelog adapter for release-it / conventional-changelog.

Reads the CHANGELOG.md committed at the repository root and slices out the
section for the requested version. No external commands are run; only the
README is read alongside the changelog, and its failure is non-fatal.
"""

from __future__ import annotations

from pathlib import Path

from changelog_promoter.adapters.base import project_name, read_readme
from changelog_promoter.changelog_parser import (
    VersionSection,
    find_latest_version,
    find_version_section,
    parse_version_from_file,
    read_changelog,
)
from changelog_promoter.config import PromoterConfig
from changelog_promoter.diagnostics import LoggingWarningSink, WarningSink
from changelog_promoter.logging_config import get_logger
from changelog_promoter.schemas import SourceAdapterName, VersionEntry

logger = get_logger(__name__)


class ReleaseItAdapter:
    """Builds VersionEntry objects from a static CHANGELOG.md.

    Usage:
        adapter = ReleaseItAdapter()
        entry = adapter.get_version_entry("/path/to/repo", "1.0.1")
    """

    name = SourceAdapterName.RELEASE_IT

    def __init__(
        self,
        config: PromoterConfig | None = None,
        warnings: WarningSink | None = None,
    ) -> None:
        self.config = config or PromoterConfig()
        self.warnings = warnings or LoggingWarningSink()

    def changelog_path(self, repo_path: str | Path) -> Path:
        return Path(repo_path) / self.config.changelog_filename

    def get_latest_entry(self, repo_path: str | Path) -> VersionEntry:
        """Return the entry for the first version header in CHANGELOG.md.

        Raises:
            ChangelogReadError: If CHANGELOG.md cannot be read
            ParseNotFoundError: If it contains no version header
        """
        path = self.changelog_path(repo_path)
        text = read_changelog(path)
        latest = find_latest_version(text, source=path)
        section = find_version_section(text, latest, source=path)
        return self._build_entry(repo_path, section)

    def get_version_entry(self, repo_path: str | Path, version: str) -> VersionEntry:
        """Return the entry for one version.

        Raises:
            ChangelogReadError: If CHANGELOG.md cannot be read
            ParseNotFoundError: If no header matches the version
        """
        section = parse_version_from_file(self.changelog_path(repo_path), version)
        return self._build_entry(repo_path, section)

    def _build_entry(
        self, repo_path: str | Path, section: VersionSection
    ) -> VersionEntry:
        entry = VersionEntry(
            project_name=project_name(repo_path),
            version=section.version,
            date=section.date,
            description=section.description,
            readme=read_readme(
                repo_path,
                self.config.readme_filename,
                self.config.readme_max_chars,
                self.config.readme_max_lines,
                self.warnings,
            ),
            source_adapter=self.name,
        )
        logger.info(
            "entry_extracted",
            adapter=self.name.value,
            project=entry.project_name,
            version=entry.version,
            date=entry.date,
        )
        return entry
