"""Live changelog extraction with git-chglog.

The adapter assembles a VersionEntry from several independent steps, each
run as an external command in the repository:

1. Probe git-chglog (`git-chglog --version`)        fatal on failure
2. Verify / discover the tag and find its predecessor fatal if tag missing
3. Generate the changelog body                      placeholder on failure
4. Look up the tag's commit date                    empty on failure
5. Collect the code diff                            placeholder on failure
6. Read README.md                                   placeholder on failure

Once the tool and tag checks pass, the caller always gets an entry; every
degraded step is reported to the WarningSink.

git-chglog: https://github.com/git-chglog/git-chglog
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Sequence

from changelog_promoter.adapters.base import project_name, read_readme
from changelog_promoter.config import PromoterConfig
from changelog_promoter.diagnostics import LoggingWarningSink, WarningSink
from changelog_promoter.errors import (
    ExecutionError,
    TagNotFoundError,
    ToolNotFoundError,
)
from changelog_promoter.executor import (
    CommandExecutorProtocol,
    CommandResult,
    SubprocessExecutor,
)
from changelog_promoter.logging_config import get_logger
from changelog_promoter.schemas import SourceAdapterName, VersionEntry

logger = get_logger(__name__)

CHGLOG_INSTALL_HINT = (
    "Please install git-chglog: https://github.com/git-chglog/git-chglog"
)
CHANGELOG_PLACEHOLDER = "Changelog content could not be generated."
DIFF_PLACEHOLDER = "Code changes could not be retrieved."
DIFF_TRUNCATION_MARKER = "\n...(diff truncated)"


@dataclass(frozen=True)
class TagRange:
    """The target tag and the tag right before it (None for the first tag)."""

    version: str
    previous: str | None = None

    @property
    def query(self) -> str:
        """git-chglog query: "prev..version" or just "version"."""
        if self.previous:
            return f"{self.previous}..{self.version}"
        return self.version


class GitChglogAdapter:
    """Builds VersionEntry objects from git tags using git-chglog.

    Usage:
        adapter = GitChglogAdapter()
        entry = adapter.get_version_entry("/path/to/repo", "v1.2.0")
        latest = adapter.get_latest_entry("/path/to/repo")
    """

    name = SourceAdapterName.GIT_CHGLOG

    def __init__(
        self,
        config: PromoterConfig | None = None,
        executor: CommandExecutorProtocol | None = None,
        warnings: WarningSink | None = None,
    ) -> None:
        """Initialize the adapter.

        Args:
            config: Binaries and thresholds. Uses defaults if None.
            executor: Runs external commands. Defaults to a SubprocessExecutor
                      honoring config.command_timeout.
            warnings: Receives degraded steps. Defaults to logging them.
        """
        self.config = config or PromoterConfig()
        self.executor = executor or SubprocessExecutor(
            timeout=self.config.command_timeout
        )
        self.warnings = warnings or LoggingWarningSink()

    # -- public contract ----------------------------------------------------

    def get_latest_entry(self, repo_path: str | Path) -> VersionEntry:
        """Return the entry for the most recent tag.

        Raises:
            ToolNotFoundError: If git-chglog (or git) is not installed
            ExecutionError: If the git-chglog probe fails
            TagNotFoundError: If the repository has no tags
        """
        self.check_tool(repo_path)
        latest = self.latest_tag(repo_path)
        return self._build_entry(repo_path, latest)

    def get_version_entry(self, repo_path: str | Path, version: str) -> VersionEntry:
        """Return the entry for a specific tag.

        Raises:
            ToolNotFoundError: If git-chglog (or git) is not installed
            ExecutionError: If the git-chglog probe fails
            TagNotFoundError: If no tag named `version` exists
        """
        self.check_tool(repo_path)
        self.verify_tag(repo_path, version)
        return self._build_entry(repo_path, version)

    # -- fatal steps --------------------------------------------------------

    def check_tool(self, repo_path: str | Path) -> None:
        """Make sure git-chglog runs inside the repository."""
        binary = self.config.chglog_binary
        try:
            result = self.executor.run(repo_path, binary, ["--version"])
        except ToolNotFoundError as exc:
            raise ToolNotFoundError(binary, CHGLOG_INSTALL_HINT) from exc
        result.check()

    def latest_tag(self, repo_path: str | Path) -> str:
        """Return the most recent tag reachable from HEAD."""
        result = self._git(repo_path, ["describe", "--tags", "--abbrev=0"])
        tag = result.stdout.strip()
        if not result.ok or not tag:
            raise TagNotFoundError(None, repo_path)
        return tag

    def verify_tag(self, repo_path: str | Path, version: str) -> None:
        result = self._git(
            repo_path, ["rev-parse", "--verify", "--quiet", f"refs/tags/{version}"]
        )
        if not result.ok:
            raise TagNotFoundError(version, repo_path)

    # -- degradable steps ---------------------------------------------------

    def resolve_range(self, repo_path: str | Path, version: str) -> TagRange:
        """Find the tag right before `version`; none means it is the first tag."""
        result = self._git(
            repo_path, ["describe", "--tags", "--abbrev=0", f"{version}^"]
        )
        previous = result.stdout.strip() if result.ok else ""
        return TagRange(version=version, previous=previous or None)

    def generate_changelog(self, repo_path: str | Path, tags: TagRange) -> str:
        """Run git-chglog over the range, retrying once on the single tag.

        The first tag has no range, so there is nothing to retry.
        """
        binary = self.config.chglog_binary
        attempts = [tags.query]
        if tags.previous:
            attempts.append(tags.version)
        errors: list[str] = []
        for query in attempts:
            try:
                return self._output(repo_path, binary, [query])
            except (ToolNotFoundError, ExecutionError) as exc:
                errors.append(str(exc))

        self.warnings.warn(
            "changelog",
            "git-chglog failed for " + " and ".join(f"'{q}'" for q in attempts),
            version=tags.version,
            errors=errors,
        )
        return CHANGELOG_PLACEHOLDER

    def tag_date(self, repo_path: str | Path, version: str) -> str:
        """Return the tag's commit date as YYYY-MM-DD, or "" if unknown."""
        try:
            raw = self._output(
                repo_path,
                self.config.git_binary,
                ["log", "-1", "--format=%cI", version],
            )
            return datetime.fromisoformat(raw.strip()).date().isoformat()
        except (ToolNotFoundError, ExecutionError, ValueError) as exc:
            self.warnings.warn(
                "date", f"Could not determine date of {version}", error=str(exc)
            )
            return ""

    def code_diff(self, repo_path: str | Path, tags: TagRange) -> str:
        """Return the diff for the release, shortened to diff_max_chars.

        Oversized diffs are replaced by a name-status listing; if that is
        still too long it is hard-truncated and marked.
        """
        limit = self.config.diff_max_chars
        try:
            diff = self._output(
                repo_path, self.config.git_binary, self._diff_args(tags)
            )
        except (ToolNotFoundError, ExecutionError) as exc:
            self.warnings.warn(
                "code_diff",
                f"Failed to get code diff for {tags.version}",
                error=str(exc),
            )
            return DIFF_PLACEHOLDER

        if len(diff) <= limit:
            return diff

        try:
            diff = self._output(
                repo_path,
                self.config.git_binary,
                self._diff_args(tags, name_status=True),
            )
        except (ToolNotFoundError, ExecutionError) as exc:
            logger.info("name_status_diff_failed", version=tags.version, error=str(exc))

        if len(diff) > limit:
            diff = diff[:limit] + DIFF_TRUNCATION_MARKER
        return diff

    # -- helpers ------------------------------------------------------------

    def _build_entry(self, repo_path: str | Path, version: str) -> VersionEntry:
        tags = self.resolve_range(repo_path, version)
        entry = VersionEntry(
            project_name=project_name(repo_path),
            version=version,
            date=self.tag_date(repo_path, version),
            description=self.generate_changelog(repo_path, tags),
            code_diff=self.code_diff(repo_path, tags),
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
            version=version,
            previous_tag=tags.previous,
            date=entry.date,
        )
        return entry

    @staticmethod
    def _diff_args(tags: TagRange, name_status: bool = False) -> list[str]:
        flags = ["--name-status"] if name_status else []
        if tags.previous:
            return ["diff", *flags, tags.previous, tags.version]
        return ["show", *flags, tags.version]

    def _git(self, repo_path: str | Path, args: Sequence[str]) -> CommandResult:
        return self.executor.run(repo_path, self.config.git_binary, args)

    def _output(self, repo_path: str | Path, program: str, args: Sequence[str]) -> str:
        return self.executor.run(repo_path, program, args).check().stdout
