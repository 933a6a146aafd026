"""Pydantic models defining the data that flows through the promoter.

These schemas are the single source of truth for:
- The canonical release record produced by every source adapter (VersionEntry)
- The typed request accepted by the CLI and the API layer (PromotionRequest)
- The prompt + context bundle handed to the LLM (PromotionTask)

Key design decisions:
- VersionEntry is frozen: it is built once per request and never mutated
- An empty date means "not determinable"; anything else must be a real date
- Adapter identity is an Enum so downstream prompt logic cannot drift
"""

from __future__ import annotations

import re
from datetime import date as _date
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def is_iso_date(value: str) -> bool:
    """Return True when value is a real calendar date in YYYY-MM-DD form."""
    if not ISO_DATE_RE.fullmatch(value):
        return False
    try:
        _date.fromisoformat(value)
    except ValueError:
        return False
    return True


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class SourceAdapterName(str, Enum):
    """Identity of the strategy that produced a VersionEntry.

    GIT_CHGLOG: Changelog generated live by the git-chglog tool
    RELEASE_IT: Section parsed from a committed CHANGELOG.md
                (release-it / conventional-changelog format)
    """

    GIT_CHGLOG = "git-chglog"
    RELEASE_IT = "release-it"


# ---------------------------------------------------------------------------
# Core record
# ---------------------------------------------------------------------------


class VersionEntry(BaseModel):
    """Canonical description of a single release.

    Attributes:
        project_name: Derived from the repository directory name
        version: Version or tag name, never empty
        date: Release date as YYYY-MM-DD, or "" when it cannot be determined
        description: Changelog body for this version (usually Markdown)
        code_diff: Code changes for the release, possibly a placeholder
        readme: Project README, possibly truncated or a placeholder
        source_adapter: Which adapter produced this entry
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., description="Repository directory name")
    version: str = Field(..., min_length=1, description="Version / tag name")
    date: str = Field("", description="Release date (YYYY-MM-DD) or empty")
    description: str = Field("", description="Changelog body for the version")
    code_diff: str = Field("", description="Code changes for the version")
    readme: str = Field("", description="Project README content")
    source_adapter: SourceAdapterName = Field(
        ..., description="Adapter that produced the entry"
    )

    @field_validator("date")
    @classmethod
    def check_date(cls, value: str) -> str:
        """Accept an empty string or a valid calendar date."""
        if value == "":
            return value
        if not is_iso_date(value):
            raise ValueError(f"date must be YYYY-MM-DD or empty, got {value!r}")
        return value


# ---------------------------------------------------------------------------
# Request / Response
# ---------------------------------------------------------------------------


class ToolArguments(BaseModel):
    """Repository and version, as taken by the per-adapter tool routes.

    Attributes:
        repo_path: Path to a local git repository (resolved to absolute)
        version: Version (tag) to process; None means the latest one
    """

    repo_path: str = Field(..., min_length=1, description="Local repository path")
    version: str | None = Field(
        None, description="Version (tag) to process, latest when omitted"
    )

    @field_validator("repo_path")
    @classmethod
    def resolve_repo_path(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("repo_path must not be blank")
        return str(Path(value).expanduser().resolve())

    @field_validator("version")
    @classmethod
    def blank_version_means_latest(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None


class PromotionRequest(ToolArguments):
    """Typed request for a promotion run: tool arguments plus the adapter."""

    adapter: SourceAdapterName = Field(
        SourceAdapterName.GIT_CHGLOG, description="Source adapter to use"
    )


class ContentBlock(BaseModel):
    """A labeled text block handed to the LLM client."""

    label: str = Field(..., description="prompt, description, code_diff or readme")
    text: str = Field(..., description="Block content")


class PromotionTask(BaseModel):
    """Prompt plus the context blocks it refers to.

    Attributes:
        prompt: Instruction text for writing the announcement
        context: Raw context keyed by description, code_diff, readme and
                 source_adapter
    """

    prompt: str
    context: dict[str, str] = Field(default_factory=dict)

    def content_blocks(self) -> list[ContentBlock]:
        """Return the prompt followed by every non-empty context block."""
        blocks = [ContentBlock(label="prompt", text=self.prompt)]
        for key in ("description", "code_diff", "readme"):
            text = self.context.get(key, "")
            if text:
                blocks.append(ContentBlock(label=key, text=text))
        return blocks


class PromotionResponse(BaseModel):
    """API response for a promotion request."""

    adapter: SourceAdapterName
    entry: VersionEntry
    content: list[ContentBlock]
