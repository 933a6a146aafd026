"""Tests for shared adapter helpers, the adapter registry and the warning sinks."""

from __future__ import annotations

from pathlib import Path

import pytest
from structlog.testing import capture_logs

from changelog_promoter.adapters import GitChglogAdapter, ReleaseItAdapter, get_adapter
from changelog_promoter.adapters.base import (
    README_PLACEHOLDER,
    README_TRUNCATION_MARKER,
    project_name,
    read_readme,
    truncate_readme,
)
from changelog_promoter.diagnostics import LoggingWarningSink, RecordingWarningSink
from changelog_promoter.executor import ScriptedExecutor
from changelog_promoter.schemas import SourceAdapterName


class TestTruncateReadme:
    """Tests for truncate_readme."""

    def test_short_readme_unchanged(self) -> None:
        text = "# Title\n\n  indented  \n"
        assert truncate_readme(text, 2000, 30) == text

    def test_blank_lines_not_counted(self) -> None:
        text = "\n\n".join(f"  line {i}  " for i in range(10))
        result = truncate_readme(text, 20, 3)
        assert result == "line 0\nline 1\nline 2"[:20] + README_TRUNCATION_MARKER

    def test_long_lines_capped(self) -> None:
        text = "\n".join("x" * 500 for _ in range(40))
        result = truncate_readme(text, 2000, 30)
        assert result.endswith(README_TRUNCATION_MARKER)
        assert len(result) == 2000 + len(README_TRUNCATION_MARKER)


class TestReadReadme:
    """Tests for read_readme."""

    def test_reads_file(self, repo_dir: Path) -> None:
        sink = RecordingWarningSink()
        assert read_readme(repo_dir, "README.md", 2000, 30, sink).startswith("# spreadsheet")
        assert sink.warnings == []

    def test_missing_file(self, tmp_path: Path) -> None:
        sink = RecordingWarningSink()
        assert read_readme(tmp_path, "README.md", 2000, 30, sink) == README_PLACEHOLDER
        assert sink.warnings[0].details["path"] == str(tmp_path / "README.md")


def test_project_name_from_directory(tmp_path: Path) -> None:
    repo = tmp_path / "my-project"
    repo.mkdir()
    assert project_name(repo) == "my-project"
    assert project_name(repo / ".") == "my-project"


class TestGetAdapter:
    """Tests for the adapter registry."""

    def test_git_chglog(self) -> None:
        executor = ScriptedExecutor()
        adapter = get_adapter("git-chglog", executor=executor)
        assert isinstance(adapter, GitChglogAdapter)
        assert adapter.executor is executor
        assert adapter.name is SourceAdapterName.GIT_CHGLOG

    def test_release_it(self) -> None:
        adapter = get_adapter(SourceAdapterName.RELEASE_IT)
        assert isinstance(adapter, ReleaseItAdapter)
        assert adapter.name is SourceAdapterName.RELEASE_IT

    def test_fresh_instances(self) -> None:
        assert get_adapter("release-it") is not get_adapter("release-it")

    def test_unknown(self) -> None:
        with pytest.raises(ValueError):
            get_adapter("keepachangelog")


class TestWarningSinks:
    """Tests for the warning channel."""

    def test_logging_sink(self) -> None:
        with capture_logs() as logs:
            LoggingWarningSink().warn("readme", "Failed to read README.md", path="/x")
        assert logs == [
            {
                "event": "extraction_degraded",
                "log_level": "warning",
                "step": "readme",
                "reason": "Failed to read README.md",
                "path": "/x",
            }
        ]

    def test_recording_sink(self) -> None:
        sink = RecordingWarningSink()
        sink.warn("code_diff", "boom", version="v1")
        assert sink.steps == ["code_diff"]
        assert sink.warnings[0].details == {"version": "v1"}

    def test_recording_sink_can_log(self) -> None:
        with capture_logs() as logs:
            RecordingWarningSink(log=True).warn("date", "no date")
        assert logs[0]["step"] == "date"
