"""Tests for the low-information changelog heuristic."""

from __future__ import annotations

import pytest

from changelog_promoter.heuristics import is_only_commit_ids


class TestIsOnlyCommitIds:
    """Tests for is_only_commit_ids."""

    def test_mostly_hashes(self) -> None:
        assert is_only_commit_ids("a1b2c3d\n\ne4f5a6b\nAdd feature\n") is True

    def test_prose_only(self) -> None:
        assert is_only_commit_ids("Add feature\nFix bug\n") is False

    def test_exactly_half_is_not_enough(self) -> None:
        assert is_only_commit_ids("a1b2c3d\nAdd feature\n") is False

    @pytest.mark.parametrize("text", ["", "\n\n", "   \n\t\n"])
    def test_blank_text(self, text: str) -> None:
        assert is_only_commit_ids(text) is False

    def test_full_length_hash(self) -> None:
        assert is_only_commit_ids("a08afaa5ed7962ee3f0e0db5747fcd9714ffee98") is True

    def test_surrounding_whitespace_is_ignored(self) -> None:
        assert is_only_commit_ids("   a1b2c3d   \n") is True

    @pytest.mark.parametrize(
        "line",
        [
            "a1b2c3",  # too short
            "a" * 41,  # too long
            "g1b2c3d",  # not hex
            "- a1b2c3d",  # list item
        ],
    )
    def test_non_matching_lines(self, line: str) -> None:
        assert is_only_commit_ids(line) is False
