"""Error taxonomy for changelog source normalization.

Fatal conditions are raised as subclasses of ChangelogError so callers can
catch the whole family in one place. Non-fatal sub-extraction failures are
never raised; adapters replace them with placeholder text and report them
through a WarningSink (see diagnostics.py).
"""

from __future__ import annotations

from pathlib import Path


class ChangelogError(Exception):
    """Base class for every fatal changelog extraction failure."""


class ToolNotFoundError(ChangelogError):
    """A required external binary is not available on PATH."""

    def __init__(self, tool: str, hint: str = "") -> None:
        self.tool = tool
        self.hint = hint
        message = f"'{tool}' command not found in PATH."
        if hint:
            message = f"{message} {hint}"
        super().__init__(message)


class ExecutionError(ChangelogError):
    """An external command ran but failed.

    Attributes:
        command: The full command line that was executed
        returncode: Exit status (None when the process never finished)
        stderr: Captured diagnostic output
    """

    def __init__(
        self,
        command: list[str],
        returncode: int | None,
        stderr: str = "",
        reason: str = "",
    ) -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command '{' '.join(self.command)}' failed"
        if reason:
            message += f": {reason}"
        elif returncode is not None:
            message += f" with exit status {returncode}"
        if stderr.strip():
            message += f"\nStderr:\n{stderr.strip()}"
        super().__init__(message)


class TagNotFoundError(ChangelogError):
    """No version-control tag matches the requested version."""

    def __init__(self, version: str | None, repo_path: str | Path) -> None:
        self.version = version
        self.repo_path = str(repo_path)
        if version:
            message = f"Tag {version} not found in repository {self.repo_path}"
        else:
            message = f"No tags found in repository {self.repo_path}"
        super().__init__(message)


class ParseNotFoundError(ChangelogError):
    """A static changelog has no section for the requested version."""

    def __init__(self, path: str | Path, version: str | None) -> None:
        self.path = str(path)
        self.version = version
        if version:
            message = f"Version {version} not found in {self.path}"
        else:
            message = f"No version header found in {self.path}"
        super().__init__(message)


class ChangelogReadError(ChangelogError):
    """A file required for extraction could not be read."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Failed to read {self.path}: {reason}")
