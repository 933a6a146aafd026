"""Command execution for the source adapters.

Every external process (git, git-chglog) is spawned through a
CommandExecutorProtocol implementation, so adapters never call subprocess
directly. Tests swap in ScriptedExecutor, which replays canned results
without touching a real repository.

Design notes:
- Non-zero exit codes are returned, not raised; callers decide what is fatal
- A missing executable raises ToolNotFoundError
- No timeout unless one is configured; a hung process blocks the call
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, Sequence

from changelog_promoter.errors import ExecutionError, ToolNotFoundError
from changelog_promoter.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command.

    Attributes:
        args: Full command line (program first)
        returncode: Process exit status
        stdout: Captured standard output
        stderr: Captured standard error
    """

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def check(self) -> CommandResult:
        """Return self, or raise ExecutionError for a non-zero exit status."""
        if not self.ok:
            raise ExecutionError(list(self.args), self.returncode, self.stderr)
        return self


# ---------------------------------------------------------------------------
# Protocol (Interface)
# ---------------------------------------------------------------------------


class CommandExecutorProtocol(Protocol):
    """Runs one program with arguments inside a working directory."""

    def run(
        self, directory: str | Path, program: str, args: Sequence[str] = ()
    ) -> CommandResult:
        """Run a program and capture its output.

        Args:
            directory: Working directory for the process
            program: Executable name or path
            args: Arguments passed to the program

        Returns:
            The captured CommandResult

        Raises:
            ToolNotFoundError: If the program cannot be found
            ExecutionError: If the process cannot be started or times out
        """
        ...


# ---------------------------------------------------------------------------
# Concrete Implementation
# ---------------------------------------------------------------------------


class SubprocessExecutor:
    """Runs commands with subprocess.run.

    Usage:
        executor = SubprocessExecutor()
        result = executor.run("/path/to/repo", "git", ["describe", "--tags"])
    """

    def __init__(self, timeout: float | None = None) -> None:
        """Initialize the executor.

        Args:
            timeout: Seconds to wait for each command. None waits forever.
        """
        self.timeout = timeout

    def run(
        self, directory: str | Path, program: str, args: Sequence[str] = ()
    ) -> CommandResult:
        command = [program, *args]
        workdir = Path(directory)
        if not workdir.is_dir():
            raise ExecutionError(
                command, None, reason=f"working directory {workdir} does not exist"
            )

        logger.debug("command_started", command=command, cwd=str(workdir))
        try:
            completed = subprocess.run(
                command,
                cwd=workdir,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ToolNotFoundError(program) from exc
        except PermissionError as exc:
            raise ExecutionError(command, None, reason=str(exc)) from exc
        except subprocess.TimeoutExpired as exc:
            raise ExecutionError(
                command, None, reason=f"timed out after {self.timeout}s"
            ) from exc

        result = CommandResult(
            args=tuple(command),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )
        if not result.ok:
            logger.debug(
                "command_failed",
                command=command,
                returncode=result.returncode,
                stderr=result.stderr.strip(),
            )
        return result


# ---------------------------------------------------------------------------
# Scripted Implementation (for testing)
# ---------------------------------------------------------------------------


@dataclass
class ScriptedExecutor:
    """Executor that replays predefined results.

    Responses are keyed by the full command line as a tuple. A response can
    be a CommandResult, a plain string (stdout of a successful run) or an
    exception instance to raise. Unscripted commands fail with exit status 1
    unless a default is given.

    Usage:
        executor = ScriptedExecutor({
            ("git-chglog", "--version"): "git-chglog version 0.15.4",
            ("git", "describe", "--tags", "--abbrev=0"): "v1.2.0\\n",
        })
    """

    responses: dict[tuple[str, ...], CommandResult | str | Exception] = field(
        default_factory=dict
    )
    default: CommandResult | str | Exception | None = None
    calls: list[tuple[str, ...]] = field(default_factory=list)

    def run(
        self, directory: str | Path, program: str, args: Sequence[str] = ()
    ) -> CommandResult:
        key = (program, *args)
        self.calls.append(key)
        response = self.responses.get(key, self.default)
        if response is None:
            return CommandResult(
                args=key,
                returncode=1,
                stderr=f"unscripted command: {' '.join(key)}",
            )
        if isinstance(response, Exception):
            raise response
        if isinstance(response, str):
            return CommandResult(args=key, returncode=0, stdout=response)
        return response

    def called(self, *command: str) -> bool:
        """Return True if the exact command line was run."""
        return tuple(command) in self.calls
