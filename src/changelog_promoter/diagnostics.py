"""Warning channel for degraded sub-extractions.

Adapters never abort when the changelog body, code diff or README cannot be
produced; they substitute placeholder text instead. Each such degradation is
reported to a WarningSink so it stays observable: the default sink logs it,
the recording sink keeps it for assertions or for surfacing to a caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from changelog_promoter.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExtractionWarning:
    """A single degraded sub-extraction.

    Attributes:
        step: Sub-extraction that degraded (e.g. "changelog", "code_diff")
        message: Human-readable explanation
        details: Extra context such as the failing command or stderr
    """

    step: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


class WarningSink(Protocol):
    """Receives degradations reported by adapters."""

    def warn(self, step: str, message: str, **details: Any) -> None:
        ...


class LoggingWarningSink:
    """Forwards warnings to the structured log."""

    def warn(self, step: str, message: str, **details: Any) -> None:
        logger.warning("extraction_degraded", step=step, reason=message, **details)


class RecordingWarningSink:
    """Keeps warnings in memory, optionally logging them as well.

    Usage:
        sink = RecordingWarningSink()
        adapter = GitChglogAdapter(warnings=sink)
        adapter.get_version_entry(repo, "v1.0.0")
        assert [w.step for w in sink.warnings] == ["readme"]
    """

    def __init__(self, log: bool = False) -> None:
        self.warnings: list[ExtractionWarning] = []
        self._log = log

    def warn(self, step: str, message: str, **details: Any) -> None:
        self.warnings.append(
            ExtractionWarning(step=step, message=message, details=details)
        )
        if self._log:
            logger.warning("extraction_degraded", step=step, reason=message, **details)

    @property
    def steps(self) -> list[str]:
        return [w.step for w in self.warnings]
