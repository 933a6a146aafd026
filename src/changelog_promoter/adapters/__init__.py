"""Source adapters that normalize changelog sources into a VersionEntry.

Two strategies share one contract (see base.SourceAdapter):
- GitChglogAdapter runs git-chglog and git against the repository
- ReleaseItAdapter parses a committed CHANGELOG.md
"""

from __future__ import annotations

from changelog_promoter.adapters.base import SourceAdapter
from changelog_promoter.adapters.gitchglog import GitChglogAdapter
from changelog_promoter.adapters.releaseit import ReleaseItAdapter
from changelog_promoter.config import PromoterConfig
from changelog_promoter.diagnostics import WarningSink
from changelog_promoter.executor import CommandExecutorProtocol
from changelog_promoter.schemas import SourceAdapterName

__all__ = [
    "GitChglogAdapter",
    "ReleaseItAdapter",
    "SourceAdapter",
    "get_adapter",
]


def get_adapter(
    name: SourceAdapterName | str,
    config: PromoterConfig | None = None,
    executor: CommandExecutorProtocol | None = None,
    warnings: WarningSink | None = None,
) -> SourceAdapter:
    """Build a fresh adapter for the given identity.

    Raises:
        ValueError: If the name is not a known adapter
    """
    adapter_name = SourceAdapterName(name)
    if adapter_name is SourceAdapterName.GIT_CHGLOG:
        return GitChglogAdapter(config=config, executor=executor, warnings=warnings)
    return ReleaseItAdapter(config=config, warnings=warnings)
