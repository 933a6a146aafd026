"""Core orchestrator for changelog promotion.

Ties the pieces together:
- Source adapters (adapters/) normalize a changelog into a VersionEntry
- The prompt builder (prompts/promote.py) turns it into a PromotionTask

Flow for one request:
1. Validate the request (PromotionRequest)
2. Build a fresh adapter for the requested source
3. Fetch the latest or the requested version
4. Build the announcement prompt and context blocks

This is the entry point for both the API (main.py) and the CLI below.
"""

from __future__ import annotations

import argparse
import json
import sys

from changelog_promoter.adapters import get_adapter
from changelog_promoter.config import PromoterConfig, load_config
from changelog_promoter.diagnostics import WarningSink
from changelog_promoter.errors import ChangelogError
from changelog_promoter.executor import CommandExecutorProtocol
from changelog_promoter.logging_config import get_logger, setup_logging
from changelog_promoter.prompts.promote import build_promotion_task
from changelog_promoter.schemas import (
    PromotionRequest,
    PromotionTask,
    SourceAdapterName,
    VersionEntry,
)

logger = get_logger(__name__)


class ChangelogPromoter:
    """Runs a promotion request end to end.

    Holds configuration and optional collaborators only; every call builds
    its own adapter, so one instance can serve concurrent requests.

    Usage:
        promoter = ChangelogPromoter()
        entry, task = promoter.promote(
            PromotionRequest(adapter="release-it", repo_path=".")
        )
    """

    def __init__(
        self,
        config: PromoterConfig | None = None,
        executor: CommandExecutorProtocol | None = None,
        warnings: WarningSink | None = None,
    ) -> None:
        self.config = config or PromoterConfig()
        self.executor = executor
        self.warnings = warnings

    def fetch_entry(self, request: PromotionRequest) -> VersionEntry:
        """Return the VersionEntry for a request.

        Raises:
            ChangelogError: If the entry cannot be produced
        """
        adapter = get_adapter(
            request.adapter,
            config=self.config,
            executor=self.executor,
            warnings=self.warnings,
        )
        logger.info(
            "extraction_started",
            adapter=request.adapter.value,
            repo_path=request.repo_path,
            version=request.version or "latest",
        )
        try:
            if request.version is None:
                return adapter.get_latest_entry(request.repo_path)
            return adapter.get_version_entry(request.repo_path, request.version)
        except ChangelogError as e:
            logger.error(
                "extraction_failed",
                adapter=request.adapter.value,
                repo_path=request.repo_path,
                version=request.version,
                error=str(e),
            )
            raise

    def promote(self, request: PromotionRequest) -> tuple[VersionEntry, PromotionTask]:
        """Fetch the entry and build the promotion task for it."""
        entry = self.fetch_entry(request)
        return entry, build_promotion_task(entry)


# ---------------------------------------------------------------------------
# CLI Entry Point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="changelog-promoter",
        description="Turn a release changelog into an announcement prompt",
    )
    parser.add_argument("repo_path", help="Path to a local git repository")
    parser.add_argument(
        "--version", "-v",
        dest="version",
        help="Version (git tag) to process; defaults to the latest",
    )
    parser.add_argument(
        "--adapter", "-a",
        choices=[name.value for name in SourceAdapterName],
        default=SourceAdapterName.GIT_CHGLOG.value,
        help="Changelog source (default: git-chglog)",
    )
    parser.add_argument("--config", "-c", help="Path to a YAML config file")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every git / git-chglog command that is run",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the entry and content blocks as JSON",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Usage:
        changelog-promoter /path/to/repo --adapter release-it --version 1.0.1
    """
    args = build_parser().parse_args(argv)
    setup_logging(log_level="DEBUG" if args.verbose else None)

    try:
        config = load_config(args.config)
        request = PromotionRequest(
            adapter=args.adapter, repo_path=args.repo_path, version=args.version
        )
        entry, task = ChangelogPromoter(config=config).promote(request)
    except (ChangelogError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.json:
        payload = {
            "entry": entry.model_dump(mode="json"),
            "content": [block.model_dump() for block in task.content_blocks()],
        }
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print("\n\n".join(block.text for block in task.content_blocks()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
