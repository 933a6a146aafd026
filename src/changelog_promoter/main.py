"""FastAPI application exposing the promoter as callable tools.

Routes:
- GET  /health                                 liveness probe
- POST /entries                                raw VersionEntry for a request
- POST /promote                                entry + prompt/context blocks
- POST /tools/changelog_promoter_gitchglog     promote via git-chglog
- POST /tools/changelog_promoter_releaseit     promote via CHANGELOG.md

Request bodies are validated by pydantic before reaching the adapters, and
fatal extraction errors come back as a single descriptive JSON error.

To run locally:
    uvicorn changelog_promoter.main:app --reload --port 8000
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from changelog_promoter import __version__
from changelog_promoter.config import load_config
from changelog_promoter.errors import (
    ChangelogError,
    ChangelogReadError,
    ExecutionError,
    ParseNotFoundError,
    TagNotFoundError,
    ToolNotFoundError,
)
from changelog_promoter.logging_config import get_logger, setup_logging
from changelog_promoter.promoter import ChangelogPromoter
from changelog_promoter.schemas import (
    PromotionRequest,
    PromotionResponse,
    SourceAdapterName,
    ToolArguments,
    VersionEntry,
)

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Application Lifespan (startup/shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the promoter once at startup; it is stateless per request."""
    setup_logging()
    app.state.promoter = ChangelogPromoter(config=load_config())
    yield


app = FastAPI(
    title="Changelog Promoter",
    description="Normalizes changelogs into release announcement prompts",
    version=__version__,
    lifespan=lifespan,
)


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------

ERROR_STATUS: dict[type[ChangelogError], tuple[int, str]] = {
    ToolNotFoundError: (503, "tool_not_found"),
    ExecutionError: (502, "execution_error"),
    TagNotFoundError: (404, "tag_not_found"),
    ParseNotFoundError: (404, "version_not_found"),
    ChangelogReadError: (500, "read_error"),
}


@app.exception_handler(ChangelogError)
async def changelog_error_handler(
    request: Request, exc: ChangelogError
) -> JSONResponse:
    """Turn a fatal extraction error into a JSON error body."""
    status_code, code = ERROR_STATUS.get(type(exc), (500, "changelog_error"))
    logger.warning("request_failed", path=request.url.path, error=code, detail=str(exc))
    return JSONResponse(
        status_code=status_code,
        content={"error": code, "detail": str(exc)},
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


def _promoter(request: Request) -> ChangelogPromoter:
    return request.app.state.promoter


def _promote(promotion: PromotionRequest, request: Request) -> PromotionResponse:
    entry, task = _promoter(request).promote(promotion)
    return PromotionResponse(
        adapter=promotion.adapter,
        entry=entry,
        content=task.content_blocks(),
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "healthy", "version": __version__}


@app.post("/entries", response_model=VersionEntry)
def get_entry(promotion: PromotionRequest, request: Request) -> VersionEntry:
    """Return the normalized VersionEntry without building a prompt."""
    return _promoter(request).fetch_entry(promotion)


@app.post("/promote", response_model=PromotionResponse)
def promote(promotion: PromotionRequest, request: Request) -> PromotionResponse:
    """Build the announcement prompt and context blocks for a release."""
    return _promote(promotion, request)


@app.post("/tools/changelog_promoter_gitchglog", response_model=PromotionResponse)
def promote_gitchglog(arguments: ToolArguments, request: Request) -> PromotionResponse:
    """Promote a release using the changelog generated by git-chglog."""
    promotion = PromotionRequest(
        adapter=SourceAdapterName.GIT_CHGLOG,
        repo_path=arguments.repo_path,
        version=arguments.version,
    )
    return _promote(promotion, request)


@app.post("/tools/changelog_promoter_releaseit", response_model=PromotionResponse)
def promote_releaseit(arguments: ToolArguments, request: Request) -> PromotionResponse:
    """Promote a release using the CHANGELOG.md written by release-it."""
    promotion = PromotionRequest(
        adapter=SourceAdapterName.RELEASE_IT,
        repo_path=arguments.repo_path,
        version=arguments.version,
    )
    return _promote(promotion, request)
