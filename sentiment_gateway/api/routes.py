"""FastAPI routes for the sentiment gateway.

# ─── API ROUTE MAP ────────────────────────────────────────────────────
#
# Endpoint                      Method     Description
# ─────────────────────────────────────────────────────────────────────
# /api?order=asc|desc&limit=N   POST       Analyze {"content": ...}
# /status                       GET, HEAD  Liveness probe (always 200)
#
# Any other method on /api gets FastAPI's 405.
#
# DEPENDENCY INJECTION PATTERN:
# The pipeline is read from app.state (populated at startup in main.py's
# _build_all) through Depends(), using the Annotated pattern.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import re
from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, Query, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from sentiment_gateway.api.schemas import AnalyzeRequest, ErrorResponse
from sentiment_gateway.models.sentiment import SortOrder
from sentiment_gateway.pipeline.context import RequestContext
from sentiment_gateway.pipeline.orchestrator import SentimentPipeline
from sentiment_gateway.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter()

_LIMIT_RE = re.compile(r"[+-]?\d+")
_NO_LIMIT = -1


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def _get_pipeline(request: Request) -> SentimentPipeline:
    return request.app.state.pipeline


def _get_request_context(request: Request) -> RequestContext:
    """Build the per-request context from the configured request deadline."""
    deadline = getattr(request.app.state, "request_deadline", None)
    return RequestContext(timeout=deadline, is_disconnected=request.is_disconnected)


PipelineDep = Annotated[SentimentPipeline, Depends(_get_pipeline)]
ContextDep = Annotated[RequestContext, Depends(_get_request_context)]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_limit(raw: str | None) -> int:
    """Parse the ``limit`` query parameter.

    A missing or unparsable value means "no limit"; the latter is logged but
    is not a request error.
    """
    if raw is None or raw == "":
        return _NO_LIMIT
    if _LIMIT_RE.fullmatch(raw) is None:
        _logger.warning("invalid_limit_parameter", limit=raw)
        return _NO_LIMIT
    return int(raw)


def _bad_request() -> JSONResponse:
    body = ErrorResponse(error="bad_request", detail="Bad request")
    return JSONResponse(status_code=400, content=body.model_dump())


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@router.post("/api")
async def analyze_sentiment(
    request: Request,
    pipeline: PipelineDep,
    ctx: ContextDep,
    order: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
) -> JSONResponse:
    """Score the sentiment of the posted text.

    Returns a JSON array of single-key ``{sentence: score}`` objects sorted
    by score.  Pipeline errors are turned into an opaque 500 by
    ``ErrorHandlingMiddleware``.
    """
    raw_body = await request.body()
    try:
        body = AnalyzeRequest.model_validate_json(raw_body)
    except ValidationError as exc:
        _logger.error("bad_request_body", error_count=exc.error_count())
        return _bad_request()

    result = await pipeline.handle(
        ctx,
        body.content,
        sort_order=SortOrder.parse(order),
        limit=_parse_limit(limit),
    )
    return JSONResponse(content=result)


@router.api_route("/status", methods=["GET", "HEAD"], include_in_schema=False)
async def status() -> Response:
    """Liveness probe for orchestrators; always 200."""
    return Response(status_code=200)
