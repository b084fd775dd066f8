"""HTTP server for seed.

Provides a small Starlette REST API over the parse/render pipeline:

    POST /render   {"source": "...", "options": {...}}  -> {"dot": "..."}
    POST /parse    {"source": "..."}                     -> {"roots": [...], "nodes": [...]}
    GET  /health                                         -> {"status": "ok"}

Every request runs its own pipeline (own arena and render context) on a
threadpool worker, so requests share no parse state and the event loop is
never held by a long parse.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, Field, ValidationError
from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from seed.ast import ParseResult
from seed.config import ParseOptions, RenderOptions
from seed.errors import SyntaxFailure
from seed.parser import parse
from seed.render import render_result

logger = logging.getLogger(__name__)


class ParseRequest(BaseModel):
    """Body of POST /parse."""

    source: str
    parse_options: ParseOptions = Field(default_factory=ParseOptions)


class RenderRequest(ParseRequest):
    """Body of POST /render."""

    options: RenderOptions = Field(default_factory=RenderOptions)


_RequestT = TypeVar("_RequestT", bound=ParseRequest)


# ------------------------------------------------------------------ #
# Helpers
# ------------------------------------------------------------------ #


async def _read_body(request: Request, model: type[_RequestT]) -> _RequestT | JSONResponse:
    """Decode and validate a JSON body, or return the 400 response."""
    try:
        body: Any = await request.json()
    except ValueError:
        return JSONResponse({"error": "Request body must be valid JSON"}, status_code=400)

    if not isinstance(body, dict):
        return JSONResponse({"error": "Request body must be a JSON object"}, status_code=400)

    try:
        return model.model_validate(body)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        return JSONResponse({"error": f"{field}: {first['msg']}"}, status_code=400)


def _parse_or_error(req: ParseRequest) -> ParseResult | JSONResponse:
    try:
        return parse(req.source, max_depth=req.parse_options.max_depth)
    except SyntaxFailure as e:
        logger.info("Rejected source: %s", e)
        return JSONResponse(e.to_dict(), status_code=422)


# ------------------------------------------------------------------ #
# Handlers
# ------------------------------------------------------------------ #


async def _handle_render(request: Request) -> JSONResponse:
    """Parse the submitted source and return it as a DOT document."""
    req = await _read_body(request, RenderRequest)
    if isinstance(req, JSONResponse):
        return req

    result = await run_in_threadpool(_parse_or_error, req)
    if isinstance(result, JSONResponse):
        return result
    dot = await run_in_threadpool(render_result, result, req.options)
    return JSONResponse({"dot": dot})


async def _handle_parse(request: Request) -> JSONResponse:
    """Parse the submitted source and return the arena as JSON."""
    req = await _read_body(request, ParseRequest)
    if isinstance(req, JSONResponse):
        return req

    result = await run_in_threadpool(_parse_or_error, req)
    if isinstance(result, JSONResponse):
        return result
    return JSONResponse(result.to_dict())


async def _handle_health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


# ------------------------------------------------------------------ #
# App
# ------------------------------------------------------------------ #

routes = [
    Route("/render", _handle_render, methods=["POST"]),
    Route("/parse", _handle_parse, methods=["POST"]),
    Route("/health", _handle_health, methods=["GET"]),
]


def create_app() -> Starlette:
    """Build the Starlette application."""
    return Starlette(routes=routes)


app = create_app()
