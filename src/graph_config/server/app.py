"""HTTP server for graph-config.

Provides a Starlette-based REST API for binding a template to a value
bundle without writing Python:

    POST /bind    {"template": "...", "kind": "digraph", "values": {...},
                   "format": "descriptors"}
    GET  /health

Transforms cannot be sent over the wire, so templates bound here rely on
the default behaviour of reading ``values[name]`` for every node.
"""

from __future__ import annotations

import json
from typing import Any

import anyio.to_thread
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from graph_config.config import get_factories
from graph_config.errors import GraphConfigError
from graph_config.template import BindingResult, GraphConfig


def _bind(template: str, kind: str, output_format: str, values: dict[str, Any]) -> BindingResult:
    config = GraphConfig(get_factories(output_format))
    return config.template(kind, template).bind(values)


def _error(message: str, error_type: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse({"error": message, "type": error_type}, status_code=status_code)


# ------------------------------------------------------------------ #
# Handlers
# ------------------------------------------------------------------ #


async def _handle_bind(request: Request) -> JSONResponse:
    """Bind a template and return its statements and diagnostics.

    Binding is CPU-only but can be large, so it runs in a worker thread
    to keep the event loop free.
    """
    try:
        body: Any = await request.json()
    except json.JSONDecodeError:
        return _error("Request body must be JSON", "BadRequest")

    if not isinstance(body, dict):
        return _error("Request body must be a JSON object", "BadRequest")

    template = body.get("template")
    kind = body.get("kind", "dot")
    output_format = body.get("format", "descriptors")
    values = body.get("values", {})

    if not isinstance(template, str) or not template.strip():
        return _error("'template' must be a non-empty string", "BadRequest")
    if not isinstance(kind, str):
        return _error("'kind' must be a string", "BadRequest")
    if not isinstance(output_format, str):
        return _error("'format' must be a string", "BadRequest")
    if not isinstance(values, dict):
        return _error("'values' must be a JSON object", "BadRequest")

    try:
        result = await anyio.to_thread.run_sync(_bind, template, kind, output_format, values)
    except GraphConfigError as e:
        return _error(str(e), type(e).__name__)
    except ValueError as e:
        # Unknown kind or format
        return _error(str(e), "BadRequest")

    return JSONResponse(
        {
            "statements": [s.model_dump(mode="json") for s in result.statements],
            "diagnostics": [
                {"kind": str(d.kind), "message": d.message, "name": d.name}
                for d in result.diagnostics
            ],
        }
    )


async def _handle_health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


routes = [
    Route("/bind", _handle_bind, methods=["POST"]),
    Route("/health", _handle_health, methods=["GET"]),
]

app = Starlette(routes=routes)
