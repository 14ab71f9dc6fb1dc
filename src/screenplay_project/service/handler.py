"""
handler.py

Transport-agnostic request handling for the render service.

The serving layer (a worker, a WSGI app, anything) decodes a JSON request body
into a mapping and hands it to handle_render_request(). The handler checks the
request shape, calls the core once and wraps the markup in a RenderResponse;
the caller only has to copy status, content type and body onto its own
response object.

Request body:
    {"screenplay": "<manuscript text>", "standalone": false}

Responses:
    200 text/html           rendered markup
    400 text/plain          missing, empty or non-text "screenplay", or a
                            "standalone" that is not a JSON boolean

The handler never reinterprets the content itself.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from screenplay_project.errors import ManuscriptError
from screenplay_project.pipeline.convert import render_manuscript

HTML = "text/html; charset=utf-8"
PLAIN = "text/plain; charset=utf-8"


@dataclass(frozen=True)
class RenderResponse:
    status: int
    content_type: str
    body: str


def _bad_request(reason: str) -> RenderResponse:
    return RenderResponse(status=400, content_type=PLAIN, body=reason)


def handle_render_request(body: Any) -> RenderResponse:
    if not isinstance(body, Mapping):
        return _bad_request("Request body must be a JSON object")

    screenplay = body.get("screenplay")
    if not isinstance(screenplay, str) or screenplay == "":
        return _bad_request(f"Body must contain a 'screenplay' field and it cannot be {screenplay!r}")

    standalone = body.get("standalone", False)
    if not isinstance(standalone, bool):
        return _bad_request(f"'standalone' must be true or false, not {standalone!r}")

    try:
        markup = render_manuscript(screenplay, standalone=standalone)
    except ManuscriptError as exc:
        return _bad_request(str(exc))
    return RenderResponse(status=200, content_type=HTML, body=markup)
