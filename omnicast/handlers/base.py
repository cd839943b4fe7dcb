"""
Shared Lambda entry-point boundary.

flow for every function:
1) OPTIONS preflight → bare 200 with CORS headers, nothing else touched.
2) Bind request/correlation IDs for traceability.
3) Run the function body.
4) RelayError → its status and {"error": message}; anything else → 500.
"""

from __future__ import annotations
import functools
import traceback
import uuid
from typing import Any, Callable, Dict

from omnicast.errors import RelayError, UpstreamError
from omnicast.http_io import error_response, header, preflight_response, request_method

Handler = Callable[[Dict[str, Any], Any], Dict[str, Any]]


def lambda_entry(log, preflight_body: str = "") -> Callable[[Callable[..., Dict[str, Any]]], Handler]:
    """
    Wrap a function body `fn(event, log)` into a Lambda `handler(event, context)`.

    parameters:
    - log: structlog.BoundLogger – the module's configured logger.
    - preflight_body: str – body returned on OPTIONS ('' or 'ok').
    """

    def decorator(fn: Callable[..., Dict[str, Any]]) -> Handler:
        @functools.wraps(fn)
        def handler(event: Dict[str, Any], context: Any = None) -> Dict[str, Any]:
            event = event or {}
            if request_method(event) == "OPTIONS":
                return preflight_response(preflight_body)

            request_id = getattr(context, "aws_request_id", None) or str(uuid.uuid4())
            correlation_id = header(event, "x-correlation-id") or str(uuid.uuid4())
            bound = log.bind(request_id=request_id, correlation_id=correlation_id)

            try:
                return fn(event, bound)
            except RelayError as e:
                details: Dict[str, Any] = {}
                if isinstance(e, UpstreamError):
                    details = {"upstream_status": e.upstream_status, "upstream_body": e.upstream_body[:200]}
                bound.error("response.error", error=e.message, status=e.status_code, **details)
                return error_response(e.message, e.status_code)
            except Exception as e:
                bound.error(
                    "response.error",
                    error=str(e),
                    error_type=type(e).__name__,
                    traceback=traceback.format_exc(limit=2),
                )
                return error_response(str(e) or None, 500)

        return handler

    return decorator
