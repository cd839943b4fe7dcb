"""
backboard-proxy: forwards client calls to the Backboard API with the server-held key.

Request body: {"endpoint": "/threads/123/messages", "method": "POST", "body": {...}}
Upstream:     <method> <base>/api<endpoint>  with  X-API-Key: <secret>
Response:     upstream JSON (or {"raw": text}) with the upstream status code.
"""

from __future__ import annotations
import json
from typing import Any, Dict

from omnicast.config import ProxySettings, get_proxy_settings
from omnicast.encoding import select_strategy
from omnicast.errors import RequestValidationError
from omnicast.handlers.base import lambda_entry
from omnicast.http_io import json_response, parse_json_body, validate_request
from omnicast.logging_setup import configure_logging
from omnicast.records import ProxyRequest
from omnicast.tools import http_tool

log = configure_logging("backboard-proxy")

LOG_BODY_CHARS = 200


def parse_proxy_request(payload: Any) -> ProxyRequest:
    if not isinstance(payload, dict) or not payload.get("endpoint"):
        raise RequestValidationError("Missing endpoint parameter")
    validate_request(payload, "proxy_request")
    return {
        "endpoint": payload["endpoint"],
        "method": payload.get("method") or "GET",
        "body": payload.get("body"),
    }


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def decode_upstream(text: str) -> Any:
    """Parsed JSON when possible, otherwise the raw text wrapped as {"raw": text}."""
    # NaN / Infinity are not JSON and could not be re-serialised for the client.
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return {"raw": text}


def forward(req: ProxyRequest, settings: ProxySettings, log) -> Dict[str, Any]:
    """
    Send one request upstream and mirror the result.

    returns:
    - dict – API Gateway response whose status equals the upstream status.
    """
    endpoint, method = req["endpoint"], req["method"]
    strategy = select_strategy(endpoint, method)
    body_kwargs, extra_headers = strategy.encode(req.get("body"))
    headers = {"X-API-Key": settings.api_key, **extra_headers}

    log.info("proxy.request", method=method, endpoint=endpoint, encoding=strategy.name)
    resp = http_tool.send(
        method,
        f"{settings.base_url}/api{endpoint}",
        headers=headers,
        timeout=settings.timeout,
        **body_kwargs,
    )

    text = resp.text
    log.info("proxy.response", status=resp.status_code, body=text[:LOG_BODY_CHARS])
    return json_response(decode_upstream(text), resp.status_code)


@lambda_entry(log)
def handler(event: Dict[str, Any], log) -> Dict[str, Any]:
    settings = get_proxy_settings()
    req = parse_proxy_request(parse_json_body(event))
    return forward(req, settings, log)
