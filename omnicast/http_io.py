"""
I/O helpers for API Gateway events, schemas and response envelopes.

PURPOSE: Central place for JSON schema validation, inbound event normalisation and
         the CORS-carrying response shape shared by every Omnicast function.
CONTEXT: Browser clients call the functions cross-origin, so every response
         (success, error and preflight) carries the same CORS headers.
"""

from __future__ import annotations

import base64
import json
import pathlib
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional

from jsonschema import Draft7Validator, ValidationError

from omnicast.errors import RequestValidationError


SCHEMA_DIR = pathlib.Path(__file__).resolve().parent / "schemas"

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


# -------------------- Schema loading utilities -------------------- #

@lru_cache(maxsize=16)
def load_schema(name: str) -> Dict[str, Any]:
    """
    Load a packaged JSON schema by short name (cached).

    parameters:
    - name: str – e.g. 'turn_request' for schemas/turn_request.schema.json.

    returns:
    - dict – parsed schema.

    raises:
    - FileNotFoundError – if no schema with that name is packaged.
    """
    p = SCHEMA_DIR / f"{name}.schema.json"
    if not p.exists():
        raise FileNotFoundError(f"Schema not found at: {p}")
    return json.loads(p.read_text(encoding="utf-8"))


def error_to_string(err: Exception) -> str:
    """
    Convert exceptions into readable strings for user-facing error messages.

    notes:
    - ValidationError messages include a pointer path showing where validation failed.
    """
    if isinstance(err, ValidationError):
        path = "$" + "".join(f"[{repr(p)}]" if isinstance(p, int) else f".{p}" for p in err.path)
        return f"{err.message} at {path}"
    return f"{type(err).__name__}: {err}"


def validate_request(payload: Any, schema_name: str) -> None:
    """
    Validate an inbound payload, turning schema failures into a 400.

    raises:
    - RequestValidationError – with the first failure and its JSON path.
    """
    try:
        Draft7Validator(load_schema(schema_name)).validate(payload)
    except ValidationError as e:
        raise RequestValidationError(error_to_string(e)) from e


# -------------------- Event normalisation -------------------- #

def request_method(event: Mapping[str, Any]) -> str:
    """
    Read the HTTP verb from a REST (v1) or HTTP API (v2) proxy event.
    Direct invocations without either field are treated as POST.
    """
    method = event.get("httpMethod")
    if not method:
        method = ((event.get("requestContext") or {}).get("http") or {}).get("method")
    return (method or "POST").upper()


def header(event: Mapping[str, Any], name: str) -> Optional[str]:
    """Case-insensitive header lookup."""
    wanted = name.lower()
    for key, value in (event.get("headers") or {}).items():
        if key.lower() == wanted:
            return value
    return None


def parse_json_body(event: Mapping[str, Any]) -> Any:
    """
    Decode the JSON body of a proxy event.

    behaviour:
    - A string body is parsed as JSON (after base64 decoding when isBase64Encoded).
    - An already-decoded body (direct invoke / tests) is returned unchanged.
    - A direct invocation (no httpMethod / requestContext) is the payload itself.
    - A gateway event without a body fails like an empty body.

    raises:
    - json.JSONDecodeError (ValueError) – if the body is missing or not valid JSON.
    """
    if "body" not in event and "httpMethod" not in event and "requestContext" not in event:
        return dict(event)
    body = event.get("body")
    if isinstance(body, (str, bytes)):
        if event.get("isBase64Encoded"):
            body = base64.b64decode(body)
        return json.loads(body)
    if body is None:
        # Same failure the runtime gives for an empty request body.
        return json.loads("")
    return body


# -------------------- Response construction -------------------- #

def json_response(body: Any, status_code: int = 200) -> Dict[str, Any]:
    """
    Wrap a JSON-serialisable value into an API Gateway compatible response.

    returns:
    - dict – {"statusCode": int, "headers": {...CORS, Content-Type}, "body": "<json-string>"}.
    """
    return {
        "statusCode": status_code,
        "headers": {**CORS_HEADERS, "Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def error_response(message: Optional[str], status_code: int = 500) -> Dict[str, Any]:
    return json_response({"error": message or "Unknown error"}, status_code)


def preflight_response(body: str = "") -> Dict[str, Any]:
    """Bare 200 acknowledging a CORS preflight; carries only the CORS headers."""
    return {"statusCode": 200, "headers": dict(CORS_HEADERS), "body": body}


__all__ = [
    "CORS_HEADERS",
    "load_schema",
    "error_to_string",
    "validate_request",
    "request_method",
    "header",
    "parse_json_body",
    "json_response",
    "error_response",
    "preflight_response",
]
