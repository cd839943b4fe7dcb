"""
Outbound body encoding strategies for the Backboard proxy.

Each strategy pairs a predicate over (endpoint, method) with an encoder that
returns the requests keyword arguments and extra headers for the outbound call.
Strategies are tried in order and the first match wins; JSON is the fallback.
"""

from __future__ import annotations
import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

Encoded = Tuple[Dict[str, Any], Dict[str, str]]


@dataclass(frozen=True)
class EncodingStrategy:
    name: str
    matches: Callable[[str, str], bool]
    encode: Callable[[Any], Encoded]


def form_value(value: Any) -> str:
    """Stringify a form field the way the browser client expects ('true', '1', ...)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def _encode_multipart(body: Any) -> Encoded:
    # (None, value) tuples make requests emit plain form fields, not file parts.
    # Content-Type is left unset so requests adds the multipart boundary.
    fields: List[Tuple[str, Tuple[None, str]]] = []
    if isinstance(body, dict):
        fields = [(k, (None, form_value(v))) for k, v in body.items() if v is not None]
    return {"files": fields}, {}


def _has_body(body: Any) -> bool:
    # Empty containers still count as a body; null and falsy scalars do not.
    if isinstance(body, (dict, list)):
        return True
    return body not in (None, "", 0, False)


def _encode_json(body: Any) -> Encoded:
    kwargs: Dict[str, Any] = {}
    if _has_body(body):
        kwargs["data"] = json.dumps(body, separators=(",", ":"))
    return kwargs, {"Content-Type": "application/json"}


MULTIPART = EncodingStrategy(
    name="multipart",
    matches=lambda endpoint, method: "/messages" in endpoint and method == "POST",
    encode=_encode_multipart,
)

JSON = EncodingStrategy(
    name="json",
    matches=lambda endpoint, method: True,
    encode=_encode_json,
)

STRATEGIES: Tuple[EncodingStrategy, ...] = (MULTIPART, JSON)


def select_strategy(endpoint: str, method: str) -> EncodingStrategy:
    for strategy in STRATEGIES:
        if strategy.matches(endpoint, method):
            return strategy
    return JSON
