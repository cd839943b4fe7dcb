"""
generate-turn: produce the next podcast utterance for one host.

Request body: {currentHost, otherHost, topic, conversationHistory, options}
Response:     {"text": "..."} or {"error": "..."} (400 on malformed input, 500 otherwise).
"""

from __future__ import annotations
from typing import Any, Dict

from omnicast.config import CompletionSettings, get_completion_settings
from omnicast.handlers.base import lambda_entry
from omnicast.http_io import json_response, parse_json_body, validate_request
from omnicast.logging_setup import configure_logging
from omnicast.prompts import build_messages
from omnicast.records import TurnRequest, TurnResponse
from omnicast.tools import completion_client

log = configure_logging("generate-turn")


def parse_turn_request(payload: Any) -> TurnRequest:
    validate_request(payload, "turn_request")
    return {
        "currentHost": payload["currentHost"],
        "otherHost": payload["otherHost"],
        "topic": payload["topic"],
        "conversationHistory": payload["conversationHistory"],
        "options": payload.get("options") or {},
    }


def generate_turn(req: TurnRequest, settings: CompletionSettings) -> TurnResponse:
    return {"text": completion_client.complete(build_messages(req), settings)}


@lambda_entry(log, preflight_body="ok")
def handler(event: Dict[str, Any], log) -> Dict[str, Any]:
    settings = get_completion_settings()
    req = parse_turn_request(parse_json_body(event))
    return json_response(generate_turn(req, settings))
