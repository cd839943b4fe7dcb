"""
elevenlabs-tts: turn one podcast line into MP3 audio.

Request body: {"text": "...", "voiceId": "male-deep", "previousText"?: "...", "nextText"?: "..."}
Response:     {"audioContent": <base64 mp3>, "voiceId": <provider id>, "textLength": int}
"""

from __future__ import annotations
import base64
from typing import Any, Dict

from omnicast.config import get_speech_settings
from omnicast.errors import RequestValidationError
from omnicast.handlers.base import lambda_entry
from omnicast.http_io import json_response, parse_json_body, validate_request
from omnicast.logging_setup import configure_logging
from omnicast.records import SpeechRequest, SpeechResponse
from omnicast.tools import tts_client

log = configure_logging("elevenlabs-tts")


def parse_speech_request(payload: Any) -> SpeechRequest:
    if not isinstance(payload, dict) or not payload.get("text") or not payload.get("voiceId"):
        raise RequestValidationError("Missing text or voiceId")
    validate_request(payload, "speech_request")
    return payload  # type: ignore[return-value]


@lambda_entry(log)
def handler(event: Dict[str, Any], log) -> Dict[str, Any]:
    settings = get_speech_settings()
    req = parse_speech_request(parse_json_body(event))

    voice = tts_client.resolve_voice(req["voiceId"])
    log.info("tts.request", voice=req["voiceId"], provider_voice=voice, text_length=len(req["text"]))

    resp = tts_client.synthesize(
        req["text"],
        voice,
        settings,
        previous_text=req.get("previousText"),
        next_text=req.get("nextText"),
    )
    if not resp.ok:
        log.error("tts.upstream_error", status=resp.status_code, body=resp.text[:200])
        return json_response(
            {"error": f"ElevenLabs API error: {resp.status_code}", "details": resp.text},
            resp.status_code,
        )

    audio = resp.content
    log.info("tts.response", audio_bytes=len(audio))
    result: SpeechResponse = {
        "audioContent": base64.b64encode(audio).decode("ascii"),
        "voiceId": voice,
        "textLength": len(req["text"]),
    }
    return json_response(result)
