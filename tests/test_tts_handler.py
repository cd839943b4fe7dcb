import base64
import json

import pytest

from omnicast.handlers.tts import handler
from omnicast.tools.tts_client import VOICE_MAP


class Ctx:
    aws_request_id = "req-tts"


def evt(payload):
    return {"httpMethod": "POST", "body": json.dumps(payload)}


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setenv("ELEVENLABS_API_KEY", "xi-key")


def test_preflight(upstream):
    resp = handler({"httpMethod": "OPTIONS"}, Ctx())
    assert resp["statusCode"] == 200
    assert resp["body"] == ""
    assert upstream.calls == []


def test_missing_key(upstream):
    resp = handler(evt({"text": "hi", "voiceId": "male-deep"}), Ctx())
    assert resp["statusCode"] == 500
    assert json.loads(resp["body"]) == {"error": "ElevenLabs API key not configured"}


def test_missing_text_or_voice(configured, upstream):
    resp = handler(evt({"voiceId": "male-deep"}), Ctx())
    assert resp["statusCode"] == 400
    assert json.loads(resp["body"]) == {"error": "Missing text or voiceId"}
    assert upstream.calls == []


def test_success_returns_base64_audio(configured, upstream):
    upstream.respond(200, content=b"ID3-fake-mp3")
    resp = handler(evt({"text": "Hello there.", "voiceId": "female-warm"}), Ctx())

    assert resp["statusCode"] == 200
    body = json.loads(resp["body"])
    assert base64.b64decode(body["audioContent"]) == b"ID3-fake-mp3"
    assert body["voiceId"] == VOICE_MAP["female-warm"]
    assert body["textLength"] == len("Hello there.")

    call = upstream.calls[0]
    assert call["url"] == f"https://api.elevenlabs.io/v1/text-to-speech/{VOICE_MAP['female-warm']}"
    assert call["params"] == {"output_format": "mp3_44100_128"}
    assert call["headers"]["xi-api-key"] == "xi-key"
    assert call["json"]["model_id"] == "eleven_turbo_v2_5"
    assert "previous_text" not in call["json"]


def test_unknown_voice_falls_back_to_male_calm(configured, upstream):
    upstream.respond(200, content=b"mp3")
    resp = handler(evt({"text": "Hi", "voiceId": "robot"}), Ctx())
    assert json.loads(resp["body"])["voiceId"] == VOICE_MAP["male-calm"]


def test_stitching_context_forwarded(configured, upstream):
    upstream.respond(200, content=b"mp3")
    handler(evt({"text": "Hi", "voiceId": "male-deep", "previousText": "Before.", "nextText": "After."}), Ctx())
    sent = upstream.calls[0]["json"]
    assert sent["previous_text"] == "Before."
    assert sent["next_text"] == "After."


def test_upstream_error_status_mirrored(configured, upstream):
    upstream.respond(401, '{"detail": "invalid api key"}')
    resp = handler(evt({"text": "Hi", "voiceId": "male-deep"}), Ctx())
    assert resp["statusCode"] == 401
    body = json.loads(resp["body"])
    assert body["error"] == "ElevenLabs API error: 401"
    assert "invalid api key" in body["details"]
