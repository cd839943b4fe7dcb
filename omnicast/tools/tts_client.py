# PURPOSE: Call the ElevenLabs text-to-speech API and return raw MP3 bytes.
# CONTEXT: Used by the speech function. Internal voice ids are decoupled from
#          provider voice ids so the client app never hard-codes the latter.

from __future__ import annotations
from typing import Any, Dict, Optional

import requests

from omnicast.config import SpeechSettings
from omnicast.tools import http_tool

MODEL_ID = "eleven_turbo_v2_5"
OUTPUT_FORMAT = "mp3_44100_128"
DEFAULT_VOICE = "male-calm"

VOICE_MAP: Dict[str, str] = {
    "male-deep": "nPczCjzI2devNBz1zQrb",         # Brian
    "male-calm": "onwK4e9ZLuTAKqWW03F9",         # Daniel
    "female-warm": "EXAVITQu4vr4xnSDxMaL",       # Sarah
    "female-energetic": "cgSgspJ2msm6clMCkdW9",  # Jessica
    "british-crisp": "JBFqnCBsd6RMkjVDRZzb",     # George
}

VOICE_SETTINGS: Dict[str, Any] = {
    "stability": 0.5,
    "similarity_boost": 0.75,
    "style": 0.4,
    "use_speaker_boost": True,
    "speed": 1.0,
}


def resolve_voice(voice_id: str) -> str:
    """Map an internal voice id to the provider's id; unknown ids use male-calm."""
    return VOICE_MAP.get(voice_id, VOICE_MAP[DEFAULT_VOICE])


def synthesize(
    text: str,
    provider_voice_id: str,
    settings: SpeechSettings,
    previous_text: Optional[str] = None,
    next_text: Optional[str] = None,
) -> requests.Response:
    """
    Request speech audio for `text`.

    notes:
    - previous_text / next_text are stitching context so consecutive clips
      flow naturally; they are only sent when provided.
    - The response is returned as-is; the caller decides how to treat non-2xx.
    """
    payload: Dict[str, Any] = {
        "text": text,
        "model_id": MODEL_ID,
        "voice_settings": dict(VOICE_SETTINGS),
    }
    if previous_text:
        payload["previous_text"] = previous_text
    if next_text:
        payload["next_text"] = next_text

    return http_tool.send(
        "POST",
        f"{settings.base_url}/v1/text-to-speech/{provider_voice_id}",
        headers={"xi-api-key": settings.api_key, "Content-Type": "application/json"},
        params={"output_format": OUTPUT_FORMAT},
        json=payload,
        timeout=settings.timeout,
    )
