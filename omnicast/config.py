"""
Function settings.

PURPOSE: Build immutable settings objects from the environment exactly once per
         process and fail fast when a required secret is missing.
CONTEXT: Handlers never read os.environ themselves; they ask for their settings
         here and pass them explicitly into the request pipeline.

Secrets may be injected directly (e.g. BACKBOARD_API_KEY) or referenced through
AWS Secrets Manager (e.g. BACKBOARD_API_KEY_SECRET_ARN).
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from omnicast.errors import ConfigurationError
from omnicast.tools import secrets_tool


DEFAULT_BACKBOARD_BASE_URL = "https://app.backboard.io"
DEFAULT_COMPLETION_BASE_URL = "https://ai.gateway.lovable.dev"
DEFAULT_COMPLETION_MODEL = "google/gemini-3-flash-preview"
DEFAULT_TTS_BASE_URL = "https://api.elevenlabs.io"


@dataclass(frozen=True)
class ProxySettings:
    api_key: str
    base_url: str = DEFAULT_BACKBOARD_BASE_URL
    timeout: Optional[float] = None


@dataclass(frozen=True)
class CompletionSettings:
    api_key: str
    base_url: str = DEFAULT_COMPLETION_BASE_URL
    model: str = DEFAULT_COMPLETION_MODEL
    temperature: float = 0.8
    max_tokens: int = 200
    timeout: Optional[float] = None


@dataclass(frozen=True)
class SpeechSettings:
    api_key: str
    base_url: str = DEFAULT_TTS_BASE_URL
    timeout: Optional[float] = None


def _secret(name: str) -> Optional[str]:
    """
    Resolve a secret by environment variable name.

    returns:
    - str or None – value of `name`, else the Secrets Manager value referenced by
      `<name>_SECRET_ARN`, else None.
    """
    value = os.getenv(name)
    if value:
        return value
    arn = os.getenv(f"{name}_SECRET_ARN")
    if arn:
        return secrets_tool.get_secret_string(arn)
    return None


def _timeout() -> Optional[float]:
    raw = os.getenv("UPSTREAM_TIMEOUT_SECONDS")
    return float(raw) if raw else None


def _base_url(name: str, default: str) -> str:
    return (os.getenv(name) or default).rstrip("/")


# lru_cache does not cache raised exceptions, so a missing secret is re-checked
# on the next invocation instead of being remembered.
@lru_cache(maxsize=1)
def get_proxy_settings() -> ProxySettings:
    """
    Settings for the Backboard proxy.

    raises:
    - ConfigurationError – if BACKBOARD_API_KEY cannot be resolved.
    """
    key = _secret("BACKBOARD_API_KEY")
    if not key:
        raise ConfigurationError("Missing API key configuration")
    return ProxySettings(
        api_key=key,
        base_url=_base_url("BACKBOARD_BASE_URL", DEFAULT_BACKBOARD_BASE_URL),
        timeout=_timeout(),
    )


@lru_cache(maxsize=1)
def get_completion_settings() -> CompletionSettings:
    """Settings for the turn generator; raises ConfigurationError without LOVABLE_API_KEY."""
    key = _secret("LOVABLE_API_KEY")
    if not key:
        raise ConfigurationError("Missing API key configuration")
    return CompletionSettings(
        api_key=key,
        base_url=_base_url("COMPLETION_BASE_URL", DEFAULT_COMPLETION_BASE_URL),
        model=os.getenv("COMPLETION_MODEL") or DEFAULT_COMPLETION_MODEL,
        timeout=_timeout(),
    )


@lru_cache(maxsize=1)
def get_speech_settings() -> SpeechSettings:
    key = _secret("ELEVENLABS_API_KEY")
    if not key:
        raise ConfigurationError("ElevenLabs API key not configured")
    return SpeechSettings(
        api_key=key,
        base_url=_base_url("ELEVENLABS_BASE_URL", DEFAULT_TTS_BASE_URL),
        timeout=_timeout(),
    )


def clear_settings_cache() -> None:
    """Drop cached settings so the next call re-reads the environment (used by tests)."""
    get_proxy_settings.cache_clear()
    get_completion_settings.cache_clear()
    get_speech_settings.cache_clear()
