# PURPOSE: Call the hosted chat-completion API (OpenAI-compatible gateway).
# CONTEXT: Used by the generate-turn function; returns only the generated text.

from __future__ import annotations
from typing import Any, Dict, List

from omnicast.config import CompletionSettings
from omnicast.errors import UpstreamError
from omnicast.tools import http_tool


def complete(messages: List[Dict[str, str]], settings: CompletionSettings) -> str:
    """
    Send role-tagged messages and return the first choice's text, trimmed.

    parameters:
    - messages: list – e.g. [{"role": "system", ...}, {"role": "user", ...}].
    - settings: CompletionSettings – credentials, model and sampling options.

    returns:
    - str – choices[0].message.content with surrounding whitespace removed.

    raises:
    - UpstreamError – on any non-2xx status (keeps status and body for logging).
    - ValueError – if the response has no choices[0].message.content.
    """
    resp = http_tool.send(
        "POST",
        f"{settings.base_url}/v1/chat/completions",
        headers={
            "Authorization": f"Bearer {settings.api_key}",
            "Content-Type": "application/json",
        },
        json={
            "model": settings.model,
            "messages": messages,
            "temperature": settings.temperature,
            "max_tokens": settings.max_tokens,
        },
        timeout=settings.timeout,
    )
    if not resp.ok:
        raise UpstreamError(f"LLM API error: {resp.status_code}", resp.status_code, resp.text)

    data: Any = resp.json()
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise ValueError("Completion response has no choices[0].message.content") from e
    if not isinstance(content, str):
        raise ValueError("Completion response content is not text")
    return content.strip()
