import json

import pytest

from omnicast.config import clear_settings_cache
from omnicast.tools import secrets_tool

_ENV_VARS = [
    "BACKBOARD_API_KEY", "BACKBOARD_API_KEY_SECRET_ARN", "BACKBOARD_BASE_URL",
    "LOVABLE_API_KEY", "LOVABLE_API_KEY_SECRET_ARN", "COMPLETION_BASE_URL", "COMPLETION_MODEL",
    "ELEVENLABS_API_KEY", "ELEVENLABS_API_KEY_SECRET_ARN", "ELEVENLABS_BASE_URL",
    "UPSTREAM_TIMEOUT_SECONDS",
]


class FakeResponse:
    """Just enough of requests.Response for the functions under test."""

    def __init__(self, status_code=200, text="", content=None):
        self.status_code = status_code
        self.text = text
        self.content = content if content is not None else text.encode("utf-8")

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return json.loads(self.text)


class Upstream:
    def __init__(self):
        self.calls = []
        self.response = FakeResponse(200, "{}")
        self.error = None

    def respond(self, status_code=200, text="", content=None):
        self.response = FakeResponse(status_code, text, content)

    def __call__(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    secrets_tool.clear_secret_cache()
    yield
    clear_settings_cache()
    secrets_tool.clear_secret_cache()


@pytest.fixture
def upstream(monkeypatch):
    fake = Upstream()
    monkeypatch.setattr("omnicast.tools.http_tool.requests.request", fake)
    return fake
