import json

import pytest

from omnicast.handlers.generate_turn import handler

COMPLETIONS_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"


class Ctx:
    aws_request_id = "req-turn"


def turn_payload(**overrides):
    payload = {
        "currentHost": {"name": "Alex", "role": "software engineer", "personality": "curious"},
        "otherHost": {"name": "Sam", "role": "product manager"},
        "topic": "Serverless architectures",
        "conversationHistory": ["Alex: Hi!", "Sam: Hello!"],
        "options": {"tone": "technical", "includeExamples": True},
    }
    payload.update(overrides)
    return payload


def evt(payload):
    return {"httpMethod": "POST", "body": json.dumps(payload)}


def completion(content):
    return json.dumps({"choices": [{"message": {"role": "assistant", "content": content}}]})


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setenv("LOVABLE_API_KEY", "lv-key")


def test_preflight_returns_ok(upstream):
    resp = handler({"httpMethod": "OPTIONS"}, Ctx())
    assert resp["statusCode"] == 200
    assert resp["body"] == "ok"
    assert resp["headers"]["Access-Control-Allow-Origin"] == "*"
    assert upstream.calls == []


def test_success_returns_trimmed_text(configured, upstream):
    upstream.respond(200, completion("  Hello there.  "))
    resp = handler(evt(turn_payload()), Ctx())
    assert resp["statusCode"] == 200
    assert json.loads(resp["body"]) == {"text": "Hello there."}
    assert resp["headers"]["Content-Type"] == "application/json"


def test_completion_request_shape(configured, upstream):
    upstream.respond(200, completion("Sure."))
    handler(evt(turn_payload()), Ctx())

    call = upstream.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == COMPLETIONS_URL
    assert call["headers"]["Authorization"] == "Bearer lv-key"
    sent = call["json"]
    assert sent["model"] == "google/gemini-3-flash-preview"
    assert sent["temperature"] == 0.8
    assert sent["max_tokens"] == 200
    assert [m["role"] for m in sent["messages"]] == ["system", "user"]
    assert "You are Alex, a software engineer" in sent["messages"][0]["content"]
    assert "Serverless architectures" in sent["messages"][1]["content"]


def test_model_override(configured, monkeypatch, upstream):
    monkeypatch.setenv("COMPLETION_MODEL", "openai/gpt-5-mini")
    upstream.respond(200, completion("Sure."))
    handler(evt(turn_payload()), Ctx())
    assert upstream.calls[0]["json"]["model"] == "openai/gpt-5-mini"


def test_upstream_failure_collapses_to_500(configured, upstream):
    upstream.respond(429, "rate limited")
    resp = handler(evt(turn_payload()), Ctx())
    assert resp["statusCode"] == 500
    body = json.loads(resp["body"])
    assert body == {"error": "LLM API error: 429"}


def test_missing_choices_is_500(configured, upstream):
    upstream.respond(200, json.dumps({"choices": []}))
    resp = handler(evt(turn_payload()), Ctx())
    assert resp["statusCode"] == 500
    assert "choices[0]" in json.loads(resp["body"])["error"]


def test_malformed_request_is_400(configured, upstream):
    payload = turn_payload()
    del payload["currentHost"]
    resp = handler(evt(payload), Ctx())
    assert resp["statusCode"] == 400
    assert "currentHost" in json.loads(resp["body"])["error"]
    assert upstream.calls == []


def test_history_must_be_strings(configured, upstream):
    resp = handler(evt(turn_payload(conversationHistory=[1, 2])), Ctx())
    assert resp["statusCode"] == 400
    assert "$.conversationHistory[" in json.loads(resp["body"])["error"]


def test_options_may_be_omitted(configured, upstream):
    payload = turn_payload()
    del payload["options"]
    upstream.respond(200, completion("Ok."))
    resp = handler(evt(payload), Ctx())
    assert resp["statusCode"] == 200
    system = upstream.calls[0]["json"]["messages"][0]["content"]
    assert "relaxed, friendly, and conversational" in system


def test_missing_key_is_500(upstream):
    resp = handler(evt(turn_payload()), Ctx())
    assert resp["statusCode"] == 500
    assert json.loads(resp["body"]) == {"error": "Missing API key configuration"}
    assert upstream.calls == []


def test_http_api_event_without_body_is_500(configured, upstream):
    event = {"version": "2.0", "requestContext": {"http": {"method": "POST"}}, "headers": {}}
    resp = handler(event, Ctx())
    assert resp["statusCode"] == 500
    assert upstream.calls == []
