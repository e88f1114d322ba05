"""
Tests for the serverless adapter: event unwrapping, CORS headers, preflight
and the guarantee that every event gets a JSON response.
Run with: pytest echobot -v
"""

import base64
import json

import pytest

from echobot import bot
from echobot.exceptions import UNEXPECTED_MESSAGE, VALIDATION_MESSAGE
from echobot.handler import lambda_handler


# ── Helpers ──────────────────────────────────────────────────

def _event(body=None, method="POST", headers=None, base64_encoded=False) -> dict:
    if headers is None:
        headers = {"content-type": "application/json"}
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    return {
        "httpMethod": method,
        "path": "/chat",
        "headers": headers,
        "body": body,
        "isBase64Encoded": base64_encoded,
    }


def _body(response: dict) -> dict:
    return json.loads(response["body"])


# ── Chat over events ─────────────────────────────────────────

class TestChatEvents:
    def test_hello(self):
        resp = lambda_handler(_event({"message": "hello"}), None)
        assert resp["statusCode"] == 200
        assert _body(resp) == {"reply": "You said: \"hello\". Hello! I'm EchoBot. How can I help?"}

    def test_headers_are_case_insensitive(self):
        resp = lambda_handler(_event({"message": "hello"}, headers={"Content-Type": "application/json"}), None)
        assert resp["statusCode"] == 200

    def test_http_api_v2_event(self):
        event = {
            "version": "2.0",
            "requestContext": {"http": {"method": "POST", "path": "/chat"}},
            "headers": {"content-type": "application/json"},
            "body": json.dumps({"message": "hello"}),
            "isBase64Encoded": False,
        }
        resp = lambda_handler(event, None)
        assert resp["statusCode"] == 200

    def test_base64_body(self):
        raw = base64.b64encode(json.dumps({"message": "hello"}).encode()).decode()
        resp = lambda_handler(_event(raw, base64_encoded=True), None)
        assert resp["statusCode"] == 200
        assert _body(resp)["reply"].startswith('You said: "hello"')

    def test_invalid_base64_body_is_500(self):
        resp = lambda_handler(_event("%%%not-base64%%%", base64_encoded=True), None)
        assert resp["statusCode"] == 500
        assert _body(resp) == {"error": UNEXPECTED_MESSAGE}

    @pytest.mark.parametrize("payload", [{}, {"message": ""}, {"message": "  "}, {"message": 42}])
    def test_invalid_message_is_400(self, payload):
        resp = lambda_handler(_event(payload), None)
        assert resp["statusCode"] == 400
        assert _body(resp) == {"error": VALIDATION_MESSAGE}

    def test_missing_body_is_400(self):
        resp = lambda_handler(_event(None), None)
        assert resp["statusCode"] == 400

    def test_malformed_json_is_500(self):
        resp = lambda_handler(_event('{"message": '), None)
        assert resp["statusCode"] == 500
        assert _body(resp) == {"error": UNEXPECTED_MESSAGE}

    def test_internal_failure_is_500(self, monkeypatch):
        def boom(message):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(bot, "render_reply", boom)
        resp = lambda_handler(_event({"message": "hello"}), None)
        assert resp["statusCode"] == 500
        assert _body(resp) == {"error": UNEXPECTED_MESSAGE}

    def test_lone_surrogate_message(self):
        resp = lambda_handler(_event('{"message": "a\\ud800b"}'), None)
        assert resp["statusCode"] == 200
        resp["body"].encode("utf-8")
        assert _body(resp)["reply"].startswith('You said: "a\ud800b"')

    def test_malformed_event_is_500(self):
        resp = lambda_handler({"httpMethod": "POST", "headers": ["not", "a", "mapping"]}, None)
        assert resp["statusCode"] == 500
        assert _body(resp) == {"error": UNEXPECTED_MESSAGE}


# ── CORS ─────────────────────────────────────────────────────

class TestCors:
    @pytest.mark.parametrize("event", [
        _event({"message": "hello"}),
        _event({}),
        _event("{oops"),
        _event(method="GET"),
    ])
    def test_every_response_allows_all_origins(self, event):
        resp = lambda_handler(event, None)
        assert resp["headers"]["Access-Control-Allow-Origin"] == "*"

    def test_json_content_type(self):
        resp = lambda_handler(_event({"message": "hello"}), None)
        assert resp["headers"]["Content-Type"] == "application/json; charset=utf-8"

    def test_preflight(self):
        resp = lambda_handler(
            _event(method="OPTIONS", headers={
                "Origin": "https://example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            }),
            None,
        )
        assert resp["statusCode"] == 204
        assert resp["body"] == ""
        assert resp["headers"]["Access-Control-Allow-Headers"] == "content-type"
        assert "POST" in resp["headers"]["Access-Control-Allow-Methods"].split(",")


# ── Methods ──────────────────────────────────────────────────

def test_other_methods_are_405():
    resp = lambda_handler(_event(method="GET"), None)
    assert resp["statusCode"] == 405
    assert resp["headers"]["Allow"] == "POST, OPTIONS"
    assert set(_body(resp)) == {"error"}
