"""
EchoBot: serverless entry point.

lambda_handler(event, context) accepts an API Gateway / Netlify style request
event and returns {"statusCode", "headers", "body"}. The chat logic itself
lives in bot.py; this module only unwraps the event and applies the static
allow-all CORS policy to every response.
"""

import base64
import binascii
import logging

from echobot import bot
from echobot.config import LOG_LEVEL
from echobot.exceptions import BodyDecodeError
from echobot.logging_config import setup_logging
from echobot.models import ChatError, ChatResponse

setup_logging(LOG_LEVEL)
logger = logging.getLogger(__name__)

CORS_ALLOWED_METHODS = "GET,HEAD,PUT,PATCH,POST,DELETE"
JSON_CONTENT_TYPE = "application/json; charset=utf-8"


def _headers(event: dict) -> dict:
    return {k.lower(): v for k, v in (event.get("headers") or {}).items() if v is not None}


def _method(event: dict) -> str:
    method = event.get("httpMethod") or ((event.get("requestContext") or {}).get("http") or {}).get("method", "")
    return method.upper()


def _raw_body(event: dict) -> bytes | str | None:
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except (binascii.Error, ValueError) as e:
            raise BodyDecodeError(f"invalid base64 body: {e}") from e
    return body


def cors_headers() -> dict:
    return {"Access-Control-Allow-Origin": "*"}


def preflight_headers(request_headers: dict) -> dict:
    headers = cors_headers()
    headers["Access-Control-Allow-Methods"] = CORS_ALLOWED_METHODS
    requested = request_headers.get("access-control-request-headers")
    if requested:
        headers["Access-Control-Allow-Headers"] = requested
        headers["Vary"] = "Access-Control-Request-Headers"
    headers["Content-Length"] = "0"
    return headers


def _json_response(status_code: int, body: ChatResponse, **extra_headers) -> dict:
    headers = {**cors_headers(), "Content-Type": JSON_CONTENT_TYPE, **extra_headers}
    return {"statusCode": status_code, "headers": headers, "body": bot.to_json(body)}


def lambda_handler(event, context):
    try:
        event = event or {}
        request_headers = _headers(event)
        method = _method(event)

        if method == "OPTIONS":
            return {"statusCode": 204, "headers": preflight_headers(request_headers), "body": ""}

        if method != "POST":
            logger.warning("Rejected %s request to the chat endpoint", method or "unknown")
            return _json_response(405, ChatError(error="Method not allowed."), Allow="POST, OPTIONS")

        raw = _raw_body(event)
    except Exception as e:
        # malformed event: answer like any other unexpected failure
        status_code, body = bot.respond(bot.Fault(reason=e))
    else:
        status_code, body = bot.handle_raw(raw, request_headers.get("content-type"))
    return _json_response(status_code, body)
