"""
EchoBot: chat request handling.

Framework-agnostic core shared by the FastAPI app (main.py) and the
serverless adapter (handler.py). Every call ends in exactly one of:

  200 {"reply": ...}   valid message
  400 {"error": ...}   missing, non-string or blank message
  500 {"error": ...}   anything else that went wrong while processing
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Union

from pydantic import ValidationError

from echobot.exceptions import BodyDecodeError, MessageValidationError, UnexpectedChatError
from echobot.models import ChatError, ChatReply, ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

REPLY_TEMPLATE = 'You said: "{message}". Hello! I\'m EchoBot. How can I help?'

# json.loads joins valid pairs, so any surrogate left in a str is unpaired
LONE_SURROGATE = re.compile("[\ud800-\udfff]")


# ── Outcomes ──────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Ok:
    """A request that was answered: either a reply or a validation error."""
    status_code: int
    body: ChatResponse


@dataclass(frozen=True)
class Fault:
    """An unexpected failure. The reason is logged, never sent to the caller."""
    reason: Exception


Outcome = Union[Ok, Fault]


# ── Steps ─────────────────────────────────────────────────────────────────────

def is_json_content_type(content_type: str | None) -> bool:
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def decode_body(raw: bytes | str | None, content_type: str | None) -> Any:
    """
    Decode a raw request body the way a JSON body parser would.

    Non-JSON content types and empty bodies decode to an empty object, which
    then fails validation (400). Malformed JSON raises BodyDecodeError (500).
    """
    if not is_json_content_type(content_type) or not raw:
        return {}
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        if not text.strip():
            return {}
        return json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise BodyDecodeError(str(e)) from e


def parse_request(payload: Any) -> ChatRequest:
    try:
        return ChatRequest.model_validate(payload)
    except ValidationError as e:
        raise MessageValidationError() from e


def render_reply(message: str) -> str:
    return REPLY_TEMPLATE.format(message=message)


# ── Pipeline ──────────────────────────────────────────────────────────────────

def _answer(payload: Any) -> Ok:
    try:
        request = parse_request(payload)
    except MessageValidationError as e:
        logger.error('Validation error: missing, empty, or invalid "message" in request body.')
        return Ok(status_code=e.status_code, body=ChatError(error=e.detail))

    logger.info('Received message: "%s"', request.message)
    reply = render_reply(request.message)
    logger.info('Generated bot reply: "%s"', reply)
    return Ok(status_code=200, body=ChatReply(reply=reply))


def process(payload: Any) -> Outcome:
    """Run validation and templating for an already-decoded payload."""
    try:
        return _answer(payload)
    except Exception as e:
        return Fault(reason=e)


def process_raw(raw: bytes | str | None, content_type: str | None) -> Outcome:
    """Like process(), with body decoding inside the same bounded scope."""
    try:
        return _answer(decode_body(raw, content_type))
    except Exception as e:
        return Fault(reason=e)


def respond(outcome: Outcome) -> tuple[int, ChatResponse]:
    if isinstance(outcome, Ok):
        return outcome.status_code, outcome.body

    logger.error("Internal error during chat processing: %s", outcome.reason, exc_info=outcome.reason)
    error = UnexpectedChatError()
    return error.status_code, ChatError(error=error.detail)


def handle(payload: Any) -> tuple[int, ChatResponse]:
    return respond(process(payload))


def handle_raw(raw: bytes | str | None, content_type: str | None) -> tuple[int, ChatResponse]:
    return respond(process_raw(raw, content_type))


def _escape_surrogate(match: re.Match) -> str:
    return "\\u%04x" % ord(match.group())


def to_json(body: ChatResponse) -> str:
    """
    Serialize a response body as compact JSON.

    Non-ASCII text is kept as is. Lone surrogates (valid in a JSON string but
    not encodable as UTF-8) are written as \\uXXXX escapes.
    """
    text = json.dumps(body.model_dump(), ensure_ascii=False, separators=(",", ":"))
    return LONE_SURROGATE.sub(_escape_surrogate, text)
