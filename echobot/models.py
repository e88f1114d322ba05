"""EchoBot: request/response models."""

from typing import Union

from pydantic import BaseModel, ConfigDict, field_validator

# Characters a blank message may consist of: space separators, tab-like
# controls, line terminators and the BOM. Unlike bare str.strip(), the
# \x1c-\x1f separators and \x85 count as content.
BLANK_CHARS = (
    "\t\n\x0b\x0c\r \xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


class ChatRequest(BaseModel):
    # strict: no coercion, so 42 or True never pass as a message
    model_config = ConfigDict(frozen=True, strict=True)

    message: str

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        # only the check trims, the stored value stays as sent
        if not value.strip(BLANK_CHARS):
            raise ValueError("message must not be blank")
        return value


class ChatReply(BaseModel):
    model_config = ConfigDict(frozen=True)

    reply: str


class ChatError(BaseModel):
    model_config = ConfigDict(frozen=True)

    error: str


ChatResponse = Union[ChatReply, ChatError]


class HealthResponse(BaseModel):
    status: str
    service: str
