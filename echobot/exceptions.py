"""EchoBot: error taxonomy.

Every failure maps to a fixed status code and a fixed, caller-safe message.
Internal details stay in the logs.
"""

VALIDATION_MESSAGE = 'A non-empty string "message" is required in the request body.'
UNEXPECTED_MESSAGE = "An unexpected error occurred while processing your request. Please try again."


class EchoBotException(Exception):
    status_code = 500
    detail = UNEXPECTED_MESSAGE

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class MessageValidationError(EchoBotException):
    status_code = 400
    detail = VALIDATION_MESSAGE


class UnexpectedChatError(EchoBotException):
    status_code = 500
    detail = UNEXPECTED_MESSAGE


class BodyDecodeError(UnexpectedChatError):
    def __init__(self, reason: str):
        # reason is for the logs only, callers still get the generic message
        super().__init__()
        self.reason = reason

    def __str__(self) -> str:
        return f"Could not decode request body: {self.reason}"
