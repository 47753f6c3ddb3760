class WebhookError(Exception):
    """Base error for a callback that cannot be accepted.

    ``status_code`` and ``message`` become the plain-text HTTP response.
    """

    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(WebhookError):
    status_code = 400
    default_message = "Bad request"


class MissingHeaders(BadRequest):
    default_message = "Missing required headers"


class InvalidSignature(WebhookError):
    status_code = 403
    default_message = "Invalid signature"


class DecodeError(WebhookError):
    default_message = "Failed to decode payload"


class InvalidInput(DecodeError):
    default_message = "Invalid decode input"


class ParseError(WebhookError):
    default_message = "Failed to parse event payload"


class CallbackFailed(WebhookError):
    pass
