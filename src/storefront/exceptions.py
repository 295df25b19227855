"""Storefront error taxonomy.

Malformed input and missing entities reuse Protean's ``ValidationError`` and
``ObjectNotFoundError``. The errors below cover what Protean has no notion
of: credentials, roles, payment state, downstream outages and write
conflicts that outlast retries. Each carries the HTTP status the API layer
answers with.
"""


class StorefrontError(Exception):
    status_code = 500
    code = "internal_error"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code}


class Unauthorized(StorefrontError):
    status_code = 401
    code = "unauthorized"
    default_message = "Unauthorized"


class TokenExpired(Unauthorized):
    """Credential verified but is past its expiry; the client may refresh."""

    code = "token_expired"
    default_message = "Token expired"


class InvalidToken(Unauthorized):
    code = "invalid_token"
    default_message = "Invalid token"


class Forbidden(StorefrontError):
    status_code = 403
    code = "forbidden"
    default_message = "Forbidden"


class PaymentIncomplete(StorefrontError):
    """The provider reports the checkout session as not paid."""

    status_code = 402
    code = "payment_incomplete"
    default_message = "Payment has not been completed"


class ServiceUnavailable(StorefrontError):
    status_code = 503
    code = "service_unavailable"
    default_message = "A downstream service is unavailable"


class WriteConflict(StorefrontError):
    """Concurrent writers kept colliding on one record after retries."""

    status_code = 409
    code = "write_conflict"
    default_message = "The record was changed by another request; retry"
