"""
Error taxonomy shared by the server and the API client.

Every error carries an HTTP status and a stable ``code`` so that the client
can turn a response body back into the same exception class.
"""
from typing import Optional


class FullServiceError(Exception):
    status_code: int = 400
    code: str = "error"
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(FullServiceError):
    status_code = 422
    code = "validation_error"
    default_message = "Please fill all fields"


class MissingProof(FullServiceError):
    status_code = 422
    code = "missing_proof"
    default_message = "Payment proof is required"


class DuplicateIdentity(FullServiceError):
    status_code = 409
    code = "duplicate_identity"
    default_message = "Username or email already exists"


class InvalidCredentials(FullServiceError):
    # wrong password and banned account share this on purpose
    status_code = 401
    code = "invalid_credentials"
    default_message = "Invalid email or password"


class Forbidden(FullServiceError):
    status_code = 403
    code = "forbidden"
    default_message = "You are not allowed to perform this action"


class NotFound(FullServiceError):
    status_code = 404
    code = "not_found"
    default_message = "Not found"


class OrderConflict(FullServiceError):
    status_code = 409
    code = "order_conflict"
    default_message = "Order has already been processed"


class TransportError(FullServiceError):
    status_code = 503
    code = "transport_error"
    default_message = "Service unavailable"


ERRORS_BY_CODE = {
    cls.code: cls
    for cls in (
        ValidationError,
        MissingProof,
        DuplicateIdentity,
        InvalidCredentials,
        Forbidden,
        NotFound,
        OrderConflict,
        TransportError,
    )
}


def error_from_response(status_code: int, body: dict) -> FullServiceError:
    """Rebuild a domain error from an API error body."""
    cls = ERRORS_BY_CODE.get(body.get("code"))
    detail = body.get("detail")
    message = detail if isinstance(detail, str) else None
    if cls is None:
        if status_code == 422:
            cls = ValidationError
        elif status_code >= 500:
            cls = TransportError
        else:
            cls = FullServiceError
    err = cls(message)
    if cls is FullServiceError:
        err.status_code = status_code
    return err
