"""API errors and status mapping."""

from enum import StrEnum

import httpx
from pydantic import BaseModel, ValidationError


class ErrorKind(StrEnum):
    """Kinds of failure a call can end with."""

    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    TRANSPORT_FAILURE = "transport_failure"
    DECODE_FAILURE = "decode_failure"


class BadRequestReason(StrEnum):
    """Error codes the service reports in a 400 body."""

    INVALID_DATA = "Invalid data"
    MISSING_CHOICES = "Missing choices"
    CHOICE_TOO_LONG = "Choice too long"
    TOO_MANY_CHOICES = "Too many choices"
    CHOICE_REQUIRED = "Choice required"
    BALLOT_REQUIRED = "Ballot required"
    VOTER_ID_TOO_LONG = "Voter ID too long"
    INVALID_VOTER_ID = "Invalid voter ID"

    @classmethod
    def parse(cls, code: str) -> "BadRequestReason | None":
        """Match "Invalid data" as well as "InvalidData"."""
        key = code.replace(" ", "").lower()
        for reason in cls:
            if reason.value.replace(" ", "").lower() == key:
                return reason
        return None


class ApiError(Exception):
    """Base error carried by an Err result."""

    kind: ErrorKind
    default_message = "API error"

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        errors: list[str] | None = None,
    ):
        self.message = message or self.default_message
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(self.message)

    @property
    def reasons(self) -> list[BadRequestReason]:
        """Known reasons among the reported error codes."""
        parsed = (BadRequestReason.parse(code) for code in self.errors)
        return [r for r in parsed if r is not None]

    @property
    def retryable(self) -> bool:
        """Server and network failures may succeed on a later attempt."""
        return self.kind in (ErrorKind.SERVER_ERROR, ErrorKind.TRANSPORT_FAILURE)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, status_code={self.status_code})"


class BadRequestError(ApiError):
    kind = ErrorKind.BAD_REQUEST
    default_message = "Bad Request"

    @classmethod
    def local(cls, reason: BadRequestReason, message: str) -> "BadRequestError":
        """Input rejected before sending."""
        return cls(message, errors=[reason.value])


class UnauthorizedError(ApiError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Unauthorized"


class NotFoundError(ApiError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Not Found"


class ConflictError(ApiError):
    kind = ErrorKind.CONFLICT
    default_message = "Conflict"


class ServerError(ApiError):
    kind = ErrorKind.SERVER_ERROR
    default_message = "Server Error"


class TransportError(ApiError):
    kind = ErrorKind.TRANSPORT_FAILURE
    default_message = "Transport failure"


class DecodeError(ApiError):
    kind = ErrorKind.DECODE_FAILURE
    default_message = "Unexpected response body"


class ErrorResponse(BaseModel):
    """Error body returned by the service."""

    code: int | None = None
    message: str | None = None
    errors: list[str] | None = None


def error_class_for_status(status_code: int) -> type[ApiError]:
    """Map an HTTP status to an error class. Unlisted codes are server errors."""
    match status_code:
        case 400:
            return BadRequestError
        case 401 | 403:
            return UnauthorizedError
        case 404:
            return NotFoundError
        case 409:
            return ConflictError
        case _:
            return ServerError


def error_from_response(status_code: int, body: str) -> ApiError:
    """Build the error for a non-2xx response."""
    error_cls = error_class_for_status(status_code)
    message, errors = _parse_error_body(body)
    if not message:
        message = httpx.codes.get_reason_phrase(status_code) or error_cls.default_message
    return error_cls(message, status_code=status_code, errors=errors)


def _parse_error_body(body: str) -> tuple[str | None, list[str]]:
    """Extract message and error codes; fall back to the raw text."""
    text = body.strip()
    if not text:
        return None, []
    try:
        parsed = ErrorResponse.model_validate_json(text)
    except ValidationError:
        return text, []
    return parsed.message, parsed.errors or []
