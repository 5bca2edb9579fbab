"""Direct Decisions API client package."""

from loguru import logger

from ddclient.errors import (
    ApiError,
    BadRequestError,
    BadRequestReason,
    ConflictError,
    DecodeError,
    ErrorKind,
    NotFoundError,
    ServerError,
    TransportError,
    UnauthorizedError,
)
from ddclient.rate import Rate
from ddclient.result import Err, Ok, Result
from ddclient.retry import with_retry
from ddclient.settings import VERSION
from ddclient.voting import VotingClient
from ddclient.voting.schemas import (
    ChoiceStrength,
    DuelSchema,
    VotingResultSchema,
    VotingResultsSchema,
    VotingSchema,
)

__version__ = VERSION

# Silent until the application opts in with setup_logging() or logger.enable("ddclient").
logger.disable("ddclient")

__all__ = [
    # Client
    "VotingClient",
    "with_retry",
    # Results
    "Ok",
    "Err",
    "Result",
    "Rate",
    # Errors
    "ErrorKind",
    "ApiError",
    "BadRequestError",
    "BadRequestReason",
    "UnauthorizedError",
    "NotFoundError",
    "ConflictError",
    "ServerError",
    "TransportError",
    "DecodeError",
    # Schemas
    "VotingSchema",
    "VotingResultSchema",
    "VotingResultsSchema",
    "DuelSchema",
    "ChoiceStrength",
]
