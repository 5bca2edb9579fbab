"""Rate limit information parsed from response headers."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import httpx

HEADER_RATE_LIMIT = "X-RateLimit-Limit"
HEADER_RATE_REMAINING = "X-RateLimit-Remaining"
HEADER_RATE_RESET = "X-RateLimit-Reset"
HEADER_RATE_RETRY = "Retry-After"


@dataclass(frozen=True)
class Rate:
    """Request quota reported by the service.

    ``reset`` and ``retry`` are absolute UTC times; the service sends them
    as seconds from now.
    """

    limit: int
    remaining: int
    reset: datetime
    retry: datetime

    @classmethod
    def from_headers(cls, headers: httpx.Headers) -> "Rate | None":
        """Parse rate headers.

        Returns None unless all of them are present, numeric and not negative,
        and the reset and retry times fit in a datetime.
        """
        try:
            limit, remaining, reset_secs, retry_secs = (
                _unsigned(headers[name])
                for name in (HEADER_RATE_LIMIT, HEADER_RATE_REMAINING, HEADER_RATE_RESET, HEADER_RATE_RETRY)
            )
            now = datetime.now(UTC)
            reset = now + timedelta(seconds=reset_secs)
            retry = now + timedelta(seconds=retry_secs)
        except (KeyError, ValueError, OverflowError):
            return None

        return cls(limit=limit, remaining=remaining, reset=reset, retry=retry)


def _unsigned(value: str) -> int:
    number = int(value)
    if number < 0:
        raise ValueError(f"negative header value: {value}")
    return number
