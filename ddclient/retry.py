"""Caller-side retry for results that failed on the server or network."""

from collections.abc import Awaitable, Callable
from typing import TypeVar

from loguru import logger
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)
from tenacity.wait import wait_base

from ddclient.result import Err, Result

T = TypeVar("T")


def _is_retryable_result(result: Result) -> bool:
    """Retry server errors and transport failures only."""
    return isinstance(result, Err) and result.error.retryable


def _last_result(state: RetryCallState) -> Result:
    logger.warning("Giving up after {} attempts", state.attempt_number)
    return state.outcome.result()


async def with_retry(
    call: Callable[[], Awaitable[Result[T]]],
    attempts: int = 3,
    wait: wait_base | None = None,
) -> Result[T]:
    """Run ``call`` until it returns Ok or a non-retryable Err.

    When attempts run out the last Err is returned rather than raised.

    Example::

        result = await with_retry(lambda: client.get_voting(voting_id))
    """
    retrying = AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait or wait_exponential(multiplier=1, min=1, max=30),
        retry=retry_if_result(_is_retryable_result),
        retry_error_callback=_last_result,
        before_sleep=lambda state: logger.info(
            "Retrying after attempt {}: {}", state.attempt_number, state.outcome.result().error
        ),
    )
    return await retrying(call)
