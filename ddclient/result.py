"""Result union returned by every client call."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

from ddclient.errors import ApiError
from ddclient.rate import Rate

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful call."""

    value: T
    rate: Rate | None = None

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> "Ok[U]":
        return Ok(fn(self.value), self.rate)


@dataclass(frozen=True)
class Err:
    """Failed call."""

    error: ApiError
    rate: Rate | None = None

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        """Raise the carried error."""
        raise self.error

    def map(self, fn: Callable) -> "Err":
        return self


Result = Ok[T] | Err
