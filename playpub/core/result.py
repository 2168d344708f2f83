"""Result type for explicit error handling.

Every step of a publish run returns either ``Ok(value)`` or ``Err(error)``.
The first ``Err`` ends the run, so callers check and return early instead of
wrapping remote calls in try/except.

Usage:
    def parse_priority(text: str) -> Result[int, str]:
        if not text.isdigit():
            return Err(f"not a number: {text}")
        return Ok(int(text))

    match parse_priority("3"):
        case Ok(value):
            print(f"priority {value}")
        case Err(error):
            print(f"error: {error}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeGuard, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_err(self) -> None:
        """Raises ValueError since this is Ok."""
        raise ValueError(f"called unwrap_err on Ok: {self.value}")

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Apply ``f`` to the contained value."""
        return Ok(f(self.value))

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> None:
        """Raises ValueError carrying the error."""
        raise ValueError(f"called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        return self.error

    def map(self, f: Callable[[T], U]) -> Err[E]:
        """Return self unchanged; there is no value to map."""
        return self

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Union[Ok[T], Err[E]]


def is_ok(result: Result[T, E]) -> TypeGuard[Ok[T]]:
    """Type guard narrowing a Result to Ok."""
    return isinstance(result, Ok)


def is_err(result: Result[T, E]) -> TypeGuard[Err[E]]:
    """Type guard narrowing a Result to Err."""
    return isinstance(result, Err)
