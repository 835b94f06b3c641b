"""Two-variant result type for expected domain failures.

Engine operations that can fail for ordinary reasons (an illegal flow
transition, a missing save slot, a full team) return ``Ok(value)`` or
``Err(error)`` instead of raising. Both variants are frozen dataclasses, so
they compare by value and work with structural pattern matching.

Example:
    >>> from battle_core.core.result import Err, Ok
    >>> match Ok(3).map(lambda n: n * 2):
    ...     case Ok(value):
    ...         print(value)
    ...     case Err(error):
    ...         print(error)
    6
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, Literal, NoReturn, TypeVar, Union


T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def ok(self) -> Literal[True]:
        return True

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        """Transform the carried value."""
        return Ok(fn(self.value))

    def and_then(self, fn: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Chain another fallible step onto this value."""
        return fn(self.value)

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def unwrap_err(self) -> NoReturn:
        raise ValueError(f"Called unwrap_err on Ok({self.value!r})")


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying an error, usually a BattleCoreError."""

    error: E

    @property
    def ok(self) -> Literal[False]:
        return False

    def map(self, fn: Callable[[object], object]) -> Err[E]:
        return self

    def and_then(self, fn: Callable[[object], object]) -> Err[E]:
        return self

    def unwrap(self) -> NoReturn:
        """Raise the carried error.

        Raises:
            The carried exception, or ValueError when the error is not one.
        """
        if isinstance(self.error, BaseException):
            raise self.error
        raise ValueError(f"Called unwrap on Err({self.error!r})")

    def unwrap_or(self, default: T) -> T:
        return default

    def unwrap_err(self) -> E:
        return self.error


Result = Union[Ok[T], Err[E]]
"""Either ``Ok[T]`` or ``Err[E]``."""


__all__ = [
    "Ok",
    "Err",
    "Result",
]
