"""Result types for railway-oriented programming.

Every command and query handler returns a Result instead of raising for
anticipated failures (not found, validation failed, conflict). Exceptions
are reserved for defects.

Reading the value of a Failure, or the error of a Success, is a contract
violation and raises ResultAccessError immediately.

Usage:
    def divide(a: float, b: float) -> Result[float, str]:
        if b == 0:
            return Failure(error="Division by zero")
        return Success(value=a / b)

    result = divide(10, 2)
    match result:
        case Success(value=value):
            print(f"Result: {value}")
        case Failure(error=error):
            print(f"Error: {error}")
"""

from dataclasses import dataclass
from typing import Any, Generic, NoReturn, TypeGuard, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


class ResultAccessError(RuntimeError):
    """Raised when a Result is read through the wrong variant.

    Signals a defect in the calling code, never a domain condition.
    """


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T

    @property
    def error(self) -> NoReturn:
        """Success carries no error; reading it is a defect."""
        raise ResultAccessError("Cannot read 'error' of a Success result")


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E

    @property
    def value(self) -> NoReturn:
        """Failure carries no value; reading it is a defect."""
        raise ResultAccessError(f"Cannot read 'value' of a Failure result: {self.error}")


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]


def is_success(result: Any) -> TypeGuard[Success[Any]]:
    """Return True when result is the Success variant."""
    return isinstance(result, Success)


def is_failure(result: Any) -> TypeGuard[Failure[Any]]:
    """Return True when result is the Failure variant."""
    return isinstance(result, Failure)
