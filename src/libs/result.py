"""
Result type shared by every use case.

A use case never raises for an expected outcome (not found, bad credentials,
conflict). It returns ``Return.ok(value)`` or ``Return.err(Error(...))`` and the
API layer maps the error code to an HTTP status.
"""

from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Error:
    """Typed failure: machine-readable code, human message, optional itemized details"""

    code: str
    message: str
    details: Optional[List[str]] = None


class Result(Generic[T]):
    """Either a success value or an Error, never both"""

    __slots__ = ("_value", "_error")

    def __init__(self, value: Optional[T] = None, error: Optional[Error] = None):
        self._value = value
        self._error = error

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        if self._error is not None:
            raise ValueError(f"Result is an error: {self._error.code}")
        return self._value

    @property
    def error(self) -> Error:
        if self._error is None:
            raise ValueError("Result is not an error")
        return self._error

    def __repr__(self) -> str:
        if self.is_err():
            return f"Result.err({self._error!r})"
        return f"Result.ok({self._value!r})"


class Return:
    """Constructors for Result"""

    @staticmethod
    def ok(value: Optional[T] = None) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result:
        return Result(error=error)
