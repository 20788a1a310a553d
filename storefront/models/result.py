# storefront/models/result.py

"""Success/error result type returned by the store clients."""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err(Generic[E]):
    """Failed outcome carrying the error that caused it."""

    error: E

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        """Human-readable description of the error."""
        return str(self.error)


Result = Union[Ok[T], Err[E]]
