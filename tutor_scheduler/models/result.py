"""
Result<T> pattern for the I/O seams around the engine.

Loading a roster or writing a report can fail; the engine itself
cannot. Those seams return a Result instead of raising so the CLI can
decide how to report the failure.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar


T = TypeVar('T')
U = TypeVar('U')


class ResultStatus(Enum):
    """Status of a Result."""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class Result(Generic[T]):
    """
    Success-or-failure wrapper.

    Attributes:
        status: SUCCESS or FAILURE
        value: Payload on success
        error: Exception that caused the failure, if any
        message: Human-readable description

    Examples:
        >>> result = load_roster(Path("roster.json"))
        >>> if result.is_success:
        ...     checker = ConflictChecker(result.value)
        ... else:
        ...     print(f"Error: {result.message}")
    """

    status: ResultStatus
    value: Optional[T] = None
    error: Optional[Exception] = None
    message: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.status == ResultStatus.FAILURE

    @classmethod
    def success(cls, value: T, message: Optional[str] = None) -> 'Result[T]':
        return cls(status=ResultStatus.SUCCESS, value=value, message=message)

    @classmethod
    def failure(cls, message: str, error: Optional[Exception] = None) -> 'Result[T]':
        return cls(status=ResultStatus.FAILURE, message=message, error=error)

    def unwrap(self) -> T:
        """
        Return the payload.

        Raises:
            ValueError: If the result is a failure
        """
        if self.is_failure:
            raise ValueError(f"Cannot unwrap failure result: {self.message}")
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value if self.is_success else default

    def map(self, func: Callable[[T], U]) -> 'Result[U]':
        """
        Apply ``func`` to the payload of a success.

        A raising ``func`` turns the result into a failure carrying the
        exception; failures pass through unchanged.

        Examples:
            >>> Result.success(roster).map(lambda r: len(r.students))
        """
        if self.is_failure:
            return Result.failure(self.message, self.error)

        try:
            return Result.success(func(self.value), self.message)
        except Exception as e:
            return Result.failure(str(e), e)
