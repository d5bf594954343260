r"""Immutable result of a retry cycle."""

from __future__ import annotations

__all__ = ["ActionResult"]

from dataclasses import dataclass
from typing import Generic, TypeVar

from aretry.types import RetryStatus

T = TypeVar("T")


@dataclass(frozen=True)
class ActionResult(Generic[T]):
    """Outcome of a call to ``RetryController.execute``.

    Instances are created through the ``skip``, ``fail``, ``success`` and
    ``canceled`` class methods and compare by value.

    Attributes:
        status: The status that describes the outcome.
        data: The value returned by the action, only set on success.

    Example:
        ```pycon
        >>> from aretry.result import ActionResult
        >>> result = ActionResult.success(42)
        >>> result.status
        <RetryStatus.SUCCESS: 'success'>
        >>> result.data
        42
        >>> ActionResult.fail() == ActionResult.fail()
        True

        ```
    """

    status: RetryStatus
    data: T | None = None

    @classmethod
    def skip(cls) -> ActionResult[T]:
        """Create the result returned when a cycle is already running."""
        return cls(status=RetryStatus.ATTEMPT)

    @classmethod
    def fail(cls) -> ActionResult[T]:
        """Create the result of a cycle that exhausted its attempts."""
        return cls(status=RetryStatus.FAIL)

    @classmethod
    def success(cls, data: T) -> ActionResult[T]:
        """Create the result of a successful cycle.

        Args:
            data: The non-``None`` value returned by the action.

        Returns:
            A result with ``SUCCESS`` status carrying ``data``.
        """
        return cls(status=RetryStatus.SUCCESS, data=data)

    @classmethod
    def canceled(cls) -> ActionResult[T]:
        """Create the result of a cycle torn down before completion."""
        return cls(status=RetryStatus.CANCELED)

    @property
    def is_skip(self) -> bool:
        return self.status is RetryStatus.ATTEMPT

    @property
    def is_success(self) -> bool:
        return self.status is RetryStatus.SUCCESS

    @property
    def is_fail(self) -> bool:
        return self.status is RetryStatus.FAIL

    @property
    def is_canceled(self) -> bool:
        return self.status is RetryStatus.CANCELED
