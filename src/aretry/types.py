r"""Enumerations and callable aliases shared by the retry controller.

This module defines the retry modes, the status vocabulary broadcast to
observers, and the type aliases for actions and status callbacks.
"""

from __future__ import annotations

__all__ = ["RetryAction", "RetryMode", "RetryStatus", "StatusCallback"]

from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, TypeAlias


class RetryMode(Enum):
    """Retry modes of a controller.

    Attributes:
        AUTO: The controller schedules and performs the next attempt itself.
        MANUAL: The controller pauses after each failed attempt until
            ``resume()`` is called.
    """

    AUTO = "auto"
    MANUAL = "manual"


class RetryStatus(Enum):
    """Statuses broadcast during a retry cycle.

    Attributes:
        ATTEMPT: A failed attempt was followed by a retry opportunity.
        SUCCESS: The action returned a value.
        FAIL: The attempts were exhausted without success.
        CANCELED: The cycle was cancelled before completion.
    """

    ATTEMPT = "attempt"
    SUCCESS = "success"
    FAIL = "fail"
    CANCELED = "canceled"

    @property
    def is_terminal(self) -> bool:
        """Indicate if the status ends a retry cycle.

        Example:
            ```pycon
            >>> from aretry.types import RetryStatus
            >>> RetryStatus.ATTEMPT.is_terminal
            False
            >>> RetryStatus.FAIL.is_terminal
            True

            ```
        """
        return self is not RetryStatus.ATTEMPT


# An action returns a value on success, ``None`` when it has not succeeded yet,
# or an awaitable resolving to either.
RetryAction: TypeAlias = Callable[[], "Any | Awaitable[Any]"]

StatusCallback: TypeAlias = Callable[[RetryStatus], None]
