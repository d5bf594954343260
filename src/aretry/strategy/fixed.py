r"""Fixed-delay retry strategy."""

from __future__ import annotations

__all__ = ["FixedRetryStrategy"]

from typing import TYPE_CHECKING

from aretry.config import DEFAULT_DELAY
from aretry.strategy.base import RetryStrategy
from aretry.utils.validation import to_seconds, validate_delay

if TYPE_CHECKING:
    from datetime import timedelta


class FixedRetryStrategy(RetryStrategy):
    """Fixed-delay retry strategy.

    Waits the same delay after every failed attempt and uses the default
    continuation rule (``attempt < max_attempts``).

    Args:
        max_attempts: Inclusive upper bound on attempts.
        delay: The delay in seconds or as a ``timedelta`` (default: 1.0).

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from aretry.strategy import FixedRetryStrategy
        >>> strategy = FixedRetryStrategy(max_attempts=4, delay=timedelta(seconds=2))
        >>> strategy.delay
        2.0
        >>> strategy.attempt_delay(3)
        2.0

        ```
    """

    def __init__(self, max_attempts: int, delay: float | timedelta = DEFAULT_DELAY) -> None:
        super().__init__(max_attempts)
        seconds = to_seconds(delay)
        validate_delay(seconds)
        self._delay = seconds

    @property
    def delay(self) -> float:
        return self._delay

    def attempt_delay(self, attempt: int) -> float:  # noqa: ARG002
        return self._delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(max_attempts={self.max_attempts}, "
            f"delay={self._delay})"
        )
