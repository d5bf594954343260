r"""Abstract base class for retry strategies."""

from __future__ import annotations

__all__ = ["RetryStrategy"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from aretry.config import DEFAULT_BASE_DELAY
from aretry.utils.validation import validate_max_attempts

if TYPE_CHECKING:
    from datetime import timedelta

    from aretry.strategy.exponential import ExponentialRetryStrategy
    from aretry.strategy.fixed import FixedRetryStrategy


class RetryStrategy(ABC):
    """Abstract base class for retry strategies.

    A retry strategy decides how long to wait before the next attempt and
    whether another attempt should be made. ``max_attempts`` is a hard
    ceiling: a controller never invokes the action more than
    ``max_attempts`` times in one cycle, whatever ``should_retry`` reports.

    Args:
        max_attempts: Inclusive upper bound on attempts. Must be >= 0.

    Raises:
        ValueError: If max_attempts is invalid.
    """

    def __init__(self, max_attempts: int) -> None:
        validate_max_attempts(max_attempts)
        self._max_attempts = max_attempts

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    @abstractmethod
    def attempt_delay(self, attempt: int) -> float:
        """Calculate the delay before the attempt following ``attempt``.

        Implementations must return a non-negative value and must not raise.

        Args:
            attempt: The attempt that just failed (1-indexed).

        Returns:
            The delay in seconds.
        """

    def should_retry(self, attempt: int, last_error: BaseException | None) -> bool:  # noqa: ARG002
        """Decide whether another attempt should follow ``attempt``.

        The default rule only compares the attempt count with
        ``max_attempts``. Subclasses may inspect ``last_error`` to stop early
        on non-retryable errors.

        Args:
            attempt: The attempt that just failed (1-indexed).
            last_error: The exception raised by the action, or ``None`` if the
                action returned ``None``.

        Returns:
            ``True`` if another attempt should be made.
        """
        return attempt < self._max_attempts

    @classmethod
    def fixed(cls, max_attempts: int, delay: float | timedelta) -> FixedRetryStrategy:
        """Create a strategy with a constant delay between attempts.

        Args:
            max_attempts: Inclusive upper bound on attempts.
            delay: The delay in seconds or as a ``timedelta``.

        Returns:
            A fixed-delay strategy.

        Example:
            ```pycon
            >>> from aretry.strategy import RetryStrategy
            >>> strategy = RetryStrategy.fixed(max_attempts=3, delay=1.5)
            >>> strategy.attempt_delay(1), strategy.attempt_delay(2)
            (1.5, 1.5)
            >>> strategy.should_retry(2, None), strategy.should_retry(3, None)
            (True, False)

            ```
        """
        from aretry.strategy.fixed import FixedRetryStrategy

        return FixedRetryStrategy(max_attempts=max_attempts, delay=delay)

    @classmethod
    def exponential(
        cls,
        max_attempts: int,
        base_delay: float = DEFAULT_BASE_DELAY,
        max_delay: float | None = None,
        jitter_factor: float = 0.0,
    ) -> ExponentialRetryStrategy:
        """Create a strategy with exponentially growing delays.

        Args:
            max_attempts: Inclusive upper bound on attempts.
            base_delay: The delay after the first attempt, in seconds.
            max_delay: Optional cap on individual delays, in seconds.
            jitter_factor: Factor for adding random jitter to delays.

        Returns:
            An exponential backoff strategy.
        """
        from aretry.strategy.exponential import ExponentialRetryStrategy

        return ExponentialRetryStrategy(
            max_attempts=max_attempts,
            base_delay=base_delay,
            max_delay=max_delay,
            jitter_factor=jitter_factor,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(max_attempts={self._max_attempts})"
