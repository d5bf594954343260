r"""Exponential backoff retry strategy."""

from __future__ import annotations

__all__ = ["ExponentialRetryStrategy"]

import logging
import random

from aretry.config import DEFAULT_BASE_DELAY
from aretry.strategy.base import RetryStrategy
from aretry.utils.validation import validate_delay, validate_strategy_params

logger: logging.Logger = logging.getLogger(__name__)

# Keeps 2.0 ** exponent within float range
_MAX_EXPONENT = 1000


class ExponentialRetryStrategy(RetryStrategy):
    """Exponential backoff retry strategy.

    Calculates the delay after attempt ``n`` as
    ``base_delay * (2 ** (n - 1))``, with an optional ``max_delay`` cap.
    When ``jitter_factor`` is positive, a random jitter of
    ``uniform(0, jitter_factor) * delay`` is added to the capped delay.

    Args:
        max_attempts: Inclusive upper bound on attempts.
        base_delay: The delay after the first attempt (default: 0.3).
        max_delay: Optional maximum delay cap in seconds.
        jitter_factor: Factor for adding random jitter (default: 0.0).
            Recommended value is 0.1 for up to 10% additional delay.

    Example:
        ```pycon
        >>> from aretry.strategy import ExponentialRetryStrategy
        >>> strategy = ExponentialRetryStrategy(max_attempts=5, base_delay=0.5)
        >>> strategy.attempt_delay(1)
        0.5
        >>> strategy.attempt_delay(3)
        2.0
        >>> strategy = ExponentialRetryStrategy(max_attempts=20, base_delay=1.0, max_delay=5.0)
        >>> strategy.attempt_delay(10)  # Would be 512.0, but capped
        5.0

        ```
    """

    def __init__(
        self,
        max_attempts: int,
        base_delay: float = DEFAULT_BASE_DELAY,
        max_delay: float | None = None,
        jitter_factor: float = 0.0,
    ) -> None:
        super().__init__(max_attempts)
        validate_delay(base_delay, name="base_delay")
        validate_strategy_params(
            max_attempts=max_attempts, max_delay=max_delay, jitter_factor=jitter_factor
        )
        self._base_delay = base_delay
        self._max_delay = max_delay
        self._jitter_factor = jitter_factor

    @property
    def base_delay(self) -> float:
        return self._base_delay

    @property
    def max_delay(self) -> float | None:
        return self._max_delay

    @property
    def jitter_factor(self) -> float:
        return self._jitter_factor

    def attempt_delay(self, attempt: int) -> float:
        """Calculate the exponential backoff delay.

        Args:
            attempt: The attempt that just failed (1-indexed).

        Returns:
            The calculated delay in seconds, including any jitter.
        """
        exponent = min(max(attempt - 1, 0), _MAX_EXPONENT)
        delay = self._base_delay * (2.0**exponent)
        if self._max_delay is not None:
            delay = min(delay, self._max_delay)
        if self._jitter_factor > 0:
            jitter = random.uniform(0, self._jitter_factor) * delay  # noqa: S311
            logger.debug(f"Adding jitter of {jitter:.2f}s to delay of {delay:.2f}s")
            delay += jitter
        return delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(max_attempts={self.max_attempts}, "
            f"base_delay={self._base_delay}, max_delay={self._max_delay}, "
            f"jitter_factor={self._jitter_factor})"
        )
