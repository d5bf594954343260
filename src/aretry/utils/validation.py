r"""Parameter validation utilities for retry strategies and configs.

This module provides validation functions for retry parameters to ensure
they meet the required constraints before a strategy or a controller is
built from them.
"""

from __future__ import annotations

__all__ = ["to_seconds", "validate_delay", "validate_max_attempts", "validate_strategy_params"]

from datetime import timedelta


def to_seconds(delay: float | timedelta) -> float:
    """Convert a delay to seconds.

    Args:
        delay: The delay as a number of seconds or a ``timedelta``.

    Returns:
        The delay in seconds.

    Example:
        ```pycon
        >>> from datetime import timedelta
        >>> from aretry.utils.validation import to_seconds
        >>> to_seconds(timedelta(milliseconds=250))
        0.25
        >>> to_seconds(2)
        2.0

        ```
    """
    if isinstance(delay, timedelta):
        return delay.total_seconds()
    return float(delay)


def validate_max_attempts(max_attempts: int) -> None:
    """Validate the maximum number of attempts.

    Args:
        max_attempts: Inclusive upper bound on attempts. Must be an
            integer >= 0.

    Raises:
        ValueError: If max_attempts is not an integer or is negative.

    Example:
        ```pycon
        >>> from aretry.utils.validation import validate_max_attempts
        >>> validate_max_attempts(3)
        >>> validate_max_attempts(-1)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: max_attempts must be >= 0, got -1

        ```
    """
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int):
        msg = f"max_attempts must be an integer, got {max_attempts!r}"
        raise ValueError(msg)
    if max_attempts < 0:
        msg = f"max_attempts must be >= 0, got {max_attempts}"
        raise ValueError(msg)


def validate_delay(delay: float, name: str = "delay") -> None:
    """Validate a delay in seconds.

    Args:
        delay: The delay to validate. Must be >= 0.
        name: The parameter name used in the error message.

    Raises:
        ValueError: If delay is negative.
    """
    if delay < 0:
        msg = f"{name} must be non-negative, got {delay}"
        raise ValueError(msg)


def validate_strategy_params(
    max_attempts: int,
    max_delay: float | None = None,
    jitter_factor: float = 0.0,
) -> None:
    """Validate the parameters shared by the backoff strategies.

    Args:
        max_attempts: Inclusive upper bound on attempts. Must be >= 0.
        max_delay: Optional cap on individual delays. Must be > 0 if provided.
        jitter_factor: Factor for adding random jitter. Must be >= 0.

    Raises:
        ValueError: If any parameter fails validation.
    """
    validate_max_attempts(max_attempts)
    if max_delay is not None and max_delay <= 0:
        msg = f"max_delay must be positive if specified, got {max_delay}"
        raise ValueError(msg)
    if jitter_factor < 0:
        msg = f"jitter_factor must be >= 0, got {jitter_factor}"
        raise ValueError(msg)
