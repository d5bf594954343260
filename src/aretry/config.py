r"""Configuration dataclass and defaults for RetryController.

This module provides configuration constants and a dataclass-based
configuration object from which a RetryController can be built.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BASE_DELAY",
    "DEFAULT_DELAY",
    "DEFAULT_MAX_ATTEMPTS",
    "RETRY_STATUS_CODES",
    "ControllerConfig",
]

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from aretry.types import RetryMode
from aretry.utils.validation import to_seconds, validate_delay, validate_max_attempts

if TYPE_CHECKING:
    from datetime import timedelta

    from aretry.strategy.fixed import FixedRetryStrategy
    from aretry.types import StatusCallback


# Default maximum number of attempts, including the first one
DEFAULT_MAX_ATTEMPTS = 3

# Default delay in seconds between attempts for the fixed-delay strategy
DEFAULT_DELAY = 1.0

# Default delay in seconds after the first attempt for exponential backoff
# With 0.3: waits 0.3s, 0.6s, 1.2s, ...
DEFAULT_BASE_DELAY = 0.3

# HTTP status codes retried by HttpRetryStrategy
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)


@dataclass
class ControllerConfig:
    """Configuration for a RetryController with a fixed-delay strategy.

    Args:
        max_attempts: Inclusive upper bound on attempts. Must be >= 0.
        delay: Delay between attempts in seconds or as a ``timedelta``.
            Must be >= 0.
        mode: The retry mode of the controller.
        on_status: Optional callback invoked with every status.

    Example:
        ```pycon
        >>> from aretry.config import ControllerConfig
        >>> config = ControllerConfig()  # Use defaults
        >>> config.max_attempts
        3
        >>> merged = config.merge(max_attempts=5)
        >>> merged.max_attempts
        5
        >>> merged.build_strategy()
        FixedRetryStrategy(max_attempts=5, delay=1.0)

        ```
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    delay: float | timedelta = DEFAULT_DELAY
    mode: RetryMode = RetryMode.AUTO
    on_status: StatusCallback | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_max_attempts(self.max_attempts)
        validate_delay(to_seconds(self.delay))
        if not isinstance(self.mode, RetryMode):
            self.mode = RetryMode(self.mode)

    def merge(self, **overrides: Any) -> ControllerConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ControllerConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def build_strategy(self) -> FixedRetryStrategy:
        """Create the fixed-delay strategy described by this config."""
        from aretry.strategy.fixed import FixedRetryStrategy

        return FixedRetryStrategy(max_attempts=self.max_attempts, delay=self.delay)
