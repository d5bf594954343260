r"""aretry - Asynchronous retry controller with pluggable retry strategies.

This package provides a retry controller that repeatedly invokes a
caller-supplied action until it succeeds, is exhausted, or is cancelled.
Delays and continuation decisions are delegated to a retry strategy, and
status transitions are broadcast to observers.

Key Features:
    - Auto mode (the controller retries by itself) and manual mode (the
      caller resumes each retry)
    - Fixed-delay, exponential backoff and httpx-aware retry strategies
    - Support for synchronous and asynchronous actions
    - Per-cycle status stream and optional status callback
    - Safe duplicate calls: ``execute()`` on a running controller is a no-op

Example:
    ```pycon
    >>> import asyncio
    >>> from aretry import RetryController, RetryStatus, RetryStrategy
    >>> statuses = []
    >>> controller = RetryController(
    ...     RetryStrategy.fixed(max_attempts=3, delay=0.01), on_status=statuses.append
    ... )
    >>> result = asyncio.run(controller.execute(lambda: None))
    >>> result.status
    <RetryStatus.FAIL: 'fail'>
    >>> statuses
    [<RetryStatus.ATTEMPT: 'attempt'>, <RetryStatus.ATTEMPT: 'attempt'>, <RetryStatus.FAIL: 'fail'>]

    ```
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BASE_DELAY",
    "DEFAULT_DELAY",
    "DEFAULT_MAX_ATTEMPTS",
    "RETRY_STATUS_CODES",
    "ActionResult",
    "ControllerConfig",
    "ExponentialRetryStrategy",
    "FixedRetryStrategy",
    "HttpRetryStrategy",
    "InvalidUsageError",
    "RetryController",
    "RetryMode",
    "RetryStatus",
    "RetryStrategy",
    "StatusStream",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.config import (
    DEFAULT_BASE_DELAY,
    DEFAULT_DELAY,
    DEFAULT_MAX_ATTEMPTS,
    RETRY_STATUS_CODES,
    ControllerConfig,
)
from aretry.controller import RetryController
from aretry.exceptions import InvalidUsageError
from aretry.result import ActionResult
from aretry.status import StatusStream
from aretry.strategy import (
    ExponentialRetryStrategy,
    FixedRetryStrategy,
    HttpRetryStrategy,
    RetryStrategy,
)
from aretry.types import RetryMode, RetryStatus

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
