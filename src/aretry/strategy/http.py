r"""Retry strategy aware of httpx errors.

This module provides the HttpRetryStrategy class that decorates another
strategy and stops a cycle early when an action fails with an HTTP error
that should not be retried.
"""

from __future__ import annotations

__all__ = ["HttpRetryStrategy"]

import logging
from typing import TYPE_CHECKING

import httpx

from aretry.config import RETRY_STATUS_CODES
from aretry.strategy.base import RetryStrategy

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class HttpRetryStrategy(RetryStrategy):
    """Decorates a strategy with httpx error classification.

    Delays and the attempt ceiling are delegated to the wrapped strategy.
    On top of its decision, the last error is classified:

    - ``httpx.HTTPStatusError``: retried only when the response status code
      is in ``status_forcelist``
    - ``httpx.RequestError`` (timeouts, connection errors, ...): retried
    - any other error, or ``None``: retried

    An optional ``retry_if`` predicate replaces this classification for
    every non-``None`` error.

    Args:
        strategy: The strategy providing delays and the attempt ceiling.
        status_forcelist: HTTP status codes that should be retried.
        retry_if: Optional predicate receiving the last error and returning
            ``True`` if the action should be retried.

    Example:
        ```pycon
        >>> import httpx
        >>> from aretry.strategy import HttpRetryStrategy, RetryStrategy
        >>> strategy = HttpRetryStrategy(RetryStrategy.fixed(max_attempts=3, delay=0.5))
        >>> request = httpx.Request("GET", "https://api.example.com/data")
        >>> error = httpx.HTTPStatusError(
        ...     "Not Found", request=request, response=httpx.Response(404, request=request)
        ... )
        >>> strategy.should_retry(1, error)
        False
        >>> strategy.should_retry(1, httpx.ConnectError("refused", request=request))
        True

        ```
    """

    def __init__(
        self,
        strategy: RetryStrategy,
        status_forcelist: tuple[int, ...] = RETRY_STATUS_CODES,
        retry_if: Callable[[BaseException], bool] | None = None,
    ) -> None:
        super().__init__(strategy.max_attempts)
        self._strategy = strategy
        self._status_forcelist = tuple(status_forcelist)
        self._retry_if = retry_if

    @property
    def strategy(self) -> RetryStrategy:
        return self._strategy

    @property
    def status_forcelist(self) -> tuple[int, ...]:
        return self._status_forcelist

    def attempt_delay(self, attempt: int) -> float:
        return self._strategy.attempt_delay(attempt)

    def should_retry(self, attempt: int, last_error: BaseException | None) -> bool:
        if not self._strategy.should_retry(attempt, last_error):
            return False
        if last_error is None:
            return True
        if self._retry_if is not None:
            return bool(self._retry_if(last_error))
        if isinstance(last_error, httpx.HTTPStatusError):
            status_code = last_error.response.status_code
            if status_code not in self._status_forcelist:
                logger.debug(f"Not retrying after attempt {attempt}: status {status_code}")
                return False
            return True
        if isinstance(last_error, httpx.RequestError):
            logger.debug(
                f"Retrying after attempt {attempt}: {type(last_error).__name__}: {last_error}"
            )
        return True

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(strategy={self._strategy!r}, "
            f"status_forcelist={self._status_forcelist})"
        )
