r"""Retry strategies deciding delays and continuation between attempts.

This package provides the abstract RetryStrategy interface and its fixed,
exponential and httpx-aware implementations.
"""

from __future__ import annotations

__all__ = [
    "ExponentialRetryStrategy",
    "FixedRetryStrategy",
    "HttpRetryStrategy",
    "RetryStrategy",
]

from aretry.strategy.base import RetryStrategy
from aretry.strategy.exponential import ExponentialRetryStrategy
from aretry.strategy.fixed import FixedRetryStrategy
from aretry.strategy.http import HttpRetryStrategy
