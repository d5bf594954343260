r"""Utility functions for the retry controller.

This package provides helpers for validating retry parameters and for
invoking synchronous or asynchronous actions.
"""

from __future__ import annotations

__all__ = [
    "invoke_action",
    "to_seconds",
    "validate_delay",
    "validate_max_attempts",
    "validate_strategy_params",
]

from aretry.utils.action import invoke_action
from aretry.utils.validation import (
    to_seconds,
    validate_delay,
    validate_max_attempts,
    validate_strategy_params,
)
