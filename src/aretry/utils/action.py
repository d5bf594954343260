r"""Helpers to invoke caller-supplied actions."""

from __future__ import annotations

__all__ = ["invoke_action"]

import inspect
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from aretry.types import RetryAction


async def invoke_action(action: RetryAction) -> Any:
    """Invoke an action and wait for its outcome.

    The action may be a plain callable or return an awaitable (for
    example an ``async def`` function). Exceptions raised by the action
    are propagated to the caller.

    Args:
        action: The action to invoke.

    Returns:
        The value returned by the action, after awaiting it if needed.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.utils.action import invoke_action
        >>> async def fetch():
        ...     return "data"
        ...
        >>> asyncio.run(invoke_action(fetch))
        'data'
        >>> asyncio.run(invoke_action(lambda: None)) is None
        True

        ```
    """
    value = action()
    if inspect.isawaitable(value):
        value = await value
    return value
