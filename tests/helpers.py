r"""Shared test helpers for retry controller tests."""

from __future__ import annotations

__all__ = ["StatusRecorder", "sequence_action"]

import asyncio
from typing import TYPE_CHECKING, Any
from unittest.mock import Mock

if TYPE_CHECKING:
    from aretry import RetryStatus


class StatusRecorder:
    """Status callback recording statuses and allowing tests to wait for
    them.

    Must be created inside a running event loop test.
    """

    def __init__(self) -> None:
        self.statuses: list[RetryStatus] = []
        self._changed = asyncio.Event()

    def __call__(self, status: RetryStatus) -> None:
        self.statuses.append(status)
        self._changed.set()

    async def wait_for_count(self, count: int, timeout: float = 2.0) -> None:
        """Wait until at least ``count`` statuses were recorded."""

        async def _wait() -> None:
            while len(self.statuses) < count:
                self._changed.clear()
                await self._changed.wait()

        await asyncio.wait_for(_wait(), timeout=timeout)


def sequence_action(*outcomes: Any) -> Mock:
    """Create a synchronous action returning or raising the given outcomes
    in order.

    Exceptions (classes or instances) in ``outcomes`` are raised, other
    values are returned.
    """
    return Mock(side_effect=list(outcomes))
