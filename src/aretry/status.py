r"""Broadcast stream of retry statuses.

This module provides the StatusStream class, a broadcast channel opened
at the start of a retry cycle and closed when the cycle ends. Observers
either register synchronous listeners or iterate asynchronously over a
subscription:

```python
async for status in controller.status:
    print(status)
```

The iteration ends when the stream is closed, so subscribers can detect
the end of a cycle without inspecting the status values.
"""

from __future__ import annotations

__all__ = ["StatusStream", "StatusSubscription"]

import asyncio
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.types import RetryStatus, StatusCallback

logger: logging.Logger = logging.getLogger(__name__)

# Queued after the last status to end the iteration of a subscription.
_CLOSED = object()


class StatusSubscription:
    """Asynchronous iterator over the statuses of a stream.

    A subscription receives every status published after its creation,
    in publication order, and stops iterating once the stream is closed
    and all queued statuses have been consumed.
    """

    def __init__(self, stream: StatusStream) -> None:
        self._stream = stream
        self._queue: asyncio.Queue = asyncio.Queue()
        self._done = False

    def _push(self, item: object) -> None:
        self._queue.put_nowait(item)

    def __aiter__(self) -> StatusSubscription:
        return self

    async def __anext__(self) -> RetryStatus:
        if self._done:
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _CLOSED:
            self._done = True
            raise StopAsyncIteration
        return item

    def cancel(self) -> None:
        """Stop receiving statuses from the stream."""
        self._stream._discard(self)
        self._done = True


class StatusStream:
    """Broadcast channel of retry statuses for one retry cycle.

    Example:
        ```pycon
        >>> from aretry.status import StatusStream
        >>> from aretry.types import RetryStatus
        >>> stream = StatusStream()
        >>> received = []
        >>> unsubscribe = stream.listen(received.append)
        >>> stream.publish(RetryStatus.ATTEMPT)
        >>> stream.publish(RetryStatus.SUCCESS)
        >>> stream.close()
        >>> received
        [<RetryStatus.ATTEMPT: 'attempt'>, <RetryStatus.SUCCESS: 'success'>]
        >>> stream.closed
        True

        ```
    """

    def __init__(self) -> None:
        self._subscriptions: list[StatusSubscription] = []
        self._listeners: list[StatusCallback] = []
        self._history: list[RetryStatus] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def history(self) -> tuple[RetryStatus, ...]:
        """The statuses published so far, in publication order."""
        return tuple(self._history)

    def publish(self, status: RetryStatus) -> None:
        """Deliver a status to every subscription and listener.

        A listener that raises is logged and does not prevent delivery to
        the other listeners.

        Args:
            status: The status to broadcast.

        Raises:
            RuntimeError: If the stream is closed.
        """
        if self._closed:
            msg = f"Cannot publish {status} on a closed status stream"
            raise RuntimeError(msg)
        self._history.append(status)
        for subscription in tuple(self._subscriptions):
            subscription._push(status)
        for listener in tuple(self._listeners):
            try:
                listener(status)
            except Exception as e:  # noqa: BLE001
                logger.warning(f"Error in status listener for {status.value!r}: {e}")

    def listen(self, callback: StatusCallback) -> Callable[[], None]:
        """Register a synchronous listener.

        Args:
            callback: Function called with every status published from now on.

        Returns:
            A function that removes the listener when called.
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def subscribe(self) -> StatusSubscription:
        """Create an asynchronous subscription to the stream.

        Subscribing to a closed stream returns a subscription that ends
        immediately.

        Returns:
            The new subscription.
        """
        subscription = StatusSubscription(self)
        if self._closed:
            subscription._push(_CLOSED)
        else:
            self._subscriptions.append(subscription)
        return subscription

    def __aiter__(self) -> StatusSubscription:
        return self.subscribe()

    def close(self) -> None:
        """Close the stream, ending every subscription. Idempotent."""
        if self._closed:
            return
        self._closed = True
        logger.debug(f"Closing status stream after {len(self._history)} status(es)")
        for subscription in self._subscriptions:
            subscription._push(_CLOSED)
        self._subscriptions.clear()
        self._listeners.clear()

    def _discard(self, subscription: StatusSubscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(closed={self._closed}, history={self._history})"
