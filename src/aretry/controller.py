r"""Retry controller driving a fallible action through a retry cycle.

This module provides the RetryController class that repeatedly invokes a
caller-supplied action until it succeeds, the attempts are exhausted, or
the cycle is cancelled. Delays and continuation decisions are delegated
to a RetryStrategy, and every status transition is broadcast on a status
stream and to an optional callback.
"""

from __future__ import annotations

__all__ = ["RetryController"]

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from aretry.exceptions import InvalidUsageError
from aretry.result import ActionResult
from aretry.status import StatusStream
from aretry.types import RetryMode, RetryStatus
from aretry.utils.action import invoke_action

if TYPE_CHECKING:
    from collections.abc import Coroutine

    from aretry.config import ControllerConfig
    from aretry.strategy.base import RetryStrategy
    from aretry.types import RetryAction, StatusCallback

logger: logging.Logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryController(Generic[T]):
    """Manages the retries of one action based on a RetryStrategy.

    A retry cycle starts with ``execute()`` and ends with a terminal status
    (``SUCCESS``, ``FAIL`` or ``CANCELED``). During a cycle the controller:

    - invokes the action (sync or async) and awaits its outcome
    - treats a ``None`` result or a raised ``Exception`` as a failed attempt
    - waits ``strategy.attempt_delay(attempt)`` seconds, then either ends the
      cycle with ``FAIL`` (no attempt left, or ``should_retry`` refuses in
      auto mode) or emits ``ATTEMPT`` and continues
    - in auto mode, continues immediately; in manual mode, pauses until
      ``resume()`` is called, leaving the decision to the caller even when
      ``should_retry`` refuses

    Only one cycle runs at a time: calling ``execute()`` while a cycle is
    running returns ``ActionResult.skip()`` without touching that cycle.
    At most one delay timer and one action invocation are outstanding.

    Args:
        strategy: The strategy deciding delays and continuation.
        mode: The retry mode (default: ``RetryMode.AUTO``).
        on_status: Optional callback invoked with every status, after the
            status is published on the status stream. Exceptions raised
            by the callback are logged and ignored.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry import RetryController, RetryStrategy
        >>> calls = []
        >>> def action():
        ...     calls.append(len(calls) + 1)
        ...     return "done" if len(calls) == 2 else None
        ...
        >>> controller = RetryController(RetryStrategy.fixed(max_attempts=4, delay=0.01))
        >>> result = asyncio.run(controller.execute(action))
        >>> result.status, result.data
        (<RetryStatus.SUCCESS: 'success'>, 'done')
        >>> calls
        [1, 2]
        >>> controller.attempt
        0

        ```
    """

    def __init__(
        self,
        strategy: RetryStrategy,
        mode: RetryMode = RetryMode.AUTO,
        on_status: StatusCallback | None = None,
    ) -> None:
        self._strategy = strategy
        self._mode = RetryMode(mode)
        self._on_status = on_status

        self._attempt = 0
        self._stream: StatusStream | None = None
        self._future: asyncio.Future[ActionResult[T]] | None = None
        self._action: RetryAction | None = None
        self._timer: asyncio.Task | None = None
        self._attempt_task: asyncio.Task | None = None
        # Incremented on every teardown so continuations of a stopped cycle
        # can detect that they are stale.
        self._cycle = 0
        self._tasks: set[asyncio.Task] = set()

    @classmethod
    def from_config(cls, config: ControllerConfig) -> RetryController[Any]:
        """Create a controller with a fixed-delay strategy from a config.

        Args:
            config: The controller configuration.

        Returns:
            The configured controller.
        """
        return cls(config.build_strategy(), mode=config.mode, on_status=config.on_status)

    @property
    def strategy(self) -> RetryStrategy:
        return self._strategy

    @property
    def mode(self) -> RetryMode:
        return self._mode

    @property
    def on_status(self) -> StatusCallback | None:
        return self._on_status

    @property
    def attempt(self) -> int:
        """The number of attempts made in the current cycle."""
        return self._attempt

    @property
    def is_active(self) -> bool:
        """Indicate if a delay timer is outstanding."""
        return self._timer is not None

    @property
    def is_running(self) -> bool:
        """Indicate if a retry cycle is in progress, paused or not."""
        return self._future is not None

    @property
    def status(self) -> StatusStream:
        """The status stream of the current or next retry cycle.

        The stream is closed when a cycle ends; a fresh stream is returned
        afterwards, so observers may subscribe before calling ``execute()``.
        """
        return self._open_stream()

    async def execute(self, action: RetryAction) -> ActionResult[T]:
        """Run the action until it succeeds, is exhausted or is cancelled.

        Args:
            action: Callable taking no argument and returning a value on
                success or ``None`` otherwise. It may return an awaitable.
                Exceptions raised by the action count as failed attempts
                and are never propagated.

        Returns:
            ``ActionResult.skip()`` if a cycle is already running, otherwise
            the result of the new cycle: ``success`` with the value returned
            by the action, ``fail`` once the attempts are exhausted, or
            ``canceled`` if the cycle was torn down by ``cancel()`` or
            ``stop()``.

        Raises:
            Exception: Any exception raised by the strategy while deciding
                the next attempt. The cycle is torn down first.
        """
        if self.is_running:
            logger.debug("A retry cycle is already running, skipping execute()")
            return ActionResult.skip()

        if self._attempt > 0 and self._attempt + 1 > self._strategy.max_attempts:
            logger.debug(f"Resetting stale attempt counter ({self._attempt})")
            self.stop()

        cycle = self._cycle
        self._action = action
        self._open_stream()
        future: asyncio.Future[ActionResult[T]] = asyncio.get_running_loop().create_future()
        self._future = future
        logger.debug(
            f"Starting retry cycle (max_attempts={self._strategy.max_attempts}, "
            f"mode={self._mode.value})"
        )

        if self._strategy.max_attempts < 1:
            logger.debug("No attempt allowed by the strategy, failing the retry cycle")
            self._finish(ActionResult.fail(), RetryStatus.FAIL)
        else:
            self._start_attempt(cycle)

        try:
            return await future
        except asyncio.CancelledError:
            if cycle == self._cycle:
                self.cancel()
            raise

    def resume(self) -> None:
        """Perform the next attempt of a paused cycle in manual mode.

        Raises:
            InvalidUsageError: If the controller is not in manual mode, if
                ``execute()`` has not started a cycle, or if an attempt or a
                delay is already outstanding.
        """
        if self._mode is not RetryMode.MANUAL:
            msg = "resume() is only allowed in manual mode"
            raise InvalidUsageError(msg)
        if self._action is None or self._future is None:
            msg = "Call execute() before using resume()"
            raise InvalidUsageError(msg)
        if self._timer is not None or self._attempt_task is not None:
            msg = f"Attempt {self._attempt} is still in progress"
            raise InvalidUsageError(msg)
        logger.debug(f"Resuming retry cycle at attempt {self._attempt + 1}")
        self._start_attempt(self._cycle)

    def cancel(self) -> None:
        """Cancel the running cycle.

        The pending result resolves to ``ActionResult.canceled()`` and the
        ``CANCELED`` status is emitted. Does nothing if no cycle is running.
        """
        if not self.is_running:
            return
        logger.debug(f"Cancelling retry cycle after {self._attempt} attempt(s)")
        self._resolve(ActionResult.canceled())
        self._emit(RetryStatus.CANCELED)

    def stop(self) -> None:
        """Tear down the current cycle and reset the controller. Idempotent.

        The attempt counter is reset, the status stream is closed, and any
        outstanding delay or action invocation is cancelled. A pending result
        that is not resolved yet resolves to ``ActionResult.canceled()``
        without emitting a status.
        """
        self._cycle += 1
        self._attempt = 0
        if self._stream is not None:
            self._stream.close()
        self._cancel_task(self._timer)
        self._timer = None
        self._cancel_task(self._attempt_task)
        self._attempt_task = None
        future, self._future = self._future, None
        self._action = None
        if future is not None and not future.done():
            logger.debug("Retry cycle stopped before completion, resolving it as canceled")
            future.set_result(ActionResult.canceled())

    def _open_stream(self) -> StatusStream:
        if self._stream is None or self._stream.closed:
            self._stream = StatusStream()
        return self._stream

    def _start_attempt(self, cycle: int) -> None:
        self._attempt_task = self._spawn(self._try_action(cycle))

    async def _try_action(self, cycle: int) -> None:
        action = self._action
        if cycle != self._cycle or action is None:
            return
        self._attempt += 1
        attempt = self._attempt
        logger.debug(f"Starting attempt {attempt}/{self._strategy.max_attempts}")

        value: Any = None
        error: Exception | None = None
        try:
            value = await invoke_action(action)
        except Exception as exc:  # noqa: BLE001
            error = exc

        if cycle != self._cycle:
            logger.debug(f"Ignoring outcome of attempt {attempt} of a stopped retry cycle")
            return
        self._attempt_task = None

        if value is not None:
            logger.debug(f"Attempt {attempt} succeeded")
            self._finish(ActionResult.success(value), RetryStatus.SUCCESS)
            return
        if error is not None:
            logger.debug(f"Attempt {attempt} raised {type(error).__name__}: {error}")
        else:
            logger.debug(f"Attempt {attempt} returned no result")
        self._schedule_next(cycle, error)

    def _schedule_next(self, cycle: int, error: Exception | None) -> None:
        try:
            delay = self._strategy.attempt_delay(self._attempt)
        except Exception as exc:  # noqa: BLE001
            self._abort(exc)
            return
        logger.debug(f"Waiting {delay:.2f}s after attempt {self._attempt}")
        self._timer = self._spawn(self._wait_next_attempt(cycle, delay, error))

    async def _wait_next_attempt(self, cycle: int, delay: float, error: Exception | None) -> None:
        await asyncio.sleep(delay)
        if cycle != self._cycle:
            return
        self._timer = None

        attempt = self._attempt
        if attempt + 1 > self._strategy.max_attempts:
            logger.debug(f"Retry cycle exhausted after {attempt} attempt(s)")
            self._finish(ActionResult.fail(), RetryStatus.FAIL)
            return
        try:
            retry = self._strategy.should_retry(attempt, error)
        except Exception as exc:  # noqa: BLE001
            self._abort(exc)
            return

        if self._mode is RetryMode.AUTO and not retry:
            logger.debug(f"Strategy refused to retry after attempt {attempt}")
            self._finish(ActionResult.fail(), RetryStatus.FAIL)
            return

        self._emit(RetryStatus.ATTEMPT)
        # The status callback may have stopped or cancelled the cycle.
        if cycle != self._cycle:
            return
        if self._mode is RetryMode.AUTO:
            self._start_attempt(cycle)
        else:
            logger.debug(
                f"Pausing after attempt {attempt} until resume() is called "
                f"(strategy {'allows' if retry else 'refuses'} a retry)"
            )

    def _finish(self, result: ActionResult[T], status: RetryStatus) -> None:
        self._resolve(result)
        self._emit(status)

    def _resolve(self, result: ActionResult[T]) -> None:
        if self._future is not None and not self._future.done():
            self._future.set_result(result)

    def _abort(self, error: Exception) -> None:
        logger.debug(f"Strategy raised {type(error).__name__}, aborting the retry cycle: {error}")
        if self._future is not None and not self._future.done():
            self._future.set_exception(error)
        self.stop()

    def _emit(self, status: RetryStatus) -> None:
        if self._stream is not None and not self._stream.closed:
            self._stream.publish(status)
        if self._on_status is not None:
            try:
                self._on_status(status)
            except Exception as e:  # noqa: BLE001
                logger.warning(f"Error in status callback for {status.value!r}: {e}")
        if status.is_terminal:
            self.stop()

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @staticmethod
    def _cancel_task(task: asyncio.Task | None) -> None:
        if task is None or task.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        if task is not current:
            task.cancel()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(strategy={self._strategy!r}, "
            f"mode={self._mode.value}, attempt={self._attempt}, running={self.is_running})"
        )
