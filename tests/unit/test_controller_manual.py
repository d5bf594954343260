r"""Unit tests for RetryController in manual mode."""

from __future__ import annotations

import asyncio
from unittest.mock import Mock

import pytest

from aretry import (
    ActionResult,
    InvalidUsageError,
    RetryController,
    RetryMode,
    RetryStatus,
    RetryStrategy,
)
from tests.helpers import StatusRecorder, sequence_action


async def _drain_loop(iterations: int = 10) -> None:
    for _ in range(iterations):
        await asyncio.sleep(0)


def test_resume_in_auto_mode_raises(fixed_strategy: RetryStrategy) -> None:
    """Test that resume is rejected in auto mode."""
    controller = RetryController(fixed_strategy)
    with pytest.raises(InvalidUsageError, match=r"only allowed in manual mode"):
        controller.resume()


def test_resume_before_execute_raises(fixed_strategy: RetryStrategy) -> None:
    """Test that resume is rejected before the first execute."""
    controller = RetryController(fixed_strategy, mode=RetryMode.MANUAL)
    with pytest.raises(InvalidUsageError, match=r"Call execute\(\) before using resume\(\)"):
        controller.resume()


@pytest.mark.asyncio
async def test_manual_mode_pauses_after_attempt_status() -> None:
    """Test that no attempt happens until resume is called."""
    recorder = StatusRecorder()
    action = sequence_action(None, None, "value")
    controller = RetryController(
        RetryStrategy.fixed(max_attempts=3, delay=0.0), mode=RetryMode.MANUAL, on_status=recorder
    )

    task = asyncio.create_task(controller.execute(action))
    await recorder.wait_for_count(1)
    await _drain_loop()

    assert recorder.statuses == [RetryStatus.ATTEMPT]
    assert action.call_count == 1
    assert controller.attempt == 1
    assert controller.is_running
    assert not controller.is_active
    assert not task.done()

    controller.resume()
    await recorder.wait_for_count(2)
    await _drain_loop()

    assert recorder.statuses == [RetryStatus.ATTEMPT, RetryStatus.ATTEMPT]
    assert action.call_count == 2

    controller.resume()

    assert await task == ActionResult.success("value")
    assert recorder.statuses == [RetryStatus.ATTEMPT, RetryStatus.ATTEMPT, RetryStatus.SUCCESS]
    assert action.call_count == 3
    assert controller.attempt == 0


@pytest.mark.asyncio
async def test_manual_mode_exhausts_attempts() -> None:
    """Test that the last resumed attempt fails the cycle."""
    recorder = StatusRecorder()
    action = Mock(return_value=None)
    controller = RetryController(
        RetryStrategy.fixed(max_attempts=2, delay=0.0), mode=RetryMode.MANUAL, on_status=recorder
    )

    task = asyncio.create_task(controller.execute(action))
    await recorder.wait_for_count(1)
    controller.resume()

    assert await task == ActionResult.fail()
    assert recorder.statuses == [RetryStatus.ATTEMPT, RetryStatus.FAIL]
    assert action.call_count == 2


@pytest.mark.asyncio
async def test_manual_mode_success_on_first_attempt() -> None:
    """Test that a first successful attempt needs no resume."""
    controller = RetryController(
        RetryStrategy.fixed(max_attempts=2, delay=0.0), mode=RetryMode.MANUAL
    )
    assert await controller.execute(Mock(return_value="value")) == ActionResult.success("value")


@pytest.mark.asyncio
async def test_resume_while_delay_pending_raises() -> None:
    """Test that resume is rejected while a delay is outstanding."""
    started = asyncio.Event()
    action = Mock(side_effect=lambda: started.set())
    controller = RetryController(
        RetryStrategy.fixed(max_attempts=3, delay=60.0), mode=RetryMode.MANUAL
    )

    task = asyncio.create_task(controller.execute(action))
    await started.wait()

    with pytest.raises(InvalidUsageError, match=r"still in progress"):
        controller.resume()
    action.assert_called_once_with()

    controller.cancel()
    assert await task == ActionResult.canceled()


@pytest.mark.asyncio
async def test_resume_while_action_in_flight_raises() -> None:
    """Test that resume cannot start a second concurrent invocation."""
    started = asyncio.Event()
    release = asyncio.Event()

    async def action() -> str:
        started.set()
        await release.wait()
        return "value"

    controller = RetryController(
        RetryStrategy.fixed(max_attempts=3, delay=0.0), mode=RetryMode.MANUAL
    )

    task = asyncio.create_task(controller.execute(action))
    await started.wait()

    with pytest.raises(InvalidUsageError, match=r"still in progress"):
        controller.resume()

    release.set()
    assert await task == ActionResult.success("value")


@pytest.mark.asyncio
async def test_resume_after_cycle_end_raises() -> None:
    """Test that resume is rejected once the cycle is over."""
    controller = RetryController(
        RetryStrategy.fixed(max_attempts=2, delay=0.0), mode=RetryMode.MANUAL
    )
    await controller.execute(Mock(return_value="value"))

    with pytest.raises(InvalidUsageError, match=r"Call execute\(\) before using resume\(\)"):
        controller.resume()


@pytest.mark.asyncio
async def test_execute_while_paused_returns_skip() -> None:
    """Test that execute on a paused cycle does not resume it."""
    recorder = StatusRecorder()
    action = Mock(return_value=None)
    controller = RetryController(
        RetryStrategy.fixed(max_attempts=3, delay=0.0), mode=RetryMode.MANUAL, on_status=recorder
    )

    task = asyncio.create_task(controller.execute(action))
    await recorder.wait_for_count(1)

    assert await controller.execute(action) == ActionResult.skip()
    await _drain_loop()
    assert action.call_count == 1

    controller.cancel()
    assert await task == ActionResult.canceled()
    assert recorder.statuses == [RetryStatus.ATTEMPT, RetryStatus.CANCELED]


@pytest.mark.asyncio
async def test_manual_mode_pauses_when_strategy_refuses() -> None:
    """Test that a refusing strategy still pauses a manual cycle, leaving
    the decision to resume to the caller."""
    recorder = StatusRecorder()
    strategy = Mock(spec=RetryStrategy, max_attempts=3)
    strategy.attempt_delay.return_value = 0.0
    strategy.should_retry.return_value = False
    action = sequence_action(None, "value")
    controller = RetryController(strategy, mode=RetryMode.MANUAL, on_status=recorder)

    task = asyncio.create_task(controller.execute(action))
    await recorder.wait_for_count(1)
    await _drain_loop()

    assert recorder.statuses == [RetryStatus.ATTEMPT]
    assert not task.done()
    strategy.should_retry.assert_called_once_with(1, None)

    controller.resume()

    assert await task == ActionResult.success("value")
    assert recorder.statuses == [RetryStatus.ATTEMPT, RetryStatus.SUCCESS]
    assert action.call_count == 2
