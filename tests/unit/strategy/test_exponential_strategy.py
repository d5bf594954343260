r"""Unit tests for ExponentialRetryStrategy."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from aretry.config import DEFAULT_BASE_DELAY
from aretry.strategy import ExponentialRetryStrategy


def test_exponential_strategy_basic() -> None:
    """Test basic exponential delay calculation."""
    strategy = ExponentialRetryStrategy(max_attempts=5, base_delay=0.5)
    assert strategy.attempt_delay(1) == 0.5
    assert strategy.attempt_delay(2) == 1.0
    assert strategy.attempt_delay(3) == 2.0
    assert strategy.attempt_delay(4) == 4.0


def test_exponential_strategy_default_values() -> None:
    """Test exponential strategy with default values."""
    strategy = ExponentialRetryStrategy(max_attempts=3)
    assert strategy.base_delay == DEFAULT_BASE_DELAY
    assert strategy.max_delay is None
    assert strategy.jitter_factor == 0.0
    assert strategy.attempt_delay(1) == DEFAULT_BASE_DELAY


def test_exponential_strategy_max_delay() -> None:
    """Test that delays are capped by max_delay."""
    strategy = ExponentialRetryStrategy(max_attempts=20, base_delay=1.0, max_delay=5.0)
    assert strategy.attempt_delay(3) == 4.0
    assert strategy.attempt_delay(4) == 5.0
    assert strategy.attempt_delay(10) == 5.0


def test_exponential_strategy_large_attempt_does_not_raise() -> None:
    """Test that a very large attempt number does not overflow."""
    strategy = ExponentialRetryStrategy(max_attempts=10_000, base_delay=1.0, max_delay=60.0)
    assert strategy.attempt_delay(5_000) == 60.0


def test_exponential_strategy_jitter() -> None:
    """Test that jitter is added on top of the capped delay."""
    strategy = ExponentialRetryStrategy(max_attempts=5, base_delay=1.0, jitter_factor=0.5)
    with patch("aretry.strategy.exponential.random.uniform", return_value=0.25) as uniform:
        assert strategy.attempt_delay(2) == 2.5
    uniform.assert_called_once_with(0, 0.5)


def test_exponential_strategy_jitter_is_non_negative() -> None:
    """Test that jittered delays stay within the expected range."""
    strategy = ExponentialRetryStrategy(max_attempts=5, base_delay=1.0, jitter_factor=0.1)
    for _ in range(20):
        assert 1.0 <= strategy.attempt_delay(1) <= 1.1


def test_exponential_strategy_should_retry() -> None:
    """Test that the default continuation rule is used."""
    strategy = ExponentialRetryStrategy(max_attempts=2)
    assert strategy.should_retry(1, None)
    assert not strategy.should_retry(2, None)


def test_exponential_strategy_invalid_base_delay() -> None:
    """Test that negative base_delay raises ValueError."""
    with pytest.raises(ValueError, match=r"base_delay must be non-negative"):
        ExponentialRetryStrategy(max_attempts=3, base_delay=-1.0)


@pytest.mark.parametrize("max_delay", [0.0, -1.0])
def test_exponential_strategy_invalid_max_delay(max_delay: float) -> None:
    """Test that non-positive max_delay raises ValueError."""
    with pytest.raises(ValueError, match=r"max_delay must be positive"):
        ExponentialRetryStrategy(max_attempts=3, max_delay=max_delay)


def test_exponential_strategy_invalid_jitter_factor() -> None:
    """Test that negative jitter_factor raises ValueError."""
    with pytest.raises(ValueError, match=r"jitter_factor must be >= 0"):
        ExponentialRetryStrategy(max_attempts=3, jitter_factor=-0.1)
