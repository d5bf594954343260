from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock, patch

import pytest

from aretry import RetryStrategy

if TYPE_CHECKING:
    from collections.abc import Generator

    from aretry import FixedRetryStrategy


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def fixed_strategy() -> FixedRetryStrategy:
    """Create a fixed-delay strategy with 3 attempts and a 1s delay."""
    return RetryStrategy.fixed(max_attempts=3, delay=1.0)


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock status callback for testing.

    Returns:
        A Mock object that can be used as the ``on_status`` callback.

    Example:
        >>> def test_callback(mock_callback):
        ...     RetryController(strategy, on_status=mock_callback)
        ...     mock_callback.assert_called_once()
    """
    return Mock()
