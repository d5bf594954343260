r"""Exceptions raised by the retry controller."""

from __future__ import annotations

__all__ = ["InvalidUsageError"]


class InvalidUsageError(ValueError):
    """Exception raised when the controller is used incorrectly.

    This signals a programming error of the caller, for example calling
    ``resume()`` on a controller in auto mode or before ``execute()``.
    It is never retried and never reported on the status stream.

    Args:
        message: A descriptive error message.

    Example:
        ```pycon
        >>> from aretry.exceptions import InvalidUsageError
        >>> raise InvalidUsageError("resume() is only allowed in manual mode")
        Traceback (most recent call last):
            ...
        aretry.exceptions.InvalidUsageError: resume() is only allowed in manual mode

        ```
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
