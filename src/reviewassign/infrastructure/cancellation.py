"""Cancellation and deadline signal shared by a caller and a unit of work"""

import threading
import time
from typing import Optional

from reviewassign.domain.exceptions import OperationCancelledError


class CancellationToken:
    """Signal that an in-flight operation should stop

    A token is cancelled either explicitly through cancel() (from any thread)
    or implicitly once its deadline passes. The unit of work checks the token
    before each statement it runs.
    """

    def __init__(self, timeout_seconds: Optional[float] = None):
        """Initialize token

        Args:
            timeout_seconds: Optional deadline, measured from now
        """
        self._event = threading.Event()
        self._deadline: Optional[float] = None
        if timeout_seconds is not None:
            self._deadline = time.monotonic() + timeout_seconds

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None when there is no deadline"""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def raise_if_cancelled(self) -> None:
        """Raise OperationCancelledError when the token is cancelled or expired"""
        if not self.cancelled:
            return
        if self._event.is_set():
            raise OperationCancelledError("Operation cancelled")
        raise OperationCancelledError("Operation deadline exceeded")
