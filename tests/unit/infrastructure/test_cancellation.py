"""Unit tests for CancellationToken"""

import pytest

from reviewassign.domain.exceptions import OperationCancelledError
from reviewassign.infrastructure.cancellation import CancellationToken


class TestCancellationToken:
    """Test suite for explicit cancellation and deadlines"""

    def test_new_token_is_not_cancelled(self):
        """Should start live with no deadline"""
        token = CancellationToken()
        assert not token.cancelled
        assert token.remaining() is None
        token.raise_if_cancelled()

    def test_cancel(self):
        """cancel() should flip the token"""
        # Arrange
        token = CancellationToken()

        # Act
        token.cancel()

        # Assert
        assert token.cancelled
        with pytest.raises(OperationCancelledError, match="Operation cancelled"):
            token.raise_if_cancelled()

    def test_expired_deadline(self):
        """A zero timeout should already be expired"""
        token = CancellationToken(timeout_seconds=0)
        assert token.cancelled
        assert token.remaining() == 0.0
        with pytest.raises(OperationCancelledError, match="deadline exceeded"):
            token.raise_if_cancelled()

    def test_future_deadline(self):
        """A long timeout should leave time remaining"""
        token = CancellationToken(timeout_seconds=60)
        assert not token.cancelled
        assert 0 < token.remaining() <= 60
