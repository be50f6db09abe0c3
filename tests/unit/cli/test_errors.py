"""Unit tests for CLI error classification and reporting"""

import sqlite3
from unittest.mock import Mock

import pytest

from reviewassign.cli.errors import (
    EXIT_DOMAIN_ERROR,
    EXIT_INTERNAL_ERROR,
    classify,
    report_error,
)
from reviewassign.domain.exceptions import (
    ConfigurationError,
    InvalidPayloadError,
    NoCandidateError,
    NotAssignedError,
    NotFoundError,
    OperationCancelledError,
    PRExistsError,
    PRMergedError,
    StorageError,
    TeamExistsError,
)
from reviewassign.infrastructure.console import ConsoleWriter


class TestClassify:
    """Test suite for exception to code mapping"""

    @pytest.mark.parametrize("error,code", [
        (TeamExistsError("backend"), "TEAM_EXISTS"),
        (PRExistsError("pr-1"), "PR_EXISTS"),
        (PRMergedError("pr-1"), "PR_MERGED"),
        (NotAssignedError("pr-1", "B"), "NOT_ASSIGNED"),
        (NoCandidateError("empty"), "NO_CANDIDATE"),
        (NotFoundError("Team", "x"), "NOT_FOUND"),
        (InvalidPayloadError("bad"), "BAD_REQUEST"),
    ])
    def test_domain_errors(self, error, code):
        """Domain outcomes should map to their code and exit status 1"""
        assert classify(error) == (code, EXIT_DOMAIN_ERROR)

    @pytest.mark.parametrize("error", [
        StorageError("disk"),
        OperationCancelledError("Operation cancelled"),
        ConfigurationError("bad"),
        RuntimeError("boom"),
    ])
    def test_infrastructure_errors(self, error):
        """Everything else should be INTERNAL with exit status 2"""
        assert classify(error) == ("INTERNAL", EXIT_INTERNAL_ERROR)


class TestReportError:
    """Test suite for error output"""

    def test_domain_error_keeps_message(self):
        """Should write the domain message as-is"""
        # Arrange
        output = Mock(spec=ConsoleWriter)

        # Act
        status = report_error(output, NotFoundError("Team", "x"))

        # Assert
        assert status == 1
        output.write_error.assert_called_once_with("NOT_FOUND", "Team 'x' not found")

    def test_storage_error_is_logged(self, caplog):
        """Should log storage failures at error level"""
        # Arrange
        output = Mock(spec=ConsoleWriter)
        error = StorageError("Database operation failed: locked")
        error.__cause__ = sqlite3.OperationalError("locked")

        # Act
        status = report_error(output, error)

        # Assert
        assert status == 2
        output.write_error.assert_called_once_with("INTERNAL", "Database operation failed: locked")
        assert "Operation failed" in caplog.text

    def test_unexpected_error_hides_details(self):
        """Should not leak messages of unexpected exceptions"""
        output = Mock(spec=ConsoleWriter)
        assert report_error(output, KeyError("secret")) == 2
        output.write_error.assert_called_once_with("INTERNAL", "internal error")
