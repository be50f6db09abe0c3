"""Mapping of domain exceptions to CLI error codes and exit statuses"""

import logging
from typing import Tuple

from reviewassign.domain.exceptions import (
    InvalidPayloadError,
    NoCandidateError,
    NotAssignedError,
    NotFoundError,
    PRExistsError,
    PRMergedError,
    ReviewAssignmentError,
    TeamExistsError,
)
from reviewassign.infrastructure.console import ConsoleWriter

logger = logging.getLogger(__name__)

# Exit status for expected domain outcomes (caller can recover)
EXIT_DOMAIN_ERROR = 1
# Exit status for storage, configuration and unexpected failures
EXIT_INTERNAL_ERROR = 2

CODE_TEAM_EXISTS = "TEAM_EXISTS"
CODE_PR_EXISTS = "PR_EXISTS"
CODE_PR_MERGED = "PR_MERGED"
CODE_NOT_ASSIGNED = "NOT_ASSIGNED"
CODE_NO_CANDIDATE = "NO_CANDIDATE"
CODE_NOT_FOUND = "NOT_FOUND"
CODE_BAD_REQUEST = "BAD_REQUEST"
CODE_INTERNAL = "INTERNAL"

_DOMAIN_ERRORS = [
    (TeamExistsError, CODE_TEAM_EXISTS),
    (PRExistsError, CODE_PR_EXISTS),
    (PRMergedError, CODE_PR_MERGED),
    (NotAssignedError, CODE_NOT_ASSIGNED),
    (NoCandidateError, CODE_NO_CANDIDATE),
    (NotFoundError, CODE_NOT_FOUND),
    (InvalidPayloadError, CODE_BAD_REQUEST),
]


def classify(error: Exception) -> Tuple[str, int]:
    """Resolve the error code and exit status for an exception

    Args:
        error: Exception raised by a service

    Returns:
        Tuple of (code, exit status)
    """
    for error_type, code in _DOMAIN_ERRORS:
        if isinstance(error, error_type):
            return code, EXIT_DOMAIN_ERROR
    return CODE_INTERNAL, EXIT_INTERNAL_ERROR


def report_error(output: ConsoleWriter, error: Exception) -> int:
    """Write the error document for an exception and return the exit status

    Domain outcomes are reported as-is. Anything else is logged with its
    traceback and reported with an opaque message.

    Args:
        output: Console writer
        error: Exception raised by a service

    Returns:
        Exit status for the process
    """
    code, status = classify(error)
    if status == EXIT_DOMAIN_ERROR:
        logger.debug("Domain error %s: %s", code, error)
        output.write_error(code, str(error))
        return status

    if isinstance(error, ReviewAssignmentError):
        logger.error("Operation failed: %s", error, exc_info=error)
        output.write_error(code, str(error))
    else:
        logger.error("Unexpected failure", exc_info=error)
        output.write_error(code, "internal error")
    return status
