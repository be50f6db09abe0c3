"""CLI commands for pull request creation, merge and reviewer reassignment.

Commands instantiate services and coordinate their operations but do not
implement business logic directly.
"""

from typing import Optional

from reviewassign.cli.errors import report_error
from reviewassign.domain.exceptions import ReviewAssignmentError
from reviewassign.infrastructure.cancellation import CancellationToken
from reviewassign.infrastructure.console import ConsoleWriter
from reviewassign.services.core.pr_service import PRService


def cmd_pr_create(
    output: ConsoleWriter,
    pr_service: PRService,
    pr_id: str,
    name: str,
    author_id: str,
    token: Optional[CancellationToken] = None,
) -> int:
    """Create a pull request and print it with its reviewers

    Args:
        output: Console writer
        pr_service: PRService wired with database and selector
        pr_id: New pull request id
        name: Pull request title
        author_id: Authoring user
        token: Optional cancellation token

    Returns:
        Exit code (0 for success)
    """
    try:
        pull_request = pr_service.create_pr(pr_id, name, author_id, token)
    except ReviewAssignmentError as e:
        return report_error(output, e)

    output.write_json({"pr": pull_request.to_dict()})
    return 0


def cmd_pr_merge(
    output: ConsoleWriter,
    pr_service: PRService,
    pr_id: str,
    token: Optional[CancellationToken] = None,
) -> int:
    """Merge a pull request and print its final state"""
    try:
        pull_request = pr_service.merge_pr(pr_id, token)
    except ReviewAssignmentError as e:
        return report_error(output, e)

    output.write_json({"pr": pull_request.to_dict()})
    return 0


def cmd_pr_reassign(
    output: ConsoleWriter,
    pr_service: PRService,
    pr_id: str,
    old_reviewer_id: str,
    token: Optional[CancellationToken] = None,
) -> int:
    """Replace one reviewer and print the pull request with the replacement id"""
    try:
        pull_request, replaced_by = pr_service.reassign_reviewer(pr_id, old_reviewer_id, token)
    except ReviewAssignmentError as e:
        return report_error(output, e)

    output.write_json({"pr": pull_request.to_dict(), "replaced_by": replaced_by})
    return 0
