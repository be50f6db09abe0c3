"""CLI commands for user activity and review queues."""

from typing import Optional

from reviewassign.cli.errors import report_error
from reviewassign.domain.exceptions import ReviewAssignmentError
from reviewassign.infrastructure.cancellation import CancellationToken
from reviewassign.infrastructure.console import ConsoleWriter
from reviewassign.infrastructure.database import Database
from reviewassign.services.core.user_service import UserService


def cmd_user_set_active(
    output: ConsoleWriter,
    database: Database,
    user_id: str,
    is_active: bool,
    token: Optional[CancellationToken] = None,
) -> int:
    """Set a user's active flag and print the updated user"""
    try:
        user = UserService(database).set_is_active(user_id, is_active, token)
    except ReviewAssignmentError as e:
        return report_error(output, e)

    output.write_json({"user": user.to_dict()})
    return 0


def cmd_user_get_review(
    output: ConsoleWriter,
    database: Database,
    user_id: str,
    token: Optional[CancellationToken] = None,
) -> int:
    """Print the pull requests a user reviews"""
    try:
        pull_requests = UserService(database).get_review_prs(user_id, token)
    except ReviewAssignmentError as e:
        return report_error(output, e)

    output.write_json({
        "user_id": user_id,
        "pull_requests": [pr.to_short_dict() for pr in pull_requests],
    })
    return 0
