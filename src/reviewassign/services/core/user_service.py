"""Core service for user activity and review queues."""

import logging
from typing import List, Optional

from reviewassign.domain.models import PullRequest, User
from reviewassign.infrastructure.cancellation import CancellationToken
from reviewassign.infrastructure.database import Database

logger = logging.getLogger(__name__)


class UserService:
    """Core service for user operations."""

    def __init__(self, database: Database):
        self.database = database

    def set_is_active(
        self, user_id: str, is_active: bool, token: Optional[CancellationToken] = None
    ) -> User:
        """Toggle a user's active flag

        Deactivating a single user does not touch the pull requests they
        review; use DeactivationService for the cascading variant.

        Raises:
            NotFoundError: If no such user
        """
        with self.database.unit_of_work(token) as uow:
            user = uow.users.update_is_active(user_id, is_active)

        logger.info("User %s is_active=%s", user_id, is_active)
        return user

    def get_review_prs(
        self, user_id: str, token: Optional[CancellationToken] = None
    ) -> List[PullRequest]:
        """Pull requests the user is assigned to review, newest first

        Reviewer lists of the returned pull requests are not loaded.

        Raises:
            NotFoundError: If no such user
        """
        with self.database.unit_of_work(token) as uow:
            uow.users.get_by_id(user_id)
            return uow.pull_requests.list_by_reviewer(user_id)
