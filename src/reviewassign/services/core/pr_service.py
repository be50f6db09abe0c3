"""Core service for pull request lifecycle and reviewer assignment.

Follows Service Layer pattern (Fowler, PoEAA) - encapsulates business logic
for creating pull requests with initial reviewers, merging them, swapping a
single reviewer, and reading assignment statistics.
"""

import logging
from typing import List, Optional, Tuple

from reviewassign.domain.constants import DEFAULT_MAX_REVIEWERS
from reviewassign.domain.exceptions import NotAssignedError, PRExistsError
from reviewassign.domain.models import (
    AssignmentStats,
    PRStatus,
    PullRequest,
    PullRequestAssignmentStats,
    ReviewerAssignment,
    Team,
)
from reviewassign.infrastructure.cancellation import CancellationToken
from reviewassign.infrastructure.database import Database
from reviewassign.services.core.candidate_selector import CandidateSelector, default_selector

logger = logging.getLogger(__name__)


class PRService:
    """Core service for pull request operations.

    Each public method runs in its own unit of work, so the reads it makes
    and the writes that follow commit or roll back together.
    """

    def __init__(
        self,
        database: Database,
        selector: Optional[CandidateSelector] = None,
        max_reviewers: int = DEFAULT_MAX_REVIEWERS,
    ):
        """Initialize PR service

        Args:
            database: Database handing out units of work
            selector: Candidate selector (default: process-wide selector)
            max_reviewers: Reviewers picked for a new pull request
        """
        self.database = database
        self.selector = selector or default_selector()
        self.max_reviewers = max_reviewers

    # Public API methods

    def create_pr(
        self,
        pull_request_id: str,
        name: str,
        author_id: str,
        token: Optional[CancellationToken] = None,
    ) -> PullRequest:
        """Create an open pull request and assign up to max_reviewers reviewers

        Reviewers come from the author's team: active members other than the
        author. Fewer reviewers than the maximum, including none, is fine.

        Args:
            pull_request_id: New pull request id
            name: Pull request title
            author_id: Id of the authoring user
            token: Optional cancellation token

        Returns:
            Created PullRequest with its assigned reviewers

        Raises:
            PRExistsError: If the id is already taken
            NotFoundError: If the author is unknown
            StorageError: If the database fails
        """
        with self.database.unit_of_work(token) as uow:
            if uow.pull_requests.exists(pull_request_id):
                raise PRExistsError(pull_request_id)

            author = uow.users.get_by_id(author_id)
            team = Team(author.team_name, uow.users.list_by_team(author.team_name))

            candidates = team.active_members_except(author.user_id)
            reviewer_ids = self.selector.pick_up_to(candidates, self.max_reviewers)

            # Pull request row first; edges reference it
            created = uow.pull_requests.create(
                PullRequest(
                    pull_request_id=pull_request_id,
                    name=name,
                    author_id=author_id,
                    status=PRStatus.OPEN,
                )
            )
            for reviewer_id in reviewer_ids:
                uow.assignments.add(ReviewerAssignment(pull_request_id, reviewer_id))

            created.assigned_reviewers = uow.assignments.reviewers_of(pull_request_id)

        logger.info(
            "Created pull request %s by %s with reviewers %s",
            pull_request_id, author_id, created.assigned_reviewers,
        )
        return created

    def merge_pr(
        self, pull_request_id: str, token: Optional[CancellationToken] = None
    ) -> PullRequest:
        """Mark a pull request as merged (idempotent)

        Merging an already merged pull request returns its current state;
        merged_at keeps the first merge time.

        Args:
            pull_request_id: Pull request to merge
            token: Optional cancellation token

        Returns:
            PullRequest in MERGED state with its reviewers

        Raises:
            NotFoundError: If no such pull request
            StorageError: If the database fails
        """
        with self.database.unit_of_work(token) as uow:
            pull_request = uow.pull_requests.get(pull_request_id)

            if pull_request.is_merged():
                logger.debug("Pull request %s already merged", pull_request_id)
            else:
                uow.pull_requests.mark_merged(pull_request_id)
                pull_request = uow.pull_requests.get(pull_request_id)
                logger.info("Merged pull request %s", pull_request_id)

            pull_request.assigned_reviewers = uow.assignments.reviewers_of(pull_request_id)

        return pull_request

    def reassign_reviewer(
        self,
        pull_request_id: str,
        old_reviewer_id: str,
        token: Optional[CancellationToken] = None,
    ) -> Tuple[PullRequest, str]:
        """Replace one reviewer with a random member of that reviewer's team

        The replacement is an active member of the old reviewer's team who is
        neither the author nor already reviewing this pull request.

        Args:
            pull_request_id: Pull request to change
            old_reviewer_id: Reviewer being replaced
            token: Optional cancellation token

        Returns:
            Tuple of (refreshed PullRequest, replacement reviewer id)

        Raises:
            NotFoundError: If the pull request or the old reviewer is unknown
            PRMergedError: If the pull request is merged
            NotAssignedError: If old_reviewer_id is not a current reviewer
            NoCandidateError: If nobody is eligible to take over
            StorageError: If the database fails
        """
        with self.database.unit_of_work(token) as uow:
            pull_request = uow.pull_requests.get(pull_request_id)
            pull_request.ensure_can_be_reassigned()

            pull_request.assigned_reviewers = uow.assignments.reviewers_of(pull_request_id)
            if not pull_request.has_reviewer(old_reviewer_id):
                raise NotAssignedError(pull_request_id, old_reviewer_id)

            old_reviewer = uow.users.get_by_id(old_reviewer_id)
            team = Team(old_reviewer.team_name, uow.users.list_by_team(old_reviewer.team_name))

            candidates = team.active_members_except(
                pull_request.author_id, *pull_request.assigned_reviewers
            )
            new_reviewer_id = self.selector.pick_one(candidates)

            uow.assignments.remove(ReviewerAssignment(pull_request_id, old_reviewer_id))
            uow.assignments.add(ReviewerAssignment(pull_request_id, new_reviewer_id))

            pull_request.assigned_reviewers = uow.assignments.reviewers_of(pull_request_id)

        logger.info(
            "Reassigned pull request %s: %s -> %s",
            pull_request_id, old_reviewer_id, new_reviewer_id,
        )
        return pull_request, new_reviewer_id

    def get_assignment_stats_by_reviewer(
        self, token: Optional[CancellationToken] = None
    ) -> List[AssignmentStats]:
        """Reviewer edge counts per reviewer, busiest first"""
        with self.database.unit_of_work(token) as uow:
            return uow.assignments.stats_by_reviewer()

    def get_assignment_stats_by_pr(
        self, token: Optional[CancellationToken] = None
    ) -> List[PullRequestAssignmentStats]:
        """Reviewer edge counts per pull request, largest first"""
        with self.database.unit_of_work(token) as uow:
            return uow.assignments.stats_by_pull_request()
