"""Service Layer class for bulk team member deactivation.

Follows Service Layer pattern (Fowler, PoEAA) - deactivates a batch of team
members and repairs every open pull request they were reviewing.

The cascade runs as a sequence of independent steps: the deactivation itself
commits first, then each affected pull request is repaired in its own unit of
work. If a step fails, steps that already committed stay in place. A pull
request that finds no eligible replacement simply keeps fewer reviewers.
"""

import logging
from typing import List, Optional, Sequence, Set

from reviewassign.domain.models import (
    BulkDeactivateResult,
    PullRequest,
    ReviewerAssignment,
    ids_of,
)
from reviewassign.infrastructure.cancellation import CancellationToken
from reviewassign.infrastructure.database import Database
from reviewassign.services.core.candidate_selector import CandidateSelector

logger = logging.getLogger(__name__)


class DeactivationService:
    """Service Layer class for cascading reviewer reassignment.

    Replacement is first-fit over the team's remaining active members in
    roster order, so the same state always yields the same repair.
    """

    def __init__(self, database: Database):
        """Initialize the deactivation service

        Args:
            database: Database handing out units of work
        """
        self.database = database

    # Public API methods

    def bulk_deactivate_team(
        self,
        team_name: str,
        user_ids: Sequence[str],
        token: Optional[CancellationToken] = None,
    ) -> BulkDeactivateResult:
        """Deactivate team members and replace them on open pull requests

        Ids that don't belong to the team are ignored. Re-deactivating an
        inactive member still repairs their open reviews but is not counted
        in deactivated_users.

        Args:
            team_name: Team whose members are deactivated
            user_ids: Ids of the members to deactivate
            token: Optional cancellation token, checked in every step

        Returns:
            BulkDeactivateResult with the deactivated and affected counts

        Raises:
            NotFoundError: If the team doesn't exist
            StorageError: If the database fails (earlier steps stay committed)
        """
        result = BulkDeactivateResult(team_name=team_name)
        if not user_ids:
            return result

        requested = set(user_ids)

        with self.database.unit_of_work(token) as uow:
            team = uow.teams.get(team_name)

            deactivation_ids = [
                user_id for user_id in team.member_ids() if user_id in requested
            ]
            if not deactivation_ids:
                logger.info("None of %s belong to team %s", sorted(requested), team_name)
                return result

            replacement_pool = [
                user_id for user_id in ids_of(team.active_members())
                if user_id not in requested
            ]

            result.deactivated_users = uow.users.bulk_deactivate_in_team(
                team_name, deactivation_ids
            )
            open_prs = uow.pull_requests.list_open_by_any_reviewer(deactivation_ids)

        logger.info(
            "Deactivated %d user(s) in team %s; %d open pull request(s) to repair",
            result.deactivated_users, team_name, len(open_prs),
        )

        deactivated = set(deactivation_ids)
        for pull_request in open_prs:
            if self._repair_pull_request(pull_request, deactivated, replacement_pool, token):
                result.affected_prs += 1

        logger.info(
            "Bulk deactivation of team %s done: %d deactivated, %d pull request(s) affected",
            team_name, result.deactivated_users, result.affected_prs,
        )
        return result

    # Private helper methods

    def _repair_pull_request(
        self,
        pull_request: PullRequest,
        deactivated: Set[str],
        replacement_pool: List[str],
        token: Optional[CancellationToken],
    ) -> bool:
        """Swap deactivated reviewers on one pull request

        Returns:
            True if any reviewer edge changed
        """
        pr_id = pull_request.pull_request_id
        changed = False

        with self.database.unit_of_work(token) as uow:
            # May have been merged since the open list was read
            if not uow.pull_requests.get(pr_id).is_open():
                logger.debug("Pull request %s merged meanwhile; skipping", pr_id)
                return False

            reviewers = uow.assignments.reviewers_of(pr_id)
            # Tracks current reviewers, including replacements added below
            assigned = set(reviewers)

            for reviewer_id in reviewers:
                if reviewer_id not in deactivated:
                    continue

                uow.assignments.remove(ReviewerAssignment(pr_id, reviewer_id))
                assigned.discard(reviewer_id)
                changed = True

                replacement = CandidateSelector.first_fit(
                    replacement_pool, assigned | {pull_request.author_id}
                )
                if replacement is None:
                    logger.warning(
                        "No replacement for %s on pull request %s; leaving it short",
                        reviewer_id, pr_id,
                    )
                    continue

                uow.assignments.add(ReviewerAssignment(pr_id, replacement))
                assigned.add(replacement)
                logger.debug("Pull request %s: %s -> %s", pr_id, reviewer_id, replacement)

        return changed
