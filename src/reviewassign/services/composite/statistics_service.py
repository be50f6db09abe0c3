"""Service Layer class for assignment statistics.

Follows Service Layer pattern (Fowler, PoEAA) - captures both statistics
views from one consistent snapshot.
"""

from datetime import datetime, timezone
from typing import Optional

from reviewassign.domain.models import AssignmentReport
from reviewassign.infrastructure.cancellation import CancellationToken
from reviewassign.infrastructure.database import Database


class StatisticsService:
    """Service Layer class for statistics operations."""

    def __init__(self, database: Database):
        """Initialize the statistics service

        Args:
            database: Database handing out units of work
        """
        self.database = database

    def build_report(self, token: Optional[CancellationToken] = None) -> AssignmentReport:
        """Collect per-reviewer and per-pull-request counts

        Both views are read inside one transaction, so they describe the same
        state of the relation.

        Returns:
            AssignmentReport stamped with the generation time
        """
        with self.database.unit_of_work(token) as uow:
            by_reviewer = uow.assignments.stats_by_reviewer()
            by_pull_request = uow.assignments.stats_by_pull_request()

        return AssignmentReport(
            by_reviewer=by_reviewer,
            by_pull_request=by_pull_request,
            generated_at=datetime.now(timezone.utc),
        )
