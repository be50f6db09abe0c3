"""CLI command for assignment statistics.

Orchestrates the statistics services; the per-view commands read through
PRService, the combined view through StatisticsService.
"""

from typing import Optional

from reviewassign.cli.errors import report_error
from reviewassign.domain.exceptions import ReviewAssignmentError
from reviewassign.infrastructure.cancellation import CancellationToken
from reviewassign.infrastructure.console import ConsoleWriter
from reviewassign.infrastructure.database import Database
from reviewassign.services.composite.statistics_service import StatisticsService
from reviewassign.services.core.pr_service import PRService


def cmd_stats(
    output: ConsoleWriter,
    database: Database,
    pr_service: PRService,
    view: str = "all",
    token: Optional[CancellationToken] = None,
) -> int:
    """Print assignment statistics

    Args:
        output: Console writer
        database: Database handle
        pr_service: PRService used for the single-view queries
        view: "all", "reviewers" or "pull-requests"
        token: Optional cancellation token

    Returns:
        Exit code (0 for success)
    """
    try:
        if view == "reviewers":
            stats = pr_service.get_assignment_stats_by_reviewer(token)
            output.write_json({"by_reviewer": [stat.to_dict() for stat in stats]})
        elif view == "pull-requests":
            stats = pr_service.get_assignment_stats_by_pr(token)
            output.write_json({"by_pull_request": [stat.to_dict() for stat in stats]})
        else:
            report = StatisticsService(database).build_report(token)
            output.write_json(report.to_dict())
    except ReviewAssignmentError as e:
        return report_error(output, e)

    return 0
