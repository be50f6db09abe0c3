"""Repository interfaces and their SQLite implementations."""
from reviewassign.infrastructure.repositories.interfaces import (
    PullRequestRepository,
    ReviewerAssignmentRepository,
    TeamRepository,
    UserRepository,
)
from reviewassign.infrastructure.repositories.sqlite_repositories import (
    SQLitePullRequestRepository,
    SQLiteReviewerAssignmentRepository,
    SQLiteTeamRepository,
    SQLiteUserRepository,
)

__all__ = [
    # Interfaces
    "PullRequestRepository",
    "ReviewerAssignmentRepository",
    "TeamRepository",
    "UserRepository",
    # SQLite
    "SQLitePullRequestRepository",
    "SQLiteReviewerAssignmentRepository",
    "SQLiteTeamRepository",
    "SQLiteUserRepository",
]
