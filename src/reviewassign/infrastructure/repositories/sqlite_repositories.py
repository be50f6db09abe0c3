"""SQLite implementations of the repository interfaces

Each repository is bound to a unit of work and runs its statements through
uow.execute(), inside the unit of work's transaction.
"""

from datetime import datetime
from typing import List, Optional, Sequence

from reviewassign.domain.exceptions import NotFoundError
from reviewassign.domain.models import (
    AssignmentStats,
    PRStatus,
    PullRequest,
    PullRequestAssignmentStats,
    ReviewerAssignment,
    Team,
    User,
)
from reviewassign.infrastructure.repositories.interfaces import (
    PullRequestRepository,
    ReviewerAssignmentRepository,
    TeamRepository,
    UserRepository,
)

PULL_REQUEST_COLUMNS = """
    p.pull_request_id,
    p.pull_request_name,
    p.author_id,
    p.status,
    p.created_at,
    p.merged_at
"""


def _placeholders(count: int) -> str:
    return ", ".join("?" for _ in range(count))


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value)


def _row_to_user(row) -> User:
    return User(
        user_id=row["user_id"],
        username=row["username"],
        team_name=row["team_name"],
        is_active=bool(row["is_active"]),
    )


def _row_to_pull_request(row) -> PullRequest:
    return PullRequest(
        pull_request_id=row["pull_request_id"],
        name=row["pull_request_name"],
        author_id=row["author_id"],
        status=PRStatus.from_string(row["status"]),
        created_at=_parse_timestamp(row["created_at"]),
        merged_at=_parse_timestamp(row["merged_at"]),
    )


class SQLiteTeamRepository(TeamRepository):
    """Teams table access"""

    def __init__(self, uow):
        self.uow = uow

    def create(self, team_name: str) -> None:
        self.uow.execute(
            "INSERT INTO teams (team_name, created_at) VALUES (?, ?)",
            (team_name, self.uow.now().isoformat()),
        )

    def exists(self, team_name: str) -> bool:
        row = self.uow.execute(
            "SELECT 1 FROM teams WHERE team_name = ?", (team_name,)
        ).fetchone()
        return row is not None

    def get(self, team_name: str) -> Team:
        if not self.exists(team_name):
            raise NotFoundError("Team", team_name)

        rows = self.uow.execute(
            """
            SELECT user_id, username, team_name, is_active
            FROM users
            WHERE team_name = ?
            ORDER BY user_id
            """,
            (team_name,),
        ).fetchall()
        return Team(name=team_name, members=[_row_to_user(row) for row in rows])


class SQLiteUserRepository(UserRepository):
    """Users table access"""

    def __init__(self, uow):
        self.uow = uow

    def upsert(self, user: User) -> None:
        self.uow.execute(
            """
            INSERT INTO users (user_id, username, team_name, is_active, updated_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT (user_id) DO UPDATE
            SET username = excluded.username,
                team_name = excluded.team_name,
                is_active = excluded.is_active,
                updated_at = excluded.updated_at
            """,
            (
                user.user_id,
                user.username,
                user.team_name,
                int(user.is_active),
                self.uow.now().isoformat(),
            ),
        )

    def get_by_id(self, user_id: str) -> User:
        row = self.uow.execute(
            """
            SELECT user_id, username, team_name, is_active
            FROM users
            WHERE user_id = ?
            """,
            (user_id,),
        ).fetchone()
        if row is None:
            raise NotFoundError("User", user_id)
        return _row_to_user(row)

    def list_by_team(self, team_name: str) -> List[User]:
        rows = self.uow.execute(
            """
            SELECT user_id, username, team_name, is_active
            FROM users
            WHERE team_name = ?
            ORDER BY user_id
            """,
            (team_name,),
        ).fetchall()
        return [_row_to_user(row) for row in rows]

    def update_is_active(self, user_id: str, is_active: bool) -> User:
        cursor = self.uow.execute(
            "UPDATE users SET is_active = ?, updated_at = ? WHERE user_id = ?",
            (int(is_active), self.uow.now().isoformat(), user_id),
        )
        if cursor.rowcount == 0:
            raise NotFoundError("User", user_id)
        return self.get_by_id(user_id)

    def bulk_deactivate_in_team(self, team_name: str, user_ids: Sequence[str]) -> int:
        if not user_ids:
            return 0

        cursor = self.uow.execute(
            f"""
            UPDATE users
            SET is_active = 0,
                updated_at = ?
            WHERE team_name = ?
              AND is_active = 1
              AND user_id IN ({_placeholders(len(user_ids))})
            """,
            (self.uow.now().isoformat(), team_name, *user_ids),
        )
        return cursor.rowcount


class SQLitePullRequestRepository(PullRequestRepository):
    """Pull requests table access"""

    def __init__(self, uow):
        self.uow = uow

    def exists(self, pull_request_id: str) -> bool:
        row = self.uow.execute(
            "SELECT 1 FROM pull_requests WHERE pull_request_id = ?",
            (pull_request_id,),
        ).fetchone()
        return row is not None

    def create(self, pull_request: PullRequest) -> PullRequest:
        created_at = pull_request.created_at or self.uow.now()
        self.uow.execute(
            """
            INSERT INTO pull_requests
                (pull_request_id, pull_request_name, author_id, status, created_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                pull_request.pull_request_id,
                pull_request.name,
                pull_request.author_id,
                pull_request.status.value,
                created_at.isoformat(),
            ),
        )
        return PullRequest(
            pull_request_id=pull_request.pull_request_id,
            name=pull_request.name,
            author_id=pull_request.author_id,
            status=pull_request.status,
            assigned_reviewers=list(pull_request.assigned_reviewers),
            created_at=created_at,
        )

    def get(self, pull_request_id: str) -> PullRequest:
        row = self.uow.execute(
            f"""
            SELECT {PULL_REQUEST_COLUMNS}
            FROM pull_requests p
            WHERE p.pull_request_id = ?
            """,
            (pull_request_id,),
        ).fetchone()
        if row is None:
            raise NotFoundError("Pull request", pull_request_id)
        return _row_to_pull_request(row)

    def mark_merged(self, pull_request_id: str) -> None:
        cursor = self.uow.execute(
            """
            UPDATE pull_requests
            SET status = 'MERGED',
                merged_at = COALESCE(merged_at, ?)
            WHERE pull_request_id = ?
            """,
            (self.uow.now().isoformat(), pull_request_id),
        )
        if cursor.rowcount == 0:
            raise NotFoundError("Pull request", pull_request_id)

    def list_by_reviewer(self, reviewer_id: str) -> List[PullRequest]:
        rows = self.uow.execute(
            f"""
            SELECT {PULL_REQUEST_COLUMNS}
            FROM pull_requests p
            JOIN pr_reviewers r ON r.pull_request_id = p.pull_request_id
            WHERE r.reviewer_id = ?
            ORDER BY p.created_at DESC, p.pull_request_id
            """,
            (reviewer_id,),
        ).fetchall()
        return [_row_to_pull_request(row) for row in rows]

    def list_open_by_any_reviewer(self, reviewer_ids: Sequence[str]) -> List[PullRequest]:
        if not reviewer_ids:
            return []

        rows = self.uow.execute(
            f"""
            SELECT DISTINCT {PULL_REQUEST_COLUMNS}
            FROM pull_requests p
            JOIN pr_reviewers r ON r.pull_request_id = p.pull_request_id
            WHERE p.status = 'OPEN'
              AND r.reviewer_id IN ({_placeholders(len(reviewer_ids))})
            ORDER BY p.created_at DESC, p.pull_request_id
            """,
            tuple(reviewer_ids),
        ).fetchall()
        return [_row_to_pull_request(row) for row in rows]


class SQLiteReviewerAssignmentRepository(ReviewerAssignmentRepository):
    """pr_reviewers relation table access"""

    def __init__(self, uow):
        self.uow = uow

    def reviewers_of(self, pull_request_id: str) -> List[str]:
        rows = self.uow.execute(
            """
            SELECT reviewer_id
            FROM pr_reviewers
            WHERE pull_request_id = ?
            ORDER BY reviewer_id
            """,
            (pull_request_id,),
        ).fetchall()
        return [row["reviewer_id"] for row in rows]

    def add(self, assignment: ReviewerAssignment) -> None:
        self.uow.execute(
            """
            INSERT OR IGNORE INTO pr_reviewers (pull_request_id, reviewer_id)
            VALUES (?, ?)
            """,
            (assignment.pull_request_id, assignment.reviewer_id),
        )

    def remove(self, assignment: ReviewerAssignment) -> None:
        self.uow.execute(
            "DELETE FROM pr_reviewers WHERE pull_request_id = ? AND reviewer_id = ?",
            (assignment.pull_request_id, assignment.reviewer_id),
        )

    def stats_by_reviewer(self) -> List[AssignmentStats]:
        rows = self.uow.execute(
            """
            SELECT reviewer_id, COUNT(*) AS cnt
            FROM pr_reviewers
            GROUP BY reviewer_id
            ORDER BY cnt DESC, reviewer_id
            """
        ).fetchall()
        return [AssignmentStats(reviewer_id=row["reviewer_id"], count=row["cnt"]) for row in rows]

    def stats_by_pull_request(self) -> List[PullRequestAssignmentStats]:
        rows = self.uow.execute(
            """
            SELECT pull_request_id, COUNT(*) AS cnt
            FROM pr_reviewers
            GROUP BY pull_request_id
            ORDER BY cnt DESC, pull_request_id
            """
        ).fetchall()
        return [
            PullRequestAssignmentStats(pull_request_id=row["pull_request_id"], count=row["cnt"])
            for row in rows
        ]
