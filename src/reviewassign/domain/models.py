"""Domain models for reviewer assignment

Teams, users, pull requests and the pull request <-> reviewer relation, plus
the pure predicates the assignment engine builds on. Nothing in this module
performs I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from reviewassign.domain.exceptions import PRMergedError


class PRStatus(Enum):
    """Lifecycle status of a pull request. MERGED is terminal."""

    OPEN = "OPEN"
    MERGED = "MERGED"

    @classmethod
    def from_string(cls, status: str) -> PRStatus:
        """Parse status from string (case-insensitive).

        Args:
            status: Status string as stored (e.g., "OPEN", "merged")

        Returns:
            PRStatus enum value

        Raises:
            ValueError: If status string is not a valid status
        """
        normalized = status.upper()
        for member in cls:
            if member.value == normalized:
                return member
        raise ValueError(f"Invalid pull request status: {status}")


@dataclass
class User:
    """Team member who can author and review pull requests"""

    user_id: str
    username: str
    team_name: str = ""
    is_active: bool = True

    @classmethod
    def from_dict(cls, data: dict, team_name: str = "") -> User:
        """Parse from a team member payload

        Args:
            data: Dictionary with user_id, username and optional is_active
            team_name: Team to attach when the payload omits it

        Returns:
            User instance
        """
        return cls(
            user_id=str(data["user_id"]),
            username=str(data.get("username", data["user_id"])),
            team_name=data.get("team_name") or team_name,
            is_active=bool(data.get("is_active", True)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "team_name": self.team_name,
            "is_active": self.is_active,
        }


@dataclass
class Team:
    """Named group of users; reviewers are drawn from team rosters"""

    name: str
    members: List[User] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> Team:
        """Parse from a team payload

        Members always belong to the team being parsed, whatever team_name
        the member payload carries.

        Args:
            data: Dictionary with team_name and a members list

        Returns:
            Team instance
        """
        name = str(data["team_name"])
        members = []
        for member_data in data.get("members", []):
            member = User.from_dict(member_data, team_name=name)
            member.team_name = name
            members.append(member)
        return cls(name=name, members=members)

    def active_members(self) -> List[User]:
        """Members with the active flag set, in roster order"""
        return [user for user in self.members if user.is_active]

    def active_members_except(self, *excluded_ids: str) -> List[User]:
        """Active members whose id is not in excluded_ids, in roster order

        Args:
            *excluded_ids: User ids to leave out (author, current reviewers, ...)

        Returns:
            List of eligible users
        """
        if not excluded_ids:
            return self.active_members()

        excluded = set(excluded_ids)
        return [
            user for user in self.members
            if user.is_active and user.user_id not in excluded
        ]

    def member_ids(self) -> List[str]:
        return [user.user_id for user in self.members]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team_name": self.name,
            "members": [
                {
                    "user_id": user.user_id,
                    "username": user.username,
                    "is_active": user.is_active,
                }
                for user in self.members
            ],
        }


@dataclass
class PullRequest:
    """Pull request with its currently assigned reviewers"""

    pull_request_id: str
    name: str
    author_id: str
    status: PRStatus = PRStatus.OPEN
    assigned_reviewers: List[str] = field(default_factory=list)
    created_at: Optional[datetime] = None
    merged_at: Optional[datetime] = None

    def is_merged(self) -> bool:
        return self.status == PRStatus.MERGED

    def is_open(self) -> bool:
        return self.status == PRStatus.OPEN

    def ensure_can_be_reassigned(self) -> None:
        """Check that reviewers of this pull request may still change

        Raises:
            PRMergedError: If the pull request is merged
        """
        if self.is_merged():
            raise PRMergedError(self.pull_request_id)

    def has_reviewer(self, user_id: str) -> bool:
        return user_id in self.assigned_reviewers

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pull_request_id": self.pull_request_id,
            "pull_request_name": self.name,
            "author_id": self.author_id,
            "status": self.status.value,
            "assigned_reviewers": list(self.assigned_reviewers),
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "mergedAt": self.merged_at.isoformat() if self.merged_at else None,
        }

    def to_short_dict(self) -> Dict[str, Any]:
        """Summary form used when listing a reviewer's pull requests"""
        return {
            "pull_request_id": self.pull_request_id,
            "pull_request_name": self.name,
            "author_id": self.author_id,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class ReviewerAssignment:
    """One (pull request, reviewer) edge of the review relation

    The pair is the identity of the edge: two assignments with the same ids
    are the same edge.
    """

    pull_request_id: str
    reviewer_id: str


@dataclass
class BulkDeactivateResult:
    """Outcome of deactivating a batch of team members"""

    team_name: str
    deactivated_users: int = 0  # Members that actually went from active to inactive
    affected_prs: int = 0  # Open pull requests whose reviewer set changed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team_name": self.team_name,
            "deactivated_users": self.deactivated_users,
            "affected_prs": self.affected_prs,
        }


@dataclass(frozen=True)
class AssignmentStats:
    """Number of reviewer edges held by one reviewer"""

    reviewer_id: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"reviewer_id": self.reviewer_id, "count": self.count}


@dataclass(frozen=True)
class PullRequestAssignmentStats:
    """Number of reviewer edges attached to one pull request"""

    pull_request_id: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"pull_request_id": self.pull_request_id, "count": self.count}


@dataclass
class AssignmentReport:
    """Both statistics views captured together"""

    by_reviewer: List[AssignmentStats] = field(default_factory=list)
    by_pull_request: List[PullRequestAssignmentStats] = field(default_factory=list)
    generated_at: Optional[datetime] = None

    @property
    def total_assignments(self) -> int:
        """Total number of reviewer edges"""
        return sum(stat.count for stat in self.by_reviewer)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generated_at": self.generated_at.isoformat() if self.generated_at else None,
            "total_assignments": self.total_assignments,
            "by_reviewer": [stat.to_dict() for stat in self.by_reviewer],
            "by_pull_request": [stat.to_dict() for stat in self.by_pull_request],
        }


def ids_of(users: Iterable[User]) -> List[str]:
    """User ids in iteration order"""
    return [user.user_id for user in users]
