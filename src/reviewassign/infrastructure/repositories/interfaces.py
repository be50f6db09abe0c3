"""Abstract interfaces for the storage collaborator

These are the contracts the assignment engine consumes. The engine decides
the sequence and choice of operations; implementations decide how state is
kept. SQLite implementations live in sqlite_repositories.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from reviewassign.domain.models import (
    AssignmentStats,
    PullRequest,
    PullRequestAssignmentStats,
    ReviewerAssignment,
    Team,
    User,
)


class TeamRepository(ABC):
    """Storage operations over teams"""

    @abstractmethod
    def create(self, team_name: str) -> None:
        """Insert a new team (members are upserted separately)"""
        pass

    @abstractmethod
    def exists(self, team_name: str) -> bool:
        pass

    @abstractmethod
    def get(self, team_name: str) -> Team:
        """Get a team with its full roster

        Raises:
            NotFoundError: If no such team
        """
        pass


class UserRepository(ABC):
    """Storage operations over users"""

    @abstractmethod
    def upsert(self, user: User) -> None:
        """Create the user or overwrite username, team and active flag"""
        pass

    @abstractmethod
    def get_by_id(self, user_id: str) -> User:
        """Get user by id

        Raises:
            NotFoundError: If no such user
        """
        pass

    @abstractmethod
    def list_by_team(self, team_name: str) -> List[User]:
        """All members of a team in stable roster order (may be empty)"""
        pass

    @abstractmethod
    def update_is_active(self, user_id: str, is_active: bool) -> User:
        """Set the active flag and return the updated user

        Raises:
            NotFoundError: If no such user
        """
        pass

    @abstractmethod
    def bulk_deactivate_in_team(self, team_name: str, user_ids: Sequence[str]) -> int:
        """Deactivate the given members of a team

        Returns:
            Number of users that actually changed from active to inactive
        """
        pass


class PullRequestRepository(ABC):
    """Storage operations over pull requests (reviewers are not loaded)"""

    @abstractmethod
    def exists(self, pull_request_id: str) -> bool:
        pass

    @abstractmethod
    def create(self, pull_request: PullRequest) -> PullRequest:
        """Insert the pull request row and return it with its timestamps"""
        pass

    @abstractmethod
    def get(self, pull_request_id: str) -> PullRequest:
        """Get pull request by id

        Raises:
            NotFoundError: If no such pull request
        """
        pass

    @abstractmethod
    def mark_merged(self, pull_request_id: str) -> None:
        """Set status MERGED; merged_at is stamped only on the first merge

        Raises:
            NotFoundError: If no such pull request
        """
        pass

    @abstractmethod
    def list_by_reviewer(self, reviewer_id: str) -> List[PullRequest]:
        """Pull requests where the user is a reviewer, newest first"""
        pass

    @abstractmethod
    def list_open_by_any_reviewer(self, reviewer_ids: Sequence[str]) -> List[PullRequest]:
        """Open pull requests having at least one of the given reviewers"""
        pass


class ReviewerAssignmentRepository(ABC):
    """Storage operations over the pull request <-> reviewer relation"""

    @abstractmethod
    def reviewers_of(self, pull_request_id: str) -> List[str]:
        """Reviewer ids of a pull request, sorted"""
        pass

    @abstractmethod
    def add(self, assignment: ReviewerAssignment) -> None:
        """Insert the edge; no-op if it already exists"""
        pass

    @abstractmethod
    def remove(self, assignment: ReviewerAssignment) -> None:
        """Delete the edge; no-op if it doesn't exist"""
        pass

    @abstractmethod
    def stats_by_reviewer(self) -> List[AssignmentStats]:
        """Edge counts per reviewer, count descending then id ascending"""
        pass

    @abstractmethod
    def stats_by_pull_request(self) -> List[PullRequestAssignmentStats]:
        """Edge counts per pull request, count descending then id ascending"""
        pass
