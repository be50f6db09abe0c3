"""Unit tests for reviewer assignment domain models"""

from datetime import datetime, timezone

import pytest

from reviewassign.domain.exceptions import PRMergedError
from reviewassign.domain.models import (
    AssignmentReport,
    AssignmentStats,
    BulkDeactivateResult,
    PRStatus,
    PullRequest,
    PullRequestAssignmentStats,
    ReviewerAssignment,
    Team,
    User,
    ids_of,
)
from tests.builders import PullRequestBuilder, TeamBuilder


class TestPRStatus:
    """Test suite for PRStatus parsing"""

    def test_from_string_is_case_insensitive(self):
        """Should parse stored and lowercase values"""
        assert PRStatus.from_string("OPEN") == PRStatus.OPEN
        assert PRStatus.from_string("merged") == PRStatus.MERGED

    def test_from_string_rejects_unknown_status(self):
        """Should raise ValueError for unknown statuses"""
        with pytest.raises(ValueError, match="Invalid pull request status"):
            PRStatus.from_string("closed")


class TestUser:
    """Test suite for User model"""

    def test_from_dict_defaults(self):
        """Should default username to the id and is_active to True"""
        # Act
        user = User.from_dict({"user_id": "u1"}, team_name="backend")

        # Assert
        assert user.user_id == "u1"
        assert user.username == "u1"
        assert user.team_name == "backend"
        assert user.is_active is True

    def test_to_dict(self):
        """Should render all fields"""
        user = User("u1", "alice", "backend", False)
        assert user.to_dict() == {
            "user_id": "u1",
            "username": "alice",
            "team_name": "backend",
            "is_active": False,
        }


class TestTeam:
    """Test suite for Team model and roster predicates"""

    def test_from_dict_forces_team_name_on_members(self):
        """Members should belong to the parsed team whatever their payload says"""
        # Arrange
        data = {
            "team_name": "backend",
            "members": [
                {"user_id": "a", "username": "Alice", "team_name": "frontend"},
                {"user_id": "b", "username": "Bob", "is_active": False},
            ],
        }

        # Act
        team = Team.from_dict(data)

        # Assert
        assert team.name == "backend"
        assert [m.team_name for m in team.members] == ["backend", "backend"]
        assert team.members[1].is_active is False

    def test_active_members_keeps_roster_order(self):
        """Should filter inactive members and keep order"""
        # Arrange
        team = TeamBuilder().with_members("A", "B").with_inactive_member("C").with_members("D").build()

        # Act & Assert
        assert ids_of(team.active_members()) == ["A", "B", "D"]

    def test_active_members_except_excludes_ids(self):
        """Should leave out the given ids and inactive members"""
        # Arrange
        team = TeamBuilder().with_members("A", "B", "C").with_inactive_member("D").build()

        # Act
        result = team.active_members_except("A", "C")

        # Assert
        assert ids_of(result) == ["B"]

    def test_active_members_except_without_ids(self):
        """Should behave like active_members when nothing is excluded"""
        team = TeamBuilder().with_members("A", "B").build()
        assert ids_of(team.active_members_except()) == ["A", "B"]

    def test_to_dict_renders_members(self):
        """Should render the team document shape"""
        team = TeamBuilder("backend").with_member("A", "alice").build()
        assert team.to_dict() == {
            "team_name": "backend",
            "members": [{"user_id": "A", "username": "alice", "is_active": True}],
        }


class TestPullRequest:
    """Test suite for PullRequest model"""

    def test_open_pull_request_can_be_reassigned(self):
        """Should return None for open pull requests"""
        pr = PullRequestBuilder().build()
        assert pr.is_open()
        assert pr.ensure_can_be_reassigned() is None

    def test_merged_pull_request_cannot_be_reassigned(self):
        """Should raise PRMergedError once merged"""
        pr = PullRequestBuilder().with_id("pr-7").merged().build()
        assert pr.is_merged()
        with pytest.raises(PRMergedError, match="pr-7"):
            pr.ensure_can_be_reassigned()

    def test_has_reviewer(self):
        """Should check the assigned reviewer list"""
        pr = PullRequestBuilder().with_reviewers("B", "C").build()
        assert pr.has_reviewer("B")
        assert not pr.has_reviewer("A")

    def test_to_dict_formats_timestamps(self):
        """Should render ISO timestamps and None when unset"""
        # Arrange
        pr = PullRequestBuilder().with_id("pr-1").with_reviewers("B").build()

        # Act
        result = pr.to_dict()

        # Assert
        assert result["pull_request_id"] == "pr-1"
        assert result["status"] == "OPEN"
        assert result["assigned_reviewers"] == ["B"]
        assert result["createdAt"] == "2025-01-15T10:00:00+00:00"
        assert result["mergedAt"] is None

    def test_to_short_dict_omits_reviewers(self):
        """Short form should not carry reviewers or timestamps"""
        pr = PullRequestBuilder().with_reviewers("B").build()
        assert set(pr.to_short_dict()) == {
            "pull_request_id", "pull_request_name", "author_id", "status",
        }


class TestReviewerAssignment:
    """Test suite for the relation value object"""

    def test_equal_pairs_are_the_same_edge(self):
        """Two assignments with the same ids should be equal and hash alike"""
        first = ReviewerAssignment("pr-1", "B")
        second = ReviewerAssignment("pr-1", "B")
        assert first == second
        assert len({first, second}) == 1

    def test_is_immutable(self):
        """Should not allow field changes"""
        edge = ReviewerAssignment("pr-1", "B")
        with pytest.raises(AttributeError):
            edge.reviewer_id = "C"


class TestResultModels:
    """Test suite for result and statistics models"""

    def test_bulk_deactivate_result_defaults_to_zero(self):
        """Should start with zero counts"""
        assert BulkDeactivateResult("backend").to_dict() == {
            "team_name": "backend",
            "deactivated_users": 0,
            "affected_prs": 0,
        }

    def test_assignment_report_totals(self):
        """Should sum reviewer counts into the total"""
        # Arrange
        report = AssignmentReport(
            by_reviewer=[AssignmentStats("B", 3), AssignmentStats("C", 2), AssignmentStats("D", 1)],
            by_pull_request=[PullRequestAssignmentStats("pr-1", 2)],
            generated_at=datetime(2025, 1, 15, tzinfo=timezone.utc),
        )

        # Act
        result = report.to_dict()

        # Assert
        assert report.total_assignments == 6
        assert result["total_assignments"] == 6
        assert result["by_pull_request"] == [{"pull_request_id": "pr-1", "count": 2}]
        assert result["generated_at"] == "2025-01-15T00:00:00+00:00"
