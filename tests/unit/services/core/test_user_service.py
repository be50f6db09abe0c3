"""Unit tests for UserService"""

import pytest

from reviewassign.domain.exceptions import NotFoundError
from reviewassign.services.core.pr_service import PRService
from reviewassign.services.core.user_service import UserService


class TestSetIsActive:
    """Tests for set_is_active"""

    def test_toggles_flag(self, database, backend_team):
        """Should return the updated user"""
        # Act
        user = UserService(database).set_is_active("B", False)

        # Assert
        assert user.user_id == "B"
        assert user.is_active is False
        assert UserService(database).set_is_active("B", True).is_active is True

    def test_unknown_user_raises(self, database):
        """Should raise NotFoundError for unknown users"""
        with pytest.raises(NotFoundError, match="User 'ghost'"):
            UserService(database).set_is_active("ghost", False)

    def test_does_not_touch_open_reviews(self, database, selector, backend_team):
        """Deactivating one user should keep their existing reviews"""
        # Arrange
        pr = PRService(database, selector=selector, max_reviewers=3).create_pr("1", "Change", "A")

        # Act
        UserService(database).set_is_active("B", False)

        # Assert
        with database.unit_of_work() as uow:
            assert uow.assignments.reviewers_of("1") == pr.assigned_reviewers == ["B", "C", "D"]


class TestGetReviewPRs:
    """Tests for get_review_prs"""

    def test_lists_pull_requests_newest_first(self, database, selector, backend_team):
        """Should return every PR the user reviews, newest first"""
        # Arrange
        service = PRService(database, selector=selector, max_reviewers=3)
        service.create_pr("1", "First", "A")
        service.create_pr("2", "Second", "A")
        service.merge_pr("1")

        # Act
        prs = UserService(database).get_review_prs("B")

        # Assert
        assert [pr.pull_request_id for pr in prs] == ["2", "1"]
        assert prs[1].is_merged()
        assert prs[0].assigned_reviewers == []

    def test_user_without_reviews(self, database, backend_team):
        """Should return an empty list"""
        assert UserService(database).get_review_prs("A") == []

    def test_unknown_user_raises(self, database):
        """Should raise NotFoundError for unknown users"""
        with pytest.raises(NotFoundError):
            UserService(database).get_review_prs("ghost")
