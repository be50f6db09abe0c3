"""End-to-end tests for the command-line entry point against a real database"""

import json

import pytest

from reviewassign.__main__ import main
from reviewassign.services.core import candidate_selector


def _run(capsys, db_path, *argv):
    status = main(["--db-path", str(db_path), *argv])
    document = json.loads(capsys.readouterr().out)
    return status, document


@pytest.fixture(autouse=True)
def fresh_selector(monkeypatch):
    """Each test starts without a shared selector"""
    monkeypatch.setattr(candidate_selector, "_default_selector", None)


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    """Fixture providing a database path and a clean REVIEWASSIGN_* environment"""
    for name in ("REVIEWASSIGN_CONFIG", "REVIEWASSIGN_DB_PATH", "REVIEWASSIGN_MAX_REVIEWERS",
                 "REVIEWASSIGN_LOG_LEVEL", "REVIEWASSIGN_BUSY_TIMEOUT", "REVIEWASSIGN_RANDOM_SEED"):
        monkeypatch.delenv(name, raising=False)
    return tmp_path / "reviewassign.db"


TEAM_T = json.dumps({
    "team_name": "T",
    "members": [
        {"user_id": "A", "username": "alice"},
        {"user_id": "B", "username": "bob"},
        {"user_id": "C", "username": "carol"},
    ],
})


class TestMain:
    """Test suite for main() routing and output"""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_init_db(self, capsys, db_path):
        status, document = _run(capsys, db_path, "init-db")
        assert status == 0
        assert document == {"status": "ok", "database_path": str(db_path)}
        assert db_path.exists()

    def test_review_lifecycle(self, capsys, db_path):
        """Create team, create PR, reassign, merge and read statistics"""
        # Arrange
        status, team = _run(capsys, db_path, "team-add", "--payload", TEAM_T)
        assert status == 0
        assert [m["user_id"] for m in team["team"]["members"]] == ["A", "B", "C"]

        # Act
        status, created = _run(
            capsys, db_path, "pr-create", "--pr-id", "1", "--name", "Add search", "--author-id", "A"
        )

        # Assert
        assert status == 0
        assert created["pr"]["assigned_reviewers"] == ["B", "C"]

        status, error = _run(capsys, db_path, "pr-reassign", "--pr-id", "1", "--old-reviewer-id", "B")
        assert status == 1
        assert error["error"]["code"] == "NO_CANDIDATE"

        status, merged = _run(capsys, db_path, "pr-merge", "--pr-id", "1")
        assert status == 0
        assert merged["pr"]["status"] == "MERGED"

        status, again = _run(capsys, db_path, "pr-merge", "--pr-id", "1")
        assert again["pr"]["mergedAt"] == merged["pr"]["mergedAt"]

        status, error = _run(capsys, db_path, "pr-reassign", "--pr-id", "1", "--old-reviewer-id", "B")
        assert error["error"]["code"] == "PR_MERGED"

        status, reviews = _run(capsys, db_path, "user-get-review", "--user-id", "B")
        assert reviews["pull_requests"][0]["pull_request_id"] == "1"

        status, stats = _run(capsys, db_path, "stats")
        assert stats["total_assignments"] == 2
        assert stats["by_pull_request"] == [{"pull_request_id": "1", "count": 2}]

        status, reviewers = _run(capsys, db_path, "stats", "--view", "reviewers")
        assert reviewers == {"by_reviewer": [
            {"reviewer_id": "B", "count": 1},
            {"reviewer_id": "C", "count": 1},
        ]}

    def test_team_deactivate(self, capsys, db_path):
        """Deactivating both reviewers should empty the pull request"""
        # Arrange
        _run(capsys, db_path, "team-add", "--payload", TEAM_T)
        _run(capsys, db_path, "pr-create", "--pr-id", "1", "--name", "x", "--author-id", "A")

        # Act
        status, result = _run(
            capsys, db_path, "team-deactivate", "--team-name", "T", "--user-id", "B", "--user-id", "C"
        )

        # Assert
        assert status == 0
        assert result == {"team_name": "T", "deactivated_users": 2, "affected_prs": 1}
        _, team = _run(capsys, db_path, "team-get", "--team-name", "T")
        assert [m["is_active"] for m in team["members"]] == [True, False, False]

    def test_user_set_active(self, capsys, db_path):
        _run(capsys, db_path, "team-add", "--payload", TEAM_T)
        status, document = _run(capsys, db_path, "user-set-active", "--user-id", "B", "--active", "false")
        assert status == 0
        assert document["user"]["is_active"] is False

    def test_domain_errors_exit_with_one(self, capsys, db_path):
        status, document = _run(capsys, db_path, "team-get", "--team-name", "nope")
        assert status == 1
        assert document["error"]["code"] == "NOT_FOUND"

    def test_invalid_config_exits_with_two(self, capsys, db_path, tmp_path):
        # Arrange
        config_file = tmp_path / "reviewassign.yml"
        config_file.write_text("maxReviewers: -3\n")

        # Act
        status = main(["--config", str(config_file), "--db-path", str(db_path), "init-db"])

        # Assert
        assert status == 2
        assert json.loads(capsys.readouterr().out)["error"]["code"] == "INTERNAL"

    def test_max_reviewers_from_environment(self, capsys, db_path, monkeypatch):
        # Arrange
        monkeypatch.setenv("REVIEWASSIGN_MAX_REVIEWERS", "1")
        _run(capsys, db_path, "team-add", "--payload", TEAM_T)

        # Act
        status, created = _run(capsys, db_path, "pr-create", "--pr-id", "1", "--name", "x", "--author-id", "A")

        # Assert
        assert status == 0
        assert len(created["pr"]["assigned_reviewers"]) == 1

    def test_expired_timeout_is_internal_error(self, capsys, db_path):
        status, document = _run(capsys, db_path, "--timeout", "0", "team-get", "--team-name", "T")
        assert status == 2
        assert document["error"]["message"] == "Operation deadline exceeded"
