"""Test data builders for reviewassign tests

This module provides builder pattern helpers for creating complex test data.
Builders simplify test setup and improve readability by providing fluent interfaces
with sensible defaults.

Example usage:
    team = TeamBuilder("backend")
        .with_members("alice", "bob")
        .with_inactive_member("carol")
        .build()
"""

from tests.builders.pull_request_builder import PullRequestBuilder
from tests.builders.team_builder import TeamBuilder

__all__ = [
    "PullRequestBuilder",
    "TeamBuilder",
]
