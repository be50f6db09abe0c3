"""Common pytest fixtures for reviewassign tests

This module provides shared fixtures used across the test suite.
Fixtures are organized by category: storage, selection, and seeded data.
"""

import random
from datetime import datetime, timedelta, timezone

import pytest

from reviewassign.infrastructure.database import Database
from reviewassign.services.core.candidate_selector import CandidateSelector
from tests.builders import TeamBuilder


# ==============================================================================
# Storage Fixtures
# ==============================================================================


class StepClock:
    """Clock that advances one second per call, so created_at values are ordered"""

    def __init__(self, start=None):
        self.current = start or datetime(2025, 1, 15, 10, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        self.current = self.current + timedelta(seconds=1)
        return self.current


@pytest.fixture
def clock():
    """Fixture providing a deterministic, strictly increasing clock"""
    return StepClock()


@pytest.fixture
def database(tmp_path, clock):
    """Fixture providing an initialized SQLite database in a temporary file

    Returns:
        Database with the schema applied
    """
    db = Database(str(tmp_path / "reviewassign.db"), busy_timeout_seconds=1.0, clock=clock)
    db.initialize()
    yield db
    db.close()


# ==============================================================================
# Selection Fixtures
# ==============================================================================


@pytest.fixture
def selector():
    """Fixture providing a selector with a seeded random source"""
    return CandidateSelector(random.Random(1234))


# ==============================================================================
# Seeded Data Fixtures
# ==============================================================================


@pytest.fixture
def seed_team(database):
    """Fixture returning a helper that stores a team built with TeamBuilder

    Example:
        seed_team(TeamBuilder("backend").with_members("a", "b", "c"))
    """
    from reviewassign.services.core.team_service import TeamService

    def _seed(builder: TeamBuilder):
        return TeamService(database).create_team(builder.build())

    return _seed


@pytest.fixture
def backend_team(seed_team):
    """Fixture providing team "backend" with active members A, B, C, D"""
    return seed_team(TeamBuilder("backend").with_members("A", "B", "C", "D"))
