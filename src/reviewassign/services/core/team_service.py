"""Core service for team management.

Follows Service Layer pattern (Fowler, PoEAA) - encapsulates business logic
for registering teams and their members.
"""

import logging
from typing import Optional

from reviewassign.domain.exceptions import TeamExistsError
from reviewassign.domain.models import Team, User
from reviewassign.infrastructure.cancellation import CancellationToken
from reviewassign.infrastructure.database import Database

logger = logging.getLogger(__name__)


class TeamService:
    """Core service for team operations."""

    def __init__(self, database: Database):
        self.database = database

    def create_team(self, team: Team, token: Optional[CancellationToken] = None) -> Team:
        """Create a team and upsert all of its members

        Members that already exist elsewhere move to this team with the
        username and active flag given here.

        Args:
            team: Team with its members
            token: Optional cancellation token

        Returns:
            Stored team with its roster

        Raises:
            TeamExistsError: If the team name is taken
            StorageError: If the database fails
        """
        with self.database.unit_of_work(token) as uow:
            if uow.teams.exists(team.name):
                raise TeamExistsError(team.name)

            uow.teams.create(team.name)
            for member in team.members:
                uow.users.upsert(
                    User(
                        user_id=member.user_id,
                        username=member.username,
                        team_name=team.name,
                        is_active=member.is_active,
                    )
                )

            created = uow.teams.get(team.name)

        logger.info("Created team %s with %d member(s)", created.name, len(created.members))
        return created

    def get_team(self, team_name: str, token: Optional[CancellationToken] = None) -> Team:
        """Get a team with its members

        Raises:
            NotFoundError: If no such team
        """
        with self.database.unit_of_work(token) as uow:
            return uow.teams.get(team_name)
