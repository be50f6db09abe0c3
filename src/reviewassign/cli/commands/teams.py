"""CLI commands for team management and bulk deactivation.

Commands instantiate services and coordinate their operations but do not
implement business logic directly.
"""

import os
from typing import List, Optional

import yaml

from reviewassign.cli.errors import report_error
from reviewassign.domain.exceptions import InvalidPayloadError, ReviewAssignmentError
from reviewassign.domain.models import Team
from reviewassign.infrastructure.cancellation import CancellationToken
from reviewassign.infrastructure.console import ConsoleWriter
from reviewassign.infrastructure.database import Database
from reviewassign.services.composite.deactivation_service import DeactivationService
from reviewassign.services.core.team_service import TeamService


def parse_team_payload(content: str, source_name: str = "payload") -> Team:
    """Parse a team document (JSON or YAML)

    Args:
        content: Document text with team_name and a members list
        source_name: Name of the source (for error messages)

    Returns:
        Team domain model

    Raises:
        InvalidPayloadError: If the document is malformed
    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise InvalidPayloadError(f"Invalid document in {source_name}: {e}")

    if not isinstance(data, dict) or not data.get("team_name"):
        raise InvalidPayloadError(f"{source_name} must be a mapping with a team_name")

    members = data.get("members", [])
    if not isinstance(members, list):
        raise InvalidPayloadError(f"members in {source_name} must be a list")
    for member in members:
        if not isinstance(member, dict) or not member.get("user_id"):
            raise InvalidPayloadError(f"Every member in {source_name} needs a user_id")
        if "is_active" in member and not isinstance(member["is_active"], bool):
            raise InvalidPayloadError(f"is_active in {source_name} must be true or false")

    return Team.from_dict(data)


def cmd_team_add(
    output: ConsoleWriter,
    database: Database,
    payload: Optional[str] = None,
    file_path: Optional[str] = None,
    token: Optional[CancellationToken] = None,
) -> int:
    """Create a team from an inline payload or a file

    Args:
        output: Console writer
        database: Database handle
        payload: Inline JSON/YAML document
        file_path: Path to a JSON/YAML document (used when payload is empty)
        token: Optional cancellation token

    Returns:
        Exit code (0 for success)
    """
    try:
        if payload:
            team = parse_team_payload(payload)
        else:
            if not file_path or not os.path.exists(file_path):
                raise InvalidPayloadError(f"File not found: {file_path}")
            with open(file_path, "r", encoding="utf-8") as f:
                team = parse_team_payload(f.read(), file_path)

        created = TeamService(database).create_team(team, token)
    except ReviewAssignmentError as e:
        return report_error(output, e)

    output.write_json({"team": created.to_dict()})
    return 0


def cmd_team_get(
    output: ConsoleWriter,
    database: Database,
    team_name: str,
    token: Optional[CancellationToken] = None,
) -> int:
    """Print a team with its members"""
    try:
        team = TeamService(database).get_team(team_name, token)
    except ReviewAssignmentError as e:
        return report_error(output, e)

    output.write_json(team.to_dict())
    return 0


def cmd_team_deactivate(
    output: ConsoleWriter,
    database: Database,
    team_name: str,
    user_ids: List[str],
    token: Optional[CancellationToken] = None,
) -> int:
    """Deactivate team members and repair their open reviews

    Args:
        output: Console writer
        database: Database handle
        team_name: Team whose members are deactivated
        user_ids: Members to deactivate
        token: Optional cancellation token

    Returns:
        Exit code (0 for success)
    """
    try:
        result = DeactivationService(database).bulk_deactivate_team(team_name, user_ids, token)
    except ReviewAssignmentError as e:
        return report_error(output, e)

    output.write_json(result.to_dict())
    return 0
