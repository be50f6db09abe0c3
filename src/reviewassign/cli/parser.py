"""
CLI Argument Parser

This module handles command-line argument parsing for reviewassign.
"""

import argparse


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in ("true", "1", "yes"):
        return True
    if normalized in ("false", "0", "no"):
        return False
    raise argparse.ArgumentTypeError(f"Expected true or false, got '{value}'")


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser for the reviewassign CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="reviewassign - Reviewer assignment for team pull requests"
    )
    parser.add_argument(
        "--config",
        help="Path to YAML configuration file (default: $REVIEWASSIGN_CONFIG)"
    )
    parser.add_argument(
        "--db-path",
        help="SQLite database path (overrides configuration)"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Abort the operation after this many seconds"
    )
    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    subparsers.add_parser(
        "init-db",
        help="Create the database schema"
    )

    # Teams
    parser_team_add = subparsers.add_parser(
        "team-add",
        help="Create a team and upsert its members"
    )
    team_source = parser_team_add.add_mutually_exclusive_group(required=True)
    team_source.add_argument(
        "--file",
        help="JSON or YAML file with team_name and members"
    )
    team_source.add_argument(
        "--payload",
        help="Inline JSON with team_name and members"
    )
    parser_team_get = subparsers.add_parser(
        "team-get",
        help="Show a team and its members"
    )
    parser_team_get.add_argument("--team-name", required=True)
    parser_team_deactivate = subparsers.add_parser(
        "team-deactivate",
        help="Deactivate team members and reassign their open reviews"
    )
    parser_team_deactivate.add_argument("--team-name", required=True)
    parser_team_deactivate.add_argument(
        "--user-id",
        action="append",
        default=[],
        dest="user_ids",
        help="Member to deactivate (repeatable)"
    )

    # Users
    parser_set_active = subparsers.add_parser(
        "user-set-active",
        help="Set a user's active flag"
    )
    parser_set_active.add_argument("--user-id", required=True)
    parser_set_active.add_argument(
        "--active",
        type=_parse_bool,
        required=True,
        help="true or false"
    )
    parser_get_review = subparsers.add_parser(
        "user-get-review",
        help="List pull requests a user reviews"
    )
    parser_get_review.add_argument("--user-id", required=True)

    # Pull requests
    parser_pr_create = subparsers.add_parser(
        "pr-create",
        help="Create a pull request and assign reviewers"
    )
    parser_pr_create.add_argument("--pr-id", required=True)
    parser_pr_create.add_argument("--name", required=True)
    parser_pr_create.add_argument("--author-id", required=True)
    parser_pr_merge = subparsers.add_parser(
        "pr-merge",
        help="Mark a pull request as merged (idempotent)"
    )
    parser_pr_merge.add_argument("--pr-id", required=True)
    parser_pr_reassign = subparsers.add_parser(
        "pr-reassign",
        help="Replace one reviewer of an open pull request"
    )
    parser_pr_reassign.add_argument("--pr-id", required=True)
    parser_pr_reassign.add_argument("--old-reviewer-id", required=True)

    # Statistics
    parser_stats = subparsers.add_parser(
        "stats",
        help="Show assignment counts per reviewer and per pull request"
    )
    parser_stats.add_argument(
        "--view",
        choices=["all", "reviewers", "pull-requests"],
        default="all",
        help="Which statistics to show (default: all)"
    )

    return parser
