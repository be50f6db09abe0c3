#!/usr/bin/env python3
"""
reviewassign - Reviewer assignment for team pull requests

Entry point for the reviewassign command-line tool.
Run with: python3 -m reviewassign <command>
"""

import sys
from typing import List, Optional

from reviewassign.cli.commands.init_db import cmd_init_db
from reviewassign.cli.commands.pull_requests import cmd_pr_create, cmd_pr_merge, cmd_pr_reassign
from reviewassign.cli.commands.statistics import cmd_stats
from reviewassign.cli.commands.teams import cmd_team_add, cmd_team_deactivate, cmd_team_get
from reviewassign.cli.commands.users import cmd_user_get_review, cmd_user_set_active
from reviewassign.cli.errors import report_error
from reviewassign.cli.parser import create_parser
from reviewassign.domain.config import configure_logging, load_app_config
from reviewassign.domain.exceptions import ReviewAssignmentError
from reviewassign.infrastructure.cancellation import CancellationToken
from reviewassign.infrastructure.console import ConsoleWriter
from reviewassign.infrastructure.database import Database
from reviewassign.services.core.candidate_selector import default_selector
from reviewassign.services.core.pr_service import PRService


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the script"""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    output = ConsoleWriter()

    try:
        config = load_app_config(args.config)
    except ReviewAssignmentError as e:
        return report_error(output, e)

    if args.db_path:
        config.database_path = args.db_path
    configure_logging(config.log_level)

    database = Database(config.database_path, config.busy_timeout_seconds)
    token = CancellationToken(args.timeout) if args.timeout is not None else None

    try:
        if args.command == "init-db":
            return cmd_init_db(output, database)

        database.initialize()
        pr_service = PRService(
            database,
            selector=default_selector(config.random_seed),
            max_reviewers=config.max_reviewers,
        )

        # Route to appropriate command handler
        if args.command == "team-add":
            return cmd_team_add(output, database, payload=args.payload, file_path=args.file, token=token)
        elif args.command == "team-get":
            return cmd_team_get(output, database, args.team_name, token=token)
        elif args.command == "team-deactivate":
            return cmd_team_deactivate(output, database, args.team_name, args.user_ids, token=token)
        elif args.command == "user-set-active":
            return cmd_user_set_active(output, database, args.user_id, args.active, token=token)
        elif args.command == "user-get-review":
            return cmd_user_get_review(output, database, args.user_id, token=token)
        elif args.command == "pr-create":
            return cmd_pr_create(output, pr_service, args.pr_id, args.name, args.author_id, token=token)
        elif args.command == "pr-merge":
            return cmd_pr_merge(output, pr_service, args.pr_id, token=token)
        elif args.command == "pr-reassign":
            return cmd_pr_reassign(output, pr_service, args.pr_id, args.old_reviewer_id, token=token)
        elif args.command == "stats":
            return cmd_stats(output, database, pr_service, view=args.view, token=token)
        else:
            print(f"Unknown command: {args.command}", file=sys.stderr)
            return 1
    except Exception as e:
        return report_error(output, e)
    finally:
        database.close()


if __name__ == "__main__":
    sys.exit(main())
