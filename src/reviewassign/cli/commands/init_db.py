"""CLI command that creates the database schema."""

from reviewassign.cli.errors import report_error
from reviewassign.domain.exceptions import ReviewAssignmentError
from reviewassign.infrastructure.console import ConsoleWriter
from reviewassign.infrastructure.database import Database


def cmd_init_db(output: ConsoleWriter, database: Database) -> int:
    """Create tables and indexes (safe to run repeatedly)"""
    try:
        database.initialize()
    except ReviewAssignmentError as e:
        return report_error(output, e)

    output.set_notice(f"Schema ready in {database.path}")
    output.write_json({"status": "ok", "database_path": database.path})
    return 0
