"""SQLite storage: schema, connections and the per-operation unit of work

Every top-level engine operation runs inside one UnitOfWork: one connection,
one transaction opened with BEGIN IMMEDIATE. SQLite grants the database write
lock at BEGIN IMMEDIATE, so the reads an operation makes before writing cannot
interleave with another writer's changes.
"""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Iterator, Optional, Sequence

from reviewassign.domain.exceptions import StorageError
from reviewassign.infrastructure.cancellation import CancellationToken
from reviewassign.infrastructure.repositories.sqlite_repositories import (
    SQLitePullRequestRepository,
    SQLiteReviewerAssignmentRepository,
    SQLiteTeamRepository,
    SQLiteUserRepository,
)

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"

SCHEMA = """
CREATE TABLE IF NOT EXISTS teams (
    team_name   TEXT PRIMARY KEY,
    created_at  TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS users (
    user_id     TEXT PRIMARY KEY,
    username    TEXT NOT NULL,
    team_name   TEXT NOT NULL REFERENCES teams(team_name),
    is_active   INTEGER NOT NULL DEFAULT 1,
    updated_at  TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_users_team_active ON users(team_name, is_active);

CREATE TABLE IF NOT EXISTS pull_requests (
    pull_request_id    TEXT PRIMARY KEY,
    pull_request_name  TEXT NOT NULL,
    author_id          TEXT NOT NULL REFERENCES users(user_id),
    status             TEXT NOT NULL DEFAULT 'OPEN' CHECK (status IN ('OPEN', 'MERGED')),
    created_at         TEXT NOT NULL,
    merged_at          TEXT
);

CREATE INDEX IF NOT EXISTS idx_pull_requests_status ON pull_requests(status);

CREATE TABLE IF NOT EXISTS pr_reviewers (
    pull_request_id  TEXT NOT NULL REFERENCES pull_requests(pull_request_id) ON DELETE CASCADE,
    reviewer_id      TEXT NOT NULL REFERENCES users(user_id),
    PRIMARY KEY (pull_request_id, reviewer_id)
);

CREATE INDEX IF NOT EXISTS idx_pr_reviewers_reviewer ON pr_reviewers(reviewer_id);
"""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class UnitOfWork:
    """One transaction against the database, with repositories bound to it

    Repositories never touch the connection directly; they go through
    execute() so that the cancellation token is honoured before every
    statement.
    """

    def __init__(
        self,
        connection: sqlite3.Connection,
        token: Optional[CancellationToken] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.connection = connection
        self.token = token
        self.clock = clock
        self.teams = SQLiteTeamRepository(self)
        self.users = SQLiteUserRepository(self)
        self.pull_requests = SQLitePullRequestRepository(self)
        self.assignments = SQLiteReviewerAssignmentRepository(self)

    def execute(self, sql: str, params: Sequence = ()) -> sqlite3.Cursor:
        """Run one statement after checking the cancellation token

        Raises:
            OperationCancelledError: If the token was cancelled or expired
            sqlite3.Error: If the statement fails (wrapped by Database)
        """
        if self.token is not None:
            self.token.raise_if_cancelled()
        return self.connection.execute(sql, params)

    def now(self) -> datetime:
        return self.clock()

    def begin(self) -> None:
        self.execute("BEGIN IMMEDIATE")

    def commit(self) -> None:
        self.connection.execute("COMMIT")

    def rollback(self) -> None:
        if self.connection.in_transaction:
            self.connection.execute("ROLLBACK")


class Database:
    """Hands out units of work against one SQLite database

    A file database gets a fresh connection per unit of work. The special
    ":memory:" path keeps one shared connection (a new in-memory connection
    would be a new, empty database), serialised by a lock.
    """

    def __init__(
        self,
        path: str,
        busy_timeout_seconds: float = 5.0,
        clock: Callable[[], datetime] = utc_now,
    ):
        """Initialize database handle

        Args:
            path: SQLite file path or ":memory:"
            busy_timeout_seconds: How long to wait for the write lock
            clock: Source of timestamps for created_at / merged_at
        """
        self.path = path
        self.busy_timeout_seconds = busy_timeout_seconds
        self.clock = clock
        self._shared: Optional[sqlite3.Connection] = None
        self._shared_lock = threading.RLock()

    # Public API methods

    def initialize(self) -> None:
        """Create tables and indexes if they don't exist

        Raises:
            StorageError: If the schema cannot be applied
        """
        try:
            connection = self._acquire()
            try:
                connection.executescript(SCHEMA)
            finally:
                self._release(connection)
        except sqlite3.Error as e:
            raise StorageError(f"Failed to initialize schema in {self.path}: {e}") from e
        logger.debug("Schema ready in %s", self.path)

    @contextmanager
    def unit_of_work(self, token: Optional[CancellationToken] = None) -> Iterator[UnitOfWork]:
        """Open a transaction and yield repositories bound to it

        Commits when the block finishes, rolls back when it raises. SQLite
        failures are re-raised as StorageError; everything else propagates
        unchanged.
        The wait for the write lock never outlasts the token deadline.

        Args:
            token: Optional cancellation token checked before each statement

        Yields:
            UnitOfWork with teams, users, pull_requests and assignments

        Raises:
            StorageError: If the database fails
            OperationCancelledError: If the token is cancelled mid-operation
        """
        try:
            connection = self._acquire(self._lock_timeout(token))
        except sqlite3.Error as e:
            raise StorageError(f"Failed to open database {self.path}: {e}") from e

        uow = UnitOfWork(connection, token, self.clock)
        try:
            try:
                uow.begin()
                yield uow
                uow.commit()
            except sqlite3.Error as e:
                self._rollback_quietly(uow)
                raise StorageError(f"Database operation failed: {e}") from e
            except BaseException:
                self._rollback_quietly(uow)
                raise
        finally:
            self._release(connection)

    def close(self) -> None:
        """Close the shared in-memory connection, if any"""
        if self._shared is not None:
            self._shared.close()
            self._shared = None

    # Private helper methods

    def _lock_timeout(self, token: Optional[CancellationToken]) -> float:
        """Busy timeout for one unit of work, capped by the token deadline"""
        remaining = token.remaining() if token is not None else None
        if remaining is None:
            return self.busy_timeout_seconds
        return min(self.busy_timeout_seconds, remaining)

    def _connect(self, timeout: Optional[float] = None) -> sqlite3.Connection:
        connection = sqlite3.connect(
            self.path,
            timeout=self.busy_timeout_seconds if timeout is None else timeout,
            isolation_level=None,
            check_same_thread=False,
        )
        connection.row_factory = sqlite3.Row
        connection.execute("PRAGMA foreign_keys = ON")
        return connection

    def _acquire(self, timeout: Optional[float] = None) -> sqlite3.Connection:
        if self.path != MEMORY_DATABASE:
            return self._connect(timeout)

        self._shared_lock.acquire()
        try:
            if self._shared is None:
                self._shared = self._connect()
        except BaseException:
            self._shared_lock.release()
            raise
        return self._shared

    def _release(self, connection: sqlite3.Connection) -> None:
        if self.path != MEMORY_DATABASE:
            connection.close()
            return
        self._shared_lock.release()

    @staticmethod
    def _rollback_quietly(uow: UnitOfWork) -> None:
        try:
            uow.rollback()
        except sqlite3.Error as e:
            logger.warning("Rollback failed: %s", e)
