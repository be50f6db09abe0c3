"""Domain constants for the reviewer assignment engine.

Defines application-wide default values and constants that are reusable
across different layers of the application.
"""

# Maximum reviewers picked for a newly created pull request
DEFAULT_MAX_REVIEWERS = 2

# Default SQLite database file
DEFAULT_DATABASE_PATH = "reviewassign.db"

# Default log level for the CLI
DEFAULT_LOG_LEVEL = "INFO"

# Seconds a connection waits on a locked database before failing
DEFAULT_BUSY_TIMEOUT_SECONDS = 5.0

# Environment variable names read by the configuration loader
ENV_DATABASE_PATH = "REVIEWASSIGN_DB_PATH"
ENV_MAX_REVIEWERS = "REVIEWASSIGN_MAX_REVIEWERS"
ENV_LOG_LEVEL = "REVIEWASSIGN_LOG_LEVEL"
ENV_BUSY_TIMEOUT = "REVIEWASSIGN_BUSY_TIMEOUT"
ENV_RANDOM_SEED = "REVIEWASSIGN_RANDOM_SEED"
ENV_CONFIG_PATH = "REVIEWASSIGN_CONFIG"
