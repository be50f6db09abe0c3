"""Custom exceptions for reviewer assignment operations"""


class ReviewAssignmentError(Exception):
    """Base exception for reviewer assignment operations"""
    pass


class AlreadyExistsError(ReviewAssignmentError):
    """Entity identifier collision"""
    pass


class TeamExistsError(AlreadyExistsError):
    """Team name already taken"""

    def __init__(self, team_name: str):
        self.team_name = team_name
        super().__init__(f"Team '{team_name}' already exists")


class PRExistsError(AlreadyExistsError):
    """Pull request id already taken"""

    def __init__(self, pull_request_id: str):
        self.pull_request_id = pull_request_id
        super().__init__(f"Pull request '{pull_request_id}' already exists")


class NotFoundError(ReviewAssignmentError):
    """Unknown team, user or pull request"""

    def __init__(self, resource: str, identifier: str = ""):
        self.resource = resource
        self.identifier = identifier
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} '{identifier}' not found"
        super().__init__(message)


class PRMergedError(ReviewAssignmentError):
    """Reviewer change attempted on a merged pull request"""

    def __init__(self, pull_request_id: str):
        self.pull_request_id = pull_request_id
        super().__init__(f"Pull request '{pull_request_id}' is merged")


class NotAssignedError(ReviewAssignmentError):
    """Reassignment target is not a current reviewer"""

    def __init__(self, pull_request_id: str, reviewer_id: str):
        self.pull_request_id = pull_request_id
        self.reviewer_id = reviewer_id
        super().__init__(
            f"User '{reviewer_id}' is not assigned to pull request '{pull_request_id}'"
        )


class NoCandidateError(ReviewAssignmentError):
    """Replacement pool exhausted"""
    pass


class ConfigurationError(ReviewAssignmentError):
    """Configuration file issues"""
    pass


class ConfigurationFileNotFoundError(ConfigurationError):
    """Missing configuration file"""
    pass


class StorageError(ReviewAssignmentError):
    """Underlying storage failures"""
    pass


class OperationCancelledError(StorageError):
    """Operation aborted by cancellation or deadline"""
    pass


class InvalidPayloadError(ReviewAssignmentError):
    """Malformed input document"""
    pass
