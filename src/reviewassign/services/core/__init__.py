"""Core services - Foundational services providing basic operations."""
from reviewassign.services.core.candidate_selector import CandidateSelector
from reviewassign.services.core.pr_service import PRService
from reviewassign.services.core.team_service import TeamService
from reviewassign.services.core.user_service import UserService

__all__ = [
    "CandidateSelector",
    "PRService",
    "TeamService",
    "UserService",
]
