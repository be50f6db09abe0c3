"""Service Layer - Organized by architectural role

Core: Foundational services providing basic operations
Composite: Higher-level orchestration services that use several repositories
"""
# Re-export all services for convenience
from reviewassign.services.core import (
    CandidateSelector,
    PRService,
    TeamService,
    UserService,
)
from reviewassign.services.composite import (
    DeactivationService,
    StatisticsService,
)

__all__ = [
    # Core
    "CandidateSelector",
    "PRService",
    "TeamService",
    "UserService",
    # Composite
    "DeactivationService",
    "StatisticsService",
]
