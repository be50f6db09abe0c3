"""Composite services - Higher-level orchestration services."""
from reviewassign.services.composite.deactivation_service import DeactivationService
from reviewassign.services.composite.statistics_service import StatisticsService

__all__ = [
    "DeactivationService",
    "StatisticsService",
]
