"""
Repository Interfaces (Ports) for the Training Progression API.

This package defines abstract interfaces that decouple the progression
engine from infrastructure (database, external services). Implementations
are provided in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the application needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import WorkoutHistoryRepository, ProfileXPRepository

    class CompleteWorkoutUseCase:
        def __init__(self, history_repo: WorkoutHistoryRepository, xp_repo: ProfileXPRepository):
            self._history_repo = history_repo
            self._xp_repo = xp_repo
"""

from application.ports.errors import RepositoryError

# Append-only session log
from application.ports.workout_history_repository import WorkoutHistoryRepository

# Profile XP counter
from application.ports.profile_xp_repository import ProfileXPRepository

__all__ = [
    "RepositoryError",
    "WorkoutHistoryRepository",
    "ProfileXPRepository",
]
