"""
Domain layer for the Training Progression API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    ExercisePerformance,
    SetRecord,
    WorkoutSession,
)

__all__ = [
    "ExercisePerformance",
    "SetRecord",
    "WorkoutSession",
]
