"""
Domain models for the Training Progression API.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the training log:
- WorkoutSession: One finished workout (immutable, append-only history)
- ExercisePerformance: One exercise's sets within a session
- SetRecord: One logged set (weight, reps, completed)

Usage:
    >>> from domain.models import WorkoutSession, ExercisePerformance, SetRecord

    >>> session = WorkoutSession(
    ...     date="2024-03-01T18:00:00Z",
    ...     exercises=[
    ...         ExercisePerformance(
    ...             exercise_name="Squat",
    ...             sets=[SetRecord(set_number=1, weight=100, reps=5, completed=True)],
    ...         )
    ...     ],
    ... )

    >>> # Serialize to JSON
    >>> json_str = session.model_dump_json(indent=2)

    >>> # Deserialize from JSON
    >>> session = WorkoutSession.model_validate_json(json_str)
"""

from domain.models.training import (
    ExercisePerformance,
    SetRecord,
    WorkoutSession,
    coerce_non_negative_float,
    coerce_non_negative_int,
)

__all__ = [
    "WorkoutSession",
    "ExercisePerformance",
    "SetRecord",
    "coerce_non_negative_float",
    "coerce_non_negative_int",
]
