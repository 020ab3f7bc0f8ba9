"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeWorkoutHistoryRepository, make_session

    repo = FakeWorkoutHistoryRepository()
    repo.seed("user1", [make_session("2024-03-01", [("Bench Press", [(80, 10)])])])
"""
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple, Union

from domain.models.training import ExercisePerformance, SetRecord, WorkoutSession
from tests.fakes.workout_history_repository import FakeWorkoutHistoryRepository
from tests.fakes.profile_xp_repository import FakeProfileXPRepository


# =============================================================================
# Factory Functions
# =============================================================================


def make_sets(
    pairs: Sequence[Tuple[float, int]],
    *,
    completed: bool = True,
) -> List[SetRecord]:
    """Build numbered sets from (weight, reps) pairs."""
    return [
        SetRecord(set_number=i + 1, weight=weight, reps=reps, completed=completed)
        for i, (weight, reps) in enumerate(pairs)
    ]


def make_session(
    when: Union[str, datetime],
    exercises: Sequence[Tuple[str, Sequence[Tuple[float, int]]]],
    *,
    routine_name: Optional[str] = None,
    duration_minutes: int = 45,
    exercise_ids: Optional[Sequence[Optional[str]]] = None,
) -> WorkoutSession:
    """
    Build a finished session from compact test data.

    Args:
        when: ISO date/datetime string or datetime (UTC)
        exercises: [(exercise_name, [(weight, reps), ...]), ...], all sets completed
        routine_name: Optional routine name
        duration_minutes: Session length
        exercise_ids: Optional library ids, parallel to exercises

    Returns:
        WorkoutSession with total_volume computed from the sets
    """
    if isinstance(when, str):
        when = datetime.fromisoformat(when)
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)

    performances = [
        ExercisePerformance(
            exercise_name=name,
            exercise_id=exercise_ids[i] if exercise_ids else None,
            sets=make_sets(pairs),
        )
        for i, (name, pairs) in enumerate(exercises)
    ]
    return WorkoutSession(
        date=when,
        routine_name=routine_name,
        duration_minutes=duration_minutes,
        total_volume=sum(s.volume for p in performances for s in p.sets),
        exercises=performances,
    )


def create_history_repo(
    *,
    user_id: str = "test_user",
    sessions: Optional[List[WorkoutSession]] = None,
) -> FakeWorkoutHistoryRepository:
    """
    Create a FakeWorkoutHistoryRepository with optional pre-populated sessions.

    Args:
        user_id: Owner of the seeded sessions
        sessions: Sessions to seed

    Returns:
        Pre-populated FakeWorkoutHistoryRepository
    """
    repo = FakeWorkoutHistoryRepository()
    if sessions:
        repo.seed(user_id, sessions)
    return repo


def create_xp_repo(
    *,
    user_id: str = "test_user",
    xp: float = 0.0,
) -> FakeProfileXPRepository:
    """Create a FakeProfileXPRepository with a starting XP total."""
    repo = FakeProfileXPRepository()
    repo.seed(user_id, xp)
    return repo


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    # Fake implementations
    "FakeWorkoutHistoryRepository",
    "FakeProfileXPRepository",
    # Factory functions
    "make_sets",
    "make_session",
    "create_history_repo",
    "create_xp_repo",
]
