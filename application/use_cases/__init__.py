"""
Application Use Cases for the Training Progression API.

This package contains application-level use cases that orchestrate the
progression engine and coordinate between ports/adapters. Use cases are the
entry points for business operations and contain the application's workflow
logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate pure engine functions and repository ports
- Dependencies are injected via constructors for testability
- Use cases return result dataclasses, not API responses

Usage:
    from application.use_cases import (
        PlanWorkoutUseCase,
        PlannedExercise,
        CompleteWorkoutUseCase,
    )

    # Pre-fill a routine
    plan = PlanWorkoutUseCase(history_repo=history_repo)
    result = plan.execute(
        user_id="user-123",
        planned_exercises=[PlannedExercise("Bench Press", target_set_count=3)],
    )

    # Finish a workout
    complete = CompleteWorkoutUseCase(history_repo=history_repo, xp_repo=xp_repo)
    result = complete.execute(
        user_id="user-123",
        exercises=exercises,
        duration_minutes=45,
    )
"""

from application.use_cases.plan_workout import (
    PlanWorkoutUseCase,
    PlanWorkoutResult,
    PlannedExercise,
    ExercisePlan,
)
from application.use_cases.complete_workout import (
    CompleteWorkoutUseCase,
    CompleteWorkoutResult,
)

__all__ = [
    # Plan
    "PlanWorkoutUseCase",
    "PlanWorkoutResult",
    "PlannedExercise",
    "ExercisePlan",
    # Complete
    "CompleteWorkoutUseCase",
    "CompleteWorkoutResult",
]
