"""
PlanWorkout Use Case.

Pre-fills a routine's exercises with progressive-overload targets before
the workout starts. History is read once and shared by every exercise.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from application.ports import WorkoutHistoryRepository
from backend.core.overload_planner import (
    DEFAULT_OVERLOAD_RULE,
    DEFAULT_REP_FLOOR,
    OverloadRule,
    OverloadSuggestion,
    suggest_next_session,
)

logger = logging.getLogger(__name__)


@dataclass
class PlannedExercise:
    """An exercise of the routine about to be performed."""

    exercise_name: str
    target_set_count: int
    rep_range_floor: int = DEFAULT_REP_FLOOR
    exercise_id: Optional[str] = None


@dataclass
class ExercisePlan:
    """Suggestions for one planned exercise."""

    exercise_name: str
    exercise_id: Optional[str]
    suggestions: List[OverloadSuggestion] = field(default_factory=list)


@dataclass
class PlanWorkoutResult:
    """Result of the PlanWorkout use case execution."""

    exercises: List[ExercisePlan] = field(default_factory=list)
    sessions_considered: int = 0


class PlanWorkoutUseCase:
    """
    Use case for building next-session targets for a routine.

    Usage:
        >>> use_case = PlanWorkoutUseCase(history_repo=history_repo)
        >>> result = use_case.execute(
        ...     user_id="user-123",
        ...     planned_exercises=[PlannedExercise("Bench Press", target_set_count=3)],
        ... )
    """

    def __init__(
        self,
        history_repo: WorkoutHistoryRepository,
        *,
        overload_rule: OverloadRule = DEFAULT_OVERLOAD_RULE,
        history_window: int = 50,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            history_repo: Repository for the workout session log
            overload_rule: Overload constants
            history_window: Recent sessions to read
        """
        self._history_repo = history_repo
        self._overload_rule = overload_rule
        self._history_window = history_window

    def execute(
        self,
        user_id: str,
        planned_exercises: List[PlannedExercise],
    ) -> PlanWorkoutResult:
        """
        Execute the plan workout workflow.

        Args:
            user_id: User ID
            planned_exercises: Exercises of the routine, in routine order

        Returns:
            PlanWorkoutResult with one ExercisePlan per planned exercise
        """
        history = self._history_repo.list_sessions(user_id, limit=self._history_window)
        logger.info(
            f"Planning {len(planned_exercises)} exercises for {user_id} "
            f"from {len(history)} recent sessions"
        )

        plans = [
            ExercisePlan(
                exercise_name=planned.exercise_name,
                exercise_id=planned.exercise_id,
                suggestions=suggest_next_session(
                    planned.exercise_name,
                    planned.target_set_count,
                    planned.rep_range_floor,
                    history,
                    exercise_id=planned.exercise_id,
                    rule=self._overload_rule,
                ),
            )
            for planned in planned_exercises
        ]

        return PlanWorkoutResult(exercises=plans, sessions_considered=len(history))
