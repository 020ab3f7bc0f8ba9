"""
CompleteWorkout Use Case.

Finishes an in-progress workout: builds the immutable session from the
completed sets, detects personal records against the history before it,
awards XP and reports a level up.

XP is awarded through the repository's atomic increment. The level up is
derived from the total the increment returns, never from a total read
earlier, so concurrent sessions on two devices cannot lose XP.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from application.ports import ProfileXPRepository, RepositoryError, WorkoutHistoryRepository
from backend.core.leveling import (
    DEFAULT_LEVELING,
    DEFAULT_XP_FORMULA,
    LevelingConfig,
    XPFormula,
    XPGainResult,
    apply_xp_gain,
    session_xp,
)
from backend.core.personal_records import NewPersonalRecord, detect_new_records
from backend.core.training_stats import summarize_exercises
from domain.models.training import ExercisePerformance, WorkoutSession

logger = logging.getLogger(__name__)


@dataclass
class CompleteWorkoutResult:
    """Result of the CompleteWorkout use case execution."""

    success: bool
    session: Optional[WorkoutSession] = None
    xp_gained: int = 0
    xp_result: Optional[XPGainResult] = None
    new_records: List[NewPersonalRecord] = field(default_factory=list)
    exercises_completed: int = 0
    error: Optional[str] = None


class CompleteWorkoutUseCase:
    """
    Use case for finishing a workout.

    Orchestrates the following workflow:
    1. Keep completed sets only and compute session totals
    2. Read prior history (strictly) and detect new personal records
    3. Compute session XP
    4. Append the session to the history log
    5. Atomically increment profile XP and detect a level up

    Dependencies are injected via constructor for testability.

    Usage:
        >>> use_case = CompleteWorkoutUseCase(history_repo=history_repo, xp_repo=xp_repo)
        >>> result = use_case.execute(
        ...     user_id="user-123",
        ...     exercises=exercises,
        ...     duration_minutes=45,
        ...     routine_name="Push Day",
        ... )
        >>> if result.success and result.xp_result.leveled_up:
        ...     print(f"Level {result.xp_result.new_level}!")
    """

    def __init__(
        self,
        history_repo: WorkoutHistoryRepository,
        xp_repo: ProfileXPRepository,
        *,
        xp_formula: XPFormula = DEFAULT_XP_FORMULA,
        leveling: LevelingConfig = DEFAULT_LEVELING,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            history_repo: Repository for the workout session log
            xp_repo: Repository for the profile XP counter
            xp_formula: XP coefficients
            leveling: Level curve
        """
        self._history_repo = history_repo
        self._xp_repo = xp_repo
        self._xp_formula = xp_formula
        self._leveling = leveling

    def execute(
        self,
        user_id: str,
        exercises: List[ExercisePerformance],
        duration_minutes: int,
        *,
        routine_name: Optional[str] = None,
        finished_at: Optional[datetime] = None,
    ) -> CompleteWorkoutResult:
        """
        Execute the complete workout workflow.

        Args:
            user_id: User ID
            exercises: In-progress log, including sets that were not completed
            duration_minutes: Session length
            routine_name: Routine the session came from
            finished_at: Completion time (default: now, UTC)

        Returns:
            CompleteWorkoutResult with success status, new records and XP
        """
        summary = summarize_exercises(exercises)
        if summary.completed_set_count == 0:
            logger.warning(f"Finishing workout for {user_id} with no completed sets")

        session = WorkoutSession(
            date=finished_at or datetime.now(timezone.utc),
            routine_name=routine_name,
            duration_minutes=duration_minutes,
            total_volume=summary.total_volume,
            exercises=summary.exercises,
        )

        # Baseline is read before the append so the session is not its own record.
        # A failed read aborts; an empty baseline would make every exercise a record.
        try:
            prior_history = self._history_repo.list_sessions(user_id, strict=True)
        except RepositoryError as e:
            logger.error(f"Failed to read history for {user_id}: {e.message}")
            return CompleteWorkoutResult(
                success=False,
                error=f"Workout could not be saved: history unavailable ({e.message})",
            )
        new_records = detect_new_records(prior_history, session)

        xp_gained = session_xp(
            session.duration_minutes,
            session.total_volume,
            summary.completed_set_count,
            len(new_records),
            self._xp_formula,
        )

        try:
            session = self._history_repo.append_session(user_id, session)
        except RepositoryError as e:
            logger.error(f"Failed to save session for {user_id}: {e.message}")
            return CompleteWorkoutResult(
                success=False,
                error=f"Workout could not be saved: {e.message}",
            )

        try:
            total_after = self._xp_repo.increment_xp(user_id, xp_gained)
        except RepositoryError as e:
            logger.error(f"Session {session.id} saved but XP increment failed for {user_id}: {e.message}")
            return CompleteWorkoutResult(
                success=False,
                session=session,
                new_records=new_records,
                exercises_completed=summary.exercises_completed,
                error=f"Workout saved but XP could not be updated: {e.message}",
            )

        xp_result = apply_xp_gain(total_after - xp_gained, xp_gained, self._leveling)

        logger.info(
            f"Workout completed for {user_id}: {summary.completed_set_count} sets, "
            f"{len(new_records)} new records, +{xp_gained} XP (level {xp_result.new_level})"
        )

        return CompleteWorkoutResult(
            success=True,
            session=session,
            xp_gained=xp_gained,
            xp_result=xp_result,
            new_records=new_records,
            exercises_completed=summary.exercises_completed,
        )
