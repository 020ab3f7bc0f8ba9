"""
Progression Service.

This module provides the read side of the progression engine on top of
repository data access:
- Personal records (best estimated 1RM per exercise)
- Per-exercise strength history for progress charts
- Next-session overload suggestions
- Level / XP state
- Dashboard statistics and achievements
"""
from typing import Optional, List, Dict
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
import logging

from application.ports.workout_history_repository import WorkoutHistoryRepository
from application.ports.profile_xp_repository import ProfileXPRepository
from backend.core.leveling import (
    DEFAULT_LEVELING,
    LevelingConfig,
    LevelState,
    level_state,
)
from backend.core.overload_planner import (
    DEFAULT_OVERLOAD_RULE,
    OverloadRule,
    OverloadSuggestion,
    suggest_next_session,
)
from backend.core.personal_records import (
    StrengthHistoryPoint,
    compute_records,
    strength_history,
)
from backend.core.training_stats import TrainingStats, training_stats

logger = logging.getLogger(__name__)


# =============================================================================
# Response DTOs
# =============================================================================


@dataclass
class PersonalRecordsResponse:
    """Best estimated 1RM per exercise identity."""
    records: Dict[str, float] = field(default_factory=dict)
    sessions_scanned: int = 0


@dataclass
class StrengthHistoryResponse:
    """Progress chart data for one exercise."""
    exercise_name: str
    exercise_id: Optional[str]
    points: List[StrengthHistoryPoint]
    all_time_best_1rm: Optional[float] = None


@dataclass
class LevelResponse:
    """A user's XP total placed on the level curve."""
    total_xp: float
    state: LevelState


# =============================================================================
# Progression Service
# =============================================================================


class ProgressionService:
    """
    Read-only queries over a user's workout history and XP.

    Every value is recomputed from the history on each call; nothing derived
    is cached or persisted.
    """

    def __init__(
        self,
        history_repo: WorkoutHistoryRepository,
        xp_repo: ProfileXPRepository,
        *,
        leveling: LevelingConfig = DEFAULT_LEVELING,
        overload_rule: OverloadRule = DEFAULT_OVERLOAD_RULE,
        history_window: int = 50,
    ):
        """
        Initialize the progression service.

        Args:
            history_repo: Repository for the workout session log
            xp_repo: Repository for the profile XP counter
            leveling: Level curve
            overload_rule: Overload constants for suggestions
            history_window: Recent sessions read for suggestions
        """
        self._history_repo = history_repo
        self._xp_repo = xp_repo
        self._leveling = leveling
        self._overload_rule = overload_rule
        self._history_window = history_window

    def get_personal_records(self, user_id: str) -> PersonalRecordsResponse:
        """
        Get the best estimated 1RM per exercise over all history.

        Args:
            user_id: User ID

        Returns:
            PersonalRecordsResponse
        """
        history = self._history_repo.list_sessions(user_id)
        return PersonalRecordsResponse(
            records=compute_records(history),
            sessions_scanned=len(history),
        )

    def get_strength_history(
        self,
        user_id: str,
        exercise_name: str,
        *,
        exercise_id: Optional[str] = None,
    ) -> StrengthHistoryResponse:
        """
        Get the best set of every session for one exercise, oldest first.

        Args:
            user_id: User ID
            exercise_name: Exercise name as logged
            exercise_id: Optional library id

        Returns:
            StrengthHistoryResponse (empty points when never trained)
        """
        history = self._history_repo.list_sessions(user_id)
        points = strength_history(history, exercise_name, exercise_id)
        best = max((p.estimated_1rm for p in points), default=None)

        return StrengthHistoryResponse(
            exercise_name=exercise_name,
            exercise_id=exercise_id,
            points=points,
            all_time_best_1rm=best,
        )

    def get_suggestions(
        self,
        user_id: str,
        exercise_name: str,
        *,
        target_set_count: int,
        rep_range_floor: int,
        exercise_id: Optional[str] = None,
    ) -> List[OverloadSuggestion]:
        """
        Suggest weight/reps for the next session of one exercise.

        Only the most recent `history_window` sessions are read; the planner
        only needs the latest match.
        """
        history = self._history_repo.list_sessions(user_id, limit=self._history_window)
        return suggest_next_session(
            exercise_name,
            target_set_count,
            rep_range_floor,
            history,
            exercise_id=exercise_id,
            rule=self._overload_rule,
        )

    def get_level(self, user_id: str) -> LevelResponse:
        """
        Get the user's level state.

        Args:
            user_id: User ID

        Returns:
            LevelResponse
        """
        total_xp = self._xp_repo.get_xp(user_id)
        return LevelResponse(
            total_xp=total_xp,
            state=level_state(total_xp, self._leveling),
        )

    def get_training_stats(
        self,
        user_id: str,
        *,
        today: Optional[date] = None,
    ) -> TrainingStats:
        """
        Get dashboard statistics and achievements.

        Args:
            user_id: User ID
            today: Reference date (default: current UTC date)

        Returns:
            TrainingStats
        """
        if today is None:
            today = datetime.now(timezone.utc).date()
        history = self._history_repo.list_sessions(user_id)
        logger.debug(f"Computing training stats over {len(history)} sessions for {user_id}")
        return training_stats(history, today)
