"""
Progression router for records, suggestions, levels and dashboard stats.

This router provides endpoints for:
- Personal records (best estimated 1RM per exercise)
- Exercise strength history for progress charts
- Progressive-overload suggestions for one exercise or a whole routine
- Level / XP state
- Dashboard statistics and achievements
"""
from datetime import date
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Path
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_plan_workout_use_case, get_progression_service
from application.use_cases import PlannedExercise, PlanWorkoutUseCase
from backend.core.one_rep_max import rounded_one_rep_max
from backend.core.overload_planner import OverloadSuggestion, parse_rep_range_floor
from backend.core.progression_service import ProgressionService
from backend.core.training_stats import Achievement

router = APIRouter(
    prefix="/progression",
    tags=["Progression"],
)

MAX_EXERCISE_NAME_LENGTH = 200


# =============================================================================
# Request / Response Models
# =============================================================================


class SuggestionResponse(BaseModel):
    """Suggested target for one planned set."""
    exercise_identity: str
    set_number: int
    suggested_weight: float
    suggested_reps: int
    based_on_prior: bool


class ExerciseSuggestionsResponse(BaseModel):
    """Suggestions for one exercise."""
    exercise_name: str
    exercise_id: Optional[str] = None
    suggestions: List[SuggestionResponse] = Field(default_factory=list)


class PlannedExerciseRequest(BaseModel):
    """One exercise of the routine about to be performed."""
    exercise_name: str = Field(..., min_length=1, max_length=MAX_EXERCISE_NAME_LENGTH)
    exercise_id: Optional[str] = None
    target_set_count: int = Field(..., ge=1, le=20)
    rep_range_floor: Optional[int] = Field(default=None, ge=0, le=100)
    rep_range: Optional[str] = Field(default=None, max_length=20, description="Routine rep range, e.g. \"8-12\"")


class PlanRequest(BaseModel):
    """Routine to pre-fill."""
    exercises: List[PlannedExerciseRequest] = Field(..., min_length=1)


class PlanResponse(BaseModel):
    """Suggestions for every exercise of a routine."""
    exercises: List[ExerciseSuggestionsResponse]
    sessions_considered: int


class PersonalRecordsApiResponse(BaseModel):
    """Best estimated 1RM per exercise identity."""
    records: Dict[str, float]
    sessions_scanned: int


class SetResponse(BaseModel):
    """A logged set."""
    set_number: int
    weight: float
    reps: int


class StrengthPointResponse(BaseModel):
    """One session's best set for an exercise."""
    date: str
    routine_name: Optional[str] = None
    best_set: SetResponse
    estimated_1rm: float
    estimated_1rm_display: float = Field(..., description="Estimated 1RM rounded to 0.1 for charts")
    total_volume: float


class StrengthHistoryApiResponse(BaseModel):
    """Progress chart data for one exercise."""
    exercise_name: str
    exercise_id: Optional[str] = None
    points: List[StrengthPointResponse]
    all_time_best_1rm: Optional[float] = None


class LevelApiResponse(BaseModel):
    """Level display data for the profile."""
    total_xp: float
    level: int
    xp_at_level_start: float
    xp_at_next_level: float
    progress_fraction: float


class AchievementResponse(BaseModel):
    """An achievement and progress towards it."""
    key: str
    title: str
    description: str
    rarity: str
    unlocked: bool
    progress: float
    max_progress: float


class TrainingStatsApiResponse(BaseModel):
    """Dashboard statistics."""
    total_workouts: int
    total_volume: float
    current_streak: int
    best_streak: int
    workouts_this_month: int
    weekly_activity: List[int]
    achievements: List[AchievementResponse]


# =============================================================================
# Helpers
# =============================================================================


def _validate_exercise_name(exercise_name: str) -> str:
    """Reject blank or oversized names; the name itself is matched as-is."""
    if not exercise_name.strip():
        raise HTTPException(status_code=400, detail="exercise_name must not be blank")
    if len(exercise_name) > MAX_EXERCISE_NAME_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"exercise_name exceeds {MAX_EXERCISE_NAME_LENGTH} characters",
        )
    return exercise_name


def _resolve_rep_floor(rep_floor: Optional[int], rep_range: Optional[str]) -> int:
    """An explicit floor wins over the lower bound of the routine's rep range."""
    if rep_floor is not None:
        return rep_floor
    return parse_rep_range_floor(rep_range)


def _suggestion_response(s: OverloadSuggestion) -> SuggestionResponse:
    return SuggestionResponse(
        exercise_identity=s.exercise_identity,
        set_number=s.set_number,
        suggested_weight=s.suggested_weight,
        suggested_reps=s.suggested_reps,
        based_on_prior=s.based_on_prior,
    )


def _achievement_response(a: Achievement) -> AchievementResponse:
    return AchievementResponse(
        key=a.key,
        title=a.title,
        description=a.description,
        rarity=a.rarity,
        unlocked=a.unlocked,
        progress=a.progress,
        max_progress=a.max_progress,
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/records", response_model=PersonalRecordsApiResponse)
async def get_personal_records(
    user_id: str = Depends(get_current_user),
    service: ProgressionService = Depends(get_progression_service),
) -> PersonalRecordsApiResponse:
    """
    Get personal records for the user.

    Returns the best estimated 1RM (Epley) per exercise over all completed
    sets, keyed by exercise id or, when there is none, the logged name.
    """
    result = service.get_personal_records(user_id)
    return PersonalRecordsApiResponse(
        records=result.records,
        sessions_scanned=result.sessions_scanned,
    )


@router.get("/exercises/{exercise_name}/history", response_model=StrengthHistoryApiResponse)
async def get_strength_history(
    exercise_name: str = Path(..., description="Exercise name as logged"),
    exercise_id: Optional[str] = Query(None, description="Exercise library id"),
    user_id: str = Depends(get_current_user),
    service: ProgressionService = Depends(get_progression_service),
) -> StrengthHistoryApiResponse:
    """
    Get the strength history of an exercise.

    Returns the best set of each session (by estimated 1RM), oldest first.
    An exercise that was never trained returns an empty list.
    """
    _validate_exercise_name(exercise_name)

    result = service.get_strength_history(user_id, exercise_name, exercise_id=exercise_id)

    return StrengthHistoryApiResponse(
        exercise_name=result.exercise_name,
        exercise_id=result.exercise_id,
        points=[
            StrengthPointResponse(
                date=p.date,
                routine_name=p.routine_name,
                best_set=SetResponse(
                    set_number=p.best_set.set_number,
                    weight=p.best_set.weight,
                    reps=p.best_set.reps,
                ),
                estimated_1rm=p.estimated_1rm,
                estimated_1rm_display=rounded_one_rep_max(p.best_set.weight, p.best_set.reps, ndigits=1),
                total_volume=p.total_volume,
            )
            for p in result.points
        ],
        all_time_best_1rm=result.all_time_best_1rm,
    )


@router.get("/exercises/{exercise_name}/suggestion", response_model=ExerciseSuggestionsResponse)
async def get_exercise_suggestion(
    exercise_name: str = Path(..., description="Exercise name as logged"),
    sets: int = Query(3, ge=1, le=20, description="Planned set count"),
    rep_floor: Optional[int] = Query(None, ge=0, le=100, description="Reps to suggest without history"),
    rep_range: Optional[str] = Query(None, max_length=20, description="Routine rep range, e.g. 8-12"),
    exercise_id: Optional[str] = Query(None, description="Exercise library id"),
    user_id: str = Depends(get_current_user),
    service: ProgressionService = Depends(get_progression_service),
) -> ExerciseSuggestionsResponse:
    """
    Get next-session targets for one exercise.

    Based on the best set of the most recent session that logged the
    exercise. Without history, suggests 0 weight at the rep floor: `rep_floor`,
    else the lower bound of `rep_range`, else 10.
    """
    _validate_exercise_name(exercise_name)

    suggestions = service.get_suggestions(
        user_id,
        exercise_name,
        target_set_count=sets,
        rep_range_floor=_resolve_rep_floor(rep_floor, rep_range),
        exercise_id=exercise_id,
    )

    return ExerciseSuggestionsResponse(
        exercise_name=exercise_name,
        exercise_id=exercise_id,
        suggestions=[_suggestion_response(s) for s in suggestions],
    )


@router.post("/plan", response_model=PlanResponse)
async def plan_workout(
    request: PlanRequest,
    user_id: str = Depends(get_current_user),
    use_case: PlanWorkoutUseCase = Depends(get_plan_workout_use_case),
) -> PlanResponse:
    """
    Pre-fill a routine with next-session targets.

    Suggestions only pre-fill the workout form; the lifter may edit them.
    """
    result = use_case.execute(
        user_id,
        [
            PlannedExercise(
                exercise_name=e.exercise_name,
                target_set_count=e.target_set_count,
                rep_range_floor=_resolve_rep_floor(e.rep_range_floor, e.rep_range),
                exercise_id=e.exercise_id,
            )
            for e in request.exercises
        ],
    )

    return PlanResponse(
        exercises=[
            ExerciseSuggestionsResponse(
                exercise_name=plan.exercise_name,
                exercise_id=plan.exercise_id,
                suggestions=[_suggestion_response(s) for s in plan.suggestions],
            )
            for plan in result.exercises
        ],
        sessions_considered=result.sessions_considered,
    )


@router.get("/level", response_model=LevelApiResponse)
async def get_level(
    user_id: str = Depends(get_current_user),
    service: ProgressionService = Depends(get_progression_service),
) -> LevelApiResponse:
    """Get the user's level and progress towards the next one."""
    result = service.get_level(user_id)
    return LevelApiResponse(
        total_xp=result.total_xp,
        level=result.state.level,
        xp_at_level_start=result.state.xp_at_level_start,
        xp_at_next_level=result.state.xp_at_next_level,
        progress_fraction=result.state.progress_fraction,
    )


@router.get("/stats", response_model=TrainingStatsApiResponse)
async def get_training_stats(
    today: Optional[date] = Query(None, description="Reference date (default: today, UTC)"),
    user_id: str = Depends(get_current_user),
    service: ProgressionService = Depends(get_progression_service),
) -> TrainingStatsApiResponse:
    """
    Get dashboard statistics and achievements.

    Streaks count consecutive training days and reset after a missed day.
    """
    stats = service.get_training_stats(user_id, today=today)
    return TrainingStatsApiResponse(
        total_workouts=stats.total_workouts,
        total_volume=stats.total_volume,
        current_streak=stats.current_streak,
        best_streak=stats.best_streak,
        workouts_this_month=stats.workouts_this_month,
        weekly_activity=stats.weekly_activity,
        achievements=[_achievement_response(a) for a in stats.achievements],
    )
