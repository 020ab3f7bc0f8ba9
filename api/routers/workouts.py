"""
Workouts router for finishing a workout.

The client sends the whole in-progress log once, when the user taps
"finish". Sets that were not marked completed are dropped; the stored
session is immutable afterwards.
"""
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from api.deps import get_complete_workout_use_case, get_current_user
from application.use_cases import CompleteWorkoutUseCase
from backend.core.overload_planner import autofill_next_set as autofill_sets
from domain.models.training import ExercisePerformance, SetRecord

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/workouts",
    tags=["Workouts"],
)


# =============================================================================
# Request / Response Models
# =============================================================================


class CompleteWorkoutRequest(BaseModel):
    """Request body for finishing a workout."""
    routine_name: Optional[str] = Field(default=None, max_length=200)
    duration_minutes: int = Field(default=0, ge=0, le=24 * 60)
    finished_at: Optional[datetime] = None
    exercises: List[ExercisePerformance] = Field(default_factory=list)


class NewRecordResponse(BaseModel):
    """A personal record beaten in this workout."""
    exercise_identity: str
    exercise_name: str
    previous_best: float
    new_best: float


class CompleteWorkoutResponse(BaseModel):
    """Response for a finished workout."""
    session_id: Optional[str] = None
    total_volume: float
    completed_sets: int
    exercises_completed: int
    xp_gained: int
    total_xp: float
    leveled_up: bool
    level: int
    new_records: List[NewRecordResponse] = Field(default_factory=list)


class AutofillRequest(BaseModel):
    """Sets of one exercise and the index of the set just completed."""
    sets: List[SetRecord]
    completed_index: int = Field(..., ge=0)


class AutofillResponse(BaseModel):
    sets: List[SetRecord]


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/complete", response_model=CompleteWorkoutResponse)
async def complete_workout(
    request: CompleteWorkoutRequest,
    user_id: str = Depends(get_current_user),
    use_case: CompleteWorkoutUseCase = Depends(get_complete_workout_use_case),
) -> CompleteWorkoutResponse:
    """
    Finish a workout.

    Stores the session, detects personal records against earlier history and
    awards XP through an atomic increment on the profile.
    """
    result = use_case.execute(
        user_id,
        request.exercises,
        request.duration_minutes,
        routine_name=request.routine_name,
        finished_at=request.finished_at,
    )

    if not result.success:
        logger.error(f"Completing workout failed for {user_id}: {result.error}")
        raise HTTPException(status_code=502, detail=result.error or "Failed to complete workout")

    return CompleteWorkoutResponse(
        session_id=result.session.id,
        total_volume=result.session.total_volume,
        completed_sets=result.session.completed_set_count,
        exercises_completed=result.exercises_completed,
        xp_gained=result.xp_gained,
        total_xp=result.xp_result.total_xp_after,
        leveled_up=result.xp_result.leveled_up,
        level=result.xp_result.new_level,
        new_records=[
            NewRecordResponse(
                exercise_identity=r.exercise_identity,
                exercise_name=r.exercise_name,
                previous_best=r.previous_best,
                new_best=r.new_best,
            )
            for r in result.new_records
        ],
    )


@router.post("/autofill", response_model=AutofillResponse)
async def autofill_next_set(
    request: AutofillRequest,
    user_id: str = Depends(get_current_user),
) -> AutofillResponse:
    """
    Copy a just-completed set into the next set when the next one is empty.
    """
    return AutofillResponse(sets=autofill_sets(request.sets, request.completed_index))
