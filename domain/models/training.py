"""
Training log value objects: logged sets, exercise performances and sessions.

A WorkoutSession is created once when a workout is finished and never
mutated afterwards. History is an append-only list of sessions owned by the
persistence collaborator; everything derived from it (records, suggestions,
levels) is recomputed on demand.

User-entered history is dirty (empty fields, negative typos, NaN from bad
parsing), so numeric fields are coerced to zero instead of failing
validation. One bad set must never break the record or suggestion pipeline.
"""

import math
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


def coerce_non_negative_float(value: Any) -> float:
    """
    Coerce a user-supplied number to a finite, non-negative float.

    Anything that is not a number (None, "", "abc"), NaN, infinite or
    negative becomes 0.0.

    Examples:
        >>> coerce_non_negative_float("82.5")
        82.5
        >>> coerce_non_negative_float(-5)
        0.0
        >>> coerce_non_negative_float(None)
        0.0
    """
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0.0
    return number


def coerce_non_negative_int(value: Any) -> int:
    """Coerce a user-supplied count to a non-negative int (truncating floats)."""
    return int(coerce_non_negative_float(value))


class SetRecord(BaseModel):
    """
    One logged set.

    Examples:
        >>> SetRecord(set_number=1, weight=80, reps=10, completed=True)
        SetRecord(set_number=1, weight=80.0, reps=10, completed=True)

        >>> SetRecord(set_number=2, weight="", reps=-3).weight
        0.0
    """

    set_number: int = Field(default=1, ge=1, description="1-based position within the exercise")
    weight: float = Field(default=0.0, ge=0, description="Load lifted")
    reps: int = Field(default=0, ge=0, description="Repetitions performed")
    completed: bool = Field(default=False, description="Whether the set was actually performed")

    @field_validator("set_number", mode="before")
    @classmethod
    def validate_set_number(cls, v: Any) -> int:
        """Set numbers start at 1; anything lower is pinned to 1."""
        return max(1, coerce_non_negative_int(v))

    @field_validator("weight", mode="before")
    @classmethod
    def validate_weight(cls, v: Any) -> float:
        return coerce_non_negative_float(v)

    @field_validator("reps", mode="before")
    @classmethod
    def validate_reps(cls, v: Any) -> int:
        return coerce_non_negative_int(v)

    @property
    def volume(self) -> float:
        """Weight moved in this set (weight x reps)."""
        return self.weight * self.reps

    model_config = {"frozen": True}


class ExercisePerformance(BaseModel):
    """
    One exercise's sets within one session.

    `exercise_name` is free text and doubles as the identity key when no
    library `exercise_id` was attached.
    """

    exercise_name: str = Field(default="", description="Display name as logged")
    exercise_id: Optional[str] = Field(
        default=None,
        description="Stable exercise library id, when the exercise came from the library",
    )
    sets: List[SetRecord] = Field(default_factory=list)

    @field_validator("exercise_id", mode="before")
    @classmethod
    def validate_exercise_id(cls, v: Any) -> Optional[str]:
        """Blank ids are the same as no id."""
        if v is None:
            return None
        v = str(v)
        return v if v.strip() else None

    @property
    def completed_sets(self) -> List[SetRecord]:
        return [s for s in self.sets if s.completed]

    model_config = {"frozen": True}


class WorkoutSession(BaseModel):
    """
    One finished workout.

    Examples:
        >>> session = WorkoutSession(
        ...     date=datetime(2024, 3, 1, tzinfo=timezone.utc),
        ...     routine_name="Push Day",
        ...     duration_minutes=55,
        ...     total_volume=4200,
        ...     exercises=[
        ...         ExercisePerformance(
        ...             exercise_name="Bench Press",
        ...             sets=[SetRecord(set_number=1, weight=80, reps=10, completed=True)],
        ...         )
        ...     ],
        ... )
        >>> session.completed_set_count
        1
    """

    id: Optional[str] = Field(default=None, description="Storage id, None before persisting")
    date: datetime = Field(..., description="When the session was finished")
    routine_name: Optional[str] = Field(default=None, max_length=200)
    duration_minutes: int = Field(default=0, ge=0)
    total_volume: float = Field(default=0.0, ge=0)
    exercises: List[ExercisePerformance] = Field(default_factory=list)

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: datetime) -> datetime:
        """Naive timestamps are stored as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_validator("duration_minutes", mode="before")
    @classmethod
    def validate_duration(cls, v: Any) -> int:
        return coerce_non_negative_int(v)

    @field_validator("total_volume", mode="before")
    @classmethod
    def validate_total_volume(cls, v: Any) -> float:
        return coerce_non_negative_float(v)

    @property
    def completed_set_count(self) -> int:
        return sum(len(ex.completed_sets) for ex in self.exercises)

    model_config = {"frozen": True}
