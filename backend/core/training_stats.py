"""
Training statistics and achievements for the progress dashboard.

Streaks count distinct calendar days (UTC) with at least one session. A
streak is only "current" while the latest training day is today or
yesterday; after a missed day it resets to 0.
"""
from dataclasses import dataclass, field
from datetime import date, timedelta, timezone
from typing import Iterable, List, Sequence

from domain.models.training import ExercisePerformance, WorkoutSession


@dataclass
class Achievement:
    """A dashboard achievement and how close the user is to it."""
    key: str
    title: str
    description: str
    rarity: str  # common, rare, epic, legendary
    unlocked: bool
    progress: float
    max_progress: float


@dataclass
class TrainingStats:
    """Aggregates shown on the progress dashboard."""
    total_workouts: int
    total_volume: float
    current_streak: int
    best_streak: int
    workouts_this_month: int
    weekly_activity: List[int]  # Monday..Sunday
    achievements: List[Achievement] = field(default_factory=list)


@dataclass
class SessionSummary:
    """Totals of an in-progress workout at the moment it is finished."""
    exercises: List[ExercisePerformance]  # completed sets only
    total_volume: float
    completed_set_count: int
    exercises_completed: int


# key, title, description, rarity, stat, threshold
ACHIEVEMENTS = [
    ("first_workout", "First Workout", "Complete your first workout", "common", "total_workouts", 1),
    ("on_fire", "On Fire", "Train 7 days in a row", "rare", "current_streak", 7),
    ("dedication", "Total Dedication", "Complete 20 workouts in a month", "epic", "workouts_this_month", 20),
    ("iron_master", "Iron Master", "Lift a total of 50 tonnes", "epic", "total_volume", 50000),
    ("centurion", "Centurion", "Complete 100 workouts", "legendary", "total_workouts", 100),
    ("unstoppable", "Unstoppable", "Keep a 30 day streak", "legendary", "current_streak", 30),
]


def _session_day(session: WorkoutSession) -> date:
    return session.date.astimezone(timezone.utc).date()


def _training_days(history: Iterable[WorkoutSession]) -> List[date]:
    """Distinct training days, newest first."""
    return sorted({_session_day(s) for s in history}, reverse=True)


def current_streak(history: Iterable[WorkoutSession], today: date) -> int:
    """
    Consecutive training days ending today or yesterday.

    Args:
        history: Workout sessions in any order
        today: Reference date (UTC)

    Returns:
        Streak length in days, 0 if the last session is older than yesterday
    """
    days = _training_days(history)
    if not days or days[0] < today - timedelta(days=1):
        return 0

    streak = 1
    for newer, older in zip(days, days[1:]):
        if newer - older != timedelta(days=1):
            break
        streak += 1
    return streak


def best_streak(history: Iterable[WorkoutSession]) -> int:
    """Longest run of consecutive training days ever."""
    days = _training_days(history)
    if not days:
        return 0

    best = run = 1
    for newer, older in zip(days, days[1:]):
        run = run + 1 if newer - older == timedelta(days=1) else 1
        best = max(best, run)
    return best


def workouts_in_month(history: Iterable[WorkoutSession], today: date) -> int:
    """Sessions in the calendar month of `today`."""
    return sum(
        1 for s in history
        if (_session_day(s).year, _session_day(s).month) == (today.year, today.month)
    )


def total_volume(history: Iterable[WorkoutSession]) -> float:
    """Sum of the recorded volume of every session."""
    return sum(s.total_volume for s in history)


def weekly_activity(history: Iterable[WorkoutSession], today: date) -> List[int]:
    """Session counts for Monday..Sunday of the week containing `today`."""
    monday = today - timedelta(days=today.weekday())
    counts = [0] * 7
    for session in history:
        offset = (_session_day(session) - monday).days
        if 0 <= offset < 7:
            counts[offset] += 1
    return counts


def evaluate_achievements(stats: TrainingStats) -> List[Achievement]:
    """
    Evaluate the fixed achievement list against dashboard stats.

    Progress is capped at the threshold so progress bars never overflow.
    """
    achievements = []
    for key, title, description, rarity, stat, threshold in ACHIEVEMENTS:
        value = getattr(stats, stat)
        achievements.append(Achievement(
            key=key,
            title=title,
            description=description,
            rarity=rarity,
            unlocked=value >= threshold,
            progress=min(value, threshold),
            max_progress=threshold,
        ))
    return achievements


def training_stats(history: Sequence[WorkoutSession], today: date) -> TrainingStats:
    """
    Build the full dashboard stats for a history.

    Args:
        history: All of a user's sessions
        today: Reference date (UTC)

    Returns:
        TrainingStats including evaluated achievements
    """
    stats = TrainingStats(
        total_workouts=len(history),
        total_volume=total_volume(history),
        current_streak=current_streak(history, today),
        best_streak=best_streak(history),
        workouts_this_month=workouts_in_month(history, today),
        weekly_activity=weekly_activity(history, today),
    )
    stats.achievements = evaluate_achievements(stats)
    return stats


def summarize_exercises(exercises: Sequence[ExercisePerformance]) -> SessionSummary:
    """
    Totals for a workout being finished.

    Only completed sets are kept and counted. Exercises with no completed
    sets stay in the log (with an empty set list) but do not count as
    completed.

    Args:
        exercises: The in-progress log, including unfinished sets

    Returns:
        SessionSummary
    """
    kept = [
        ExercisePerformance(
            exercise_name=ex.exercise_name,
            exercise_id=ex.exercise_id,
            sets=ex.completed_sets,
        )
        for ex in exercises
    ]
    return SessionSummary(
        exercises=kept,
        total_volume=sum(s.volume for ex in kept for s in ex.sets),
        completed_set_count=sum(len(ex.sets) for ex in kept),
        exercises_completed=sum(1 for ex in kept if ex.sets),
    )
