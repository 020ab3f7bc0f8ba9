"""
Exercise identity resolution.

Logged exercises link back to the exercise library through `exercise_id`,
but custom and AI-generated exercises only carry a free-text name. Records
and suggestions are keyed by whatever identity this module resolves.

The matching rule lives here only: names are compared
exactly (case, whitespace and accents included), so "Press Banca" and
"press banca " are different exercises today. Swapping in normalized or
fuzzy matching only requires changing this module.
"""
from typing import Optional

from domain.models.training import ExercisePerformance


def resolve_exercise_identity(performance: ExercisePerformance) -> str:
    """
    Get the identity key for a logged exercise.

    Args:
        performance: Logged exercise

    Returns:
        exercise_id when present, otherwise the exercise name as logged
    """
    if performance.exercise_id:
        return performance.exercise_id
    return performance.exercise_name


def matches_exercise(
    performance: ExercisePerformance,
    exercise_name: str,
    exercise_id: Optional[str] = None,
) -> bool:
    """
    Check whether a logged exercise is the one being looked up.

    Ids are compared when both sides have one; otherwise names must be equal.
    """
    if exercise_id and performance.exercise_id:
        return performance.exercise_id == exercise_id
    return performance.exercise_name == exercise_name
