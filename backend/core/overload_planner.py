"""
Progressive overload planner.

Pre-fills the next session's weight/reps from the most recent time an
exercise was trained. The rule is a conservative double progression:

- Already at 10+ reps: add a fixed weight increment and drop two reps
  (never below 6), since a heavier load lowers achievable reps.
- Below 10 reps: keep the weight and add one rep.

The best prior set (heaviest weight, first on ties) drives a single target
that is applied to every planned set. Suggestions only pre-fill the workout
form; the lifter can always override them.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from backend.core.exercise_identity import matches_exercise
from backend.core.one_rep_max import clean_reps
from domain.models.training import SetRecord, WorkoutSession

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverloadRule:
    """Tunable constants of the overload rule."""
    weight_increment: float = 2.5
    high_rep_threshold: int = 10
    rep_drop: int = 2
    min_reps: int = 6
    rep_step: int = 1


DEFAULT_OVERLOAD_RULE = OverloadRule()

# Reps suggested for an exercise with no history and no rep range
DEFAULT_REP_FLOOR = 10


def parse_rep_range_floor(rep_range: Optional[str], default: int = DEFAULT_REP_FLOOR) -> int:
    """
    Lower bound of a routine's rep range.

    Examples:
        >>> parse_rep_range_floor("8-12")
        8
        >>> parse_rep_range_floor("5")
        5
        >>> parse_rep_range_floor(None)
        10
    """
    if not rep_range:
        return default
    head = rep_range.split("-")[0].strip()
    if not head.isdigit() or int(head) == 0:
        return default
    return int(head)


@dataclass
class OverloadSuggestion:
    """Suggested target for one planned set."""
    exercise_identity: str
    set_number: int
    suggested_weight: float
    suggested_reps: int
    based_on_prior: bool


def _sessions_newest_first(history: Sequence[WorkoutSession]) -> List[WorkoutSession]:
    # Later list position wins when two sessions share a timestamp
    indexed = sorted(enumerate(history), key=lambda pair: (pair[1].date, pair[0]), reverse=True)
    return [session for _, session in indexed]


def find_latest_sets(
    history: Sequence[WorkoutSession],
    exercise_name: str,
    exercise_id: Optional[str] = None,
) -> List[SetRecord]:
    """
    Get the sets from the most recent session that logged this exercise.

    Matching performances with no sets are skipped, so an exercise that was
    added to a workout but never logged does not hide older data.

    When one session logs the same exercise more than once, the sets of every
    matching entry are merged in logged order. The best set is still the
    heaviest, first on ties, so the suggestion only changes when a later
    entry was heavier than the first.

    Returns:
        Sets in logged order, or [] if the exercise was never logged
    """
    for session in _sessions_newest_first(history):
        sets = [
            s
            for performance in session.exercises
            if matches_exercise(performance, exercise_name, exercise_id)
            for s in performance.sets
        ]
        if sets:
            return sets
    return []


def best_prior_set(sets: Sequence[SetRecord]) -> Optional[SetRecord]:
    """Heaviest set, first occurrence on ties."""
    best = None
    for candidate in sets:
        if best is None or candidate.weight > best.weight:
            best = candidate
    return best


def apply_overload_rule(
    weight: float,
    reps: int,
    rule: OverloadRule = DEFAULT_OVERLOAD_RULE,
) -> tuple[float, int]:
    """
    Derive the next target from a prior (weight, reps).

    Zero values are not special-cased; they flow through the rule.

    Returns:
        (suggested_weight, suggested_reps)
    """
    if reps >= rule.high_rep_threshold:
        return weight + rule.weight_increment, max(rule.min_reps, reps - rule.rep_drop)
    return weight, reps + rule.rep_step


def suggest_next_session(
    exercise_name: str,
    target_set_count: int,
    rep_range_floor: int,
    history: Sequence[WorkoutSession],
    *,
    exercise_id: Optional[str] = None,
    rule: OverloadRule = DEFAULT_OVERLOAD_RULE,
) -> List[OverloadSuggestion]:
    """
    Suggest weight/reps for every planned set of an exercise.

    Args:
        exercise_name: Exercise name as it appears in the log
        target_set_count: Number of sets planned for the new session
        rep_range_floor: Reps to suggest when there is no history
        history: Past sessions in any order (only the latest match is used)
        exercise_id: Optional library id, compared when history has one too
        rule: Overload constants

    Returns:
        Exactly target_set_count suggestions ([] when the count is below 1)
    """
    identity = exercise_id or exercise_name
    set_count = clean_reps(target_set_count)
    if set_count < 1:
        logger.warning(f"Ignoring suggestion request with {target_set_count!r} sets for '{identity}'")
        return []

    best = best_prior_set(find_latest_sets(history, exercise_name, exercise_id))

    if best is None:
        weight, reps, based_on_prior = 0.0, clean_reps(rep_range_floor), False
    else:
        weight, reps = apply_overload_rule(best.weight, best.reps, rule)
        based_on_prior = True

    return [
        OverloadSuggestion(
            exercise_identity=identity,
            set_number=i + 1,
            suggested_weight=weight,
            suggested_reps=reps,
            based_on_prior=based_on_prior,
        )
        for i in range(set_count)
    ]


def autofill_next_set(sets: Sequence[SetRecord], completed_index: int) -> List[SetRecord]:
    """
    Copy a just-completed set's weight/reps into the next set if it is empty.

    A set counts as empty when both weight and reps are 0. The input is not
    modified.

    Args:
        sets: Sets of one exercise in the in-progress workout
        completed_index: Index of the set that was just marked completed

    Returns:
        New list of sets
    """
    result = list(sets)
    next_index = completed_index + 1
    if completed_index < 0 or next_index >= len(result):
        return result

    current, following = result[completed_index], result[next_index]
    if following.weight == 0 and following.reps == 0:
        result[next_index] = following.model_copy(
            update={"weight": current.weight, "reps": current.reps}
        )
    return result
