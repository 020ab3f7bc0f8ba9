"""
Personal record (PR) tracking.

Records are derived, never stored: the best estimated 1RM per exercise is
recomputed from the full history every time. The tracker is stateless; to
decide whether a just-finished session set a new PR, the caller passes the
history *before* that session as the baseline.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from backend.core.exercise_identity import matches_exercise, resolve_exercise_identity
from backend.core.one_rep_max import estimate_one_rep_max
from domain.models.training import SetRecord, WorkoutSession


@dataclass
class NewPersonalRecord:
    """A record beaten in a just-finished session."""
    exercise_identity: str
    exercise_name: str
    previous_best: float
    new_best: float


@dataclass
class StrengthHistoryPoint:
    """One session's best effort on an exercise, for progress charts."""
    date: str  # ISO format
    routine_name: Optional[str]
    best_set: SetRecord
    estimated_1rm: float
    total_volume: float


def _accumulate_best(records: Dict[str, float], session: WorkoutSession) -> None:
    for performance in session.exercises:
        identity = resolve_exercise_identity(performance)
        for set_record in performance.sets:
            if not set_record.completed:
                continue
            score = estimate_one_rep_max(set_record.weight, set_record.reps)
            if identity not in records or score > records[identity]:
                records[identity] = score


def compute_records(history: Iterable[WorkoutSession]) -> Dict[str, float]:
    """
    Get the best-ever estimated 1RM per exercise.

    Every completed set of every session is scanned; order does not matter.
    Incomplete sets are ignored.

    Args:
        history: Workout sessions to scan

    Returns:
        Mapping of exercise identity to best estimated 1RM ({} for no history)
    """
    records: Dict[str, float] = {}
    for session in history:
        _accumulate_best(records, session)
    return records


def session_best_scores(session: WorkoutSession) -> Dict[str, float]:
    """Best estimated 1RM per exercise within a single session."""
    records: Dict[str, float] = {}
    _accumulate_best(records, session)
    return records


def detect_new_records(
    prior_history: Iterable[WorkoutSession],
    session: WorkoutSession,
) -> List[NewPersonalRecord]:
    """
    Find the exercises where a session beat the prior record.

    An exercise with no prior data has a prior record of 0, so any scoring
    set on a first attempt counts. Ties are not records.

    Args:
        prior_history: History before the session (must not include it)
        session: The just-finished session

    Returns:
        New records in the order exercises appear in the session
    """
    previous = compute_records(prior_history)
    names: Dict[str, str] = {}
    for performance in session.exercises:
        names.setdefault(resolve_exercise_identity(performance), performance.exercise_name)

    new_records: List[NewPersonalRecord] = []
    for identity, best in session_best_scores(session).items():
        previous_best = previous.get(identity, 0.0)
        if best > previous_best:
            new_records.append(NewPersonalRecord(
                exercise_identity=identity,
                exercise_name=names.get(identity, identity),
                previous_best=previous_best,
                new_best=best,
            ))
    return new_records


def strength_history(
    history: Iterable[WorkoutSession],
    exercise_name: str,
    exercise_id: Optional[str] = None,
) -> List[StrengthHistoryPoint]:
    """
    Get the per-session best set for one exercise, oldest first.

    Sessions where the exercise has no completed sets are skipped.

    Args:
        history: Workout sessions in any order
        exercise_name: Exercise name as logged
        exercise_id: Optional library id (preferred when both sides have one)

    Returns:
        Chronological list of StrengthHistoryPoint
    """
    points: List[StrengthHistoryPoint] = []
    for session in sorted(history, key=lambda s: s.date):
        sets = [
            s
            for performance in session.exercises
            if matches_exercise(performance, exercise_name, exercise_id)
            for s in performance.completed_sets
        ]
        if not sets:
            continue

        best_set = sets[0]
        best_score = estimate_one_rep_max(best_set.weight, best_set.reps)
        for candidate in sets[1:]:
            score = estimate_one_rep_max(candidate.weight, candidate.reps)
            if score > best_score:
                best_set, best_score = candidate, score

        points.append(StrengthHistoryPoint(
            date=session.date.isoformat(),
            routine_name=session.routine_name,
            best_set=best_set,
            estimated_1rm=best_score,
            total_volume=sum(s.volume for s in sets),
        ))
    return points
