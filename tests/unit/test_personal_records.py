"""
Unit tests for backend/core/personal_records.py

Tests cover:
- Record computation over history
- Incomplete and dirty sets
- New record detection for a finished session
- Strength history for progress charts
"""
import pytest

from backend.core.one_rep_max import estimate_one_rep_max
from backend.core.personal_records import (
    compute_records,
    detect_new_records,
    session_best_scores,
    strength_history,
)
from domain.models import ExercisePerformance, SetRecord, WorkoutSession
from tests.fakes import make_session


@pytest.fixture
def history():
    return [
        make_session("2024-03-01", [("Bench Press", [(60, 10), (65, 8)]), ("Squat", [(100, 5)])]),
        make_session("2024-03-04", [("Bench Press", [(70, 5)])]),
        make_session("2024-03-08", [("Squat", [(110, 3), (90, 10)])]),
    ]


@pytest.mark.unit
class TestComputeRecords:
    """Tests for compute_records."""

    def test_empty_history(self):
        assert compute_records([]) == {}

    def test_max_per_exercise(self, history):
        records = compute_records(history)
        assert set(records) == {"Bench Press", "Squat"}
        assert records["Bench Press"] == pytest.approx(max(
            estimate_one_rep_max(60, 10),
            estimate_one_rep_max(65, 8),
            estimate_one_rep_max(70, 5),
        ))
        assert records["Squat"] == pytest.approx(max(
            estimate_one_rep_max(100, 5),
            estimate_one_rep_max(110, 3),
            estimate_one_rep_max(90, 10),
        ))

    def test_order_does_not_matter(self, history):
        assert compute_records(history) == compute_records(list(reversed(history)))

    def test_deterministic(self, history):
        assert compute_records(history) == compute_records(history)

    def test_incomplete_sets_ignored(self):
        session = WorkoutSession(
            date="2024-03-01T10:00:00Z",
            exercises=[ExercisePerformance(
                exercise_name="Deadlift",
                sets=[
                    SetRecord(set_number=1, weight=100, reps=5, completed=True),
                    SetRecord(set_number=2, weight=200, reps=5, completed=False),
                ],
            )],
        )
        assert compute_records([session])["Deadlift"] == pytest.approx(estimate_one_rep_max(100, 5))

    def test_zero_scores_still_listed(self):
        """An exercise logged with empty sets still appears with 0."""
        session = make_session("2024-03-01", [("Plank", [(0, 0)])])
        assert compute_records([session]) == {"Plank": 0.0}

    def test_exercise_with_only_incomplete_sets_absent(self):
        session = WorkoutSession(
            date="2024-03-01T10:00:00Z",
            exercises=[ExercisePerformance(
                exercise_name="Deadlift",
                sets=[SetRecord(set_number=1, weight=200, reps=5, completed=False)],
            )],
        )
        assert compute_records([session]) == {}

    def test_dirty_set_does_not_break_scan(self):
        session = WorkoutSession.model_validate({
            "date": "2024-03-01T10:00:00Z",
            "exercises": [{
                "exercise_name": "Row",
                "sets": [
                    {"set_number": 1, "weight": "NaN", "reps": 10, "completed": True},
                    {"set_number": 2, "weight": 50, "reps": 10, "completed": True},
                ],
            }],
        })
        assert compute_records([session])["Row"] == pytest.approx(estimate_one_rep_max(50, 10))

    def test_keyed_by_exercise_id(self):
        session = make_session(
            "2024-03-01",
            [("Bench", [(100, 1)]), ("Bench Press", [(110, 1)])],
            exercise_ids=["barbell-bench-press", "barbell-bench-press"],
        )
        assert compute_records([session]) == {"barbell-bench-press": 110.0}

    def test_removing_max_set_lowers_record(self, history):
        """The record is a true max over completed sets."""
        without_max = [
            make_session("2024-03-01", [("Squat", [(100, 5)])]),
            make_session("2024-03-08", [("Squat", [(90, 10)])]),
        ]
        assert compute_records(without_max)["Squat"] < compute_records(history)["Squat"]


@pytest.mark.unit
class TestDetectNewRecords:
    """Tests for detect_new_records."""

    def test_first_performance_is_a_record(self):
        session = make_session("2024-03-01", [("Bench Press", [(60, 8)])])
        records = detect_new_records([], session)
        assert len(records) == 1
        assert records[0].exercise_identity == "Bench Press"
        assert records[0].previous_best == 0.0
        assert records[0].new_best == pytest.approx(estimate_one_rep_max(60, 8))

    def test_beating_prior_record(self, history):
        session = make_session("2024-03-10", [("Bench Press", [(80, 5)]), ("Squat", [(80, 5)])])
        records = detect_new_records(history, session)
        assert [r.exercise_identity for r in records] == ["Bench Press"]
        assert records[0].previous_best == pytest.approx(compute_records(history)["Bench Press"])

    def test_tie_is_not_a_record(self, history):
        session = make_session("2024-03-10", [("Squat", [(110, 3)])])
        assert detect_new_records(history, session) == []

    def test_zero_score_first_attempt_is_not_a_record(self):
        session = make_session("2024-03-01", [("Plank", [(0, 0)])])
        assert detect_new_records([], session) == []

    def test_record_uses_logged_name(self):
        session = make_session(
            "2024-03-01",
            [("Banco Plano", [(60, 8)])],
            exercise_ids=["barbell-bench-press"],
        )
        record = detect_new_records([], session)[0]
        assert record.exercise_identity == "barbell-bench-press"
        assert record.exercise_name == "Banco Plano"

    def test_session_best_scores(self):
        session = make_session("2024-03-01", [("Squat", [(100, 5), (100, 8)])])
        assert session_best_scores(session) == {"Squat": pytest.approx(estimate_one_rep_max(100, 8))}


@pytest.mark.unit
class TestStrengthHistory:
    """Tests for strength_history."""

    def test_oldest_first(self, history):
        points = strength_history(list(reversed(history)), "Bench Press")
        assert [p.date[:10] for p in points] == ["2024-03-01", "2024-03-04"]

    def test_best_set_and_volume(self, history):
        point = strength_history(history, "Bench Press")[0]
        assert point.best_set.weight == 65
        assert point.best_set.reps == 8
        assert point.estimated_1rm == pytest.approx(estimate_one_rep_max(65, 8))
        assert point.total_volume == 60 * 10 + 65 * 8

    def test_unknown_exercise(self, history):
        assert strength_history(history, "Curl") == []

    def test_skips_sessions_without_completed_sets(self):
        session = WorkoutSession(
            date="2024-03-01T10:00:00Z",
            exercises=[ExercisePerformance(
                exercise_name="Curl",
                sets=[SetRecord(set_number=1, weight=20, reps=10, completed=False)],
            )],
        )
        assert strength_history([session], "Curl") == []
