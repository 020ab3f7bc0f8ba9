"""
Unit tests for PlanWorkoutUseCase.

Uses in-memory fakes; no database required.
"""
import pytest

from application.use_cases import PlannedExercise, PlanWorkoutUseCase
from backend.core.overload_planner import OverloadRule
from tests.fakes import create_history_repo, make_session


@pytest.fixture
def history_repo():
    return create_history_repo(sessions=[
        make_session("2024-03-01", [("Bench Press", [(80, 10)]), ("Row", [(60, 8)])]),
        make_session("2024-03-04", [("Squat", [(100, 5)])]),
    ])


@pytest.mark.unit
class TestPlanWorkoutUseCase:
    """Tests for planning a routine."""

    def test_plans_every_exercise_in_order(self, history_repo):
        use_case = PlanWorkoutUseCase(history_repo)
        result = use_case.execute("test_user", [
            PlannedExercise("Row", target_set_count=2),
            PlannedExercise("Bench Press", target_set_count=3),
            PlannedExercise("Curl", target_set_count=1, rep_range_floor=12),
        ])

        assert [p.exercise_name for p in result.exercises] == ["Row", "Bench Press", "Curl"]
        row, bench, curl = result.exercises
        assert [(s.suggested_weight, s.suggested_reps) for s in row.suggestions] == [(60, 9)] * 2
        assert [(s.suggested_weight, s.suggested_reps) for s in bench.suggestions] == [(82.5, 8)] * 3
        assert curl.suggestions[0].based_on_prior is False
        assert curl.suggestions[0].suggested_reps == 12
        assert result.sessions_considered == 2

    def test_reads_history_once_with_window(self, history_repo):
        use_case = PlanWorkoutUseCase(history_repo, history_window=1)
        result = use_case.execute("test_user", [
            PlannedExercise("Bench Press", target_set_count=1),
            PlannedExercise("Squat", target_set_count=1),
        ])

        assert history_repo.list_calls == [{"user_id": "test_user", "limit": 1}]
        assert result.sessions_considered == 1
        # Only the newest session (Squat) is inside the window
        assert result.exercises[0].suggestions[0].based_on_prior is False
        assert result.exercises[1].suggestions[0].based_on_prior is True

    def test_new_exercise_defaults_to_ten_reps(self, history_repo):
        result = PlanWorkoutUseCase(history_repo).execute(
            "test_user", [PlannedExercise("Deadlift", target_set_count=2)],
        )
        assert [(s.suggested_weight, s.suggested_reps) for s in result.exercises[0].suggestions] == [(0.0, 10)] * 2

    def test_other_users_history_not_used(self, history_repo):
        result = PlanWorkoutUseCase(history_repo).execute(
            "someone_else", [PlannedExercise("Bench Press", target_set_count=1)],
        )
        assert result.sessions_considered == 0
        assert result.exercises[0].suggestions[0].based_on_prior is False

    def test_custom_rule(self, history_repo):
        use_case = PlanWorkoutUseCase(history_repo, overload_rule=OverloadRule(weight_increment=5))
        result = use_case.execute("test_user", [PlannedExercise("Bench Press", target_set_count=1)])
        assert result.exercises[0].suggestions[0].suggested_weight == 85

    def test_empty_plan(self, history_repo):
        assert PlanWorkoutUseCase(history_repo).execute("test_user", []).exercises == []
