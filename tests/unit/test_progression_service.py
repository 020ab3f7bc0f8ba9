"""
Unit tests for Progression Service.

Tests cover:
- Personal records over all history
- Strength history with all-time best
- Suggestions read through the history window
- Level state from the profile XP counter
- Dashboard stats
"""
from datetime import date

import pytest

from backend.core.leveling import LevelingConfig
from backend.core.one_rep_max import estimate_one_rep_max
from backend.core.progression_service import ProgressionService
from tests.fakes import create_history_repo, create_xp_repo, make_session


@pytest.fixture
def history_repo():
    return create_history_repo(sessions=[
        make_session("2024-03-01", [("Bench Press", [(80, 10)]), ("Squat", [(100, 5)])], routine_name="Full Body"),
        make_session("2024-03-05", [("Bench Press", [(85, 6)])], routine_name="Push"),
        make_session("2024-03-06", [("Squat", [(110, 5)])], routine_name="Legs"),
    ])


@pytest.fixture
def service(history_repo):
    return ProgressionService(history_repo, create_xp_repo(xp=1500))


@pytest.mark.unit
class TestPersonalRecords:
    """Tests for get_personal_records."""

    def test_records(self, service):
        result = service.get_personal_records("test_user")
        assert result.sessions_scanned == 3
        assert result.records["Bench Press"] == pytest.approx(estimate_one_rep_max(80, 10))
        assert result.records["Squat"] == pytest.approx(estimate_one_rep_max(110, 5))

    def test_unknown_user(self, service):
        result = service.get_personal_records("nobody")
        assert result.records == {}
        assert result.sessions_scanned == 0


@pytest.mark.unit
class TestStrengthHistory:
    """Tests for get_strength_history."""

    def test_points_and_best(self, service):
        result = service.get_strength_history("test_user", "Bench Press")
        assert [p.routine_name for p in result.points] == ["Full Body", "Push"]
        assert result.all_time_best_1rm == pytest.approx(estimate_one_rep_max(80, 10))

    def test_never_trained(self, service):
        result = service.get_strength_history("test_user", "Curl")
        assert result.points == []
        assert result.all_time_best_1rm is None


@pytest.mark.unit
class TestSuggestions:
    """Tests for get_suggestions."""

    def test_uses_latest_session(self, service):
        suggestions = service.get_suggestions(
            "test_user", "Bench Press", target_set_count=3, rep_range_floor=8,
        )
        assert [(s.suggested_weight, s.suggested_reps) for s in suggestions] == [(85, 7)] * 3

    def test_reads_history_window(self, history_repo):
        service = ProgressionService(history_repo, create_xp_repo(), history_window=1)
        suggestions = service.get_suggestions(
            "test_user", "Bench Press", target_set_count=1, rep_range_floor=8,
        )
        assert history_repo.list_calls[-1]["limit"] == 1
        assert suggestions[0].based_on_prior is False


@pytest.mark.unit
class TestLevel:
    """Tests for get_level."""

    def test_level_from_xp(self, service):
        result = service.get_level("test_user")
        assert result.total_xp == 1500
        assert result.state.level == 2
        assert result.state.progress_fraction == pytest.approx(500 / 1250)

    def test_new_profile(self, service):
        result = service.get_level("nobody")
        assert result.total_xp == 0.0
        assert result.state.level == 1

    def test_custom_curve(self, history_repo):
        service = ProgressionService(
            history_repo, create_xp_repo(xp=1500), leveling=LevelingConfig(base_xp=100),
        )
        assert service.get_level("test_user").state.level == 3


@pytest.mark.unit
class TestTrainingStats:
    """Tests for get_training_stats."""

    def test_stats(self, service):
        stats = service.get_training_stats("test_user", today=date(2024, 3, 7))
        assert stats.total_workouts == 3
        assert stats.current_streak == 2
        assert stats.workouts_this_month == 3
        assert stats.total_volume == 800 + 500 + 510 + 550

    def test_defaults_to_today(self, service):
        stats = service.get_training_stats("nobody")
        assert stats.total_workouts == 0
