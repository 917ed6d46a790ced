"""Tests for the training review, race countdown, coach matcher, and settings."""

from datetime import date

import pytest

from ocr_planner.core.coaches import coach_from_dict, load_coaches, match_coaches
from ocr_planner.core.config_loader import default_data_dir, load_settings
from ocr_planner.core.milestones import (
    MILESTONE_TASKS,
    days_remaining,
    format_days_remaining,
    milestone_tasks,
)
from ocr_planner.core.models import AthleteInput, LogEntry
from ocr_planner.core.planner import generate_plan
from ocr_planner.core.review import (
    HIGH_EFFORT_MESSAGE,
    LOW_ADHERENCE_MESSAGE,
    MORE_STRENGTH_THAN_RUNS_MESSAGE,
    NO_STRENGTH_MESSAGE,
    ON_TRACK_MESSAGE,
    ONLY_OTHER_MESSAGE,
    READY_FOR_MORE_MESSAGE,
    review_training,
)

FRIDAY = date(2026, 10, 23)  # fifth day of the plan


@pytest.fixture
def plan():
    athlete = AthleteInput("2026-12-28", "10k", "intermediate", 10.0, 4, 1)
    return generate_plan(athlete, date(2026, 10, 19))


def _week(type_: str, rpe: str = "") -> list[LogEntry]:
    return [LogEntry(date=f"2026-10-{d}", type=type_, rpe=rpe) for d in range(19, 24)]


# ===========================================================================
# Review
# ===========================================================================


class TestReview:
    def test_mixed_week_on_track(self, plan):
        logs = [
            LogEntry(date="2026-10-19", type="run", rpe="4"),
            LogEntry(date="2026-10-20", type="strength"),
            LogEntry(date="2026-10-21", type="Run", rpe="6"),
            LogEntry(date="2026-10-22", type="yoga"),
        ]
        result = review_training(plan, logs, FRIDAY)

        assert result.total_days == 5
        assert result.completed_days == 4
        assert result.completion_ratio == pytest.approx(0.8)
        assert result.avg_rpe == pytest.approx(5.0)
        assert result.type_counts == {"run": 2, "strength": 1, "other": 1, "rest": 0}
        assert result.recommendations == [ON_TRACK_MESSAGE]

    def test_low_adherence(self, plan):
        logs = [LogEntry(date="2026-10-19", type="strength")]
        result = review_training(plan, logs, FRIDAY)
        assert result.recommendations == [LOW_ADHERENCE_MESSAGE, MORE_STRENGTH_THAN_RUNS_MESSAGE]

    def test_ready_for_more_without_rpe(self, plan):
        result = review_training(plan, _week("run"), FRIDAY)
        assert result.avg_rpe is None
        assert result.recommendations == [READY_FOR_MORE_MESSAGE, NO_STRENGTH_MESSAGE]

    def test_only_other_high_effort(self, plan):
        result = review_training(plan, _week("other", rpe="8"), FRIDAY)
        assert result.recommendations == [
            HIGH_EFFORT_MESSAGE,
            NO_STRENGTH_MESSAGE,
            ONLY_OTHER_MESSAGE,
        ]

    def test_nothing_elapsed(self, plan):
        result = review_training(plan, [], date(2026, 10, 1))
        assert result.total_days == 0
        assert result.completion_ratio == 0.0
        assert result.recommendations[0] == LOW_ADHERENCE_MESSAGE


# ===========================================================================
# Countdown
# ===========================================================================


class TestCountdown:
    def test_days_remaining(self):
        assert days_remaining("2026-12-28", date(2026, 10, 19)) == 70
        assert days_remaining("2026-10-01", date(2026, 10, 19)) == 0

    @pytest.mark.parametrize(
        "days_left, row",
        [(70, 0), (29, 0), (28, 1), (15, 1), (14, 2), (8, 2), (7, 3), (0, 3)],
    )
    def test_milestone_thresholds(self, days_left, row):
        assert milestone_tasks(days_left) == MILESTONE_TASKS[row][1]

    def test_format(self):
        assert format_days_remaining(1) == "1 day remaining"
        assert format_days_remaining(0) == "0 days remaining"
        assert format_days_remaining(12) == "12 days remaining"


# ===========================================================================
# Coaches
# ===========================================================================


class TestCoaches:
    @pytest.fixture
    def directory(self):
        return load_coaches()

    def _names(self, coaches):
        return [c.name for c in coaches]

    def test_directory_loaded(self, directory):
        assert len(directory) == 5

    def test_no_criteria_matches_all(self, directory):
        assert match_coaches(directory) == directory

    def test_filter_by_format(self, directory):
        assert self._names(match_coaches(directory, fmt="remote")) == [
            "Sarah Thompson",
            "Emily Chen",
            "Ariana Gomez",
        ]

    def test_filter_by_experience(self, directory):
        assert self._names(match_coaches(directory, experience="advanced")) == [
            "Sarah Thompson",
            "Marcus Lee",
        ]

    def test_any_specialty_matches(self, directory):
        assert self._names(match_coaches(directory, specialties=["nutrition"])) == ["Emily Chen"]
        assert self._names(
            match_coaches(directory, "remote", "intermediate", ["running"])
        ) == ["Ariana Gomez"]

    def test_no_match(self, directory):
        assert match_coaches(directory, "in-person", "advanced", ["nutrition"]) == []

    def test_bad_record(self):
        with pytest.raises(ValueError):
            coach_from_dict({"name": "X", "format": "carrier pigeon"})
        with pytest.raises(ValueError):
            coach_from_dict({"format": "remote"})


# ===========================================================================
# Settings
# ===========================================================================


class TestSettings:
    def test_bundled_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "missing.yaml")
        assert settings["athlete"]["training_days"] == 3
        assert settings["export"]["filename"] == "ocr_training_plan.ics"

    def test_user_override_is_merged(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("athlete:\n  training_days: 5\n", encoding="utf-8")
        settings = load_settings(path)
        assert settings["athlete"]["training_days"] == 5
        assert settings["athlete"]["experience"] == "beginner"

    def test_broken_user_file_warns(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.warns(UserWarning):
            settings = load_settings(path)
        assert settings["athlete"]["training_days"] == 3

    def test_data_dir_setting(self, tmp_path):
        assert default_data_dir({"data_dir": str(tmp_path)}) == tmp_path
