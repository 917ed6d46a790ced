"""
Tests for adherence tracking and plan adaptation.

All scenarios use a 10-week plan generated on Monday 2026-10-19, so the
plan starts that same day.
"""

from datetime import date

import pytest

from ocr_planner.core.adaptation import (
    adapt_plan,
    adapt_week,
    build_log_map,
    completion_status,
    plan_end_date,
    recompute,
    select_mode,
    summarize_adherence,
)
from ocr_planner.core.calendar import round_tenth
from ocr_planner.core.config import ACTIVE_RECOVERY_TEXT, INTENSIFY_TEXT
from ocr_planner.core.models import AdherenceSummary, AthleteInput, LogEntry
from ocr_planner.core.planner import generate_plan

MONDAY = date(2026, 10, 19)


@pytest.fixture
def base_plan():
    athlete = AthleteInput(
        race_date="2026-12-28",
        race_distance="10k",
        experience="intermediate",
        running_mileage=10.0,
        training_days=4,
        strength_frequency=1,
    )
    return generate_plan(athlete, MONDAY)


def _log(day: str, rpe: str = "", type_: str = "run", notes: str = "") -> LogEntry:
    return LogEntry(date=day, type=type_, value="30 min", rpe=rpe, notes=notes)


def _changed_days(before, after) -> int:
    return sum(1 for a, b in zip(before.days, after.days) if a != b)


# ===========================================================================
# Adherence
# ===========================================================================


class TestAdherence:
    def test_walk_includes_today(self, base_plan):
        summary = summarize_adherence(base_plan, [], date(2026, 10, 28))
        assert summary.total_days == 10

    def test_walk_stops_at_plan_end(self, base_plan):
        summary = summarize_adherence(base_plan, [], date(2027, 3, 1))
        assert summary.total_days == 70
        assert plan_end_date(base_plan) == date(2026, 12, 28)

    def test_before_start_walks_nothing(self, base_plan):
        summary = summarize_adherence(base_plan, [_log("2026-10-18")], date(2026, 10, 18))
        assert summary.total_days == 0
        assert select_mode(summary) == "none"

    def test_logs_outside_window_ignored(self, base_plan):
        logs = [_log("2026-10-18"), _log("2026-10-25")]
        summary = summarize_adherence(base_plan, logs, date(2026, 10, 21))
        assert summary.total_days == 3
        assert summary.completed_sessions == 0

    def test_last_logged_week_index(self, base_plan):
        logs = [_log("2026-10-19"), _log("2026-10-27")]
        summary = summarize_adherence(base_plan, logs, date(2026, 10, 30))
        assert summary.last_logged_week_index == 1

    def test_avg_rpe_counts_entries_without_rpe(self, base_plan):
        logs = [_log(f"2026-10-{d}") for d in range(19, 23)] + [_log("2026-10-23", rpe="10")]
        summary = summarize_adherence(base_plan, logs, date(2026, 10, 23))
        assert summary.completed_sessions == 5
        assert summary.avg_rpe == pytest.approx(2.0)

    def test_last_entry_for_a_date_wins(self):
        logs = [_log("2026-10-19", rpe="9"), _log("2026-10-19", rpe="2")]
        assert build_log_map(logs)["2026-10-19"].rpe == "2"


# ===========================================================================
# Mode selection
# ===========================================================================


class TestSelectMode:
    @pytest.mark.parametrize(
        "total, completed, rpe_sum, expected",
        [
            (10, 0, 0.0, "none"),
            (10, 4, 8.0, "lighten"),  # ratio 0.4
            (10, 5, 30.0, "lighten"),  # avg RPE 6
            (10, 8, 32.0, "intensify"),  # ratio 0.8, avg 4
            (10, 8, 40.0, "none"),  # avg 5
            (10, 7, 14.0, "none"),  # ratio 0.7
            (0, 0, 0.0, "none"),
        ],
    )
    def test_thresholds(self, total, completed, rpe_sum, expected):
        summary = AdherenceSummary(
            total_days=total, completed_sessions=completed, total_rpe=rpe_sum
        )
        assert select_mode(summary) == expected


# ===========================================================================
# Week adaptation
# ===========================================================================


class TestAdaptWeek:
    def test_lighten_swaps_first_hard_run(self, base_plan):
        week = base_plan.weeks[1]
        lighter = adapt_week(week, "lighten")
        assert lighter.mileage == round_tenth(week.mileage * 0.9)
        assert lighter.days[0].text == ACTIVE_RECOVERY_TEXT
        assert lighter.days[0].category == "active_recovery"
        assert _changed_days(week, lighter) == 1

    def test_intensify_swaps_first_easy_day(self, base_plan):
        week = base_plan.weeks[1]
        harder = adapt_week(week, "intensify")
        assert harder.mileage == round_tenth(week.mileage * 1.1)
        assert harder.days[1].text == INTENSIFY_TEXT
        assert harder.days[1].category == "hard_run"
        assert _changed_days(week, harder) == 1

    def test_lighten_without_hard_run_only_scales(self, base_plan):
        week = base_plan.weeks[1]
        no_hard = adapt_week(adapt_week(week, "lighten"), "lighten")
        assert no_hard.days == adapt_week(week, "lighten").days

    def test_none_returns_same_week(self, base_plan):
        week = base_plan.weeks[0]
        assert adapt_week(week, "none") is week


# ===========================================================================
# Plan adaptation
# ===========================================================================


class TestAdaptPlan:
    def test_no_logs_keeps_plan(self, base_plan):
        assert adapt_plan(base_plan, [], date(2026, 10, 28)) == base_plan

    def test_lighten_after_poor_adherence(self, base_plan):
        logs = [_log("2026-10-19"), _log("2026-10-21"), _log("2026-10-23")]
        adapted = adapt_plan(base_plan, logs, date(2026, 10, 28))  # 3 of 10 days

        assert adapted.weeks[0] == base_plan.weeks[0]
        for before, after in zip(base_plan.weeks[1:], adapted.weeks[1:]):
            assert after.mileage == round_tenth(before.mileage * 0.9)
            assert _changed_days(before, after) <= 1
        assert adapted.weeks[1].mileage == 9.9

    def test_intensify_after_easy_full_week(self, base_plan):
        logs = [_log(f"2026-10-{d}", rpe="3") for d in range(19, 24)]
        adapted = adapt_plan(base_plan, logs, date(2026, 10, 23))

        assert adapted.weeks[0] == base_plan.weeks[0]
        assert adapted.weeks[1].mileage == round_tenth(11.0 * 1.1)
        assert adapted.weeks[1].days[1].text == INTENSIFY_TEXT

    def test_high_rpe_lightens(self, base_plan):
        logs = [_log(f"2026-10-{d}", rpe="7") for d in range(19, 24)]
        adapted = adapt_plan(base_plan, logs, date(2026, 10, 23))
        assert adapted.weeks[1].days[0].text == ACTIVE_RECOVERY_TEXT

    def test_moderate_effort_keeps_plan(self, base_plan):
        logs = [_log(f"2026-10-{d}", rpe="5") for d in range(19, 23)]
        assert adapt_plan(base_plan, logs, date(2026, 10, 23)) == base_plan

    def test_duplicate_date_uses_latest_entry(self, base_plan):
        logs = [_log("2026-10-19", rpe="9"), _log("2026-10-19", rpe="2")]
        adapted = adapt_plan(base_plan, logs, MONDAY)
        assert adapted.weeks[1].days[1].text == INTENSIFY_TEXT

    def test_weeks_up_to_last_logged_week_unchanged(self, base_plan):
        logs = [_log("2026-10-19"), _log("2026-10-27")]
        adapted = adapt_plan(base_plan, logs, date(2026, 10, 30))  # 2 of 12 days

        assert adapted.weeks[:2] == base_plan.weeks[:2]
        assert adapted.weeks[2] != base_plan.weeks[2]

    def test_base_plan_untouched(self, base_plan):
        snapshot = generate_plan(
            AthleteInput("2026-12-28", "10k", "intermediate", 10.0, 4, 1), MONDAY
        )
        logs = [_log("2026-10-19")]
        adapt_plan(base_plan, logs, date(2026, 10, 28))
        assert base_plan == snapshot

    def test_recompute_is_repeatable(self, base_plan):
        logs = [_log("2026-10-19"), _log("2026-10-21")]
        today = date(2026, 10, 28)
        assert recompute(base_plan, logs, today) == recompute(base_plan, logs, today)

    def test_phase_and_week_numbers_survive(self, base_plan):
        logs = [_log("2026-10-19")]
        adapted = adapt_plan(base_plan, logs, date(2026, 10, 28))
        assert [w.phase for w in adapted.weeks] == [w.phase for w in base_plan.weeks]
        assert [w.week for w in adapted.weeks] == list(range(1, 11))
        assert adapted.phases == base_plan.phases


class TestCompletionStatus:
    def test_marks_logged_days(self, base_plan):
        entry = _log("2026-10-27", notes="hills")
        status = completion_status(base_plan, [entry])
        assert len(status) == 10
        assert all(len(week) == 7 for week in status)
        assert status[1][1] == entry
        assert status[0] == [None] * 7
