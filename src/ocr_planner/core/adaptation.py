"""
Adaptation rules: adherence tracking and rescheduling of future weeks.

Compares the elapsed part of a plan with the workout log, decides
whether upcoming weeks should be lightened or intensified, and derives
an adapted plan. The base plan is never modified; every call starts
from it again, so re-running on the same inputs gives the same result.
"""

import logging
from dataclasses import replace
from datetime import date, timedelta

from .calendar import day_date, parse_iso, round_tenth, to_iso
from .config import (
    ACTIVE_RECOVERY_TEXT,
    DAYS_PER_WEEK,
    INTENSIFY_CANDIDATES,
    INTENSIFY_COMPLETION_AT_LEAST,
    INTENSIFY_MILEAGE_FACTOR,
    INTENSIFY_RPE_AT_MOST,
    INTENSIFY_TEXT,
    LIGHTEN_CANDIDATES,
    LIGHTEN_COMPLETION_BELOW,
    LIGHTEN_MILEAGE_FACTOR,
    LIGHTEN_RPE_AT_LEAST,
)
from .models import AdaptationMode, AdherenceSummary, DayAssignment, LogEntry, Plan, WeekEntry

logger = logging.getLogger(__name__)


def build_log_map(logs: list[LogEntry]) -> dict[str, LogEntry]:
    """
    Index log entries by date.

    When several entries share a date the last one wins.
    """
    log_map: dict[str, LogEntry] = {}
    for entry in logs:
        log_map[entry.date] = entry
    return log_map


def plan_end_date(plan: Plan) -> date:
    """First day after the last week of the plan."""
    return parse_iso(plan.start_date) + timedelta(days=len(plan.weeks) * DAYS_PER_WEEK)


def summarize_adherence(
    plan: Plan,
    logs: list[LogEntry],
    today: date,
) -> AdherenceSummary:
    """
    Walk the elapsed plan days and collect completion statistics.

    Days run from the plan start through today (inclusive), stopping at
    the end of the plan. A day counts as completed when any log entry
    exists for it.

    Args:
        plan: Plan being followed
        logs: All logged workouts
        today: Reference date

    Returns:
        AdherenceSummary
    """
    log_map = build_log_map(logs)
    start = parse_iso(plan.start_date)
    end = plan_end_date(plan)

    summary = AdherenceSummary()
    offset = 0
    day = start
    while day <= today and day < end:
        entry = log_map.get(to_iso(day))
        if entry is not None:
            summary.completed_sessions += 1
            rpe = entry.rpe_value
            if rpe is not None:
                summary.total_rpe += rpe
            summary.last_logged_week_index = max(
                summary.last_logged_week_index, offset // DAYS_PER_WEEK
            )
        summary.total_days += 1
        offset += 1
        day += timedelta(days=1)

    return summary


def select_mode(summary: AdherenceSummary) -> AdaptationMode:
    """
    Decide how upcoming weeks should change.

    - lighten: completion below 50% or average RPE 6 and up
    - intensify: completion 80% and up with average RPE 4 or below
    - none: otherwise, or when nothing has been logged yet

    Args:
        summary: Adherence statistics

    Returns:
        Adaptation mode
    """
    if summary.total_days == 0 or summary.completed_sessions == 0:
        return "none"

    ratio = summary.completion_ratio
    avg_rpe = summary.avg_rpe

    if ratio < LIGHTEN_COMPLETION_BELOW or avg_rpe >= LIGHTEN_RPE_AT_LEAST:
        return "lighten"
    if ratio >= INTENSIFY_COMPLETION_AT_LEAST and avg_rpe <= INTENSIFY_RPE_AT_MOST:
        return "intensify"
    return "none"


def adapt_week(week: WeekEntry, mode: AdaptationMode) -> WeekEntry:
    """
    Apply one adaptation step to a single week.

    Mileage is scaled by ±10% and at most one day is swapped: lightening
    turns the first hard run into active recovery, intensifying turns the
    first easy, recovery or rest day into an interval session.

    Args:
        week: Week to adapt
        mode: "lighten" or "intensify" ("none" returns the week unchanged)

    Returns:
        New WeekEntry
    """
    if mode == "none":
        return week

    if mode == "lighten":
        factor = LIGHTEN_MILEAGE_FACTOR
        candidates = LIGHTEN_CANDIDATES
        replacement = DayAssignment(category="active_recovery", text=ACTIVE_RECOVERY_TEXT)
    else:
        factor = INTENSIFY_MILEAGE_FACTOR
        candidates = INTENSIFY_CANDIDATES
        replacement = DayAssignment(category="hard_run", text=INTENSIFY_TEXT)

    days = list(week.days)
    for i, day in enumerate(days):
        if day.category in candidates:
            days[i] = replacement
            break

    return replace(week, mileage=round_tenth(week.mileage * factor), days=tuple(days))


def adapt_plan(plan: Plan, logs: list[LogEntry], today: date | None = None) -> Plan:
    """
    Derive an adapted plan from a base plan and the workout log.

    Only weeks after the last week that contains a logged day change.
    The input plan is left untouched.

    Args:
        plan: Base plan
        logs: All logged workouts
        today: Reference date (default: today)

    Returns:
        Adapted plan (``plan`` itself when no adaptation applies)
    """
    if today is None:
        today = date.today()

    summary = summarize_adherence(plan, logs, today)
    mode = select_mode(summary)
    logger.debug(
        "adherence: %d/%d days, avg RPE %.2f, last logged week %d -> %s",
        summary.completed_sessions,
        summary.total_days,
        summary.avg_rpe,
        summary.last_logged_week_index,
        mode,
    )
    if mode == "none":
        return plan

    weeks = tuple(
        adapt_week(week, mode) if w > summary.last_logged_week_index else week
        for w, week in enumerate(plan.weeks)
    )
    return replace(plan, weeks=weeks)


def recompute(base_plan: Plan, logs: list[LogEntry], today: date | None = None) -> Plan:
    """
    Rebuild the current plan after the log changed.

    Always starts again from the base plan; callers keep the base plan and
    call this whenever they notice new log entries.
    """
    return adapt_plan(base_plan, logs, today)


def completion_status(plan: Plan, logs: list[LogEntry]) -> list[list[LogEntry | None]]:
    """
    Log entry matched to every plan day, or None.

    Returns:
        One list of seven items per week
    """
    log_map = build_log_map(logs)
    start = parse_iso(plan.start_date)
    return [
        [log_map.get(to_iso(day_date(start, w, d))) for d in range(len(week.days))]
        for w, week in enumerate(plan.weeks)
    ]
