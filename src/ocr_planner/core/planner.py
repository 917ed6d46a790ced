"""
Plan generation for ocr-planner.

Generates a deterministic week-by-week, day-by-day plan from the
athlete's inputs and the race date: phase lengths from a fixed table,
a compounding mileage curve capped at a distance-dependent peak, and a
fixed weekly layout of runs, strength, active recovery, and rest.
"""

from datetime import date

from .calendar import parse_iso, plan_start_date, round_half_up, round_tenth, to_iso, weeks_between
from .config import (
    ACTIVE_RECOVERY_TEXT,
    DAYS_PER_WEEK,
    EASY_RUN_TEXT,
    HARD_RUN_MIN_TRAINING_DAYS,
    HARD_RUN_TEXTS,
    MIN_TARGET_PEAK,
    PEAK_MULTIPLIERS,
    PHASE_TABLE,
    REST_TEXT,
    RUN_DAY_FRACTION,
    STRENGTH_TEXTS,
    SUMMARY_SEPARATOR,
    WEEKLY_GROWTH_RATES,
)
from .models import (
    AthleteInput,
    DayAssignment,
    DayCategory,
    Experience,
    Phase,
    PhaseCounts,
    Plan,
    RaceDistance,
    WeekEntry,
)


def weeks_to_race(race_date: str, today: date) -> int:
    """
    Plan horizon in whole weeks.

    Args:
        race_date: ISO race date
        today: Generation date

    Returns:
        At least 1
    """
    return weeks_between(today, parse_iso(race_date))


def phase_lengths(weeks: int) -> PhaseCounts:
    """
    Split a horizon into Base / Build / Specific / Taper weeks.

    Base, specific and taper come from PHASE_TABLE; build is whatever is
    left. Build is not clamped, so horizons shorter than the fixed phases
    produce a zero or negative build count.

    Args:
        weeks: Horizon in weeks

    Returns:
        PhaseCounts summing to ``weeks``
    """
    for upper, base, specific, taper in PHASE_TABLE:
        if upper is None or weeks < upper:
            return PhaseCounts(
                base=base,
                build=weeks - base - specific - taper,
                specific=specific,
                taper=taper,
            )
    raise AssertionError("PHASE_TABLE must end with an unbounded row")


def phase_for_week(week_index: int, phases: PhaseCounts) -> Phase:
    """Phase of the 0-based ``week_index`` given cumulative phase boundaries."""
    if week_index < phases.base:
        return "Base"
    if week_index < phases.base + phases.build:
        return "Build"
    if week_index < phases.base + phases.build + phases.specific:
        return "Specific"
    return "Taper"


def target_peak(start_mileage: float, race_distance: RaceDistance) -> float:
    """Peak weekly mileage: start × distance multiplier, at least MIN_TARGET_PEAK."""
    return max(start_mileage * PEAK_MULTIPLIERS[race_distance], MIN_TARGET_PEAK)


def mileage_progression(
    start_mileage: float,
    race_distance: RaceDistance,
    experience: Experience,
    weeks: int,
) -> list[float]:
    """
    Weekly mileage targets, unrounded.

    Mileage compounds by the experience growth rate each week and
    saturates at the target peak, so the sequence is non-decreasing.
    Week 1 is the starting mileage itself.

    Args:
        start_mileage: Current weekly mileage (negative is treated as 0)
        race_distance: Determines the peak multiplier
        experience: Determines the weekly growth rate
        weeks: Number of values to produce

    Returns:
        List of ``weeks`` mileage values
    """
    current = max(0.0, start_mileage)
    peak = target_peak(current, race_distance)
    rate = WEEKLY_GROWTH_RATES[experience]

    values: list[float] = []
    for _ in range(weeks):
        values.append(current)
        current = min(peak, current * (1 + rate))
    return values


def run_days_for(training_days: int) -> int:
    """Run sessions per week: 60% of training days, at least one."""
    return max(1, round_half_up(training_days * RUN_DAY_FRACTION))


def week_day_categories(training_days: int, strength_frequency: int) -> list[DayCategory]:
    """
    Lay out one week, Monday to Sunday.

    Run slots come first, then strength, then active recovery up to
    ``training_days``, then rest. With four or more training days one run
    is hard; the lookahead rule front-loads it onto the first run day.

    Args:
        training_days: Training days per week (1-7)
        strength_frequency: Requested strength sessions per week

    Returns:
        Seven day categories
    """
    run_days = run_days_for(training_days)
    strength_days = min(strength_frequency, training_days - run_days)
    hard_runs = 1 if training_days >= HARD_RUN_MIN_TRAINING_DAYS else 0

    categories: list[DayCategory] = []
    run_count = 0
    strength_count = 0
    hard_used = 0
    for day in range(DAYS_PER_WEEK):
        if run_count < run_days:
            is_hard = hard_used < hard_runs and (
                run_days - run_count <= (hard_runs - hard_used) + (DAYS_PER_WEEK - day)
            )
            if is_hard:
                hard_used += 1
            categories.append("hard_run" if is_hard else "easy_run")
            run_count += 1
        elif strength_count < strength_days:
            categories.append("strength")
            strength_count += 1
        elif day < training_days:
            categories.append("active_recovery")
        else:
            categories.append("rest")
    return categories


def describe_day(category: DayCategory, phase: Phase) -> DayAssignment:
    """Build the day assignment with its fixed text for a category and phase."""
    if category == "easy_run":
        text = EASY_RUN_TEXT
    elif category == "hard_run":
        text = HARD_RUN_TEXTS[phase]
    elif category == "strength":
        text = STRENGTH_TEXTS[phase]
    elif category == "active_recovery":
        text = ACTIVE_RECOVERY_TEXT
    else:
        text = REST_TEXT
    return DayAssignment(category=category, text=text)


def generate_plan(athlete: AthleteInput, today: date | None = None) -> Plan:
    """
    Generate the base plan for an athlete.

    The result is the reference plan that adaptation derives from; it is
    immutable and identical for identical (athlete, today).

    Args:
        athlete: Plan request
        today: Generation date (default: today)

    Returns:
        Plan with one WeekEntry per week until race day
    """
    if today is None:
        today = date.today()

    weeks = weeks_to_race(athlete.race_date, today)
    phases = phase_lengths(weeks)
    mileages = mileage_progression(
        athlete.running_mileage,
        athlete.race_distance,
        athlete.experience,
        weeks,
    )
    layout = week_day_categories(athlete.training_days, athlete.strength_frequency)

    week_entries: list[WeekEntry] = []
    for w in range(weeks):
        phase = phase_for_week(w, phases)
        week_entries.append(
            WeekEntry(
                week=w + 1,
                phase=phase,
                mileage=round_tenth(mileages[w]),
                days=tuple(describe_day(c, phase) for c in layout),
            )
        )

    return Plan(
        weeks=tuple(week_entries),
        phases=phases,
        weeks_to_race=weeks,
        start_date=to_iso(plan_start_date(today)),
        race_date=athlete.race_date,
    )


def day_summary(text: str) -> str:
    """Text before the first en dash, or the whole text when there is none."""
    idx = text.find(SUMMARY_SEPARATOR)
    if idx == -1:
        return text
    return text[:idx].strip() or text
