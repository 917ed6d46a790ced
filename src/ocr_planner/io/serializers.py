"""
JSON serialization for ocr-planner data models.

Handles conversion between dataclasses and JSON-compatible dicts, and
the lenient parsing of form-style athlete input.
"""

import json
import re
from datetime import datetime
from typing import Any

from ..core.config import (
    DAYS_PER_WEEK,
    DEFAULT_RUNNING_MILEAGE,
    DEFAULT_STRENGTH_FREQUENCY,
    DEFAULT_TRAINING_DAYS,
)
from ..core.models import (
    RACE_DISTANCES,
    EXPERIENCE_LEVELS,
    AthleteInput,
    DayAssignment,
    LogEntry,
    PhaseCounts,
    Plan,
    WeekEntry,
    parse_leading_float,
)

_LEADING_INT = re.compile(r"^\s*[-+]?\d+")


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def validate_choice(value: str, choices: tuple[str, ...], name: str) -> str:
    """
    Validate that a value is one of the allowed choices.

    Raises:
        ValidationError: If value is not allowed
    """
    if value not in choices:
        raise ValidationError(f"Invalid {name}: {value!r}. Must be one of {choices}")
    return value


def parse_leading_int(raw: object) -> int | None:
    """Integer prefix of a value ("4", "4 days", 4.7 → 4), or None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw == raw and abs(raw) != float("inf") else None
    if not isinstance(raw, str):
        return None
    m = _LEADING_INT.match(raw)
    return int(m.group(0)) if m else None


# =============================================================================
# ATHLETE INPUT
# =============================================================================


def coerce_running_mileage(raw: object) -> float:
    """Weekly mileage; missing, malformed, or negative values become 0."""
    value = parse_leading_float(raw)
    if value is None:
        return DEFAULT_RUNNING_MILEAGE
    return max(0.0, value)


def coerce_training_days(raw: object) -> int:
    """Training days; missing, malformed, or non-positive values become 3, capped at 7."""
    value = parse_leading_int(raw)
    if value is None or value <= 0:
        return DEFAULT_TRAINING_DAYS
    return min(value, DAYS_PER_WEEK)


def coerce_strength_frequency(raw: object) -> int:
    """Strength sessions per week; missing, malformed, or negative values become 1."""
    value = parse_leading_int(raw)
    if value is None or value < 0:
        return DEFAULT_STRENGTH_FREQUENCY
    return value


def athlete_input_from_form(data: dict[str, Any]) -> AthleteInput:
    """
    Build an AthleteInput from form-style data.

    Numeric fields never fail: malformed values fall back to safe
    defaults. Race date, distance, and experience must be valid.

    Accepts both snake_case and the camelCase keys of the web form.

    Raises:
        ValidationError: If date, distance, or experience is invalid
    """

    def pick(*keys: str) -> Any:
        for k in keys:
            if k in data and data[k] is not None:
                return data[k]
        return None

    race_date = validate_date(str(pick("race_date", "raceDate") or ""))
    distance = validate_choice(
        str(pick("race_distance", "raceDistance") or ""), RACE_DISTANCES, "race_distance"
    )
    experience = validate_choice(
        str(pick("experience") or ""), EXPERIENCE_LEVELS, "experience"
    )

    return AthleteInput(
        race_date=race_date,
        race_distance=distance,  # type: ignore[arg-type]
        experience=experience,  # type: ignore[arg-type]
        running_mileage=coerce_running_mileage(pick("running_mileage", "runningMileage")),
        training_days=coerce_training_days(pick("training_days", "trainingDays")),
        strength_frequency=coerce_strength_frequency(
            pick("strength_frequency", "strengthFrequency")
        ),
    )


def athlete_input_to_dict(athlete: AthleteInput) -> dict[str, Any]:
    """Convert AthleteInput to JSON-compatible dict."""
    return {
        "race_date": athlete.race_date,
        "race_distance": athlete.race_distance,
        "experience": athlete.experience,
        "running_mileage": athlete.running_mileage,
        "training_days": athlete.training_days,
        "strength_frequency": athlete.strength_frequency,
    }


def dict_to_athlete_input(data: dict[str, Any]) -> AthleteInput:
    """
    Convert a stored dict back to AthleteInput.

    Raises:
        ValidationError: If data is invalid
    """
    try:
        return AthleteInput(
            race_date=validate_date(data["race_date"]),
            race_distance=data["race_distance"],
            experience=data["experience"],
            running_mileage=float(data.get("running_mileage", 0.0)),
            training_days=int(data.get("training_days", DEFAULT_TRAINING_DAYS)),
            strength_frequency=int(data.get("strength_frequency", DEFAULT_STRENGTH_FREQUENCY)),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid athlete record: {e}") from e


# =============================================================================
# PLAN
# =============================================================================


def week_to_dict(week: WeekEntry) -> dict[str, Any]:
    """Convert WeekEntry to JSON-compatible dict."""
    return {
        "week": week.week,
        "phase": week.phase,
        "mileage": week.mileage,
        "days": [{"category": d.category, "text": d.text} for d in week.days],
    }


def dict_to_week(data: dict[str, Any]) -> WeekEntry:
    """
    Convert dict to WeekEntry.

    Raises:
        ValidationError: If data is invalid
    """
    try:
        return WeekEntry(
            week=int(data["week"]),
            phase=data["phase"],
            mileage=float(data["mileage"]),
            days=tuple(
                DayAssignment(category=d["category"], text=str(d["text"]))
                for d in data["days"]
            ),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid week record: {e}") from e


def plan_to_dict(plan: Plan) -> dict[str, Any]:
    """Convert Plan to JSON-compatible dict."""
    return {
        "start_date": plan.start_date,
        "race_date": plan.race_date,
        "weeks_to_race": plan.weeks_to_race,
        "phases": {
            "base": plan.phases.base,
            "build": plan.phases.build,
            "specific": plan.phases.specific,
            "taper": plan.phases.taper,
        },
        "weeks": [week_to_dict(w) for w in plan.weeks],
    }


def dict_to_plan(data: dict[str, Any]) -> Plan:
    """
    Convert dict to Plan.

    Raises:
        ValidationError: If data is invalid
    """
    try:
        phases = data["phases"]
        return Plan(
            weeks=tuple(dict_to_week(w) for w in data["weeks"]),
            phases=PhaseCounts(
                base=int(phases["base"]),
                build=int(phases["build"]),
                specific=int(phases["specific"]),
                taper=int(phases["taper"]),
            ),
            weeks_to_race=int(data["weeks_to_race"]),
            start_date=validate_date(data["start_date"]),
            race_date=data.get("race_date", ""),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid plan record: {e}") from e


# =============================================================================
# LOG ENTRIES
# =============================================================================


def log_entry_to_dict(entry: LogEntry) -> dict[str, Any]:
    """Convert LogEntry to JSON-compatible dict."""
    return {
        "date": entry.date,
        "type": entry.type,
        "value": entry.value,
        "rpe": entry.rpe,
        "notes": entry.notes,
    }


def dict_to_log_entry(data: dict[str, Any]) -> LogEntry:
    """
    Convert dict to LogEntry.

    Missing optional fields become empty strings; a numeric ``rpe`` is
    stored as text.

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError(f"Log record must be an object, got {type(data).__name__}")
    if "date" not in data:
        raise ValidationError("Log record missing 'date'")

    validate_date(data["date"])

    def text(key: str, default: str = "") -> str:
        value = data.get(key)
        return default if value is None else str(value)

    return LogEntry(
        date=data["date"],
        type=text("type", "other"),
        value=text("value"),
        rpe=text("rpe"),
        notes=text("notes"),
    )


def log_entry_to_json_line(entry: LogEntry) -> str:
    """Convert a log entry to a single JSON line (no trailing newline)."""
    return json.dumps(log_entry_to_dict(entry), ensure_ascii=False, separators=(",", ":"))
