"""
Data models for ocr-planner.

All core dataclasses representing athlete inputs, plans, and logged
workouts. Dates are stored as ISO strings (YYYY-MM-DD). Plans are frozen
so the base plan can be kept as a reference while adapted copies are
derived from it.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from .config import DAYS_PER_WEEK, PHASES

RaceDistance = Literal["5k", "10k", "21k", "ultra"]
Experience = Literal["beginner", "intermediate", "advanced"]
Phase = Literal["Base", "Build", "Specific", "Taper"]
DayCategory = Literal["easy_run", "hard_run", "strength", "active_recovery", "rest"]
AdaptationMode = Literal["lighten", "intensify", "none"]

RACE_DISTANCES: tuple[str, ...] = ("5k", "10k", "21k", "ultra")
EXPERIENCE_LEVELS: tuple[str, ...] = ("beginner", "intermediate", "advanced")
DAY_CATEGORIES: tuple[str, ...] = (
    "easy_run",
    "hard_run",
    "strength",
    "active_recovery",
    "rest",
)

_LEADING_FLOAT = re.compile(r"^\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?")


def validate_iso_date(date_str: str) -> None:
    """Validate date string is ISO format YYYY-MM-DD."""
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValueError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")
    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValueError(f"Invalid date: {date_str}") from e


def parse_leading_float(raw: object) -> float | None:
    """
    Parse the numeric prefix of a value, the way form fields are read.

    "7", "7.5", " 6 (hard)" all parse; "", "hard", None do not.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return float(raw) if raw == raw else None  # NaN check
    if not isinstance(raw, str):
        return None
    m = _LEADING_FLOAT.match(raw)
    if m is None:
        return None
    return float(m.group(0))


@dataclass(frozen=True)
class AthleteInput:
    """
    Parameters of one plan request.

    Numbers are already coerced; see io.serializers.athlete_input_from_form
    for the lenient form-style constructor.
    """

    race_date: str  # ISO format: YYYY-MM-DD
    race_distance: RaceDistance
    experience: Experience
    running_mileage: float = 0.0  # current weekly baseline
    training_days: int = 3
    strength_frequency: int = 1

    def __post_init__(self) -> None:
        """Validate athlete input."""
        validate_iso_date(self.race_date)
        if self.race_distance not in RACE_DISTANCES:
            raise ValueError(f"Invalid race_distance: {self.race_distance}")
        if self.experience not in EXPERIENCE_LEVELS:
            raise ValueError(f"Invalid experience: {self.experience}")
        if self.running_mileage < 0:
            raise ValueError("running_mileage must be non-negative")
        if not 1 <= self.training_days <= DAYS_PER_WEEK:
            raise ValueError(f"training_days must be between 1 and {DAYS_PER_WEEK}")
        if self.strength_frequency < 0:
            raise ValueError("strength_frequency must be non-negative")


@dataclass(frozen=True)
class DayAssignment:
    """One day of a training week: its category and the text shown to the athlete."""

    category: DayCategory
    text: str

    def __post_init__(self) -> None:
        if self.category not in DAY_CATEGORIES:
            raise ValueError(f"Invalid day category: {self.category}")


@dataclass(frozen=True)
class WeekEntry:
    """
    A single planned week.

    Days run Monday to Sunday. Mileage is stored with one-decimal precision.
    """

    week: int  # 1-indexed
    phase: Phase
    mileage: float
    days: tuple[DayAssignment, ...]

    def __post_init__(self) -> None:
        """Validate week data."""
        if self.week < 1:
            raise ValueError("week must be 1 or greater")
        if self.phase not in PHASES:
            raise ValueError(f"Invalid phase: {self.phase}")
        if len(self.days) != DAYS_PER_WEEK:
            raise ValueError(
                f"week {self.week} must have {DAYS_PER_WEEK} days, got {len(self.days)}"
            )


@dataclass(frozen=True)
class PhaseCounts:
    """
    Number of weeks in each phase.

    ``build`` is the remainder of the horizon and may be zero or negative
    for short horizons; the other phases keep their table lengths.
    """

    base: int
    build: int
    specific: int
    taper: int

    @property
    def total(self) -> int:
        return self.base + self.build + self.specific + self.taper


@dataclass(frozen=True)
class Plan:
    """
    A complete periodized plan.

    ``start_date`` is the Monday of week 1; week ``i`` day ``d`` falls on
    start_date + 7*i + d.
    """

    weeks: tuple[WeekEntry, ...]
    phases: PhaseCounts
    weeks_to_race: int
    start_date: str  # ISO format: YYYY-MM-DD
    race_date: str = ""

    def __post_init__(self) -> None:
        """Validate plan data."""
        validate_iso_date(self.start_date)
        if self.race_date:
            validate_iso_date(self.race_date)
        if self.weeks_to_race < 1:
            raise ValueError("weeks_to_race must be at least 1")
        if len(self.weeks) != self.weeks_to_race:
            raise ValueError(
                f"plan has {len(self.weeks)} weeks but weeks_to_race is {self.weeks_to_race}"
            )
        if self.phases.total != self.weeks_to_race:
            raise ValueError(
                f"phase counts sum to {self.phases.total}, expected {self.weeks_to_race}"
            )


@dataclass(frozen=True)
class LogEntry:
    """
    A logged workout.

    ``type`` is free text, canonically run | strength | other | rest.
    ``value`` and ``rpe`` are kept exactly as entered.
    """

    date: str  # ISO format: YYYY-MM-DD
    type: str = "other"
    value: str = ""
    rpe: str = ""
    notes: str = ""

    def __post_init__(self) -> None:
        validate_iso_date(self.date)

    @property
    def rpe_value(self) -> float | None:
        """Reported RPE as a number, or None when missing or unparseable."""
        return parse_leading_float(self.rpe)


@dataclass
class AdherenceSummary:
    """
    Completion statistics for the elapsed part of a plan.
    """

    total_days: int = 0
    completed_sessions: int = 0
    total_rpe: float = 0.0
    last_logged_week_index: int = -1  # 0-based; -1 when nothing was logged

    @property
    def completion_ratio(self) -> float:
        if self.total_days == 0:
            return 0.0
        return self.completed_sessions / self.total_days

    @property
    def avg_rpe(self) -> float:
        # Entries without a parseable RPE still count in the denominator.
        if self.completed_sessions == 0:
            return 0.0
        return self.total_rpe / self.completed_sessions


@dataclass
class TrainingReview:
    """
    Adherence and effort review over the elapsed part of a plan.
    """

    total_days: int
    completed_days: int
    avg_rpe: float | None  # mean over entries with a parseable RPE
    type_counts: dict[str, int] = field(default_factory=dict)
    recommendations: list[str] = field(default_factory=list)

    @property
    def completion_ratio(self) -> float:
        if self.total_days == 0:
            return 0.0
        return self.completed_days / self.total_days


@dataclass(frozen=True)
class Coach:
    """A coach listing in the matcher directory."""

    name: str
    format: Literal["remote", "in-person"]
    specialties: tuple[str, ...]
    levels: tuple[str, ...]
    bio: str = ""
    location: str = ""
    contact: str = ""
