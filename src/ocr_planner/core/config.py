"""
Configuration constants for the OCR training model.

All heuristic parameters of plan generation and adaptation are
centralized here. The workout texts are part of the stored-plan format
and must not be reworded.
"""

from typing import Final

# =============================================================================
# PHASE LENGTHS
# =============================================================================

# (upper bound exclusive, base, specific, taper); build fills the remainder.
# The last row has no upper bound.
PHASE_TABLE: Final[list[tuple[int | None, int, int, int]]] = [
    (8, 2, 1, 1),
    (12, 3, 2, 1),
    (20, 4, 3, 1),
    (None, 6, 5, 2),
]

PHASES: Final[tuple[str, ...]] = ("Base", "Build", "Specific", "Taper")

# =============================================================================
# MILEAGE PROGRESSION
# =============================================================================

PEAK_MULTIPLIERS: Final[dict[str, float]] = {
    "5k": 1.5,
    "10k": 1.8,
    "21k": 2.2,
    "ultra": 3.0,
}

MIN_TARGET_PEAK: Final[float] = 10.0  # Floor of the peak weekly mileage

WEEKLY_GROWTH_RATES: Final[dict[str, float]] = {
    "beginner": 0.08,
    "intermediate": 0.10,
    "advanced": 0.12,
}

# =============================================================================
# WEEKLY STRUCTURE
# =============================================================================

DAYS_PER_WEEK: Final[int] = 7
RUN_DAY_FRACTION: Final[float] = 0.6  # Share of training days spent running
HARD_RUN_MIN_TRAINING_DAYS: Final[int] = 4  # One hard run from this many days up

# Form-input fallbacks for malformed numbers
DEFAULT_RUNNING_MILEAGE: Final[float] = 0.0
DEFAULT_TRAINING_DAYS: Final[int] = 3
DEFAULT_STRENGTH_FREQUENCY: Final[int] = 1

# =============================================================================
# ADAPTATION
# =============================================================================

LIGHTEN_COMPLETION_BELOW: Final[float] = 0.5
LIGHTEN_RPE_AT_LEAST: Final[float] = 6.0
INTENSIFY_COMPLETION_AT_LEAST: Final[float] = 0.8
INTENSIFY_RPE_AT_MOST: Final[float] = 4.0

LIGHTEN_MILEAGE_FACTOR: Final[float] = 0.9
INTENSIFY_MILEAGE_FACTOR: Final[float] = 1.1

# Categories a day must have to be swapped by each adaptation mode
LIGHTEN_CANDIDATES: Final[frozenset[str]] = frozenset({"hard_run"})
INTENSIFY_CANDIDATES: Final[frozenset[str]] = frozenset(
    {"easy_run", "active_recovery", "rest"}
)

# =============================================================================
# WORKOUT TEXTS
# =============================================================================

EASY_RUN_TEXT: Final[str] = "Easy run – stay at conversational pace (RPE 3–4)."

HARD_RUN_TEXTS: Final[dict[str, str]] = {
    "Base": "Tempo run – moderate pace (RPE 5–6).",
    "Build": "Interval or hill session – short bursts at RPE 6–7 with recovery jogs.",
    "Specific": "Race‑specific run – include carries or obstacles and maintain RPE 5–7.",
    "Taper": "Short sharpening run – brief bursts at RPE 6, mostly easy.",
}

STRENGTH_TEXTS: Final[dict[str, str]] = {
    "Base": "General strength circuit – squats, push‑ups, lunges, core exercises.",
    "Build": "Full‑body strength with added grip work – deadlifts, pull‑ups, presses.",
    "Specific": "Obstacle strength & carries – rope climbs, sandbag/bucket carries, rig practice.",
    "Taper": "Light strength & mobility – keep muscles activated but prioritise recovery.",
}

ACTIVE_RECOVERY_TEXT: Final[str] = "Active recovery/mobility – gentle stretching or yoga."
REST_TEXT: Final[str] = "Rest day."

# Replacement used when a week is intensified
INTENSIFY_TEXT: Final[str] = HARD_RUN_TEXTS["Build"]

# Separator between the summary and the details of a workout text
SUMMARY_SEPARATOR: Final[str] = "–"

# =============================================================================
# REVIEW
# =============================================================================

LOG_TYPES: Final[tuple[str, ...]] = ("run", "strength", "other", "rest")

# =============================================================================
# CALENDAR EXPORT
# =============================================================================

ICS_PRODID: Final[str] = "-//OCR Planner//EN"
ICS_UID_DOMAIN: Final[str] = "ocrplanner"
ICS_LINE_LIMIT: Final[int] = 75  # Octets per content line before folding
