"""
Coach directory and matching.

The directory is a static list loaded from the bundled coaches.yaml.
"""

from typing import Any, Iterable

from .config_loader import load_coach_records
from .models import Coach

COACH_FORMATS: tuple[str, ...] = ("remote", "in-person")
SPECIALTIES: tuple[str, ...] = ("ocr", "running", "strength", "nutrition")


def coach_from_dict(data: dict[str, Any]) -> Coach:
    """
    Build a Coach from a directory record.

    Raises:
        ValueError: If a required field is missing or the format is unknown
    """
    try:
        name = str(data["name"])
        fmt = str(data["format"])
    except KeyError as e:
        raise ValueError(f"coach record missing field {e}") from e
    if fmt not in COACH_FORMATS:
        raise ValueError(f"Invalid coach format for {name}: {fmt}")
    return Coach(
        name=name,
        format=fmt,  # type: ignore[arg-type]
        specialties=tuple(str(s) for s in data.get("specialties", [])),
        levels=tuple(str(lv) for lv in data.get("levels", [])),
        bio=str(data.get("bio", "")),
        location=str(data.get("location", "")),
        contact=str(data.get("contact", "")),
    )


def load_coaches() -> list[Coach]:
    """All coaches in the bundled directory."""
    return [coach_from_dict(rec) for rec in load_coach_records()]


def match_coaches(
    coaches: Iterable[Coach],
    fmt: str | None = None,
    experience: str | None = None,
    specialties: Iterable[str] = (),
) -> list[Coach]:
    """
    Filter coaches by the athlete's preferences.

    Each criterion is optional. A coach matches when the format is equal,
    the experience level is among the coach's levels, and at least one of
    the requested specialties is offered.

    Args:
        coaches: Directory to search
        fmt: "remote" or "in-person"
        experience: Athlete experience level
        specialties: Wanted specialties (any one suffices)

    Returns:
        Matching coaches in directory order
    """
    wanted = [s.lower() for s in specialties]
    matches: list[Coach] = []
    for coach in coaches:
        if fmt and coach.format != fmt:
            continue
        if experience and experience not in coach.levels:
            continue
        if wanted and not any(s in coach.specialties for s in wanted):
            continue
        matches.append(coach)
    return matches
