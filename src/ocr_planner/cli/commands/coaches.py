"""Coach matcher command."""

import json
from typing import Annotated, Optional

import typer

from ...core.coaches import COACH_FORMATS, SPECIALTIES, load_coaches, match_coaches
from ...core.models import EXPERIENCE_LEVELS
from .. import views
from ..app import JsonOption, app


@app.command()
def coaches(
    fmt: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="remote | in-person"),
    ] = None,
    experience: Annotated[
        Optional[str],
        typer.Option("--experience", "-e", help="beginner | intermediate | advanced"),
    ] = None,
    specialty: Annotated[
        Optional[list[str]],
        typer.Option("--specialty", "-s", help="ocr | running | strength | nutrition (repeatable)"),
    ] = None,
    json_out: JsonOption = False,
) -> None:
    """
    Find coaches matching format, experience level, and specialties.
    """
    if fmt is not None and fmt not in COACH_FORMATS:
        views.print_error(f"Invalid format: {fmt}. Must be one of {COACH_FORMATS}")
        raise typer.Exit(1)
    if experience is not None and experience not in EXPERIENCE_LEVELS:
        views.print_error(f"Invalid experience: {experience}. Must be one of {EXPERIENCE_LEVELS}")
        raise typer.Exit(1)
    for s in specialty or []:
        if s.lower() not in SPECIALTIES:
            views.print_error(f"Invalid specialty: {s}. Must be one of {SPECIALTIES}")
            raise typer.Exit(1)

    matches = match_coaches(load_coaches(), fmt, experience, specialty or [])

    if json_out:
        print(json.dumps([
            {
                "name": c.name,
                "format": c.format,
                "specialties": list(c.specialties),
                "levels": list(c.levels),
                "location": c.location,
                "contact": c.contact,
            }
            for c in matches
        ], indent=2))
        return

    views.print_coaches(matches)
