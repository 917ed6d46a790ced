"""Planning commands: generate, plan, export."""

import json
from datetime import timedelta
from pathlib import Path
from typing import Annotated, Optional

import typer

from ...core.adaptation import completion_status, plan_end_date, recompute
from ...core.calendar import to_iso
from ...core.config_loader import load_settings
from ...core.milestones import days_remaining, milestone_tasks
from ...core.models import EXPERIENCE_LEVELS, RACE_DISTANCES
from ...core.planner import generate_plan
from ...io.calendar_export import export_calendar, write_calendar
from ...io.serializers import (
    ValidationError,
    athlete_input_from_form,
    athlete_input_to_dict,
    plan_to_dict,
)
from .. import views
from ..app import DataDirOption, JsonOption, TodayOption, app, get_store, require_base_plan, resolve_today


def _prompt_choice(label: str, choices: tuple[str, ...], default: str) -> str:
    """Prompt until one of ``choices`` is entered (Enter keeps the default)."""
    hint = " | ".join(choices)
    while True:
        raw = views.console.input(f"{label} ({hint}) [{default}]: ").strip()
        if not raw:
            return default
        if raw in choices:
            return raw
        views.print_error(f"Choose one of: {hint}")


@app.command()
def generate(
    race_date: Annotated[
        Optional[str],
        typer.Option("--race-date", "-r", help="Race date (YYYY-MM-DD)"),
    ] = None,
    distance: Annotated[
        Optional[str],
        typer.Option("--distance", "-d", help="Race distance: 5k | 10k | 21k | ultra"),
    ] = None,
    experience: Annotated[
        Optional[str],
        typer.Option("--experience", "-e", help="beginner | intermediate | advanced"),
    ] = None,
    mileage: Annotated[
        Optional[str],
        typer.Option("--mileage", "-m", help="Current weekly running mileage"),
    ] = None,
    training_days: Annotated[
        Optional[str],
        typer.Option("--training-days", "-t", help="Training days per week (1-7)"),
    ] = None,
    strength: Annotated[
        Optional[str],
        typer.Option("--strength", "-s", help="Strength sessions per week"),
    ] = None,
    data_dir: DataDirOption = None,
    today: TodayOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Generate a new base plan and store it.

    Missing race date, distance, or experience are asked for interactively.
    Options left out default to the previously stored request, then to
    the configured settings.
    Malformed numbers fall back to defaults instead of failing:

      ocr-planner generate --race-date 2026-12-20 --distance 10k \\
        --experience intermediate --mileage 10 --training-days 4 --strength 1
    """
    ref_date = resolve_today(today)
    store = get_store(data_dir)
    defaults = load_settings().get("athlete", {})

    # A previous request overrides the configured defaults
    previous = store.load_athlete()
    if previous is not None:
        defaults = {**defaults, **athlete_input_to_dict(previous)}

    if race_date is None:
        default_race = str(defaults.get("race_date", ""))
        hint = f" [{default_race}]" if default_race else ""
        race_date = views.console.input(f"Race date (YYYY-MM-DD){hint}: ").strip() or default_race

    if distance is None:
        distance = _prompt_choice(
            "Race distance", RACE_DISTANCES, str(defaults.get("race_distance", "10k"))
        )
    if experience is None:
        experience = _prompt_choice(
            "Experience", EXPERIENCE_LEVELS, str(defaults.get("experience", "beginner"))
        )

    form = {
        "race_date": race_date,
        "race_distance": distance,
        "experience": experience,
        "running_mileage": mileage if mileage is not None else defaults.get("running_mileage"),
        "training_days": (
            training_days if training_days is not None else defaults.get("training_days")
        ),
        "strength_frequency": (
            strength if strength is not None else defaults.get("strength_frequency")
        ),
    }

    try:
        athlete = athlete_input_from_form(form)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    base_plan = generate_plan(athlete, ref_date)
    store.save_base_plan(base_plan, athlete)
    logs = store.read_all()
    current = recompute(base_plan, logs, ref_date)

    if json_out:
        print(json.dumps(plan_to_dict(current), indent=2, ensure_ascii=False))
        return

    views.print_success(
        f"Generated {base_plan.weeks_to_race}-week plan for {athlete.race_distance} "
        f"on {athlete.race_date}."
    )
    views.print_plan(current, completion_status(current, logs))
    days_left = days_remaining(athlete.race_date, ref_date)
    views.print_countdown(days_left, milestone_tasks(days_left))


@app.command()
def plan(
    data_dir: DataDirOption = None,
    today: TodayOption = None,
    base: Annotated[
        bool,
        typer.Option("--base", help="Show the base plan without adaptation"),
    ] = False,
    json_out: JsonOption = False,
) -> None:
    """
    Show the current plan, adapted to the workouts logged so far.
    """
    ref_date = resolve_today(today)
    store = get_store(data_dir)
    base_plan = require_base_plan(store)
    logs = store.read_all()

    current = base_plan if base else recompute(base_plan, logs, ref_date)

    if json_out:
        print(json.dumps(plan_to_dict(current), indent=2, ensure_ascii=False))
        return

    title = "Base Plan" if base else "Training Plan"
    views.print_plan(current, completion_status(current, logs), title=title)
    if current.race_date:
        days_left = days_remaining(current.race_date, ref_date)
        views.print_countdown(days_left, milestone_tasks(days_left))


@app.command()
def export(
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Calendar file to write (.ics)"),
    ] = None,
    data_dir: DataDirOption = None,
    today: TodayOption = None,
) -> None:
    """
    Export the current plan as an iCalendar (.ics) file.
    """
    ref_date = resolve_today(today)
    store = get_store(data_dir)
    base_plan = require_base_plan(store)
    logs = store.read_all()

    current = recompute(base_plan, logs, ref_date)
    if output is None:
        filename = load_settings().get("export", {}).get("filename", "ocr_training_plan.ics")
        output = Path(filename)

    path = write_calendar(output, export_calendar(current, logs))
    views.print_success(
        f"Exported {len(current.weeks) * 7} days "
        f"({current.start_date} to {to_iso(plan_end_date(current) - timedelta(days=1))}) to {path}"
    )

