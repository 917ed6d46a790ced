"""Session commands: log, history."""

import json
from typing import Annotated, Optional

import typer

from ...core.adaptation import recompute
from ...core.calendar import to_iso
from ...core.config import LOG_TYPES
from ...core.models import LogEntry, parse_leading_float
from ...io.serializers import ValidationError, log_entry_to_dict, validate_date
from .. import views
from ..app import DataDirOption, JsonOption, TodayOption, app, get_store, resolve_today

RPE_MIN = 0.0
RPE_MAX = 10.0


def _validate_rpe(raw: str) -> str:
    """
    Check an RPE entry.

    Empty is allowed (no RPE reported). Anything else must be a number
    from 0 to 10.

    Raises:
        ValidationError: If the value is not a valid RPE
    """
    raw = raw.strip()
    if not raw:
        return ""
    value = parse_leading_float(raw)
    if value is None or not RPE_MIN <= value <= RPE_MAX:
        raise ValidationError(f"RPE must be a number from 0 to 10, got {raw!r}")
    return raw


@app.command("log")
def log_workout(
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Workout date (YYYY-MM-DD, default: today)"),
    ] = None,
    workout_type: Annotated[
        Optional[str],
        typer.Option("--type", "-t", help="Workout type: run | strength | other | rest"),
    ] = None,
    value: Annotated[
        Optional[str],
        typer.Option("--value", "-v", help="Duration or distance, e.g. '5 km' or '45 min'"),
    ] = None,
    rpe: Annotated[
        Optional[str],
        typer.Option("--rpe", "-r", help="Rating of perceived exertion, 0-10"),
    ] = None,
    notes: Annotated[
        Optional[str],
        typer.Option("--notes", "-n", help="Workout notes"),
    ] = None,
    data_dir: DataDirOption = None,
    today: TodayOption = None,
) -> None:
    """
    Log a completed workout.

    Run without options for interactive entry, or supply them all:

      ocr-planner log --date 2026-10-19 --type run --value "5 km" --rpe 5
    """
    ref_date = resolve_today(today)
    store = get_store(data_dir)

    # ── Interactive prompts for missing values ──────────────────────────────

    if date is None:
        default_date = to_iso(ref_date)
        raw = views.console.input(f"Date [{default_date}]: ").strip()
        date = raw or default_date

    if workout_type is None:
        hint = " | ".join(LOG_TYPES)
        raw = views.console.input(f"Type ({hint}) [run]: ").strip().lower()
        workout_type = raw or "run"

    if value is None:
        value = views.console.input("Duration/Distance: ").strip()

    if rpe is None:
        while True:
            raw = views.console.input("RPE 0-10 (Enter to skip): ").strip()
            try:
                rpe = _validate_rpe(raw)
                break
            except ValidationError as e:
                views.print_error(str(e))

    if notes is None:
        notes = views.console.input("Notes: ").strip()

    try:
        validate_date(date)
        entry = LogEntry(
            date=date,
            type=workout_type,
            value=value,
            rpe=_validate_rpe(rpe),
            notes=notes,
        )
    except (ValidationError, ValueError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    store.append(entry)
    views.print_success(f"Logged {entry.type} on {entry.date}.")
    if entry.type.lower() not in LOG_TYPES:
        views.print_warning(f"Unknown type {entry.type!r}; the review counts it as other.")

    base_plan = store.load_base_plan()
    if base_plan is not None:
        current = recompute(base_plan, store.read_all(), ref_date)
        if current != base_plan:
            views.print_info("Upcoming weeks were adjusted. Run 'plan' to see them.")


@app.command()
def history(
    data_dir: DataDirOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Show all logged workouts, newest first.
    """
    store = get_store(data_dir)
    entries = store.read_all()

    if json_out:
        print(json.dumps([log_entry_to_dict(e) for e in entries], indent=2, ensure_ascii=False))
        return

    views.print_history(entries)
