"""Shared Typer app object, shared option types, and store utility."""

import logging
from datetime import date
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.logging import RichHandler

from ..core.calendar import parse_iso
from ..core.models import Plan
from ..io.log_store import LogStore, get_default_store
from ..io.serializers import ValidationError, validate_date
from . import views

# Shared --data-dir option type used across all commands
DataDirOption = Annotated[
    Optional[Path],
    typer.Option("--data-dir", "-p", help="Directory holding logs.jsonl and plan.json"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

# Reference date override, mainly for reproducible runs
TodayOption = Annotated[
    Optional[str],
    typer.Option("--today", help="Treat this date (YYYY-MM-DD) as today"),
]

app = typer.Typer(
    name="ocr-planner",
    help="Periodized obstacle-course-race training planner with adaptive rescheduling.",
    no_args_is_help=False,
    invoke_without_command=True,
)


def get_store(data_dir: Path | None) -> LogStore:
    """Get the log store for a directory or the configured default."""
    return get_default_store(data_dir)


def configure_logging(verbose: bool) -> None:
    """Route library log records through Rich; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def require_base_plan(store: LogStore) -> Plan:
    """Load the stored base plan or exit with a hint to generate one."""
    plan = store.load_base_plan()
    if plan is None:
        views.print_info("No training plan yet. Run 'generate' first.")
        raise typer.Exit(1)
    return plan


def resolve_today(today: str | None) -> date:
    """Parse the --today option, defaulting to the current date."""
    if today is None:
        return date.today()
    try:
        return parse_iso(validate_date(today))
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
