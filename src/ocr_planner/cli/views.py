"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of plans, logs, and reviews.
"""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.milestones import format_days_remaining
from ..core.models import Coach, LogEntry, Plan, TrainingReview
from ..core.planner import day_summary

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]

_CATEGORY_STYLE = {
    "hard_run": "bold red",
    "easy_run": "green",
    "strength": "magenta",
    "active_recovery": "cyan",
    "rest": "dim",
}

console = Console()


def format_phase_summary(plan: Plan) -> str:
    """One-line summary of the plan horizon and phase lengths."""
    p = plan.phases
    return (
        f"Total weeks: [bold]{plan.weeks_to_race}[/bold]  |  "
        f"Phases → Base: {p.base} wk, Build: {p.build} wk, "
        f"Specific: {p.specific} wk, Taper: {p.taper} wk"
    )


def format_plan_table(
    plan: Plan,
    completed: list[list[LogEntry | None]] | None = None,
    title: str = "Training Plan",
) -> Table:
    """
    Build the week-by-day plan table.

    Args:
        plan: Plan to show
        completed: Log entry matched to each day (see adaptation.completion_status)
        title: Table title

    Returns:
        Rich Table
    """
    table = Table(title=title, show_lines=True)
    table.add_column("Wk", justify="right", style="dim", width=3)
    table.add_column("Phase", style="cyan")
    table.add_column("Miles", justify="right", style="bold")
    for name in DAY_NAMES:
        table.add_column(name)

    for w, week in enumerate(plan.weeks):
        cells: list[str] = []
        for d, day in enumerate(week.days):
            label = day_summary(day.text)
            done = completed is not None and completed[w][d] is not None
            if done:
                cells.append(f"[green]✔ {label}[/green]")
            else:
                style = _CATEGORY_STYLE.get(day.category, "")
                cells.append(f"[{style}]{label}[/{style}]" if style else label)
        table.add_row(str(week.week), week.phase, f"{week.mileage:.1f}", *cells)

    return table


def print_plan(
    plan: Plan,
    completed: list[list[LogEntry | None]] | None = None,
    title: str = "Training Plan",
) -> None:
    """
    Print the phase summary and the plan table.

    Args:
        plan: Plan to show
        completed: Log entry matched to each day
        title: Table title
    """
    console.print()
    console.print(format_phase_summary(plan))
    console.print(f"Starts Monday {plan.start_date}")
    console.print()
    console.print(format_plan_table(plan, completed, title))


def format_history_table(entries: list[LogEntry]) -> Table:
    """Build a table of logged workouts, newest first."""
    table = Table(title="Workout Log", show_header=True)
    table.add_column("Date", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Duration/Distance")
    table.add_column("RPE", justify="right")
    table.add_column("Notes")

    for entry in sorted(entries, key=lambda e: e.date, reverse=True):
        table.add_row(
            entry.date,
            escape(entry.type),
            escape(entry.value),
            escape(entry.rpe),
            escape(entry.notes),
        )
    return table


def print_history(entries: list[LogEntry]) -> None:
    """
    Print logged workouts to console.

    Args:
        entries: Logged workouts
    """
    if not entries:
        console.print("[yellow]No entries yet. Add your first workout with 'log'.[/yellow]")
        return

    console.print(format_history_table(entries))


def print_review(review: TrainingReview) -> None:
    """Print adherence metrics and recommendations."""
    console.print()
    console.print("[bold]Your Training Insights[/bold]")
    console.print(
        f"- Training duration evaluated: {review.total_days} days "
        "(from plan start to today)"
    )
    console.print(
        f"- Completed workouts: {review.completed_days} out of {review.total_days} days"
    )
    line = f"- Adherence ratio: {review.completion_ratio * 100:.1f}%"
    if review.avg_rpe is not None:
        line += f"  |  Average RPE: {review.avg_rpe:.1f}"
    console.print(line)

    counts = review.type_counts
    console.print(f"- Runs logged: {counts.get('run', 0)}")
    console.print(f"- Strength sessions logged: {counts.get('strength', 0)}")
    console.print(f"- Other workouts: {counts.get('other', 0)}")
    console.print(f"- Rest days logged: {counts.get('rest', 0)}")

    console.print()
    console.print("[bold]Recommendations[/bold]")
    for message in review.recommendations:
        console.print(f"- {message}")
    console.print()


def print_countdown(days_left: int, tasks: list[str]) -> None:
    """Print days to race and the current milestone tasks."""
    console.print()
    console.print("[bold]Countdown to Race[/bold]")
    console.print(format_days_remaining(days_left))
    for task in tasks:
        console.print(f"  • {task}")
    console.print()


def print_coaches(coaches: list[Coach]) -> None:
    """Print matched coaches as a table."""
    if not coaches:
        console.print("[yellow]No coaches match your criteria. Try adjusting your filters.[/yellow]")
        return

    table = Table(title="Coaches", show_lines=True)
    table.add_column("Name", style="bold")
    table.add_column("Location", style="cyan")
    table.add_column("Format")
    table.add_column("Specialties", style="magenta")
    table.add_column("Levels")
    table.add_column("About")
    table.add_column("Contact", style="blue")

    for coach in coaches:
        table.add_row(
            coach.name,
            coach.location,
            "Remote/Virtual" if coach.format == "remote" else "In-person",
            ", ".join(s.upper() for s in coach.specialties),
            ", ".join(lv.capitalize() for lv in coach.levels),
            coach.bio,
            coach.contact,
        )
    console.print(table)


def print_success(message: str) -> None:
    """Print a success message. The message is shown literally, never as markup."""
    console.print(f"[green]{escape(message)}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{escape(message)}[/blue]")
