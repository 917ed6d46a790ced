"""
CLI entry point using Typer.

Provides commands for OCR plan management:
- generate: Create and store a new base plan
- plan: Show the plan adapted to the workout log
- log: Log a completed workout
- history: Show logged workouts
- export: Write the plan as an .ics calendar
- review: Adherence and effort review
- countdown: Days to race and milestone tasks
- coaches: Find a coach
"""

from typing import Annotated

import typer

from . import views
from .app import app, configure_logging
from .commands import analysis, coaches, planning, sessions  # noqa: F401  (registers commands)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Show debug logging"),
    ] = False,
) -> None:
    """
    OCR training planner. Run without a command for interactive mode.
    """
    configure_logging(verbose)

    if ctx.invoked_subcommand is not None:
        return  # a sub-command handles it

    # ── Interactive main menu ───────────────────────────────────────────────
    views.console.print()
    views.console.print("[bold cyan]ocr-planner[/bold cyan]: obstacle race training planner")
    views.console.print()

    menu = {
        "1": ("plan",      "Show current plan"),
        "2": ("log",       "Log a workout"),
        "3": ("history",   "Show workout log"),
        "4": ("review",    "Training review"),
        "5": ("countdown", "Race countdown"),
        "6": ("export",    "Export calendar (.ics)"),
        "g": ("generate",  "Generate a new plan"),
        "c": ("coaches",   "Find a coach"),
        "0": ("quit",      "Quit"),
    }

    for key, (_, desc) in menu.items():
        views.console.print(f"  \\[{key}] {desc}")

    views.console.print()
    choice = views.console.input("Choose [1]: ").strip() or "1"

    if choice == "0":
        raise typer.Exit(0)

    chosen = {k: v[0] for k, v in menu.items()}.get(choice)
    if chosen is None:
        views.print_error(f"Unknown choice: {choice}")
        raise typer.Exit(1)

    handlers = {
        "plan": planning.plan,
        "log": sessions.log_workout,
        "history": sessions.history,
        "review": analysis.review,
        "countdown": analysis.countdown,
        "export": planning.export,
        "generate": planning.generate,
        "coaches": coaches.coaches,
    }
    ctx.invoke(handlers[chosen])


if __name__ == "__main__":
    app()
