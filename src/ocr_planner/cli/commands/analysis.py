"""Analysis commands: review, countdown."""

import json

import typer

from ...core.adaptation import select_mode, summarize_adherence
from ...core.milestones import days_remaining, milestone_tasks
from ...core.review import review_training
from .. import views
from ..app import DataDirOption, JsonOption, TodayOption, app, get_store, require_base_plan, resolve_today


@app.command()
def review(
    data_dir: DataDirOption = None,
    today: TodayOption = None,
    json_out: JsonOption = False,
) -> None:
    """
    Review adherence and effort since the plan started.
    """
    ref_date = resolve_today(today)
    store = get_store(data_dir)
    base_plan = require_base_plan(store)
    logs = store.read_all()

    result = review_training(base_plan, logs, ref_date)
    mode = select_mode(summarize_adherence(base_plan, logs, ref_date))

    if json_out:
        print(json.dumps({
            "total_days": result.total_days,
            "completed_days": result.completed_days,
            "completion_ratio": round(result.completion_ratio, 3),
            "avg_rpe": round(result.avg_rpe, 2) if result.avg_rpe is not None else None,
            "type_counts": result.type_counts,
            "adaptation": mode,
            "recommendations": result.recommendations,
        }, indent=2, ensure_ascii=False))
        return

    views.print_review(result)
    if mode != "none":
        views.print_info(f"Upcoming weeks are adapted: {mode}.")


@app.command()
def countdown(
    data_dir: DataDirOption = None,
    today: TodayOption = None,
) -> None:
    """
    Show days until race day and what to focus on now.
    """
    ref_date = resolve_today(today)
    store = get_store(data_dir)
    base_plan = require_base_plan(store)

    if not base_plan.race_date:
        views.print_error("Stored plan has no race date. Run 'generate' again.")
        raise typer.Exit(1)

    days_left = days_remaining(base_plan.race_date, ref_date)
    views.print_countdown(days_left, milestone_tasks(days_left))
