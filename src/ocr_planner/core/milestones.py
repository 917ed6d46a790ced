"""Race countdown and milestone suggestions."""

from datetime import date

from .calendar import parse_iso

# (more than N days remaining, tasks); checked in order, last row is the fallback
MILESTONE_TASKS: list[tuple[int, list[str]]] = [
    (28, [
        "Continue building your base fitness and gradually increase mileage.",
        "Practice obstacle techniques to improve efficiency.",
        "Ensure strength and mobility work remain consistent.",
    ]),
    (14, [
        "Finalize your race gear and test it during long sessions.",
        "Begin mental rehearsal – visualise obstacles and race strategy.",
        "Increase specificity: include carries and technical terrain in your runs.",
    ]),
    (7, [
        "Taper your training volume to allow recovery.",
        "Prioritise sleep, nutrition and hydration.",
        "Refine obstacle technique with low‑intensity practice.",
    ]),
    (-1, [
        "Maintain light activity to stay loose, avoid strenuous sessions.",
        "Prepare your race day logistics: travel, nutrition and gear.",
        "Stay positive – trust your training and visualise success.",
    ]),
]


def days_remaining(race_date: str, today: date | None = None) -> int:
    """Days until race day, 0 once it has passed."""
    if today is None:
        today = date.today()
    return max(0, (parse_iso(race_date) - today).days)


def milestone_tasks(days_left: int) -> list[str]:
    """Suggested focus for the time remaining before the race."""
    for more_than, tasks in MILESTONE_TASKS:
        if days_left > more_than:
            return list(tasks)
    return list(MILESTONE_TASKS[-1][1])


def format_days_remaining(days_left: int) -> str:
    return f"{days_left} day{'' if days_left == 1 else 's'} remaining"
