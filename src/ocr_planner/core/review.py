"""
Training review: adherence, effort, and workout-type balance.

Evaluates the logged workouts over the elapsed part of the base plan
and produces short recommendations.
"""

from datetime import date, timedelta

from .adaptation import build_log_map, plan_end_date
from .calendar import parse_iso, to_iso
from .config import INTENSIFY_COMPLETION_AT_LEAST, INTENSIFY_RPE_AT_MOST, LIGHTEN_COMPLETION_BELOW
from .models import LogEntry, Plan, TrainingReview

LOW_ADHERENCE_MESSAGE = (
    "You’re missing many of your planned sessions. Consider reducing the weekly "
    "workload or adjusting your schedule to make training more manageable. Focus "
    "on consistency before intensity."
)
READY_FOR_MORE_MESSAGE = (
    "Great adherence with manageable effort levels! You may benefit from slightly "
    "increasing the challenge—try adding an extra interval session or increasing "
    "the pace on one easy run."
)
HIGH_EFFORT_MESSAGE = (
    "Your recorded RPEs suggest workouts are feeling very hard. Prioritize recovery "
    "sessions and reduce intensity until fatigue decreases. Listen to your body to "
    "avoid overtraining."
)
ON_TRACK_MESSAGE = (
    "Your training is on track. Maintain your current balance between running, "
    "strength and recovery to continue progressing toward your race."
)
MORE_STRENGTH_THAN_RUNS_MESSAGE = (
    "You’ve logged more strength than running workouts. Ensure you’re getting "
    "sufficient run mileage to build endurance for your race distance."
)
NO_STRENGTH_MESSAGE = (
    "You haven’t logged any strength sessions. Incorporating strength and grip "
    "work will help with obstacle efficiency."
)
ONLY_OTHER_MESSAGE = (
    "Most of your workouts are categorized as “Other.” Try logging runs and "
    "strength sessions specifically to better tailor the plan."
)

# Average RPE above which the review flags workouts as too hard
HIGH_EFFORT_RPE_ABOVE = 6.0


def recommendations_for(review: TrainingReview) -> list[str]:
    """
    Recommendation paragraphs for a review.

    One adherence/effort message is always returned, followed by any
    workout-type balance remarks.
    """
    ratio = review.completion_ratio
    avg_rpe = review.avg_rpe
    counts = review.type_counts

    messages: list[str] = []
    if ratio < LIGHTEN_COMPLETION_BELOW:
        messages.append(LOW_ADHERENCE_MESSAGE)
    elif ratio >= INTENSIFY_COMPLETION_AT_LEAST and (
        avg_rpe is None or avg_rpe <= INTENSIFY_RPE_AT_MOST
    ):
        messages.append(READY_FOR_MORE_MESSAGE)
    elif avg_rpe is not None and avg_rpe > HIGH_EFFORT_RPE_ABOVE:
        messages.append(HIGH_EFFORT_MESSAGE)
    else:
        messages.append(ON_TRACK_MESSAGE)

    if counts["run"] < counts["strength"]:
        messages.append(MORE_STRENGTH_THAN_RUNS_MESSAGE)
    if counts["strength"] == 0:
        messages.append(NO_STRENGTH_MESSAGE)
    if counts["other"] > 0 and counts["run"] + counts["strength"] == 0:
        messages.append(ONLY_OTHER_MESSAGE)
    return messages


def review_training(plan: Plan, logs: list[LogEntry], today: date | None = None) -> TrainingReview:
    """
    Review logged training against the base plan.

    Unlike adaptation, the average RPE only counts entries that carry a
    parseable RPE, and is None when there are none.

    Args:
        plan: Base plan
        logs: All logged workouts
        today: Reference date (default: today)

    Returns:
        TrainingReview with recommendations filled in
    """
    if today is None:
        today = date.today()

    log_map = build_log_map(logs)
    end = plan_end_date(plan)

    total_days = 0
    completed = 0
    rpe_total = 0.0
    rpe_count = 0
    type_counts = {"run": 0, "strength": 0, "other": 0, "rest": 0}

    day = parse_iso(plan.start_date)
    while day <= today and day < end:
        total_days += 1
        entry = log_map.get(to_iso(day))
        if entry is not None:
            completed += 1
            kind = (entry.type or "").lower()
            type_counts[kind if kind in type_counts else "other"] += 1
            rpe = entry.rpe_value
            if rpe is not None:
                rpe_total += rpe
                rpe_count += 1
        day += timedelta(days=1)

    review = TrainingReview(
        total_days=total_days,
        completed_days=completed,
        avg_rpe=rpe_total / rpe_count if rpe_count else None,
        type_counts=type_counts,
    )
    review.recommendations = recommendations_for(review)
    return review
