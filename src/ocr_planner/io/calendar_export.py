"""
iCalendar export of a training plan.

Every plan day becomes an all-day VEVENT whose description carries the
workout text and whether the day has been logged.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path

from ..core.adaptation import build_log_map
from ..core.calendar import day_date, parse_iso, to_ics_date, to_iso, to_utc_stamp
from ..core.config import ICS_LINE_LIMIT, ICS_PRODID, ICS_UID_DOMAIN
from ..core.models import LogEntry, Plan
from ..core.planner import day_summary

CRLF = "\r\n"


def escape_text(text: str) -> str:
    """
    Escape a TEXT value (RFC 5545 §3.3.11).

    Backslashes, commas and semicolons are backslash-escaped, newlines
    become a literal ``\\n`` and carriage returns are dropped.
    """
    return (
        str(text)
        .replace("\\", "\\\\")
        .replace("\n", "\\n")
        .replace("\r", "")
        .replace(",", "\\,")
        .replace(";", "\\;")
    )


def fold_line(line: str, limit: int = ICS_LINE_LIMIT) -> str:
    """
    Fold a content line into chunks of at most ``limit`` octets.

    Continuation lines start with a single space. Multi-byte UTF-8
    characters are never split.
    """
    if len(line.encode("utf-8")) <= limit:
        return line

    parts: list[str] = []
    current = ""
    current_len = 0
    budget = limit
    for ch in line:
        ch_len = len(ch.encode("utf-8"))
        if current_len + ch_len > budget:
            parts.append(current)
            current = ""
            current_len = 0
            budget = limit - 1  # room for the leading space
        current += ch
        current_len += ch_len
    parts.append(current)
    return (CRLF + " ").join(parts)


def export_calendar(
    plan: Plan,
    logs: list[LogEntry],
    generated_at: datetime | None = None,
) -> str:
    """
    Serialize a plan as an iCalendar document.

    Args:
        plan: Plan to export (usually the adapted plan)
        logs: Workout log, used for the completion status of each day
        generated_at: DTSTAMP for every event (default: now, UTC)

    Returns:
        Calendar text with CRLF line endings
    """
    if generated_at is None:
        generated_at = datetime.now(timezone.utc)
    stamp = to_utc_stamp(generated_at)

    log_map = build_log_map(logs)
    start = parse_iso(plan.start_date)

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{ICS_PRODID}",
    ]

    uid = 1
    for w, week in enumerate(plan.weeks):
        for d, day in enumerate(week.days):
            event_date = day_date(start, w, d)
            entry = log_map.get(to_iso(event_date))

            status = "Status: completed" if entry is not None else "Status: not completed"
            description = f"{escape_text(day.text)}\\n{escape_text(status)}"
            if entry is not None and entry.notes:
                description += f"\\nNotes: {escape_text(entry.notes)}"

            lines.extend([
                "BEGIN:VEVENT",
                f"UID:plan-{uid}@{ICS_UID_DOMAIN}",
                f"DTSTAMP:{stamp}",
                f"DTSTART;VALUE=DATE:{to_ics_date(event_date)}",
                f"DTEND;VALUE=DATE:{to_ics_date(event_date + timedelta(days=1))}",
                f"SUMMARY:{escape_text(day_summary(day.text))}",
                f"DESCRIPTION:{description}",
                "END:VEVENT",
            ])
            uid += 1

    lines.append("END:VCALENDAR")
    return CRLF.join(fold_line(line) for line in lines) + CRLF


def write_calendar(path: str | Path, text: str) -> Path:
    """
    Write calendar text to ``path`` keeping CRLF line endings.

    Returns:
        The written path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8"))
    return path
