"""Tests for iCalendar export."""

from datetime import date, datetime, timezone

import pytest

from ocr_planner.core.calendar import day_date, parse_iso, to_ics_date
from ocr_planner.core.models import AthleteInput, LogEntry
from ocr_planner.core.planner import generate_plan
from ocr_planner.io.calendar_export import (
    escape_text,
    export_calendar,
    fold_line,
    write_calendar,
)

GENERATED_AT = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)


@pytest.fixture
def plan():
    athlete = AthleteInput("2026-12-28", "10k", "intermediate", 10.0, 4, 1)
    return generate_plan(athlete, date(2026, 10, 19))


def _unfold(text: str) -> list[str]:
    """Undo line folding and split into content lines."""
    return text.replace("\r\n ", "").split("\r\n")


def _events(text: str) -> list[dict[str, str]]:
    events: list[dict[str, str]] = []
    current: dict[str, str] | None = None
    for line in _unfold(text):
        if line == "BEGIN:VEVENT":
            current = {}
        elif line == "END:VEVENT":
            events.append(current)
            current = None
        elif current is not None:
            key, _, value = line.partition(":")
            current[key] = value
    return events


class TestEscapeAndFold:
    def test_escape_text(self):
        assert escape_text("a, b; c\\d\ne") == "a\\, b\\; c\\\\d\\ne"
        assert escape_text("line\r\nnext") == "line\\nnext"

    def test_short_line_untouched(self):
        assert fold_line("SUMMARY:Easy run") == "SUMMARY:Easy run"

    def test_long_line_folded(self):
        line = "DESCRIPTION:" + "x" * 200
        folded = fold_line(line)
        physical = folded.split("\r\n")
        assert len(physical) > 1
        assert all(len(p.encode("utf-8")) <= 75 for p in physical)
        assert all(p.startswith(" ") for p in physical[1:])
        assert folded.replace("\r\n ", "") == line

    def test_multibyte_never_split(self):
        line = "SUMMARY:" + "–" * 60
        folded = fold_line(line)
        for physical in folded.split("\r\n"):
            assert len(physical.encode("utf-8")) <= 75
            physical.encode("utf-8").decode("utf-8")
        assert folded.replace("\r\n ", "") == line


class TestExportCalendar:
    def test_envelope_and_line_endings(self, plan):
        text = export_calendar(plan, [], GENERATED_AT)
        assert text.startswith("BEGIN:VCALENDAR\r\nVERSION:2.0\r\nPRODID:-//OCR Planner//EN\r\n")
        assert text.endswith("END:VCALENDAR\r\n")
        assert "\n" not in text.replace("\r\n", "")
        assert all(len(p.encode("utf-8")) <= 75 for p in text.split("\r\n"))

    def test_one_event_per_plan_day(self, plan):
        events = _events(export_calendar(plan, [], GENERATED_AT))
        assert len(events) == 70
        assert events[0]["UID"] == "plan-1@ocrplanner"
        assert events[-1]["UID"] == "plan-70@ocrplanner"
        assert all(e["DTSTAMP"] == "20261019T083000Z" for e in events)

    def test_event_dates_match_plan_days(self, plan):
        events = _events(export_calendar(plan, [], GENERATED_AT))
        start = parse_iso(plan.start_date)
        for i, event in enumerate(events):
            w, d = divmod(i, 7)
            assert event["DTSTART;VALUE=DATE"] == to_ics_date(day_date(start, w, d))
        assert events[0]["DTSTART;VALUE=DATE"] == "20261019"
        assert events[0]["DTEND;VALUE=DATE"] == "20261020"
        assert events[-1]["DTSTART;VALUE=DATE"] == "20261227"

    def test_summary_and_description(self, plan):
        events = _events(export_calendar(plan, [], GENERATED_AT))
        assert events[0]["SUMMARY"] == "Tempo run"
        assert events[4]["SUMMARY"] == "Rest day."
        assert events[0]["DESCRIPTION"] == (
            "Tempo run – moderate pace (RPE 5–6).\\nStatus: not completed"
        )

    def test_completed_day_with_notes(self, plan):
        logs = [
            LogEntry(date="2026-10-19", type="run", value="5 km", rpe="5",
                     notes="Felt good, legs; tired\nok"),
            LogEntry(date="2026-10-20", type="run"),
        ]
        events = _events(export_calendar(plan, logs, GENERATED_AT))
        assert events[0]["DESCRIPTION"].endswith(
            "\\nStatus: completed\\nNotes: Felt good\\, legs\\; tired\\nok"
        )
        assert events[1]["DESCRIPTION"].endswith("\\nStatus: completed")
        assert events[2]["DESCRIPTION"].endswith("\\nStatus: not completed")

    def test_write_calendar_keeps_crlf(self, plan, tmp_path):
        text = export_calendar(plan, [], GENERATED_AT)
        path = write_calendar(tmp_path / "out" / "plan.ics", text)
        assert path.read_bytes() == text.encode("utf-8")
        assert b"\r\n" in path.read_bytes()
