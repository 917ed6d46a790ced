"""
JSONL-based workout log and base-plan storage.

Handles reading and appending the workout log and persisting the base
plan that adaptation starts from.
"""

import json
import logging
from pathlib import Path

from ..core.config_loader import default_data_dir
from ..core.models import AthleteInput, LogEntry, Plan
from .serializers import (
    ValidationError,
    athlete_input_to_dict,
    dict_to_athlete_input,
    dict_to_log_entry,
    dict_to_plan,
    log_entry_to_json_line,
    plan_to_dict,
)

logger = logging.getLogger(__name__)

LOG_FILENAME = "logs.jsonl"
PLAN_FILENAME = "plan.json"


class LogStore:
    """
    Manages the workout log and the base plan of one athlete.

    The log file contains one JSON object per line and is only ever
    appended to. Several entries may share a date; readers treat the
    last one as authoritative.

    A separate plan.json holds the base plan and the athlete input it
    was generated from.
    """

    def __init__(self, data_dir: str | Path):
        """
        Initialize the store.

        Args:
            data_dir: Directory holding logs.jsonl and plan.json
        """
        self.data_dir = Path(data_dir)
        self.log_path = self.data_dir / LOG_FILENAME
        self.plan_path = self.data_dir / PLAN_FILENAME

    def init(self) -> None:
        """Create the data directory and an empty log file if needed."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        if not self.log_path.exists():
            self.log_path.touch()

    def append(self, entry: LogEntry) -> None:
        """
        Append a workout to the log.

        Args:
            entry: Entry to append
        """
        self.init()
        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(log_entry_to_json_line(entry) + "\n")
        logger.debug("appended log entry for %s to %s", entry.date, self.log_path)

    def read_all(self) -> list[LogEntry]:
        """
        Load every logged workout in file order.

        A missing file is an empty log. If any line is not valid JSON the
        whole log is treated as empty and a warning is logged; the file
        itself is left as it is. A line that parses but is not a usable
        record (not an object, no valid date) is skipped with a warning.

        Returns:
            List of LogEntry
        """
        if not self.log_path.exists():
            return []

        entries: list[LogEntry] = []
        try:
            with open(self.log_path, "r", encoding="utf-8") as f:
                for line_num, line in enumerate(f, 1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        data = json.loads(line)
                    except json.JSONDecodeError as e:
                        raise ValidationError(
                            f"Error parsing line {line_num} in {self.log_path}: {e}"
                        ) from e
                    try:
                        entries.append(dict_to_log_entry(data))
                    except (ValidationError, ValueError) as e:
                        logger.warning(
                            "skipping record on line %d in %s: %s", line_num, self.log_path, e
                        )
        except (ValidationError, UnicodeDecodeError) as e:
            logger.warning("ignoring unreadable workout log: %s", e)
            return []

        return entries

    def save_base_plan(self, plan: Plan, athlete: AthleteInput) -> None:
        """
        Persist the base plan and the input it was generated from.

        Args:
            plan: Freshly generated base plan
            athlete: Plan request
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        data = {
            "athlete": athlete_input_to_dict(athlete),
            "plan": plan_to_dict(plan),
        }
        with open(self.plan_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def _load_plan_file(self) -> dict | None:
        if not self.plan_path.exists():
            return None
        try:
            with open(self.plan_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("ignoring unreadable plan file %s: %s", self.plan_path, e)
            return None
        return data if isinstance(data, dict) else None

    def load_base_plan(self) -> Plan | None:
        """
        Load the stored base plan.

        Returns:
            Plan, or None if no valid plan has been saved
        """
        data = self._load_plan_file()
        if data is None or "plan" not in data:
            return None
        try:
            return dict_to_plan(data["plan"])
        except ValidationError as e:
            logger.warning("ignoring invalid plan in %s: %s", self.plan_path, e)
            return None

    def load_athlete(self) -> AthleteInput | None:
        """
        Load the athlete input stored with the base plan.

        Returns:
            AthleteInput, or None if not available
        """
        data = self._load_plan_file()
        if data is None or "athlete" not in data:
            return None
        try:
            return dict_to_athlete_input(data["athlete"])
        except ValidationError as e:
            logger.warning("ignoring invalid athlete record in %s: %s", self.plan_path, e)
            return None


def get_default_store(data_dir: Path | None = None) -> LogStore:
    """
    Get a LogStore for ``data_dir`` or the configured default directory.

    Returns:
        LogStore instance
    """
    if data_dir is None:
        data_dir = default_data_dir()
    return LogStore(data_dir)
