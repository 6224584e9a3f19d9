"""
Completion index: (habit_id, log_date) -> the log that counts for that day.

Duplicate resolution
--------------------
The persistence layer should keep one log per habit per day, but the engine
tolerates duplicates. For two logs on the same key:

  * the one with the later `updated_at` wins;
  * if the timestamps tie, or either one is missing, the one seen last wins;
  * a naive `updated_at` is read as UTC when compared with an aware one.

Every dropped duplicate is recorded as a DuplicateLogConflict and logged.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Iterable, Optional

from app.models.habit import HabitLog

logger = logging.getLogger(__name__)

Key = tuple[str, date]


@dataclass
class DuplicateLogConflict:
    habit_id: str
    log_date: date
    kept_id: Optional[str]
    dropped_id: Optional[str]


def _as_aware(ts: datetime) -> datetime:
    return ts.replace(tzinfo=timezone.utc) if ts.tzinfo is None else ts


def _supersedes(new: HabitLog, old: HabitLog) -> bool:
    if new.updated_at is None or old.updated_at is None:
        return True
    return _as_aware(new.updated_at) >= _as_aware(old.updated_at)


class CompletionIndex:
    def __init__(self, logs: Iterable[HabitLog] = ()):
        self._logs: dict[Key, HabitLog] = {}
        self.conflicts: list[DuplicateLogConflict] = []
        for log in logs:
            self.add(log)

    def add(self, log: HabitLog) -> None:
        key = (log.habit_id, log.log_date)
        existing = self._logs.get(key)
        if existing is None:
            self._logs[key] = log
            return

        if _supersedes(log, existing):
            kept, dropped = log, existing
            self._logs[key] = log
        else:
            kept, dropped = existing, log
        conflict = DuplicateLogConflict(
            habit_id=log.habit_id,
            log_date=log.log_date,
            kept_id=kept.id,
            dropped_id=dropped.id,
        )
        self.conflicts.append(conflict)
        logger.warning(
            "Duplicate habit log for %s on %s; keeping %s, dropping %s",
            conflict.habit_id, conflict.log_date, conflict.kept_id, conflict.dropped_id,
            extra={"habit_id": conflict.habit_id, "log_date": str(conflict.log_date)},
        )

    def get(self, habit_id: str, day: date) -> Optional[HabitLog]:
        return self._logs.get((habit_id, day))

    def is_completed(self, habit_id: str, day: date) -> bool:
        log = self._logs.get((habit_id, day))
        return log is not None and log.completed

    def completed_logs(
        self,
        habit_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[HabitLog]:
        """Completed logs for one habit, ascending by date, optionally windowed."""
        logs = [
            log for (hid, day), log in self._logs.items()
            if hid == habit_id
            and log.completed
            and (start is None or day >= start)
            and (end is None or day <= end)
        ]
        return sorted(logs, key=lambda log: log.log_date)

    def completed_dates(
        self,
        habit_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[date]:
        return [log.log_date for log in self.completed_logs(habit_id, start, end)]

    def count_completions(self, habit_id: str, start: date, end: date) -> int:
        return len(self.completed_logs(habit_id, start, end))

    def habit_ids(self) -> set[str]:
        return {hid for hid, _ in self._logs}

    def __len__(self) -> int:
        return len(self._logs)


# ---------------------------------------------------------------------------
# Functional API
# ---------------------------------------------------------------------------

def build_index(logs: Iterable[HabitLog]) -> CompletionIndex:
    return CompletionIndex(logs)


def is_completed(index: CompletionIndex, habit_id: str, day: date) -> bool:
    return index.is_completed(habit_id, day)


def count_completions(index: CompletionIndex, habit_id: str, start: date, end: date) -> int:
    return index.count_completions(habit_id, start, end)
