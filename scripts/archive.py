#!/usr/bin/env python3
"""Week archive operations: snapshot, recurring carry-forward, history."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from week import Calendar, Task, week_to_dict

if TYPE_CHECKING:
    from store import Store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArchivedWeek:
    timestamp: str
    week: dict[str, list[Task]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {'timestamp': self.timestamp, 'week': week_to_dict(self.week)}

    @classmethod
    def from_dict(cls, data: dict) -> ArchivedWeek:
        timestamp = data['timestamp']
        if not isinstance(timestamp, str):
            raise TypeError(f"timestamp must be a string, got {timestamp!r}")
        return cls(timestamp=timestamp, week=Calendar.from_dict({'days': data['week']}).days)

    def task_count(self) -> int:
        return sum(len(tasks) for tasks in self.week.values())


def recurring_tasks(calendar: Calendar) -> list[tuple[str, list[Task]]]:
    """Group the recurring tasks of each day, keeping their order.

    Days without recurring tasks are left out.
    """
    preserved = []
    for day, tasks in calendar.days.items():
        keep = [task for task in tasks if task.recurring]
        if keep:
            preserved.append((day, keep))
    return preserved


def archive_week(calendar: Calendar, store: Store, now: datetime | None = None) -> list[tuple[str, list[Task]]]:
    """Append a timestamped snapshot of the week to the archive log.

    The calendar itself is left untouched; callers reset it and reinsert
    the returned recurring groups (see Calendar.carry_forward).
    """
    archives = store.load_archive_log()
    instant = now or datetime.now(timezone.utc)
    snapshot = ArchivedWeek(
        timestamp=instant.isoformat(),
        week={day: list(tasks) for day, tasks in calendar.days.items()},
    )
    archives.append(snapshot)
    store.save_archive_log(archives)
    logger.info(f"Archived {snapshot.task_count()} task(s) at {snapshot.timestamp}")
    return recurring_tasks(calendar)


def archive_summary(archives: list[ArchivedWeek]) -> list[dict]:
    summary = []
    for snapshot in archives:
        summary.append({
            'timestamp': snapshot.timestamp,
            'total': snapshot.task_count(),
            'recurring': sum(1 for tasks in snapshot.week.values() for t in tasks if t.recurring),
        })
    return summary


def search_archives(archives: list[ArchivedWeek], query: str) -> list[dict]:
    """Find archived tasks whose description or location contains query."""
    hits = []
    query_lower = query.lower()
    for snapshot in archives:
        for day, tasks in snapshot.week.items():
            for task in tasks:
                haystack = f"{task.description} {task.location or ''}".lower()
                if query_lower in haystack:
                    hits.append({'timestamp': snapshot.timestamp, 'day': day, 'task': task})
    return hits
