#!/usr/bin/env python3
"""
Calendar model for the current week.

Tasks are kept per day key in insertion order. Day names go through
normalize_day(), so unknown names are stored verbatim and never shown
by render(), which only walks the seven canonical days.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from theme import BOLD, BRIGHT_BLUE, BRIGHT_GREEN, BRIGHT_YELLOW, DIM, GREEN, color, day_color
from utils import DAYS, capitalize_first, normalize_day

RECURRING_MARK = "↻"
NO_ITEMS = "(no items)"


@dataclass(frozen=True)
class Task:
    description: str
    location: str | None = None
    recurring: bool = False

    def to_dict(self) -> dict:
        return {
            'description': self.description,
            'location': self.location,
            'recurring': self.recurring,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Task:
        """Build a Task from its stored form.

        Records written before recurring tasks existed have no 'recurring'
        field; those default to False. A missing description raises KeyError,
        a field of the wrong type raises TypeError.
        """
        description = data['description']
        location = data.get('location')
        recurring = data.get('recurring', False)
        if not isinstance(description, str):
            raise TypeError(f"description must be a string, got {description!r}")
        if location is not None and not isinstance(location, str):
            raise TypeError(f"location must be a string or null, got {location!r}")
        if not isinstance(recurring, bool):
            raise TypeError(f"recurring must be a boolean, got {recurring!r}")
        return cls(description=description, location=location, recurring=recurring)


class Calendar:
    def __init__(self, days: dict[str, list[Task]] | None = None):
        self.days: dict[str, list[Task]] = days if days is not None else {}

    @classmethod
    def from_dict(cls, data: dict) -> Calendar:
        days = {}
        for day, tasks in data['days'].items():
            if not isinstance(tasks, list):
                raise TypeError(f"tasks for {day!r} must be a list")
            days[str(day)] = [Task.from_dict(raw) for raw in tasks]
        return cls(days)

    def to_dict(self) -> dict:
        return {'days': week_to_dict(self.days)}

    def __eq__(self, other) -> bool:
        if not isinstance(other, Calendar):
            return NotImplemented
        return self.days == other.days

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        counts = ', '.join(f"{day}={len(tasks)}" for day, tasks in self.days.items())
        return f"Calendar({counts})"

    # -------------------- mutation --------------------
    def add_item(self, day: str, description: str, location: str | None = None,
                 recurring: bool = False) -> str:
        """Append a task to a day and return the normalized day key."""
        key = normalize_day(day)
        self.days.setdefault(key, []).append(Task(description, location, recurring))
        return key

    def clear_day(self, day: str) -> str:
        key = normalize_day(day)
        self.days[key] = []
        return key

    def carry_forward(self, preserved: Iterable[tuple[str, list[Task]]]) -> int:
        """Start a fresh week holding only the preserved task groups.

        Returns the number of tasks reinserted.
        """
        self.days.clear()
        count = 0
        for day, tasks in preserved:
            self.days.setdefault(day, []).extend(tasks)
            count += len(tasks)
        return count

    def task_count(self) -> int:
        return sum(len(tasks) for tasks in self.days.values())

    # -------------------- display --------------------
    def render(self) -> list[str]:
        lines = [
            color("Weekly Calendar:", BOLD, BRIGHT_BLUE),
            color("================", BRIGHT_BLUE),
        ]
        for day in DAYS:
            lines.append('')
            lines.append(f"{color(capitalize_first(day), day_color(day), BOLD)}:")
            tasks = self.days.get(day)
            if not tasks:
                lines.append(f"  {color(NO_ITEMS, DIM)}")
                continue
            lines.extend(format_task(task) for task in tasks)
        return lines

    def show(self) -> None:
        print('\n'.join(self.render()))


def format_task(task: Task) -> str:
    """Render one bullet line: description, recurrence mark, location."""
    line = f"  {color('•', GREEN)} {color(task.description, BRIGHT_YELLOW)}"
    if task.recurring:
        line += f" {color(RECURRING_MARK, BRIGHT_GREEN)}"
    if task.location is not None:
        line += f" {color(f'(at {task.location})', DIM)}"
    return line


def week_to_dict(days: dict[str, list[Task]]) -> dict[str, list[dict]]:
    return {day: [task.to_dict() for task in tasks] for day, tasks in days.items()}
