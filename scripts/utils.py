#!/usr/bin/env python3
"""
Shared utilities for the weekly calendar scripts.

Configuration via environment variables:
- WEEKCAL_DIR: Directory holding calendar.json and archive.json (default: ~/.calendar)
- WEEKCAL_LOG_LEVEL: Logging level for the CLI (default: WARNING)
"""

import os
from pathlib import Path

CALENDAR_FILENAME = "calendar.json"
ARCHIVE_FILENAME = "archive.json"

DAYS = (
    'monday',
    'tuesday',
    'wednesday',
    'thursday',
    'friday',
    'saturday',
    'sunday',
)

# 's' resolves to saturday, there is no single-letter sunday
DAY_SHORTHANDS = {
    'm': 'monday',
    't': 'tuesday',
    'w': 'wednesday',
    'th': 'thursday',
    'f': 'friday',
    'sa': 'saturday',
    's': 'saturday',
    'su': 'sunday',
}


def get_data_dir() -> Path:
    """Return the directory holding the calendar records.

    Resolved on every call so the environment can be changed at runtime.
    """
    env_dir = os.getenv('WEEKCAL_DIR')
    if env_dir:
        return Path(env_dir).expanduser()
    return Path.home() / ".calendar"


def get_calendar_path(data_dir: Path | None = None) -> Path:
    return (data_dir or get_data_dir()) / CALENDAR_FILENAME


def get_archive_path(data_dir: Path | None = None) -> Path:
    return (data_dir or get_data_dir()) / ARCHIVE_FILENAME


def get_log_level() -> str:
    return os.getenv('WEEKCAL_LOG_LEVEL', 'WARNING').upper()


def normalize_day(day: str) -> str:
    """Lower-case a day name and expand known shorthands.

    Unknown input (full names, typos) is returned lower-cased as-is.
    """
    day = day.lower()
    return DAY_SHORTHANDS.get(day, day)


def capitalize_first(s: str) -> str:
    """Upper-case the first character only: 'monday' -> 'Monday'."""
    if not s:
        return ''
    return s[0].upper() + s[1:]
