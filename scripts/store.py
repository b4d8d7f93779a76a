#!/usr/bin/env python3
"""
Persistence for the calendar and archive records.

Both records are pretty-printed JSON files under the data directory
(see utils.get_data_dir). Loading is best-effort: a missing file is empty
state, and unreadable content is logged and treated as empty state, so it
is overwritten by the next save. Save failures are logged, never raised.
There is no locking; concurrent invocations are last-writer-wins.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from archive import ArchivedWeek
from utils import get_archive_path, get_calendar_path, get_data_dir
from week import Calendar

logger = logging.getLogger(__name__)

# Raised while decoding a structurally wrong but valid JSON document
_SHAPE_ERRORS = (KeyError, TypeError, AttributeError, ValueError)


def atomic_write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(content)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)


def _read_json(path: Path):
    """Return the decoded document, or None when absent or unparseable."""
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable record {path}: {e}")
        return None


def _write_json(path: Path, payload) -> bool:
    try:
        atomic_write(path, json.dumps(payload, indent=2, ensure_ascii=False) + "\n")
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to write {path}: {e}")
        return False
    logger.debug(f"Wrote {path}")
    return True


class Store:
    """Reads and writes the two records of one data directory."""

    def __init__(self, data_dir: Path | None = None):
        self.data_dir = Path(data_dir) if data_dir is not None else get_data_dir()

    @property
    def calendar_path(self) -> Path:
        return get_calendar_path(self.data_dir)

    @property
    def archive_path(self) -> Path:
        return get_archive_path(self.data_dir)

    def load_calendar(self) -> Calendar:
        data = _read_json(self.calendar_path)
        if data is None:
            return Calendar()
        try:
            return Calendar.from_dict(data)
        except _SHAPE_ERRORS as e:
            logger.warning(f"Ignoring malformed calendar {self.calendar_path}: {e!r}")
            return Calendar()

    def save_calendar(self, calendar: Calendar) -> bool:
        """Overwrite the calendar record. Returns False if the write failed."""
        return _write_json(self.calendar_path, calendar.to_dict())

    def load_archive_log(self) -> list[ArchivedWeek]:
        data = _read_json(self.archive_path)
        if data is None:
            return []
        try:
            if not isinstance(data, list):
                raise TypeError(f"expected a list, got {type(data).__name__}")
            return [ArchivedWeek.from_dict(raw) for raw in data]
        except _SHAPE_ERRORS as e:
            logger.warning(f"Ignoring malformed archive {self.archive_path}: {e!r}")
            return []

    def save_archive_log(self, log: list[ArchivedWeek]) -> bool:
        return _write_json(self.archive_path, [snapshot.to_dict() for snapshot in log])
