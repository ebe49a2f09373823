from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence, TypeVar

from ..attendance.model import AttendanceRecord
from ..core.constants import QUALITY_SCORE_MAX
from ..core.exceptions import DataSourceError
from ..members.model import Member
from ..ratings.model import Rating
from ..settings.model import OrgSettings
from ..tasks.model import Task
from .rows import attendance_from_row, member_from_row, rating_from_row, task_from_row
from .source import DataSource

logger = logging.getLogger(__name__)
T = TypeVar("T")


def _present(items: Iterable[T]) -> list[T]:
    return [i for i in items if i is not None]


class JsonSnapshotDataSource(DataSource):
    """Read-only data source over a JSON export of the backing sheets.

    The file is read lazily on first access and cached for the lifetime of
    the instance; call ``reload()`` to pick up a new export.
    """

    def __init__(self, path: Path | str, *, score_scale: float = QUALITY_SCORE_MAX):
        self._path = Path(path)
        self._score_scale = float(score_scale)
        self._raw: Optional[dict[str, Any]] = None

    def reload(self) -> None:
        self._raw = None

    def _load(self) -> dict[str, Any]:
        if self._raw is None:
            try:
                with self._path.open("r", encoding="utf-8") as fh:
                    raw = json.load(fh)
            except FileNotFoundError:
                raise DataSourceError(f"Snapshot not found: {self._path}")
            except json.JSONDecodeError as e:
                raise DataSourceError(f"Snapshot is not valid JSON: {self._path} ({e})")
            if not isinstance(raw, dict):
                raise DataSourceError(f"Snapshot root must be an object: {self._path}")
            self._raw = raw
            logger.info("Loaded snapshot %s", self._path)
        return self._raw

    def _rows(self, key: str) -> list[dict]:
        rows = self._load().get(key) or []
        if not isinstance(rows, list):
            raise DataSourceError(f"Snapshot section {key!r} must be a list")
        return rows

    def list_members(self) -> Sequence[Member]:
        return _present(member_from_row(r) for r in self._rows("members"))

    def list_attendance(self, *, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[AttendanceRecord]:
        settings = self.get_settings()
        out = []
        for row in self._rows("attendance"):
            rec = attendance_from_row(row, settings)
            if rec is None:
                continue
            if start is not None and rec.date < start:
                continue
            if end is not None and rec.date > end:
                continue
            out.append(rec)
        return out

    def list_tasks(self) -> Sequence[Task]:
        return _present(task_from_row(r, score_scale=self._score_scale) for r in self._rows("tasks"))

    def list_ratings(self) -> Sequence[Rating]:
        return _present(rating_from_row(r) for r in self._rows("ratings"))

    def get_settings(self) -> OrgSettings:
        return OrgSettings.from_mapping(self._load().get("settings") or {})
