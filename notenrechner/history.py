import logging
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterator, Optional, Tuple

from notenrechner.grade_logic import GradeResult, Label, ScoringMode

logger = logging.getLogger(__name__)

HISTORY_CAPACITY = 50


def _new_id() -> str:
    return uuid.uuid4().hex


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class HistoryRecord:
    mode: ScoringMode
    points: int
    max_points: Optional[int]
    grade: float
    label: Label
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_utc_now)


def make_record(
    mode: ScoringMode,
    points: int,
    max_points: Optional[int],
    result: GradeResult,
) -> HistoryRecord:
    """
    Snapshot one finished calculation. The raw grade is stored; rounding
    for display happens when the record is shown.
    """
    return HistoryRecord(
        mode=mode,
        points=points,
        max_points=max_points,
        grade=result.value,
        label=result.label,
    )


class HistoryLedger:
    """
    Insertion-ordered history of calculations, oldest first.

    Holds at most `capacity` records; appending beyond that drops the oldest.
    Not thread-safe: one session owns one ledger.
    """

    def __init__(self, capacity: int = HISTORY_CAPACITY):
        if capacity <= 0:
            raise ValueError(f"Ledger capacity must be positive (got {capacity}).")
        self.capacity = capacity
        self._records: deque = deque()

    def append(self, record: HistoryRecord) -> None:
        self._records.append(record)
        while len(self._records) > self.capacity:
            evicted = self._records.popleft()
            logger.debug("history_evicted id=%s", evicted.id)
        logger.info("history_appended id=%s size=%s", record.id, len(self._records))

    def remove(self, record_id: str) -> None:
        for record in self._records:
            if record.id == record_id:
                self._records.remove(record)
                logger.info("history_removed id=%s", record_id)
                return
        logger.debug("history_remove_unknown id=%s", record_id)

    def clear(self) -> None:
        self._records.clear()
        logger.info("history_cleared")

    def all(self) -> Tuple[HistoryRecord, ...]:
        return tuple(self._records)

    def newest_first(self) -> Tuple[HistoryRecord, ...]:
        return tuple(reversed(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[HistoryRecord]:
        return iter(tuple(self._records))

    def __contains__(self, record_id: object) -> bool:
        return any(record.id == record_id for record in self._records)
