import dataclasses
from datetime import timezone

import pytest

from notenrechner.grade_logic import Label, ScoringMode, calculate
from notenrechner.history import HISTORY_CAPACITY, HistoryLedger, HistoryRecord, make_record


def _record(points: int = 80) -> HistoryRecord:
    return make_record(ScoringMode.IHK, points, None, calculate(ScoringMode.IHK, points))


def test_append_keeps_insertion_order():
    ledger = HistoryLedger()
    records = [_record(p) for p in (10, 50, 90)]
    for r in records:
        ledger.append(r)

    assert ledger.all() == tuple(records)
    assert ledger.newest_first() == tuple(reversed(records))
    assert len(ledger) == 3


def test_append_beyond_capacity_evicts_oldest():
    ledger = HistoryLedger()
    records = [_record(p % 101) for p in range(HISTORY_CAPACITY + 1)]
    for r in records:
        ledger.append(r)

    assert len(ledger) == HISTORY_CAPACITY
    assert records[0].id not in ledger
    assert records[-1].id in ledger
    assert ledger.all() == tuple(records[1:])


def test_custom_capacity():
    ledger = HistoryLedger(capacity=2)
    a, b, c = _record(1), _record(2), _record(3)
    for r in (a, b, c):
        ledger.append(r)
    assert ledger.all() == (b, c)

    with pytest.raises(ValueError):
        HistoryLedger(capacity=0)


def test_remove_by_id():
    ledger = HistoryLedger()
    a, b, c = _record(), _record(), _record()
    for r in (a, b, c):
        ledger.append(r)

    ledger.remove(b.id)
    assert ledger.all() == (a, c)


def test_remove_unknown_id_is_noop():
    ledger = HistoryLedger()
    for p in (20, 40):
        ledger.append(_record(p))
    before = ledger.all()

    ledger.remove("does-not-exist")
    assert ledger.all() == before


def test_clear():
    ledger = HistoryLedger()
    for _ in range(7):
        ledger.append(_record())
    ledger.clear()
    assert ledger.all() == ()
    assert len(ledger) == 0

    HistoryLedger().clear()


def test_duplicate_content_gets_distinct_records():
    ledger = HistoryLedger()
    first, second = _record(75), _record(75)
    ledger.append(first)
    ledger.append(second)

    assert first.id != second.id
    assert len(ledger) == 2
    ledger.remove(first.id)
    assert ledger.all() == (second,)


def test_make_record_snapshot():
    result = calculate(ScoringMode.CUSTOM, 15, 20)
    record = make_record(ScoringMode.CUSTOM, 15, 20, result)

    assert record.mode is ScoringMode.CUSTOM
    assert record.points == 15
    assert record.max_points == 20
    assert record.grade == result.value
    assert record.label is Label.GOOD
    assert record.created_at.tzinfo is timezone.utc

    with pytest.raises(dataclasses.FrozenInstanceError):
        record.points = 16


def test_all_is_a_snapshot():
    ledger = HistoryLedger()
    ledger.append(_record())
    view = ledger.all()
    ledger.append(_record())
    assert len(view) == 1
