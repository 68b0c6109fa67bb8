from notenrechner.grade_logic import ScoringMode, calculate
from notenrechner.history import HistoryLedger, make_record
from notenrechner.io_csv import HISTORY_COLUMNS, describe_record, history_to_csv, history_to_frame


def _ledger() -> HistoryLedger:
    ledger = HistoryLedger()
    ledger.append(make_record(ScoringMode.IHK, 57, None, calculate(ScoringMode.IHK, 57)))
    ledger.append(make_record(ScoringMode.CUSTOM, 15, 20, calculate(ScoringMode.CUSTOM, 15, 20)))
    return ledger


def test_history_to_frame():
    df = history_to_frame(_ledger().all())

    assert list(df.columns) == HISTORY_COLUMNS
    assert list(df["Mode"]) == ["IHK", "Custom"]
    assert list(df["Points"]) == [57, 15]
    assert df["Max points"].isna().tolist() == [True, False]
    assert df["Max points"].iloc[1] == 20
    assert list(df["Percent"]) == [57.0, 75.0]
    assert list(df["Grade"]) == [4.0, 2.3]
    assert list(df["Label"]) == ["Sufficient", "Good"]


def test_history_to_frame_newest_first():
    df = history_to_frame(_ledger().newest_first())
    assert list(df["Mode"]) == ["Custom", "IHK"]


def test_empty_history_frame():
    df = history_to_frame([])
    assert df.empty
    assert list(df.columns) == HISTORY_COLUMNS


def test_history_to_csv():
    data = history_to_csv(_ledger().all())
    lines = data.decode("utf-8").strip().splitlines()

    assert lines[0] == "Created,Mode,Points,Max points,Percent,Grade,Label"
    assert len(lines) == 3
    assert lines[1].endswith(",IHK,57,,57.0,4.0,Sufficient")
    assert lines[2].endswith(",Custom,15,20,75.0,2.3,Good")


def test_history_to_frame_percent_is_rounded():
    ledger = HistoryLedger()
    ledger.append(make_record(ScoringMode.CUSTOM, 2, 3, calculate(ScoringMode.CUSTOM, 2, 3)))
    df = history_to_frame(ledger.all())
    assert df["Percent"].iloc[0] == 66.7


def test_describe_record_shows_score_and_date():
    record = make_record(ScoringMode.CUSTOM, 15, 20, calculate(ScoringMode.CUSTOM, 15, 20))
    text = describe_record(record)

    assert "15/20 = 75.0%" in text
    assert "**2.3** (Good)" in text
    assert record.created_at.astimezone().strftime("%d.%m.%Y %H:%M") in text


def test_describe_record_ihk_defaults_to_100():
    record = make_record(ScoringMode.IHK, 57, None, calculate(ScoringMode.IHK, 57))
    assert "57/100 = 57.0%" in describe_record(record)
