from typing import Iterable

import pandas as pd

from notenrechner.grade_logic import percentage, percentage_summary, round_1dp_half_up
from notenrechner.history import HistoryRecord

# ------------------------
# CSV helpers (UI-side)
# ------------------------

HISTORY_COLUMNS = ["Created", "Mode", "Points", "Max points", "Percent", "Grade", "Label"]
ROW_TIME_FORMAT = "%d.%m.%Y %H:%M"


def history_to_frame(records: Iterable[HistoryRecord]) -> pd.DataFrame:
    """
    One row per record, in the order given. Grades and percentages are
    rounded to one decimal the same way they are displayed.
    """
    rows = []
    for record in records:
        rows.append(
            {
                "Created": record.created_at.strftime("%Y-%m-%d %H:%M:%S"),
                "Mode": record.mode.value,
                "Points": record.points,
                "Max points": record.max_points,
                "Percent": round_1dp_half_up(percentage(record.points, record.max_points)),
                "Grade": round_1dp_half_up(record.grade),
                "Label": record.label.title,
            }
        )
    df = pd.DataFrame(rows, columns=HISTORY_COLUMNS)
    df["Max points"] = df["Max points"].astype("Int64")
    return df


def history_to_csv(records: Iterable[HistoryRecord]) -> bytes:
    return history_to_frame(records).to_csv(index=False).encode("utf-8")


def describe_record(record: HistoryRecord) -> str:
    # shown in local time
    created = record.created_at.astimezone().strftime(ROW_TIME_FORMAT)
    return (
        f"**{record.mode.value}** · {percentage_summary(record.points, record.max_points)} → "
        f"**{round_1dp_half_up(record.grade):.1f}** ({record.label.title}) · {created}"
    )
