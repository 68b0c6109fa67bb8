from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

IHK_MAX_POINTS = 100
GRADE_BEST = 1.0
GRADE_WORST = 6.0


class ScoringMode(Enum):
    IHK = "IHK"
    CUSTOM = "Custom"


class Label(Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    SATISFACTORY = "satisfactory"
    SUFFICIENT = "sufficient"
    POOR = "poor"
    INSUFFICIENT = "insufficient"

    @property
    def title(self) -> str:
        return self.value.capitalize()


LABEL_ORDER = {label: rank for rank, label in enumerate(Label, start=1)}


# ------------------------
# Rounding
# ------------------------
def round_1dp_half_up(x: float) -> float:
    if not np.isfinite(x):
        return x
    return float(Decimal(str(x)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


# ------------------------
# IHK key (Stand: Oktober 2014)
# ------------------------
IHK_BANDS: List[Tuple[int, int, float]] = [
    (100, 100, 1.0),
    (98, 99, 1.1),
    (96, 97, 1.2),
    (94, 95, 1.3),
    (92, 93, 1.4),
    (91, 91, 1.5),
    (90, 90, 1.6),
    (89, 89, 1.7),
    (88, 88, 1.8),
    (87, 87, 1.9),
    (85, 86, 2.0),
    (84, 84, 2.1),
    (83, 83, 2.2),
    (82, 82, 2.3),
    (81, 81, 2.4),
    (80, 80, 2.5),
    (79, 79, 2.6),
    (77, 78, 2.7),
    (76, 76, 2.8),
    (74, 75, 2.9),
    (73, 73, 3.0),
    (71, 72, 3.1),
    (70, 70, 3.2),
    (68, 69, 3.3),
    (67, 67, 3.4),
    (66, 66, 3.5),
    (64, 65, 3.6),
    (62, 63, 3.7),
    (61, 61, 3.8),
    (59, 60, 3.9),
    (57, 58, 4.0),
    (55, 56, 4.1),
    (54, 54, 4.2),
    (52, 53, 4.3),
    (50, 51, 4.4),
    (49, 49, 4.5),
    (47, 48, 4.6),
    (45, 46, 4.7),
    (43, 44, 4.8),
    (41, 42, 4.9),
    (38, 40, 5.0),
    (36, 37, 5.1),
    (34, 35, 5.2),
    (32, 33, 5.3),
    (30, 31, 5.4),
    (29, 29, 5.5),
    (23, 28, 5.6),
    (17, 22, 5.7),
    (12, 16, 5.8),
    (6, 11, 5.9),
    (0, 5, 6.0),
]


def _build_ihk_table(bands: List[Tuple[int, int, float]]) -> np.ndarray:
    """
    Expand (start, end, grade) bands into a lookup array indexed by points.

    Every point value 0..IHK_MAX_POINTS must be covered by exactly one band.
    """
    table = np.full(IHK_MAX_POINTS + 1, np.nan)
    for start, end, grade in bands:
        span = table[start:end + 1]
        if not np.all(np.isnan(span)):
            raise ValueError(f"IHK band {start}-{end} overlaps another band.")
        table[start:end + 1] = grade

    gaps = np.flatnonzero(np.isnan(table))
    if gaps.size:
        raise ValueError(f"IHK table has no grade for points {gaps.tolist()}.")
    table.flags.writeable = False
    return table


IHK_TABLE = _build_ihk_table(IHK_BANDS)


# ------------------------
# Core logic
# ------------------------
def grade_for_ihk(points: int) -> float:
    clamped = max(0, min(int(points), IHK_MAX_POINTS))
    return float(IHK_TABLE[clamped])


def percentage(points: int, max_points: Optional[int] = None) -> float:
    """
    Score as a percentage of max_points (100 when no maximum is given).
    Returns NaN when max_points is not positive.
    """
    if max_points is None:
        max_points = IHK_MAX_POINTS
    if max_points <= 0:
        return float("nan")
    return points * 100 / max_points


def percentage_summary(points: int, max_points: Optional[int] = None) -> str:
    if max_points is None:
        max_points = IHK_MAX_POINTS
    pct = percentage(points, max_points)
    if np.isnan(pct):
        return f"{points}/{max_points} = N/A"
    return f"{points}/{max_points} = {round_1dp_half_up(pct):.1f}%"


def grade_for_ihk_scaled(points: int, max_points: int) -> float:
    """
    IHK grade for an exam with a maximum other than 100 points.

    The score is scaled to a percentage, truncated to a whole point and
    clamped into 0..100 before the table lookup. Returns NaN when
    max_points is not positive.
    """
    if max_points <= 0:
        return float("nan")
    scaled = int(points / max_points * 100)
    return grade_for_ihk(scaled)


def grade_for_custom(points: int, max_points: int) -> float:
    """
    Linear key: 100% -> 1.0, 0% -> 6.0.

    Points outside 0..max_points are not clamped and give grades outside
    1.0..6.0. Returns NaN when max_points is not positive.
    """
    pct = percentage(points, max_points)
    if np.isnan(pct):
        return pct
    return (GRADE_WORST - GRADE_BEST) * (100 - pct) / 100 + GRADE_BEST


def label_for(grade: float) -> Label:
    # thresholds are applied to the one-decimal grade, not the raw value
    normalized = round_1dp_half_up(grade)
    if not np.isfinite(normalized):
        return Label.INSUFFICIENT

    if normalized <= 1.5:
        return Label.EXCELLENT
    elif normalized <= 2.5:
        return Label.GOOD
    elif normalized <= 3.5:
        return Label.SATISFACTORY
    elif normalized <= 4.0:
        return Label.SUFFICIENT
    elif normalized <= 4.9:
        return Label.POOR
    else:
        return Label.INSUFFICIENT


@dataclass(frozen=True)
class GradeResult:
    value: float
    label: Label

    @property
    def rounded(self) -> float:
        return round_1dp_half_up(self.value)


def uses_scaled_ihk(mode: ScoringMode, max_points: Optional[int]) -> bool:
    return mode is ScoringMode.IHK and max_points is not None and max_points != IHK_MAX_POINTS


def calculate(mode: ScoringMode, points: int, max_points: Optional[int] = None) -> GradeResult:
    """
    Grade and label for one input.

    mode: IHK uses the official table (scaled when a maximum other than 100
          is given), CUSTOM the linear key and requires max_points.
    """
    if mode is ScoringMode.IHK:
        if uses_scaled_ihk(mode, max_points):
            value = grade_for_ihk_scaled(points, max_points)
        else:
            value = grade_for_ihk(points)
    elif mode is ScoringMode.CUSTOM:
        if max_points is None:
            raise ValueError("Custom mode needs max_points.")
        value = grade_for_custom(points, max_points)
    else:
        raise ValueError(f"Unknown scoring mode: {mode!r}")

    return GradeResult(value=value, label=label_for(value))
