from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Sequence

from hitmon.anomaly.models import EmptyWindowError

IQR_FACTOR = 1.5


@dataclass(frozen=True)
class OutlierBounds:
    q1: float
    q3: float
    lower: float
    upper: float

    @property
    def iqr(self) -> float:
        return self.q3 - self.q1


def detect_outliers(values: Sequence[float]) -> OutlierBounds:
    """
    IQR fences over values.

    Quartiles are positional, not interpolated:
      Q1 = sorted[floor(n/4)], Q3 = sorted[ceil(3n/4)]
    For n < 4 the Q3 position lies past the end, so there is no Q3; the
    fences open to (-inf, +inf) and nothing counts as an outlier.
    """
    ordered = sorted(values)
    n = len(ordered)
    if n == 0:
        raise EmptyWindowError("cannot compute IQR bounds over no values")
    q1 = ordered[n // 4]
    q3_pos = -(-3 * n // 4)
    if q3_pos >= n:
        return OutlierBounds(q1=q1, q3=math.nan, lower=-math.inf, upper=math.inf)
    q3 = ordered[q3_pos]
    iqr = q3 - q1
    return OutlierBounds(q1=q1, q3=q3, lower=q1 - IQR_FACTOR * iqr, upper=q3 + IQR_FACTOR * iqr)


def is_outlier(value: float, lower: float, upper: float) -> bool:
    return value < lower or value > upper
