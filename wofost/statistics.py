"""Moments of a data sample."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True)
class Moments:
    """Mean, spread and shape of a sample."""

    average: float
    average_deviation: float
    standard_deviation: float
    variance: float
    skewness: float
    kurtosis: float


def moment(data: Sequence[float]) -> Moments:
    """Return the moments of ``data``, which needs at least two values.

    The variance is the sample variance with a round-off correction. When it
    is zero, skewness and kurtosis are left as the raw central sums.
    """
    values = [float(v) for v in data]
    n = len(values)
    if n <= 1:
        raise ValueError("n must be at least 2 in moment")

    average = sum(values) / n
    adev = var = skew = curt = ep = 0.0
    for value in values:
        s = value - average
        adev += abs(s)
        ep += s
        p = s * s
        var += p
        p *= s
        skew += p
        p *= s
        curt += p

    adev /= n
    var = (var - ep * ep / n) / (n - 1)
    sdev = math.sqrt(var)
    if var:
        skew /= n * var * sdev
        curt = curt / (n * var * var) - 3.0

    return Moments(
        average=average,
        average_deviation=adev,
        standard_deviation=sdev,
        variance=var,
        skewness=skew,
        kurtosis=curt,
    )