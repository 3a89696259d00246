"""Interpolation tables and date-keyed amount tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator


@dataclass(frozen=True)
class AfgenTable:
    """A piecewise linear function given by ``(x, y)`` points."""

    points: tuple[tuple[float, float], ...]

    def __init__(self, points: Iterable[tuple[float, float]]) -> None:
        pts = tuple((float(x), float(y)) for x, y in points)
        if not pts:
            raise ValueError("an interpolation table needs at least one point")
        object.__setattr__(self, "points", pts)

    def __call__(self, x: float) -> float:
        """Interpolate the table at ``x``, holding the end values outside it."""
        first_x, first_y = self.points[0]
        if x <= first_x:
            return first_y
        for (x0, y0), (x1, y1) in zip(self.points, self.points[1:]):
            if x0 <= x < x1:
                return y0 + (x - x0) * (y1 - y0) / (x1 - x0)
        return self.points[-1][1]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[tuple[float, float]]:
        return iter(self.points)


@dataclass(frozen=True)
class DateEntry:
    """An amount applied on a calendar month and day."""

    month: int
    day: int
    amount: float


@dataclass(frozen=True)
class DateTable:
    """A list of amounts keyed by calendar date."""

    entries: tuple[DateEntry, ...] = field(default_factory=tuple)

    def __init__(self, entries: Iterable[DateEntry] = ()) -> None:
        object.__setattr__(self, "entries", tuple(entries))

    def amount_on(self, month: int, day: int, year: int, end_year: int) -> float:
        """Return the amount for the given date, or 0 if none applies.

        ``month`` counts from 1. Nothing applies after ``end_year``.
        """
        if year > end_year:
            return 0.0
        for entry in self.entries:
            if entry.month == month and entry.day == day:
                return entry.amount
        return 0.0

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[DateEntry]:
        return iter(self.entries)