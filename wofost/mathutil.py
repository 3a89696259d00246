"""Small numeric helpers shared by the crop model."""


def limit(a: float, b: float, c: float) -> float:
    """Clamp ``c`` to the closed interval ``[a, b]``."""
    if c < a:
        return a
    if a <= c <= b:
        return c
    return b


def notnul(x: float) -> float:
    """Return ``x`` unless it is zero, in which case return 1."""
    return x if x != 0.0 else 1.0


def insw(x1: float, x2: float, x3: float) -> float:
    """Input switch: ``x2`` when ``x1`` is negative, otherwise ``x3``."""
    return x2 if x1 < 0 else x3


def leap_year(year: int) -> int:
    """Return the number of days in ``year`` (366 or 365)."""
    if year % 400 == 0 or (year % 100 != 0 and year % 4 == 0):
        return 366
    return 365