"""Astronomical day length, solar radiation integrals and diffuse light."""

from __future__ import annotations

import math
from dataclasses import dataclass

ANGLE = -4.0
PI = 3.1415926
RAD = 0.0174533


def _cmin(a: float, b: float) -> float:
    return a if a < b else b


def _cmax(a: float, b: float) -> float:
    return a if a > b else b


def _asin(x: float) -> float:
    return math.asin(x) if -1.0 <= x <= 1.0 else math.nan


def _sqrt(x: float) -> float:
    return math.sqrt(x) if x >= 0.0 else math.nan


@dataclass(frozen=True)
class AstroResult:
    """Astronomical quantities for one day at one latitude."""

    daylength: float
    par_daylength: float
    sin_ld: float
    cos_ld: float
    dsinb: float
    dsinbe: float
    solar_constant: float
    angot_radiation: float
    atmosph_transm: float
    diff_rad_pp: float


def _fraction_diffuse(transmission: float) -> float:
    if transmission > 0.75:
        return 0.23
    if transmission > 0.35:
        return 1.33 - 1.46 * transmission
    if transmission > 0.07:
        return 1.0 - 2.3 * (transmission - 0.07) ** 2
    return 1.0


def astro(day_of_year: float, latitude: float, radiation: float) -> AstroResult:
    """Compute the astronomical parameters for a day.

    ``radiation`` is the daily global radiation in J m-2 d-1.
    Raises ``ValueError`` for a latitude beyond 90 degrees.
    """
    if abs(latitude) > 90.0:
        raise ValueError(f"latitude {latitude} is outside -90..90")

    declination = -math.asin(
        math.sin(23.45 * RAD) * math.cos(2.0 * PI * (day_of_year + 10.0) / 365.0)
    )
    solar_constant = 1370.0 * (1.0 + 0.033 * math.cos(2.0 * PI * day_of_year / 365.0))

    sin_ld = math.sin(RAD * latitude) * math.sin(declination)
    cos_ld = math.cos(RAD * latitude) * math.cos(declination)
    aob = sin_ld / cos_ld

    daylength = _cmax(0.0, _cmin(24.0, 12.0 * (1.0 + 2.0 * _asin(aob) / PI)))
    par_daylength = _cmax(
        0.0,
        _cmin(
            24.0,
            12.0 * (1.0 + 2.0 * _asin((-math.sin(ANGLE * RAD) + sin_ld) / cos_ld) / PI),
        ),
    )

    base = daylength * (sin_ld + 0.4 * (sin_ld * sin_ld + cos_ld * cos_ld * 0.5))
    if aob <= 1.0:
        root = _sqrt(1.0 - aob * aob)
        dsinb = 3600.0 * (daylength * sin_ld + (24.0 / PI) * cos_ld * root)
        dsinbe = 3600.0 * (base + 12.0 * cos_ld * (2.0 + 3.0 * 0.4 * sin_ld) * root / PI)
    else:
        dsinb = 3600.0 * (daylength * sin_ld)
        dsinbe = 3600.0 * base

    angot_radiation = solar_constant * dsinb
    atmosph_transm = radiation / angot_radiation
    diff_rad_pp = 0.5 * _fraction_diffuse(atmosph_transm) * atmosph_transm * solar_constant

    return AstroResult(
        daylength=daylength,
        par_daylength=par_daylength,
        sin_ld=sin_ld,
        cos_ld=cos_ld,
        dsinb=dsinb,
        dsinbe=dsinbe,
        solar_constant=solar_constant,
        angot_radiation=angot_radiation,
        atmosph_transm=atmosph_transm,
        diff_rad_pp=diff_rad_pp,
    )