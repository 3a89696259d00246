"""Canopy CO2 assimilation by three-point Gaussian integration."""

from __future__ import annotations

import math
from typing import Sequence

from .astro import PI, AstroResult
from .crop import Crop

SCAT_COEF = 0.2
X_GAUSS = (0.1127017, 0.5000000, 0.8872983)
W_GAUSS = (0.2777778, 0.4444444, 0.2777778)

_LOW_TEMPERATURE_DAYS = 7


def instant_assimilation(
    k_diffuse: float,
    eff: float,
    assim_max: float,
    sin_b: float,
    par_diffuse: float,
    par_direct: float,
    lai: float,
) -> float:
    """Return the instantaneous canopy assimilation rate.

    Integrates over the canopy depth with three Gaussian points, separating
    sunlit and shaded leaves.
    """
    root = math.sqrt(1.0 - SCAT_COEF)
    reflection = (1.0 - root) / (1.0 + root) * (2.0 / (1.0 + 1.6 * sin_b))
    k_direct_bl = (0.5 / sin_b) * k_diffuse / (0.8 * root)
    k_direct_tl = k_direct_bl * root
    light_scale = eff / max(2.0, assim_max)

    gross = 0.0
    for x, weight in zip(X_GAUSS, W_GAUSS):
        depth = lai * x

        absorbed_diffuse = (
            (1.0 - reflection) * par_diffuse * k_diffuse * math.exp(-k_diffuse * depth)
        )
        absorbed_total = (
            (1.0 - reflection) * par_direct * k_direct_tl * math.exp(-k_direct_tl * depth)
        )
        absorbed_direct = (
            (1.0 - SCAT_COEF) * par_direct * k_direct_bl * math.exp(-k_direct_bl * depth)
        )

        absorbed_shaded = absorbed_diffuse + absorbed_total - absorbed_direct
        assim_shaded = assim_max * (1.0 - math.exp(-absorbed_shaded * light_scale))

        absorbed_sunlit = (1.0 - SCAT_COEF) * par_direct / sin_b
        if absorbed_sunlit <= 0:
            assim_sunlit = assim_shaded
        else:
            assim_sunlit = assim_max * (
                1.0
                - (assim_max - assim_shaded)
                * (1.0 - math.exp(-absorbed_sunlit * light_scale))
                / (eff * absorbed_sunlit)
            )

        fraction_sunlit = math.exp(-k_direct_bl * depth)
        local = fraction_sunlit * assim_sunlit + (1.0 - fraction_sunlit) * assim_shaded
        gross += local * weight

    return gross * lai


def daily_total_assimilation(
    crop: Crop,
    astro: AstroResult,
    day_temp: float,
    co2: float,
    radiation: float,
) -> float:
    """Return the daily gross assimilation of the canopy.

    ``radiation`` is the daily global radiation in J m-2 d-1 used to compute
    ``astro``.
    """
    tables = crop.tables
    dev = crop.st.development
    lai = crop.st.lai

    k_diffuse = tables.k_diffuse(dev)
    eff = tables.eff(day_temp) * tables.co2_eff(co2)
    assim_max = (
        tables.factor_assim_rate_temp(day_temp)
        * tables.max_assim_rate(dev)
        * tables.co2_amax(co2)
    )

    total = 0.0
    if assim_max > 0.0 and lai > 0.0:
        for x, weight in zip(X_GAUSS, W_GAUSS):
            hour = 12.0 + 0.5 * astro.daylength * x
            sin_b = max(
                0.0,
                astro.sin_ld + astro.cos_ld * math.cos(2.0 * PI * (hour + 12.0) / 24.0),
            )
            par = 0.5 * radiation * sin_b * (1.0 + 0.4 * sin_b) / astro.dsinbe
            par_diffuse = min(par, sin_b * astro.diff_rad_pp)
            par_direct = par - par_diffuse
            total += (
                instant_assimilation(
                    k_diffuse, eff, assim_max, sin_b, par_diffuse, par_direct, lai
                )
                * weight
            )
    return total * astro.daylength


def correct(crop: Crop, assimilation: float, tmin: Sequence[float]) -> float:
    """Correct the daily assimilation for low minimum temperatures.

    ``tmin`` holds the daily minimum temperatures up to and including today,
    oldest first. The mean of the last seven days is used, or of the last
    ``growth_day`` days early in the season. The result is converted from
    CO2 to carbohydrate.
    """
    number = _LOW_TEMPERATURE_DAYS
    if crop.growth_day < 6:
        number = crop.growth_day
    recent = list(tmin)[-number:] if number > 0 else []
    if not recent:
        raise ValueError("no minimum temperatures to average")
    tmin_avg = sum(recent) / len(recent)
    return assimilation * crop.tables.factor_gross_assim_temp(tmin_avg) * 30.0 / 44.0