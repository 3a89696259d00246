"""Crop transpiration, soil and water evaporation and water stress."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .crop import Crop
from .mathutil import limit
from .parameters import SoilConstants


@dataclass
class PenmanRates:
    """Potential evaporation rates: open water, bare soil and crop canopy."""

    e0: float
    es0: float
    et0: float


@dataclass
class WaterBalance:
    """Soil constants, current soil moisture, water stress and transpiration."""

    ct: SoilConstants
    moisture: float
    water_stress: float = 1.0
    transpiration: float = 0.0


@dataclass(frozen=True)
class EvapotranspirationRates:
    """Maximum evaporation and transpiration rates under the canopy."""

    max_evap_water: float
    max_evap_soil: float
    max_transpiration: float


def sweaf(et0: float, crop_group_number: float) -> float:
    """Return the easily available fraction of soil water.

    Depends on the potential evapotranspiration and the crop group number
    (1 drought-sensitive to 5 drought-resistant), limited to 0.10..0.95.
    """
    value = 1.0 / (0.76 + 1.5 * et0) - (5.0 - crop_group_number) * 0.10
    if crop_group_number < 3.0:
        value += (et0 - 0.6) / (crop_group_number * (crop_group_number + 3.0))
    return limit(0.10, 0.95, value)


def evapotranspiration(
    crop: Crop,
    penman: PenmanRates,
    water_balance: WaterBalance,
    co2: float,
) -> EvapotranspirationRates:
    """Compute the maximum rates and set water stress and transpiration.

    ``penman.et0`` is corrected in place with the crop transpiration factor.
    The oxygen stress day count of the crop is updated; the water stress
    applied to transpiration is held at 1.
    """
    prm = crop.prm
    penman.et0 *= prm.correction_transp

    k_diffuse = crop.tables.k_diffuse(crop.st.development)
    extinction = math.exp(-0.75 * k_diffuse * crop.st.lai)
    rates = EvapotranspirationRates(
        max_evap_water=penman.e0 * extinction,
        max_evap_soil=max(0.0, penman.es0 * extinction),
        max_transpiration=max(
            0.0001, penman.et0 * crop.tables.co2_tra(co2) * (1.0 - extinction)
        ),
    )

    ct = water_balance.ct
    moisture = water_balance.moisture
    depletion = sweaf(penman.et0, prm.crop_group_number)
    critical = (1.0 - depletion) * (ct.moisture_fc - ct.moisture_wp) + ct.moisture_wp
    moisture_stress = limit(
        0.0, 1.0, (moisture - ct.moisture_wp) / (critical - ct.moisture_wp)
    )

    if prm.airducts:
        aeration = ct.moisture_sat - ct.critical_soil_air_c
        if moisture >= aeration:
            crop.days_oxygen_stress = min(crop.days_oxygen_stress + 1.0, 4.0)
        else:
            crop.days_oxygen_stress = 0.0
        max_reduction = limit(
            0.0, 1.0, (ct.moisture_sat - moisture) / (ct.moisture_sat - aeration)
        )
        oxygen_stress = max_reduction + (1.0 - crop.days_oxygen_stress / 4.0) * (
            1.0 - max_reduction
        )
    else:
        oxygen_stress = 1.0

    # The combined stress is computed but water stress is switched off.
    _ = moisture_stress * oxygen_stress
    water_balance.water_stress = 1.0
    water_balance.transpiration = water_balance.water_stress * rates.max_transpiration
    return rates