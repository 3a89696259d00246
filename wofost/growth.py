"""Phenological development, dry matter partitioning, growth and integration."""

from __future__ import annotations

import math

from .crop import Crop
from .leaves import dying_leaves, leave_growth
from .mathutil import insw, limit

_STEM_TRANSLOCATION = 0.2


def development_rate(crop: Crop, temp: float, par_daylength: float) -> float:
    """Set and return the development rate, including photoperiod and vernalization."""
    prm = crop.prm
    dev = crop.st.development
    if dev < 1.0:
        rate = crop.tables.delta_temp_sum(temp) / prm.temp_sum1
        if prm.identify_anthesis in (1, 2):
            rate *= limit(
                0.0,
                1.0,
                (par_daylength - prm.critical_daylength)
                / (prm.optimum_daylength - prm.critical_daylength),
            )
        if prm.identify_anthesis == 2:
            vern_table = crop.tables.vernalization_rate
            if vern_table is None:
                raise ValueError("vernalization requires a vernalization table")
            crop.rt.vernalization = insw(dev - 0.3, vern_table(temp), 0.0)
            factor = limit(
                0.0,
                1.0,
                (crop.st.vernalization - prm.base_vern_requirement)
                / (prm.sat_vern_requirement - prm.base_vern_requirement),
            )
            rate *= insw(dev - 0.3, factor, 1.0)
    else:
        rate = crop.tables.delta_temp_sum(temp) / prm.temp_sum2
    crop.rt.development = rate
    return rate


def partitioning(crop: Crop, water_stress: float) -> None:
    """Set the partitioning factors, corrected for water or nitrogen stress."""
    dev = crop.st.development
    tables = crop.tables
    indx = crop.n_st.indx
    if water_stress < indx:
        factor = max(1.0, 1.0 / (water_stress + 0.5))
        crop.fac_ro = min(0.6, tables.roots(dev) * factor)
        crop.fac_lv = tables.leaves(dev)
        crop.fac_st = tables.stems(dev)
        crop.fac_so = tables.storage(dev)
    else:
        flv = tables.leaves(dev)
        factor = math.exp(-crop.prm.n_lv_partitioning * (1.0 - indx))
        crop.fac_lv = flv * factor
        crop.fac_ro = tables.roots(dev)
        crop.fac_st = tables.stems(dev) + flv - crop.fac_lv
        crop.fac_so = tables.storage(dev)


def conversion(crop: Crop, net_assimilation: float) -> float:
    """Convert net assimilates into dry matter (kg ha-1 d-1)."""
    prm = crop.prm
    root = crop.fac_ro / prm.conversion_roots
    shoots = (
        crop.fac_st / prm.conversion_stems
        + crop.fac_lv / prm.conversion_leaves
        + crop.fac_so / prm.conversion_storage
    )
    return net_assimilation / (shoots * (1.0 - crop.fac_ro) + root)


def growth(
    crop: Crop,
    new_plant_material: float,
    temp: float,
    water_stress: float,
    transpiration: float,
    max_transpiration: float,
    groundwater_depth: float,
    step: float,
) -> None:
    """Set the organ growth and death rates and the rooting depth increase."""
    st, rt, drt = crop.st, crop.rt, crop.drt
    dev = st.development

    transloc_st = transloc_dst = 0.0
    if dev >= 1.0:
        transloc_st = st.stems * rt.development * _STEM_TRANSLOCATION
        transloc_dst = crop.dst.stems * rt.development * _STEM_TRANSLOCATION
    translocation = transloc_st + transloc_dst

    drt.roots = st.roots * crop.tables.death_rate_roots(dev)
    rt.roots = new_plant_material * crop.fac_ro - drt.roots

    shoots = new_plant_material * (1.0 - crop.fac_ro)

    drt.stems = st.stems * crop.tables.death_rate_stems(dev) - transloc_dst
    rt.stems = shoots * crop.fac_st - drt.stems - transloc_st

    rt.storage = shoots * crop.fac_so + translocation

    drt.leaves = dying_leaves(crop, transpiration, max_transpiration)
    rt.leaves = shoots * crop.fac_lv
    leave_growth(crop, temp, water_stress)
    rt.leaves -= drt.leaves

    if crop.fac_ro <= 0.0 or (
        not crop.prm.airducts and groundwater_depth - st.root_depth < 10.0
    ):
        rt.root_depth = 0.0
    else:
        rt.root_depth = min(
            crop.prm.max_rooting_depth - st.root_depth,
            crop.prm.max_increase_root * step,
        )


def integrate_crop(crop: Crop, temp: float) -> None:
    """Integrate the crop rates into the states and age the leaf classes."""
    st, rt = crop.st, crop.rt

    st.roots += rt.roots
    st.stems += rt.stems
    st.leaves += rt.leaves
    st.storage += rt.storage
    st.lai_exp += rt.lai_exp

    st.root_depth_prev = st.root_depth
    st.root_depth += rt.root_depth

    if st.development < 1.0:
        st.development = min(1.0, st.development + rt.development)
    else:
        st.development += rt.development

    crop.dst.roots += crop.drt.roots
    crop.dst.stems += crop.drt.stems
    crop.dst.leaves += crop.drt.leaves

    if crop.prm.identify_anthesis == 2:
        st.vernalization += rt.vernalization

    base = crop.prm.temp_base_leaves
    ageing = max(0.0, (temp - base) / (35.0 - base))
    # The youngest class, last in the list, does not age on the day it is added.
    for leaf in crop.leaf_classes[:-1]:
        leaf.age += ageing