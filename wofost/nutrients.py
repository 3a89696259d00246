"""Crop nutrient (N, P, K) initialization, uptake, translocation, losses and integration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Protocol

from .crop import Crop, NutrientRates, NutrientState
from .tables import DateTable

_TINY = 0.001


class _Management(Protocol):
    """What nutrient initialization needs from the crop management."""

    n_uptake_frac: float
    p_uptake_frac: float
    k_uptake_frac: float
    n_mins: float
    p_mins: float
    k_mins: float
    n_fert_table: DateTable
    p_fert_table: DateTable
    k_fert_table: DateTable


@dataclass
class SoilNutrients:
    """Soil N, P, K available to the crop, mineralization pools and their rates."""

    n_tot: float = 0.0
    p_tot: float = 0.0
    k_tot: float = 0.0
    n_mins: float = 0.0
    p_mins: float = 0.0
    k_mins: float = 0.0
    rate_n_tot: float = 0.0
    rate_p_tot: float = 0.0
    rate_k_tot: float = 0.0
    rate_n_mins: float = 0.0
    rate_p_mins: float = 0.0
    rate_k_mins: float = 0.0


def _nutrients(crop: Crop) -> Iterator[tuple[NutrientState, NutrientRates]]:
    yield crop.n_st, crop.n_rt
    yield crop.p_st, crop.p_rt
    yield crop.k_st, crop.k_rt


def initialize_nutrients(
    crop: Crop,
    management: _Management,
    month: int,
    day: int,
    year: int,
    end_year: int,
) -> SoilNutrients:
    """Set the initial crop nutrient states and return the soil nutrient state.

    Organs start at their maximum concentration; the soil starts with the
    fertilizer applied on the given date times the uptake fraction.
    """
    prm = crop.prm
    tables = crop.tables
    st = crop.st
    dev = st.development

    organs = (
        (crop.n_st, tables.n_max_leaves(dev), prm.n_max_stems, prm.n_max_roots),
        (crop.p_st, tables.p_max_leaves(dev), prm.p_max_stems, prm.p_max_roots),
        (crop.k_st, tables.k_max_leaves(dev), prm.k_max_stems, prm.k_max_roots),
    )
    for state, max_lv, stem_factor, root_factor in organs:
        state.max_lv = max_lv
        state.max_st = stem_factor * max_lv
        state.max_ro = root_factor * max_lv
        state.max_so = 0.0

        state.leaves = state.max_lv * st.leaves
        state.stems = state.max_st * st.stems
        state.roots = state.max_ro * st.roots
        state.storage = 0.0

        state.death_lv = state.death_st = state.death_ro = 0.0
        state.uptake = state.uptake_lv = state.uptake_st = state.uptake_ro = 0.0
        state.indx = 1.0

    crop.npk_indx = 1.0
    crop.n_st.optimum_lv = 0.0
    crop.n_st.optimum_st = 0.0

    def applied(table: DateTable) -> float:
        return table.amount_on(month, day, year, end_year)

    return SoilNutrients(
        n_tot=applied(management.n_fert_table) * management.n_uptake_frac,
        p_tot=applied(management.p_fert_table) * management.p_uptake_frac,
        k_tot=applied(management.k_fert_table) * management.k_uptake_frac,
        n_mins=management.n_mins,
        p_mins=management.p_mins,
        k_mins=management.k_mins,
    )


def crop_nutrient_rates(crop: Crop) -> None:
    """Set the organ nutrient rates and partition translocation over the organs.

    Storage uptake is only updated after development stage
    ``development_stage_nt``; translocation follows the storage rate in
    proportion to the nutrients available in each organ.
    """
    after_nt = crop.st.development > crop.prm.development_stage_nt
    for state, rate in _nutrients(crop):
        rate.leaves = rate.uptake_lv - rate.transloc_lv - rate.death_lv
        rate.stems = rate.uptake_st - rate.transloc_st - rate.death_st
        rate.roots = rate.uptake_ro - rate.transloc_ro - rate.death_ro

        if after_nt:
            rate.storage = min(rate.demand_so, rate.supply)

        available = state.avail_lv + state.avail_st + state.avail_ro
        if available > _TINY:
            rate.transloc_lv = rate.storage * state.avail_lv / available
            rate.transloc_st = rate.storage * state.avail_st / available
            rate.transloc_ro = rate.storage * state.avail_ro / available
        else:
            rate.transloc_lv = rate.transloc_st = rate.transloc_ro = 0.0


def nutrient_loss(crop: Crop) -> None:
    """Set the nutrient loss rates from dying leaves, stems and roots."""
    prm = crop.prm
    drt = crop.drt
    fractions = (
        (crop.n_rt, prm.n_residual_frac_lv, prm.n_residual_frac_st, prm.n_residual_frac_ro),
        (crop.p_rt, prm.p_residual_frac_lv, prm.p_residual_frac_st, prm.p_residual_frac_ro),
        (crop.k_rt, prm.k_residual_frac_lv, prm.k_residual_frac_st, prm.k_residual_frac_ro),
    )
    for rate, frac_lv, frac_st, frac_ro in fractions:
        rate.death_lv = frac_lv * drt.leaves
        rate.death_st = frac_st * drt.stems
        rate.death_ro = frac_ro * drt.roots


def nutrient_partitioning(
    crop: Crop,
    soil: SoilNutrients,
    transpiration: float,
    max_transpiration: float,
    step: float,
) -> None:
    """Set the total N, P, K uptake rates and share them over the organs.

    No nutrients are taken up after development stage
    ``development_stage_n_limit`` or under severe water shortage. Uptake is
    limited by what the soil holds; part of the N demand may be fixed.
    """
    demands = [
        rate.demand_lv + rate.demand_st + rate.demand_ro for _, rate in _nutrients(crop)
    ]
    total_n, total_p, total_k = demands

    nutrient_limit = 0.0
    if (
        crop.st.development < crop.prm.development_stage_n_limit
        and transpiration / max_transpiration > 0.01
    ):
        nutrient_limit = 1.0

    n_fixation = max(0.0, crop.prm.n_fixation * total_n) * nutrient_limit

    crop.n_rt.uptake = (
        max(0.0, min(total_n - n_fixation, soil.n_tot + soil.rate_n_mins))
        * nutrient_limit
        / step
    )
    crop.p_rt.uptake = (
        max(0.0, min(total_p, soil.p_tot + soil.rate_p_mins)) * nutrient_limit / step
    )
    crop.k_rt.uptake = (
        max(0.0, min(total_k, soil.k_tot + soil.rate_k_mins)) * nutrient_limit / step
    )

    supplies = (
        crop.n_rt.uptake + n_fixation,
        crop.p_rt.uptake,
        crop.k_rt.uptake,
    )
    for (_, rate), total, supply in zip(_nutrients(crop), demands, supplies):
        if total > _TINY:
            rate.uptake_lv = rate.demand_lv / total * supply
            rate.uptake_st = rate.demand_st / total * supply
            rate.uptake_ro = rate.demand_ro / total * supply
        else:
            rate.uptake_lv = rate.uptake_st = rate.uptake_ro = 0.0


def integrate_nutrients(crop: Crop, soil: SoilNutrients) -> None:
    """Integrate the soil and crop nutrient rates into their states."""
    soil.n_tot = max(0.0, soil.n_tot + soil.rate_n_tot)
    soil.p_tot = max(0.0, soil.p_tot + soil.rate_p_tot)
    soil.k_tot = max(0.0, soil.k_tot + soil.rate_k_tot)

    soil.n_mins = max(0.0, soil.n_mins - soil.rate_n_mins)
    soil.p_mins = max(0.0, soil.p_mins - soil.rate_p_mins)
    soil.k_mins = max(0.0, soil.k_mins - soil.rate_k_mins)

    for state, rate in _nutrients(crop):
        state.uptake += rate.uptake

        state.leaves += rate.leaves
        state.stems += rate.stems
        state.roots += rate.roots
        state.storage += rate.storage

        state.death_lv += rate.death_lv
        state.death_st += rate.death_st
        state.death_ro += rate.death_ro