"""Crop, soil, site and management parameter sets."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Sequence


def _mapped(cls: type, values: Sequence[float]) -> dict[str, Any]:
    names = [f.name for f in fields(cls)]
    if len(values) < len(names):
        raise ValueError(
            f"{cls.__name__} needs {len(names)} values, got {len(values)}"
        )
    return {name: float(value) for name, value in zip(names, values)}


@dataclass
class CropParameters:
    """Scalar crop parameters in the order of the crop file."""

    temp_base_emergence: float
    temp_eff_max: float
    tsum_emergence: float
    identify_anthesis: int
    optimum_daylength: float
    critical_daylength: float
    sat_vern_requirement: float
    base_vern_requirement: float
    temp_sum1: float
    temp_sum2: float
    initial_dvs: float
    develop_stage_harvest: float
    initial_dry_weight: float
    rel_increase_lai: float
    specific_pod_area: float
    life_span: float
    temp_base_leaves: float
    conversion_leaves: float
    conversion_storage: float
    conversion_roots: float
    conversion_stems: float
    q10: float
    rel_respi_leaves: float
    rel_respi_storage: float
    rel_respi_roots: float
    rel_respi_stems: float
    max_rel_death_rate: float
    correction_transp: float
    crop_group_number: float
    airducts: float
    init_rooting_depth: float
    max_increase_root: float
    max_rooting_depth: float
    dying_leaves_npk_stress: float
    development_stage_n_limit: float
    development_stage_nt: float
    frac_transloc_roots: float
    opt_n_frac: float
    opt_p_frac: float
    opt_k_frac: float
    n_max_roots: float
    n_max_stems: float
    p_max_roots: float
    p_max_stems: float
    k_max_roots: float
    k_max_stems: float
    nitrogen_stress_lai: float
    nlue: float
    max_n_storage: float
    max_p_storage: float
    max_k_storage: float
    n_lv_partitioning: float
    nutrient_stress_sla: float
    n_residual_frac_lv: float
    n_residual_frac_st: float
    n_residual_frac_ro: float
    p_residual_frac_lv: float
    p_residual_frac_st: float
    p_residual_frac_ro: float
    k_residual_frac_lv: float
    k_residual_frac_st: float
    k_residual_frac_ro: float
    tcnt: float
    tcpt: float
    tckt: float
    n_fixation: float

    @classmethod
    def from_values(cls, values: Sequence[float]) -> "CropParameters":
        """Build from values in crop-file order.

        Vernalization requirements are set to -99 unless vernalization is
        switched on (``identify_anthesis`` of 2 or more).
        """
        kwargs = _mapped(cls, values)
        kwargs["identify_anthesis"] = int(kwargs["identify_anthesis"])
        if kwargs["identify_anthesis"] < 2:
            kwargs["sat_vern_requirement"] = -99.0
            kwargs["base_vern_requirement"] = -99.0
        return cls(**kwargs)


@dataclass
class SoilConstants:
    """Soil physical constants."""

    moisture_wp: float
    moisture_fc: float
    moisture_sat: float
    critical_soil_air_c: float
    k0: float
    max_percol_rtz: float
    max_percol_subs: float

    @classmethod
    def from_values(cls, values: Sequence[float]) -> "SoilConstants":
        """Build from values in soil-file order."""
        return cls(**_mapped(cls, values))


@dataclass
class SiteParameters:
    """Site parameters, including the atmospheric CO2 concentration."""

    flag_groundwater: float
    inf_rain_dependent: float
    flag_drains: float
    max_surface_storage: float
    init_soil_moisture: float
    groundwater_depth: float
    dd: float
    soil_lim_root_depth: float
    not_infiltrating: float
    surface_storage: float
    max_init_soil_m: float
    co2: float

    @classmethod
    def from_values(cls, values: Sequence[float]) -> "SiteParameters":
        """Build from values in site-file order."""
        return cls(**_mapped(cls, values))


@dataclass
class ManagementParameters:
    """Nutrient uptake fractions, mineralization and recovery."""

    n_uptake_frac: float
    p_uptake_frac: float
    k_uptake_frac: float
    n_mins: float
    n_recovery_frac: float
    p_mins: float
    p_recovery_frac: float
    k_mins: float
    k_recovery_frac: float

    @classmethod
    def from_values(cls, values: Sequence[float]) -> "ManagementParameters":
        """Build from values in management-file order."""
        return cls(**_mapped(cls, values))