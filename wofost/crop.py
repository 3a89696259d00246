"""Crop state, rates, interpolation tables and crop initialization."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Optional, Sequence

from .mathutil import limit
from .parameters import CropParameters
from .tables import AfgenTable


@dataclass
class LeafClass:
    """One age class of leaves: physiological age, dry weight and specific area."""

    age: float
    weight: float
    area: float


@dataclass
class CropTables:
    """Interpolation tables of a crop, in crop-file order."""

    vernalization_rate: Optional[AfgenTable]
    delta_temp_sum: AfgenTable
    specific_leave_area: AfgenTable
    specific_stem_area: AfgenTable
    k_diffuse: AfgenTable
    eff: AfgenTable
    max_assim_rate: AfgenTable
    factor_assim_rate_temp: AfgenTable
    factor_gross_assim_temp: AfgenTable
    co2_amax: AfgenTable
    co2_eff: AfgenTable
    co2_tra: AfgenTable
    factor_senescence: AfgenTable
    roots: AfgenTable
    leaves: AfgenTable
    stems: AfgenTable
    storage: AfgenTable
    death_rate_stems: AfgenTable
    death_rate_roots: AfgenTable
    n_max_leaves: AfgenTable
    p_max_leaves: AfgenTable
    k_max_leaves: AfgenTable

    @classmethod
    def from_list(
        cls, tables: Sequence[Optional[AfgenTable]], identify_anthesis: int
    ) -> "CropTables":
        """Build from tables in crop-file order.

        The vernalization table is only kept when ``identify_anthesis`` is 2 or
        more; it may then not be missing. All other tables are required.
        """
        names = [f.name for f in fields(cls)]
        if len(tables) != len(names):
            raise ValueError(
                f"expected {len(names)} crop tables, got {len(tables)}"
            )
        values = dict(zip(names, tables))
        if identify_anthesis < 2:
            values["vernalization_rate"] = None
        elif values["vernalization_rate"] is None:
            raise ValueError("vernalization table is required for vernalization")
        missing = [
            name
            for name in names[1:]
            if values[name] is None
        ]
        if missing:
            raise ValueError(f"missing crop tables: {', '.join(missing)}")
        return cls(**values)


@dataclass
class CropState:
    """Crop state variables."""

    development: float = 0.0
    lai: float = 0.0
    lai_exp: float = 0.0
    roots: float = 0.0
    stems: float = 0.0
    leaves: float = 0.0
    storage: float = 0.0
    root_depth: float = 0.0
    root_depth_prev: float = 0.0
    vernalization: float = 0.0


@dataclass
class CropRates:
    """Daily rates of change of the crop state."""

    development: float = 0.0
    lai_exp: float = 0.0
    roots: float = 0.0
    stems: float = 0.0
    leaves: float = 0.0
    storage: float = 0.0
    root_depth: float = 0.0
    vernalization: float = 0.0


@dataclass
class DeadMatter:
    """Dead plant material per organ (state) or its daily increase (rate)."""

    leaves: float = 0.0
    stems: float = 0.0
    roots: float = 0.0


@dataclass
class NutrientState:
    """Amounts and concentrations of one nutrient in the crop."""

    leaves: float = 0.0
    stems: float = 0.0
    roots: float = 0.0
    storage: float = 0.0
    max_lv: float = 0.0
    max_st: float = 0.0
    max_ro: float = 0.0
    max_so: float = 0.0
    optimum_lv: float = 0.0
    optimum_st: float = 0.0
    indx: float = 1.0
    uptake: float = 0.0
    uptake_lv: float = 0.0
    uptake_st: float = 0.0
    uptake_ro: float = 0.0
    death_lv: float = 0.0
    death_st: float = 0.0
    death_ro: float = 0.0
    avail_lv: float = 0.0
    avail_st: float = 0.0
    avail_ro: float = 0.0


@dataclass
class NutrientRates:
    """Daily rates of one nutrient in the crop."""

    leaves: float = 0.0
    stems: float = 0.0
    roots: float = 0.0
    storage: float = 0.0
    uptake: float = 0.0
    uptake_lv: float = 0.0
    uptake_st: float = 0.0
    uptake_ro: float = 0.0
    transloc_lv: float = 0.0
    transloc_st: float = 0.0
    transloc_ro: float = 0.0
    death_lv: float = 0.0
    death_st: float = 0.0
    death_ro: float = 0.0
    demand_lv: float = 0.0
    demand_st: float = 0.0
    demand_ro: float = 0.0
    demand_so: float = 0.0
    supply: float = 0.0


@dataclass
class Crop:
    """A crop with its parameters, tables, states and rates.

    A new crop has not been sown or emerged and carries no biomass.
    """

    prm: CropParameters
    tables: CropTables
    st: CropState = field(default_factory=CropState)
    rt: CropRates = field(default_factory=CropRates)
    dst: DeadMatter = field(default_factory=DeadMatter)
    drt: DeadMatter = field(default_factory=DeadMatter)
    n_st: NutrientState = field(default_factory=NutrientState)
    p_st: NutrientState = field(default_factory=NutrientState)
    k_st: NutrientState = field(default_factory=NutrientState)
    n_rt: NutrientRates = field(default_factory=NutrientRates)
    p_rt: NutrientRates = field(default_factory=NutrientRates)
    k_rt: NutrientRates = field(default_factory=NutrientRates)
    leaf_classes: list[LeafClass] = field(default_factory=list)
    fac_ro: float = 0.0
    fac_lv: float = 0.0
    fac_st: float = 0.0
    fac_so: float = 0.0
    emergence: bool = False
    sowing: int = 0
    tsum_emergence: float = 0.0
    growth_day: int = 0
    days_oxygen_stress: float = 0.0
    nutrient_stress: float = 1.0
    npk_indx: float = 1.0
    seasons: int = 1


def emergence_crop(crop: Crop, emerged: bool, temp: float) -> bool:
    """Advance the emergence temperature sum and report whether the crop emerged.

    Counting starts the day after sowing.
    """
    if emerged:
        return True
    if crop.sowing == 1:
        crop.sowing = 2
        return False
    delta = limit(
        0.0,
        crop.prm.temp_eff_max - crop.prm.temp_base_emergence,
        temp - crop.prm.temp_base_emergence,
    )
    crop.tsum_emergence += delta
    return crop.tsum_emergence >= crop.prm.tsum_emergence


def initialize_crop(crop: Crop, soil_lim_root_depth: float) -> None:
    """Set the crop states and the first leaf class at emergence."""
    prm = crop.prm
    tables = crop.tables
    st = crop.st

    st.development = prm.initial_dvs
    dev = st.development

    fraction_roots = tables.roots(dev)
    shoot_weight = prm.initial_dry_weight * (1.0 - fraction_roots)

    st.roots = prm.initial_dry_weight * fraction_roots
    st.root_depth = prm.init_rooting_depth
    st.stems = shoot_weight * tables.stems(dev)
    st.leaves = shoot_weight * tables.leaves(dev)
    st.storage = shoot_weight * tables.storage(dev)

    prm.max_rooting_depth = max(
        prm.init_rooting_depth, min(prm.max_rooting_depth, soil_lim_root_depth)
    )

    sla = tables.specific_leave_area(dev)
    lai_emergence = st.leaves * sla
    st.lai_exp = lai_emergence
    st.lai = (
        lai_emergence
        + st.stems * tables.specific_stem_area(dev)
        + st.storage * prm.specific_pod_area
    )

    crop.leaf_classes = [LeafClass(age=0.0, weight=st.leaves, area=sla)]

    crop.emergence = True
    crop.growth_day = 1
    crop.dst = DeadMatter()
    st.vernalization = 0.0