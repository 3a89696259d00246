"""Leaf area index, leaf growth and leaf death over the leaf age classes."""

from __future__ import annotations

import math

from .crop import Crop, LeafClass
from .mathutil import limit


def leaf_area_index(crop: Crop) -> float:
    """Return the green area index: leaves, stems and storage organs."""
    dev = crop.st.development
    leaf_area = sum(leaf.weight * leaf.area for leaf in crop.leaf_classes)
    return (
        leaf_area
        + crop.st.stems * crop.tables.specific_stem_area(dev)
        + crop.st.storage * crop.prm.specific_pod_area
    )


def leave_growth(crop: Crop, temp: float, water_stress: float) -> None:
    """Add today's new leaves as the youngest leaf class.

    The specific area of the new class is limited by exponential growth of
    the leaf area; ``crop.rt.lai_exp`` receives that exponential growth.
    """
    dev = crop.st.development
    spec_leaf_area = crop.tables.specific_leave_area(dev) * math.exp(
        -crop.prm.nutrient_stress_sla * (1.0 - crop.npk_indx)
    )

    if crop.st.lai_exp < 6 and crop.rt.leaves > 0.0:
        if dev < 0.2 and crop.st.lai < 0.75:
            stress = water_stress * math.exp(
                -crop.prm.nitrogen_stress_lai * (1.0 - crop.npk_indx)
            )
        else:
            stress = 1.0
        dt_eff = max(0.0, temp - crop.prm.temp_base_leaves)
        growth_exp_lai = crop.st.lai_exp * crop.prm.rel_increase_lai * dt_eff * stress
        growth_source_limited = crop.rt.leaves * spec_leaf_area
        spec_leaf_area = min(growth_exp_lai, growth_source_limited) / crop.rt.leaves
    else:
        growth_exp_lai = 0.0

    crop.leaf_classes.append(
        LeafClass(age=0.0, weight=crop.rt.leaves, area=spec_leaf_area)
    )
    crop.rt.lai_exp = growth_exp_lai


def dying_leaves(crop: Crop, transpiration: float, max_transpiration: float) -> float:
    """Remove dying leaves from the oldest classes and return the dead weight.

    Leaves die from water stress, shading at high LAI, nutrient stress and
    from exceeding their life span.
    """
    dev = crop.st.development
    leaves = crop.st.leaves
    critical_lai = 3.2 / crop.tables.k_diffuse(dev)
    death1 = leaves * (1.0 - transpiration / max_transpiration) * crop.prm.max_rel_death_rate
    death2 = leaves * limit(0.0, 0.03, 0.03 * (crop.st.lai - critical_lai) / critical_lai)
    death = death1 if death1 > death2 else death2
    death += leaves * crop.prm.dying_leaves_npk_stress * (1.0 - crop.npk_indx)

    if death < 0.001:
        death = 0.0
    death_stress = death

    classes = crop.leaf_classes
    while classes and death > classes[0].weight:
        death -= classes.pop(0).weight

    death_age = 0.0
    if classes:
        classes[0].weight -= death
        while classes and classes[0].age > crop.prm.life_span:
            death_age += classes.pop(0).weight

    return death_stress + death_age