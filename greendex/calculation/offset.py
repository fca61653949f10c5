# -*- coding: utf-8 -*-
"""
Offset Estimator

Converts a CO2 total into the number of trees whose annual absorption would
offset it. A partial tree-equivalent still requires a whole tree.
"""

import math
from typing import Optional

from greendex.calculation.factors import DEFAULT_EMISSION_MODEL, EmissionModel


def trees_needed(total_co2_kg: float, model: Optional[EmissionModel] = None) -> int:
    """
    Number of trees needed to offset ``total_co2_kg`` in one year.

    Always rounds up: 22 kg -> 1 tree, 22.0001 kg -> 2 trees. Zero, negative
    and non-finite totals need no trees.
    """
    model = model or DEFAULT_EMISSION_MODEL
    if total_co2_kg is None or not math.isfinite(total_co2_kg) or total_co2_kg <= 0:
        return 0
    return math.ceil(total_co2_kg / model.co2_per_tree_per_year)


__all__ = ["trees_needed"]
