# -*- coding: utf-8 -*-
"""
Activity CO2 Calculator

Sums CO2 across discrete transport activities (the project-level baseline).

A single bad record must never abort the aggregate:
- NaN, infinite or non-positive distances contribute 0
- activity types without a factor contribute 0 and are logged
- rows that are not records at all are skipped and logged
"""

import logging
import math
from typing import Any, Iterable, Optional

from greendex.calculation.factors import DEFAULT_EMISSION_MODEL, EmissionModel
from greendex.calculation.ingest import ingest_activity
from greendex.exceptions import IngestError

logger = logging.getLogger(__name__)


def calculate_activity_co2(
    activity_type: str,
    distance_km: float,
    model: Optional[EmissionModel] = None,
) -> float:
    """
    Calculate CO2 emissions for a single activity.

    Args:
        activity_type: Transport mode (e.g. "car", "train")
        distance_km: Distance travelled in kilometres
        model: Emission model (defaults to DEFAULT_EMISSION_MODEL)

    Returns:
        CO2 emissions in kilograms, or 0 if the record is invalid
    """
    model = model or DEFAULT_EMISSION_MODEL

    if distance_km is None or math.isnan(distance_km) or math.isinf(distance_km) or distance_km <= 0:
        return 0.0

    factor = model.transport_factor(activity_type)
    if factor is None:
        logger.warning("Unknown activity type: %s", activity_type)
        return 0.0

    return distance_km * factor


def calculate_activities_co2(
    activities: Optional[Iterable[Any]],
    model: Optional[EmissionModel] = None,
) -> float:
    """
    Compute total CO2 emissions for a list of transport activities.

    Raw rows (mappings or ORM objects with string distances) are ingested
    first; ActivityRecords pass straight through.

    Args:
        activities: Activity records or raw rows; None is treated as empty
        model: Emission model (defaults to DEFAULT_EMISSION_MODEL)

    Returns:
        Total CO2 emissions in kilograms, never negative
    """
    if not activities:
        return 0.0

    model = model or DEFAULT_EMISSION_MODEL
    total = 0.0
    for raw in activities:
        try:
            record = ingest_activity(raw)
        except IngestError as e:
            logger.warning("Skipping malformed activity row: %s", e)
            continue
        total += calculate_activity_co2(record.activity_type, record.distance_km, model)
    return total


__all__ = ["calculate_activity_co2", "calculate_activities_co2"]
