"""
Greendex: Carbon-Footprint Calculation Engine
=============================================

Emissions engine behind Greendex carbon-footprint campaigns. Organizations run
projects, participants answer a travel/accommodation/food questionnaire, and
the engine turns activities and answers into CO2 estimates with tree-offset
recommendations.

    >>> from greendex import calculate_emissions
    >>> round(calculate_emissions({"trainKm": 250}).transport_co2, 2)
    20.5
"""

from ._version import __version__

from greendex.calculation import (
    EmissionModel,
    DEFAULT_EMISSION_MODEL,
    ParticipantAnswers,
    calculate_activities_co2,
    calculate_emissions,
    trees_needed,
    create_project_comparator,
    get_project_statistics,
    compute_project_stats,
    rank_participants,
)
from greendex.exceptions import GreendexException

__license__ = "MIT"

__all__ = [
    "__version__",
    "EmissionModel",
    "DEFAULT_EMISSION_MODEL",
    "ParticipantAnswers",
    "calculate_activities_co2",
    "calculate_emissions",
    "trees_needed",
    "create_project_comparator",
    "get_project_statistics",
    "compute_project_stats",
    "rank_participants",
    "GreendexException",
]
