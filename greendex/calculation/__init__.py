"""
Greendex Emissions Calculation Engine

Pure, stateless functions converting project activities and participant
questionnaire answers into CO2 totals, per-category breakdowns and
tree-offset estimates.

Key Guarantees:
- PURE: no I/O, no shared mutable state; safe to call concurrently
- DETERMINISTIC: same input and model -> same output
- FORGIVING: partial or invalid input degrades to zero contributions,
  calculators never raise
- VERSIONED: every calibration constant lives in an immutable EmissionModel

Components:
- EmissionModel: factor tables and adjustment constants
- calculate_activities_co2: project activity baseline
- calculate_emissions: questionnaire breakdown
- trees_needed: offset estimate
- create_project_comparator: ordering for project lists and leaderboards
- get_project_statistics / compute_project_stats: dashboard aggregates
"""

from greendex.calculation.factors import (
    ActivityType,
    ParticipantActivityType,
    AccommodationCategory,
    RoomOccupancy,
    ElectricityType,
    FoodFrequency,
    CarType,
    EmissionModel,
    DEFAULT_EMISSION_MODEL,
    CO2_FACTORS,
    ACCOMMODATION_FACTORS,
    FOOD_FACTORS,
    ROOM_OCCUPANCY_FACTORS,
    GREEN_ENERGY_REDUCTION_FACTOR,
    CONVENTIONAL_ENERGY_FACTOR,
    ROUND_TRIP_MULTIPLIER,
    DEFAULT_CAR_PASSENGERS,
    CO2_PER_TREE_PER_YEAR,
)

from greendex.calculation.ingest import (
    ActivityRecord,
    ParticipantAnswers,
    parse_distance,
    ingest_activity,
    ingest_activities,
)

from greendex.calculation.activities import (
    calculate_activity_co2,
    calculate_activities_co2,
)

from greendex.calculation.questionnaire import (
    EmissionCalculation,
    ParticipantActivity,
    get_occupancy_factor,
    get_electricity_factor,
    calculate_transport_co2,
    calculate_emissions,
    build_participant_activities,
)

from greendex.calculation.offset import trees_needed

from greendex.calculation.comparators import (
    PROJECT_SORT_FIELDS,
    DEFAULT_PROJECT_SORT,
    create_project_comparator,
    sort_projects,
)

from greendex.calculation.statistics import (
    calculate_project_duration,
    ProjectStatistics,
    get_project_statistics,
    ParticipantResult,
    evaluate_participant,
    ActivityBreakdown,
    ProjectStats,
    compute_project_stats,
    rank_participants,
)

__all__ = [
    # Factors
    "ActivityType",
    "ParticipantActivityType",
    "AccommodationCategory",
    "RoomOccupancy",
    "ElectricityType",
    "FoodFrequency",
    "CarType",
    "EmissionModel",
    "DEFAULT_EMISSION_MODEL",
    "CO2_FACTORS",
    "ACCOMMODATION_FACTORS",
    "FOOD_FACTORS",
    "ROOM_OCCUPANCY_FACTORS",
    "GREEN_ENERGY_REDUCTION_FACTOR",
    "CONVENTIONAL_ENERGY_FACTOR",
    "ROUND_TRIP_MULTIPLIER",
    "DEFAULT_CAR_PASSENGERS",
    "CO2_PER_TREE_PER_YEAR",
    # Ingest
    "ActivityRecord",
    "ParticipantAnswers",
    "parse_distance",
    "ingest_activity",
    "ingest_activities",
    # Calculators
    "calculate_activity_co2",
    "calculate_activities_co2",
    "EmissionCalculation",
    "ParticipantActivity",
    "get_occupancy_factor",
    "get_electricity_factor",
    "calculate_transport_co2",
    "calculate_emissions",
    "build_participant_activities",
    "trees_needed",
    # Ordering
    "PROJECT_SORT_FIELDS",
    "DEFAULT_PROJECT_SORT",
    "create_project_comparator",
    "sort_projects",
    # Statistics
    "calculate_project_duration",
    "ProjectStatistics",
    "get_project_statistics",
    "ParticipantResult",
    "evaluate_participant",
    "ActivityBreakdown",
    "ProjectStats",
    "compute_project_stats",
    "rank_participants",
]
