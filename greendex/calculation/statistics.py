# -*- coding: utf-8 -*-
"""
Project Statistics

Aggregates computed on the fly for project dashboards. Nothing here is
persisted; every figure is derived from participants' answers and the
project's activity rows.

- ProjectStatistics: project summary (counts, total distance, duration,
  baseline activity CO2)
- ProjectStats: participant aggregate (totals, average, per-mode breakdown,
  trees needed)
- rank_participants: leaderboard ordered by ascending total CO2
"""

import functools
import logging
import math
from dataclasses import asdict, dataclass, field, replace
from datetime import date, datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from greendex.calculation.activities import calculate_activities_co2
from greendex.calculation.comparators import create_project_comparator, get_field
from greendex.calculation.factors import (
    DEFAULT_EMISSION_MODEL,
    EmissionModel,
    ParticipantActivityType,
)
from greendex.calculation.ingest import ParticipantAnswers, ingest_activity
from greendex.calculation.offset import trees_needed
from greendex.calculation.questionnaire import (
    EmissionCalculation,
    ParticipantActivity,
    build_participant_activities,
    calculate_emissions,
)
from greendex.exceptions import IngestError

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 60 * 60 * 24

DateInput = Union[date, datetime, str, None]


# ==============================================================================
# Project duration and summary
# ==============================================================================

def _to_datetime(value: DateInput) -> Optional[datetime]:
    """Parse a date-like value to an aware UTC datetime, or None if invalid."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def calculate_project_duration(start_date: DateInput, end_date: DateInput) -> int:
    """
    Duration of a project in whole days, rounded up.

    Returns 0 for unparseable dates or when the end precedes the start.
    """
    start = _to_datetime(start_date)
    end = _to_datetime(end_date)
    if start is None or end is None or end < start:
        return 0
    return math.ceil((end - start).total_seconds() / SECONDS_PER_DAY)


@dataclass(frozen=True)
class ProjectStatistics:
    """Project summary shown on the project detail page"""
    participants_count: int
    activities_count: int
    total_distance_km: float
    duration_days: int
    activities_co2_kg: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def get_project_statistics(
    project: Any,
    participants: Optional[Iterable[Any]],
    activities: Optional[Iterable[Any]],
    model: Optional[EmissionModel] = None,
) -> ProjectStatistics:
    """
    Summarize a project.

    Total distance sums every positive, finite distance regardless of the
    activity type; CO2 only counts types with a known factor. None inputs are
    treated as empty.
    """
    participants = list(participants or [])
    activities = list(activities or [])

    total_distance_km = 0.0
    for raw in activities:
        try:
            distance = ingest_activity(raw).distance_km
        except IngestError:
            continue
        if math.isfinite(distance) and distance > 0:
            total_distance_km += distance

    duration_days = 0
    if project is not None:
        duration_days = calculate_project_duration(
            _first_field(project, "start_date", "startDate"),
            _first_field(project, "end_date", "endDate"),
        )

    return ProjectStatistics(
        participants_count=len(participants),
        activities_count=len(activities),
        total_distance_km=total_distance_km,
        duration_days=duration_days,
        activities_co2_kg=calculate_activities_co2(activities, model),
    )


def _first_field(item: Any, *names: str) -> Any:
    for name in names:
        value = get_field(item, name)
        if value is not None:
            return value
    return None


# ==============================================================================
# Participants
# ==============================================================================

@dataclass(frozen=True)
class ParticipantResult:
    """A participant with computed emissions (never persisted verbatim)"""
    emissions: EmissionCalculation
    activities: Tuple[ParticipantActivity, ...] = ()
    participant_id: Optional[str] = None
    name: Optional[str] = None
    rank: Optional[int] = None

    @property
    def total_co2(self) -> float:
        return self.emissions.total_co2

    def to_dict(self) -> Dict[str, Any]:
        return {
            "participant_id": self.participant_id,
            "name": self.name,
            "rank": self.rank,
            "total_co2": self.total_co2,
            "emissions": self.emissions.to_dict(),
            "activities": [activity.to_dict() for activity in self.activities],
        }


def evaluate_participant(
    answers: Union[ParticipantAnswers, Mapping[str, Any], None],
    project_activities: Optional[Iterable[Any]] = None,
    participant_id: Optional[str] = None,
    model: Optional[EmissionModel] = None,
) -> ParticipantResult:
    """Compute a participant's emissions and travel segments from answers."""
    model = model or DEFAULT_EMISSION_MODEL
    answers = ParticipantAnswers.from_raw(answers)
    if project_activities is not None:
        project_activities = list(project_activities)

    return ParticipantResult(
        emissions=calculate_emissions(answers, project_activities, model),
        activities=tuple(build_participant_activities(answers, model)),
        participant_id=participant_id,
        name=answers.first_name,
    )


@dataclass(frozen=True)
class ActivityBreakdown:
    """Distance, CO2 and number of segments for one transport mode"""
    distance: float = 0.0
    co2: float = 0.0
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProjectStats:
    """Participant aggregate for a project"""
    total_participants: int
    total_co2: float
    average_co2: float
    breakdown_by_type: Mapping[str, ActivityBreakdown] = field(default_factory=dict)
    trees_needed: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_participants": self.total_participants,
            "total_co2": self.total_co2,
            "average_co2": self.average_co2,
            "breakdown_by_type": {
                activity_type: breakdown.to_dict()
                for activity_type, breakdown in self.breakdown_by_type.items()
            },
            "trees_needed": self.trees_needed,
        }


def compute_project_stats(
    participants: Optional[Iterable[ParticipantResult]],
    model: Optional[EmissionModel] = None,
) -> ProjectStats:
    """
    Fold participants into project-wide totals.

    breakdown_by_type always lists every participant transport mode, with
    zeros for modes nobody used.
    """
    participants = list(participants or [])

    totals: Dict[str, List[float]] = {
        member.value: [0.0, 0.0, 0] for member in ParticipantActivityType
    }
    total_co2 = 0.0
    for participant in participants:
        total_co2 += participant.total_co2
        for activity in participant.activities:
            bucket = totals[activity.type.value]
            bucket[0] += activity.distance_km
            bucket[1] += activity.co2_kg
            bucket[2] += 1

    breakdown = {
        activity_type: ActivityBreakdown(distance=distance, co2=co2, count=int(count))
        for activity_type, (distance, co2, count) in totals.items()
    }

    count = len(participants)
    return ProjectStats(
        total_participants=count,
        total_co2=total_co2,
        average_co2=total_co2 / count if count else 0.0,
        breakdown_by_type=MappingProxyType(breakdown),
        trees_needed=trees_needed(total_co2, model),
    )


def rank_participants(participants: Optional[Iterable[ParticipantResult]]) -> List[ParticipantResult]:
    """
    Leaderboard: lowest total CO2 first, ranks 1..n.

    Ties keep their input order and receive consecutive ranks.
    """
    comparator = create_project_comparator("total_co2", descending=False)
    ordered = sorted(participants or [], key=functools.cmp_to_key(comparator))
    return [replace(participant, rank=index) for index, participant in enumerate(ordered, start=1)]


__all__ = [
    "SECONDS_PER_DAY",
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
