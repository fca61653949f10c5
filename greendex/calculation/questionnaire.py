# -*- coding: utf-8 -*-
"""
Questionnaire Emission Calculator

Computes a participant's full emissions breakdown (transport, accommodation,
food) from questionnaire answers and adds the project activity baseline.

Calculation Steps:
1. Sum one-way transport: plane, boat, train, bus (km x factor)
2. Add car: km x (electric or conventional factor) / passengers
3. Apply the round-trip multiplier to the transport subtotal only
4. Accommodation: days x category factor x occupancy factor x electricity factor
5. Food: days x frequency factor
6. Project activities baseline (activity calculator)
7. Total = sum of the four subtotals (no rounding)
8. Trees needed = ceil(total / CO2 absorbed per tree per year)

Missing answers contribute 0 to their category; nothing here raises for
partial input.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from greendex.calculation.activities import calculate_activities_co2
from greendex.calculation.factors import (
    DEFAULT_EMISSION_MODEL,
    QUESTIONNAIRE_TRANSPORT_FIELDS,
    CarType,
    ElectricityType,
    EmissionModel,
    ParticipantActivityType,
    RoomOccupancy,
)
from greendex.calculation.ingest import ParticipantAnswers
from greendex.calculation.offset import trees_needed

logger = logging.getLogger(__name__)

AnswersInput = Union[ParticipantAnswers, Mapping[str, Any], None]


@dataclass(frozen=True)
class EmissionCalculation:
    """
    Emission breakdown for one participant, in kg CO2.

    total_co2 is the exact float sum of the four subtotals; round only for
    display.
    """
    transport_co2: float
    accommodation_co2: float
    food_co2: float
    project_activities_co2: float
    total_co2: float
    trees_needed: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ParticipantActivity:
    """
    A travel segment derived from questionnaire answers.

    Computed for display, never stored. distance_km and co2_kg cover the
    round trip; car CO2 is the per-passenger share.
    """
    type: ParticipantActivityType
    distance_km: float
    co2_kg: float

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "distance_km": self.distance_km, "co2_kg": self.co2_kg}


def get_occupancy_factor(
    occupancy: Optional[RoomOccupancy],
    model: Optional[EmissionModel] = None,
) -> float:
    """
    Emission factor for a room occupancy.

    Returns:
        1.0 for a single room (or unspecified), less when the room is shared
    """
    model = model or DEFAULT_EMISSION_MODEL
    if not occupancy:
        return model.room_occupancy_factors[RoomOccupancy.ALONE.value]
    key = occupancy.value if isinstance(occupancy, RoomOccupancy) else str(occupancy)
    return model.room_occupancy_factors.get(
        key, model.room_occupancy_factors[RoomOccupancy.ALONE.value]
    )


def get_electricity_factor(
    electricity: Optional[ElectricityType],
    model: Optional[EmissionModel] = None,
) -> float:
    """Green energy reduces accommodation emissions; anything else does not."""
    model = model or DEFAULT_EMISSION_MODEL
    if electricity == ElectricityType.GREEN:
        return model.green_energy_factor
    return model.conventional_energy_factor


def _car_factor(car_type: Optional[CarType], model: EmissionModel) -> float:
    if car_type == CarType.ELECTRIC:
        return model.transport_factors[ParticipantActivityType.ELECTRIC_CAR.value]
    return model.transport_factors[ParticipantActivityType.CAR.value]


def _car_passengers(answers: ParticipantAnswers, model: EmissionModel) -> float:
    return answers.car_passengers or model.default_car_passengers


def calculate_transport_co2(
    answers: AnswersInput,
    model: Optional[EmissionModel] = None,
) -> float:
    """Round-trip transport emissions for a set of answers (kg CO2)."""
    model = model or DEFAULT_EMISSION_MODEL
    answers = ParticipantAnswers.from_raw(answers)

    transport_co2 = 0.0
    for field_name, mode in QUESTIONNAIRE_TRANSPORT_FIELDS:
        km = getattr(answers, field_name)
        if km:
            transport_co2 += km * model.transport_factors[mode.value]

    if answers.car_km:
        car_factor = _car_factor(answers.car_type, model)
        transport_co2 += (answers.car_km * car_factor) / _car_passengers(answers, model)

    # Answers capture the one-way distance TO the project
    return transport_co2 * model.round_trip_multiplier


def calculate_emissions(
    answers: AnswersInput,
    project_activities: Optional[Iterable[Any]] = None,
    model: Optional[EmissionModel] = None,
) -> EmissionCalculation:
    """
    Calculate CO2 emissions from participant answers and estimate the trees
    required to offset the total.

    Args:
        answers: ParticipantAnswers or a raw (camelCase or snake_case) mapping
        project_activities: Optional project-level activities contributing the
            baseline CO2
        model: Emission model (defaults to DEFAULT_EMISSION_MODEL)

    Returns:
        EmissionCalculation with the per-category breakdown
    """
    model = model or DEFAULT_EMISSION_MODEL
    answers = ParticipantAnswers.from_raw(answers)

    transport_co2 = calculate_transport_co2(answers, model)

    accommodation_co2 = 0.0
    if answers.days and answers.accommodation_category:
        base_factor = model.accommodation_factors[answers.accommodation_category.value]
        accommodation_co2 = (
            answers.days
            * base_factor
            * get_occupancy_factor(answers.room_occupancy, model)
            * get_electricity_factor(answers.electricity, model)
        )

    food_co2 = 0.0
    if answers.days and answers.food:
        food_co2 = answers.days * model.food_factors[answers.food.value]

    project_activities_co2 = (
        calculate_activities_co2(project_activities, model)
        if project_activities is not None
        else 0.0
    )

    total_co2 = transport_co2 + accommodation_co2 + food_co2 + project_activities_co2

    result = EmissionCalculation(
        transport_co2=transport_co2,
        accommodation_co2=accommodation_co2,
        food_co2=food_co2,
        project_activities_co2=project_activities_co2,
        total_co2=total_co2,
        trees_needed=trees_needed(total_co2, model),
    )

    logger.debug(
        "Emissions calculated with model %s: total=%.3f kg CO2 (%d trees)",
        model.version, total_co2, result.trees_needed,
    )
    return result


def build_participant_activities(
    answers: AnswersInput,
    model: Optional[EmissionModel] = None,
) -> List[ParticipantActivity]:
    """
    Derive per-mode travel segments from questionnaire answers.

    Only modes with a positive distance produce a segment. The CO2 of all
    segments sums to the transport_co2 of calculate_emissions().
    """
    model = model or DEFAULT_EMISSION_MODEL
    answers = ParticipantAnswers.from_raw(answers)
    multiplier = model.round_trip_multiplier

    activities: List[ParticipantActivity] = []
    for field_name, mode in QUESTIONNAIRE_TRANSPORT_FIELDS:
        km = getattr(answers, field_name)
        if km and km > 0:
            activities.append(ParticipantActivity(
                type=mode,
                distance_km=km * multiplier,
                co2_kg=km * model.transport_factors[mode.value] * multiplier,
            ))

    if answers.car_km and answers.car_km > 0:
        mode = (
            ParticipantActivityType.ELECTRIC_CAR
            if answers.car_type == CarType.ELECTRIC
            else ParticipantActivityType.CAR
        )
        car_co2 = (answers.car_km * _car_factor(answers.car_type, model)) / _car_passengers(answers, model)
        activities.append(ParticipantActivity(
            type=mode,
            distance_km=answers.car_km * multiplier,
            co2_kg=car_co2 * multiplier,
        ))

    return activities


__all__ = [
    "EmissionCalculation",
    "ParticipantActivity",
    "get_occupancy_factor",
    "get_electricity_factor",
    "calculate_transport_co2",
    "calculate_emissions",
    "build_participant_activities",
]
