# -*- coding: utf-8 -*-
"""
Input Boundary

Typed parsing of loosely typed input before it reaches the calculators.

Activity rows arrive from storage with ``distanceKm`` serialized as a string
(decimal columns) and with ``activityType`` as a free string. Questionnaire
answers arrive from a validated form submission in camelCase. Both are
converted here into typed value objects; the calculators only ever see
numbers and enum members.

Bad values inside a well-formed record never raise: unparseable numbers and
unknown categories are dropped with a warning, so a partially filled
questionnaire still produces a (partial) result. Input that is not a record
at all raises ``IngestError``.
"""

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from greendex.calculation.factors import (
    AccommodationCategory,
    CarType,
    ElectricityType,
    FoodFrequency,
    RoomOccupancy,
)
from greendex.exceptions import IngestError

logger = logging.getLogger(__name__)

# Car type spellings found in older questionnaire versions
_LEGACY_CAR_TYPES = {
    "electric": CarType.ELECTRIC,
    "conventional (diesel, petrol, gas…)": CarType.CONVENTIONAL,
    "conventional": CarType.CONVENTIONAL,
}


def parse_distance(value: Any) -> float:
    """
    Coerce a storage/serialization distance to a float.

    Numbers pass through, numeric strings are parsed, anything else becomes
    NaN (which every calculator treats as a zero contribution).
    """
    if value is None or isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return math.nan
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


@dataclass(frozen=True)
class ActivityRecord:
    """
    One travel leg (project baseline or participant-derived).

    activity_type stays a plain string: unknown types must survive ingest so
    the activity calculator can skip and report them.
    """
    activity_type: str
    distance_km: float

    def to_dict(self) -> Dict[str, Any]:
        return {"activity_type": self.activity_type, "distance_km": self.distance_km}


def _first_present(source: Any, *names: str) -> Any:
    if isinstance(source, Mapping):
        for name in names:
            if name in source:
                return source[name]
        return None
    for name in names:
        if hasattr(source, name):
            return getattr(source, name)
    return None


def ingest_activity(raw: Any) -> ActivityRecord:
    """
    Convert a raw activity row into an ActivityRecord.

    Accepts mappings with ``activityType``/``activity_type``/``type`` and
    ``distanceKm``/``distance_km`` keys, or objects with those attributes
    (e.g. ORM rows or ParticipantActivity segments).

    Raises:
        IngestError: If the row is neither a mapping nor carries activity attributes
    """
    if isinstance(raw, ActivityRecord):
        return raw

    is_record = isinstance(raw, Mapping) or any(
        hasattr(raw, name)
        for name in ("activity_type", "activityType", "type", "distance_km", "distanceKm")
    )
    if not is_record or isinstance(raw, (str, bytes)):
        raise IngestError(
            "Activity row must be a mapping or an object with activity attributes",
            context={"type": type(raw).__name__},
        )

    activity_type = _first_present(raw, "activityType", "activity_type", "type")
    if isinstance(activity_type, Enum):
        activity_type = activity_type.value
    distance = _first_present(raw, "distanceKm", "distance_km")

    return ActivityRecord(
        activity_type="" if activity_type is None else str(activity_type),
        distance_km=parse_distance(distance),
    )


def ingest_activities(rows: Optional[Iterable[Any]]) -> List[ActivityRecord]:
    """Convert an iterable of raw rows; None yields an empty list."""
    if rows is None:
        return []
    return [ingest_activity(row) for row in rows]


# ==============================================================================
# Questionnaire answers
# ==============================================================================

_NUMERIC_FIELDS = (
    "days",
    "flight_km",
    "boat_km",
    "train_km",
    "bus_km",
    "car_km",
    "car_passengers",
)

_CATEGORICAL_FIELDS = {
    "accommodation_category": AccommodationCategory,
    "room_occupancy": RoomOccupancy,
    "electricity": ElectricityType,
    "food": FoodFrequency,
}


class ParticipantAnswers(BaseModel):
    """
    A participant's questionnaire response.

    Accepts both the camelCase keys sent by the web form (``flightKm``,
    ``accommodationCategory``) and snake_case field names. Every field is
    optional; a missing field contributes nothing to its category.

    Distances are one-way kilometres TO the project.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    # Participant info (not used by the calculation)
    first_name: Optional[str] = None
    country: Optional[str] = None
    email: Optional[str] = None

    days: Optional[float] = None
    accommodation_category: Optional[AccommodationCategory] = None
    room_occupancy: Optional[RoomOccupancy] = None
    electricity: Optional[ElectricityType] = None
    food: Optional[FoodFrequency] = None

    flight_km: Optional[float] = None
    boat_km: Optional[float] = None
    train_km: Optional[float] = None
    bus_km: Optional[float] = None
    car_km: Optional[float] = None
    car_type: Optional[CarType] = None
    car_passengers: Optional[float] = None

    # Demographics
    age: Optional[int] = None
    gender: Optional[str] = None

    @field_validator(*_NUMERIC_FIELDS, mode="before")
    @classmethod
    def _coerce_number(cls, value: Any, info) -> Optional[float]:
        if value is None or value == "":
            return None
        number = parse_distance(value)
        if not math.isfinite(number):
            logger.warning("Ignoring non-numeric answer for %s: %r", info.field_name, value)
            return None
        if number < 0:
            logger.warning("Ignoring negative answer for %s: %r", info.field_name, value)
            return None
        return number

    @field_validator(*_CATEGORICAL_FIELDS, mode="before")
    @classmethod
    def _coerce_category(cls, value: Any, info) -> Any:
        if value is None or value == "":
            return None
        enum_type = _CATEGORICAL_FIELDS[info.field_name]
        if isinstance(value, enum_type):
            return value
        try:
            return enum_type(value)
        except ValueError:
            logger.warning("Ignoring unknown %s answer: %r", info.field_name, value)
            return None

    @field_validator("car_type", mode="before")
    @classmethod
    def _coerce_car_type(cls, value: Any) -> Optional[CarType]:
        if value is None or value == "":
            return None
        if isinstance(value, CarType):
            return value
        try:
            return CarType(value)
        except ValueError:
            pass
        legacy = _LEGACY_CAR_TYPES.get(str(value))
        if legacy is not None:
            logger.warning("Deprecated car type %r, treating as %s", value, legacy.value)
            return legacy
        logger.warning("Ignoring unknown car_type answer: %r", value)
        return None

    @field_validator("age", mode="before")
    @classmethod
    def _coerce_age(cls, value: Any) -> Optional[int]:
        if value is None or value == "":
            return None
        number = parse_distance(value)
        if not math.isfinite(number):
            logger.warning("Ignoring non-numeric age answer: %r", value)
            return None
        return int(number)

    @field_validator("first_name", "country", "email", "gender", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        if isinstance(value, Enum):
            return str(value.value)
        return str(value)

    @classmethod
    def from_raw(cls, raw: Any) -> "ParticipantAnswers":
        """
        Ingest a submitted questionnaire payload.

        Raises:
            IngestError: If the payload is not a mapping
        """
        if isinstance(raw, cls):
            return raw
        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            raise IngestError(
                "Questionnaire answers must be a mapping",
                context={"type": type(raw).__name__},
            )
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as e:
            raise IngestError(
                "Questionnaire answers could not be parsed",
                context={"errors": e.errors(include_url=False)},
            ) from e

    def to_dict(self) -> Dict[str, Any]:
        """Serialize answered fields only, using the web form's camelCase keys"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


__all__ = [
    "ActivityRecord",
    "ParticipantAnswers",
    "parse_distance",
    "ingest_activity",
    "ingest_activities",
]
