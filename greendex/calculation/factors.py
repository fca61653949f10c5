# -*- coding: utf-8 -*-
"""
Emission Factor Tables

Calibration constants for the Greendex emissions engine, held by an immutable,
versioned ``EmissionModel``. Calculators receive a model by argument; the
module-level names (``CO2_FACTORS``, ``ACCOMMODATION_FACTORS``, ...) are
read-only views onto ``DEFAULT_EMISSION_MODEL``.

Factor tables are keyed by the enum *values* (``"car"``, ``"3★ Hotel"``) so
that loosely typed input can be looked up without conversion. The enums below
define the closed domain every table must cover.

Units:
- transport: kg CO2 per km per person
- accommodation: kg CO2 per night per person
- food: kg CO2 per day
"""

import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Type

from greendex.exceptions import EmissionModelError

logger = logging.getLogger(__name__)


class ActivityType(str, Enum):
    """Transport modes available for project-level activities"""
    BOAT = "boat"
    BUS = "bus"
    TRAIN = "train"
    CAR = "car"


class ParticipantActivityType(str, Enum):
    """
    Transport modes available to participants.

    Strict superset of ActivityType: adds plane and electricCar, which only
    appear in questionnaire answers.
    """
    BOAT = "boat"
    BUS = "bus"
    TRAIN = "train"
    CAR = "car"
    PLANE = "plane"
    ELECTRIC_CAR = "electricCar"


class AccommodationCategory(str, Enum):
    CAMPING = "Camping"
    HOSTEL = "Hostel"
    HOTEL_3_STAR = "3★ Hotel"
    HOTEL_4_STAR = "4★ Hotel"
    HOTEL_5_STAR = "5★ Hotel"
    APARTMENT = "Apartment"
    FRIENDS_FAMILY = "Friends/Family"


class RoomOccupancy(str, Enum):
    ALONE = "alone"
    TWO_PEOPLE = "2 people"
    THREE_PEOPLE = "3 people"
    FOUR_PLUS_PEOPLE = "4+ people"


class ElectricityType(str, Enum):
    GREEN = "green energy"
    CONVENTIONAL = "conventional energy"
    UNKNOWN = "could not find out"


class FoodFrequency(str, Enum):
    """How often a participant eats meat"""
    NEVER = "never"
    RARELY = "rarely"
    SOMETIMES = "sometimes"
    ALMOST_EVERY_DAY = "almost every day"
    EVERY_DAY = "every day"


class CarType(str, Enum):
    """Car types offered by the questionnaire (the car-like participant activities)"""
    CONVENTIONAL = "car"
    ELECTRIC = "electricCar"


# Questionnaire answer field -> transport mode, in calculation order.
# Car is handled separately (car type and passenger sharing).
QUESTIONNAIRE_TRANSPORT_FIELDS = (
    ("flight_km", ParticipantActivityType.PLANE),
    ("boat_km", ParticipantActivityType.BOAT),
    ("train_km", ParticipantActivityType.TRAIN),
    ("bus_km", ParticipantActivityType.BUS),
)


def _freeze_table(
    name: str,
    table: Mapping[Any, Any],
    domain: Type[Enum],
    version: str,
    upper_bound: Optional[float] = None,
) -> Mapping[str, float]:
    """Normalize a factor table to ``{enum value: float}`` and validate it."""
    frozen: Dict[str, float] = {}
    invalid: Dict[str, str] = {}

    for key, value in table.items():
        key_str = key.value if isinstance(key, Enum) else str(key)
        try:
            domain(key_str)
        except ValueError:
            invalid[f"{name}.{key_str}"] = "not a member of " + domain.__name__
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            invalid[f"{name}.{key_str}"] = f"not a number: {value!r}"
            continue
        if not math.isfinite(number) or number <= 0:
            invalid[f"{name}.{key_str}"] = f"must be a finite number > 0, got {value!r}"
            continue
        if upper_bound is not None and number > upper_bound:
            invalid[f"{name}.{key_str}"] = f"must be <= {upper_bound}, got {value!r}"
            continue
        frozen[key_str] = number

    for member in domain:
        if member.value not in frozen and f"{name}.{member.value}" not in invalid:
            invalid[f"{name}.{member.value}"] = "missing"

    if invalid:
        raise EmissionModelError(
            f"Invalid {name} table in emission model {version}",
            version=version,
            invalid_fields=invalid,
        )

    # Preserve enum declaration order for display
    ordered = {member.value: frozen[member.value] for member in domain}
    return MappingProxyType(ordered)


@dataclass(frozen=True)
class EmissionModel:
    """
    Versioned set of calibration constants.

    IMMUTABLE: tables are read-only mappings, the dataclass is frozen.
    TOTAL: every member of each closed enum has a positive, finite factor.

    A regulatory update to a coefficient is a new model version, never an
    in-place edit of a live model.
    """
    version: str
    transport_factors: Mapping[str, float]
    accommodation_factors: Mapping[str, float]
    food_factors: Mapping[str, float]
    room_occupancy_factors: Mapping[str, float]
    green_energy_factor: float = 0.75
    conventional_energy_factor: float = 1.0
    round_trip_multiplier: float = 2
    default_car_passengers: int = 1
    co2_per_tree_per_year: float = 22
    source: str = ""
    description: str = field(default="", compare=False)

    def __post_init__(self):
        """Normalize tables and validate every coefficient"""
        if not self.version or not str(self.version).strip():
            raise EmissionModelError("Emission model version must not be empty")

        setattr_ = object.__setattr__
        setattr_(self, "transport_factors", _freeze_table(
            "transport_factors", self.transport_factors, ParticipantActivityType, self.version,
        ))
        setattr_(self, "accommodation_factors", _freeze_table(
            "accommodation_factors", self.accommodation_factors, AccommodationCategory, self.version,
        ))
        setattr_(self, "food_factors", _freeze_table(
            "food_factors", self.food_factors, FoodFrequency, self.version,
        ))
        setattr_(self, "room_occupancy_factors", _freeze_table(
            "room_occupancy_factors", self.room_occupancy_factors, RoomOccupancy, self.version,
            upper_bound=1.0,
        ))

        invalid: Dict[str, str] = {}
        scalars = {
            "green_energy_factor": self.green_energy_factor,
            "conventional_energy_factor": self.conventional_energy_factor,
            "round_trip_multiplier": self.round_trip_multiplier,
            "co2_per_tree_per_year": self.co2_per_tree_per_year,
        }
        for name, value in scalars.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                invalid[name] = f"not a number: {value!r}"
            elif not math.isfinite(value) or value <= 0:
                invalid[name] = f"must be a finite number > 0, got {value!r}"

        if "green_energy_factor" not in invalid and self.green_energy_factor > 1:
            invalid["green_energy_factor"] = "must be <= 1 (a reduction)"

        if (
            isinstance(self.default_car_passengers, bool)
            or not isinstance(self.default_car_passengers, int)
            or self.default_car_passengers < 1
        ):
            invalid["default_car_passengers"] = "must be an integer >= 1"

        # Project activities must always be priceable with the participant table
        project_types = {member.value for member in ActivityType}
        participant_types = {member.value for member in ParticipantActivityType}
        if not project_types < participant_types:
            invalid["transport_factors"] = "project activity types must be a strict subset of participant types"

        if invalid:
            raise EmissionModelError(
                f"Invalid emission model {self.version}",
                version=self.version,
                invalid_fields=invalid,
            )

    def __hash__(self) -> int:
        # Tables are read-only mappings, hash their items in declaration order
        return hash((
            self.version,
            tuple(self.transport_factors.items()),
            tuple(self.accommodation_factors.items()),
            tuple(self.food_factors.items()),
            tuple(self.room_occupancy_factors.items()),
            self.green_energy_factor,
            self.conventional_energy_factor,
            self.round_trip_multiplier,
            self.default_car_passengers,
            self.co2_per_tree_per_year,
            self.source,
        ))

    def transport_factor(self, activity_type: Any) -> Optional[float]:
        """
        Look up a transport factor by enum member or raw string.

        Returns:
            kg CO2 per km, or None when the type is unknown
        """
        key = activity_type.value if isinstance(activity_type, Enum) else activity_type
        if not isinstance(key, str):
            return None
        return self.transport_factors.get(key)

    def with_overrides(self, **changes: Any) -> "EmissionModel":
        """Derive a new, re-validated model with some constants replaced."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (YAML/JSON friendly)"""
        return {
            "version": self.version,
            "source": self.source,
            "description": self.description,
            "transport_factors": dict(self.transport_factors),
            "accommodation_factors": dict(self.accommodation_factors),
            "food_factors": dict(self.food_factors),
            "room_occupancy_factors": dict(self.room_occupancy_factors),
            "green_energy_factor": self.green_energy_factor,
            "conventional_energy_factor": self.conventional_energy_factor,
            "round_trip_multiplier": self.round_trip_multiplier,
            "default_car_passengers": self.default_car_passengers,
            "co2_per_tree_per_year": self.co2_per_tree_per_year,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "EmissionModel":
        """
        Build a model from a plain mapping (e.g. a parsed YAML document).

        Raises:
            EmissionModelError: If required keys are missing or values invalid
        """
        if not isinstance(data, Mapping):
            raise EmissionModelError(
                "Emission model document must be a mapping",
                context={"type": type(data).__name__},
            )

        required = (
            "version",
            "transport_factors",
            "accommodation_factors",
            "food_factors",
            "room_occupancy_factors",
        )
        missing = [key for key in required if key not in data]
        if missing:
            raise EmissionModelError(
                "Emission model document is missing required keys",
                version=str(data.get("version") or ""),
                invalid_fields={key: "missing" for key in missing},
            )

        known = set(cls.__dataclass_fields__)
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown emission model keys: %s", ", ".join(unknown))

        kwargs = {key: value for key, value in data.items() if key in known}
        kwargs["version"] = str(kwargs["version"])
        for table in required[1:]:
            if not isinstance(kwargs[table], Mapping):
                raise EmissionModelError(
                    f"{table} must be a mapping",
                    version=kwargs["version"],
                    invalid_fields={table: "not a mapping"},
                )
        return cls(**kwargs)


# ==============================================================================
# Default model
# ==============================================================================

DEFAULT_EMISSION_MODEL = EmissionModel(
    version="greendex-2025.1",
    source="Greendex questionnaire calibration",
    description="Per-km transport, per-night accommodation and per-day food factors "
                "used by the participant questionnaire.",
    transport_factors={
        ParticipantActivityType.CAR: 0.192,
        ParticipantActivityType.BOAT: 0.115,
        ParticipantActivityType.BUS: 0.089,
        ParticipantActivityType.TRAIN: 0.041,
        ParticipantActivityType.PLANE: 0.255,
        ParticipantActivityType.ELECTRIC_CAR: 0.053,
    },
    accommodation_factors={
        AccommodationCategory.CAMPING: 1.5,
        AccommodationCategory.HOSTEL: 3.0,
        AccommodationCategory.HOTEL_3_STAR: 5.0,
        AccommodationCategory.HOTEL_4_STAR: 7.5,
        AccommodationCategory.HOTEL_5_STAR: 10.0,
        AccommodationCategory.APARTMENT: 4.0,
        AccommodationCategory.FRIENDS_FAMILY: 2.0,
    },
    food_factors={
        FoodFrequency.NEVER: 1.5,
        FoodFrequency.RARELY: 2.5,
        FoodFrequency.SOMETIMES: 4.0,
        FoodFrequency.ALMOST_EVERY_DAY: 5.5,
        FoodFrequency.EVERY_DAY: 7.0,
    },
    room_occupancy_factors={
        RoomOccupancy.ALONE: 1.0,
        RoomOccupancy.TWO_PEOPLE: 0.6,
        RoomOccupancy.THREE_PEOPLE: 0.4,
        RoomOccupancy.FOUR_PLUS_PEOPLE: 0.3,
    },
    green_energy_factor=0.75,
    conventional_energy_factor=1.0,
    round_trip_multiplier=2,
    default_car_passengers=1,
    co2_per_tree_per_year=22,
)

CO2_FACTORS = DEFAULT_EMISSION_MODEL.transport_factors
ACCOMMODATION_FACTORS = DEFAULT_EMISSION_MODEL.accommodation_factors
FOOD_FACTORS = DEFAULT_EMISSION_MODEL.food_factors
ROOM_OCCUPANCY_FACTORS = DEFAULT_EMISSION_MODEL.room_occupancy_factors
GREEN_ENERGY_REDUCTION_FACTOR = DEFAULT_EMISSION_MODEL.green_energy_factor
CONVENTIONAL_ENERGY_FACTOR = DEFAULT_EMISSION_MODEL.conventional_energy_factor
ROUND_TRIP_MULTIPLIER = DEFAULT_EMISSION_MODEL.round_trip_multiplier
DEFAULT_CAR_PASSENGERS = DEFAULT_EMISSION_MODEL.default_car_passengers
CO2_PER_TREE_PER_YEAR = DEFAULT_EMISSION_MODEL.co2_per_tree_per_year


__all__ = [
    "ActivityType",
    "ParticipantActivityType",
    "AccommodationCategory",
    "RoomOccupancy",
    "ElectricityType",
    "FoodFrequency",
    "CarType",
    "QUESTIONNAIRE_TRANSPORT_FIELDS",
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
]
