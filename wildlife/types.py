"""Shared enums, keys and errors for the wildlife engine."""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple

AnimalId = int

LONERS = "Loners"


class AnimalType(Enum):
    CARNIVORE = "carnivore"
    HERBIVORE = "herbivore"


class LivingType(Enum):
    ALONE = "alone"
    GROUP = "group"


class Habitat(Enum):
    LAND = "land"
    WATER = "water"
    AIR = "air"


class Biome(Enum):
    SAVANNA = "savanna"
    TUNDRA = "tundra"
    TROPICAL_FOREST = "tropical_forest"
    DESERT = "desert"

    @classmethod
    def parse(cls, name: str) -> Biome:
        """Look up a biome by value or member name, ignoring case."""
        key = name.strip().lower().replace(" ", "_")
        for biome in cls:
            if biome.value == key:
                return biome
        raise ValueError(f"Unknown biome {name!r}")


class GroupKey(NamedTuple):
    """Composite address of one group list inside an ecosystem."""

    animal_type: AnimalType
    group_name: str


class WildlifeError(Exception):
    """Root of all wildlife errors."""


class AnimalNotFoundError(WildlifeError, KeyError):
    """Raised when an animal id does not resolve to any group member."""

    def __init__(self, animal_id: AnimalId) -> None:
        self.animal_id = animal_id
        super().__init__(f"Animal {animal_id} not found in ecosystem")


class IllegalAttackTargetError(WildlifeError, ValueError):
    """Raised when an attack pairing is not a live carnivore against a live herbivore."""

    def __init__(self, predator_id: AnimalId, victim_id: AnimalId, message: str) -> None:
        self.predator_id = predator_id
        self.victim_id = victim_id
        super().__init__(message)


class UnknownSpeciesError(WildlifeError, KeyError):
    """Raised when a species kind is not defined in a registry."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Species {kind!r} is not defined")
