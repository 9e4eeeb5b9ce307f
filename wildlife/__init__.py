"""wildlife - Predator/prey ecosystem simulation in Python."""

from wildlife.animals import Animal, Carnivore, Herbivore, IdAllocator, breed
from wildlife.config import EcosystemConfig, SimulationConfig
from wildlife.ecosystem import Ecosystem
from wildlife.events import Event, EventLog
from wildlife.outcome import FixedOutcomeSource, OutcomeSource, SeededOutcomeSource
from wildlife.simulation import Simulation, TurnContext, default_systems
from wildlife.species import SpeciesDef, SpeciesRegistry, default_registry
from wildlife.types import (
    LONERS,
    AnimalId,
    AnimalNotFoundError,
    AnimalType,
    Biome,
    GroupKey,
    Habitat,
    IllegalAttackTargetError,
    LivingType,
    UnknownSpeciesError,
    WildlifeError,
)

__all__ = [
    "Animal",
    "Carnivore",
    "Herbivore",
    "IdAllocator",
    "breed",
    "Ecosystem",
    "EcosystemConfig",
    "SimulationConfig",
    "Simulation",
    "TurnContext",
    "default_systems",
    "OutcomeSource",
    "SeededOutcomeSource",
    "FixedOutcomeSource",
    "SpeciesDef",
    "SpeciesRegistry",
    "default_registry",
    "Event",
    "EventLog",
    "AnimalId",
    "AnimalType",
    "LivingType",
    "Habitat",
    "Biome",
    "GroupKey",
    "LONERS",
    "WildlifeError",
    "AnimalNotFoundError",
    "IllegalAttackTargetError",
    "UnknownSpeciesError",
]
