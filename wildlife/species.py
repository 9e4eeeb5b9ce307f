"""Species definitions and the registry that builds animals from them."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from wildlife.animals import Animal, Carnivore, Herbivore, IdAllocator
from wildlife.types import (
    LONERS,
    AnimalType,
    Biome,
    Habitat,
    LivingType,
    UnknownSpeciesError,
)

if TYPE_CHECKING:
    from wildlife.ecosystem import Ecosystem


@dataclass(frozen=True)
class SpeciesDef:
    """Immutable species template.

    Attributes:
        kind: Display name, also the case-insensitive registry key.
        animal_type: Carnivore or herbivore.
        biomes: Biomes the species can inhabit.
        max_age: Age in turns at which the animal dies of old age.
        weight: Body weight; drives attack odds and hunger relief.
        reproductive_rate: Breeds every this many turns of age.
        living_type: Solitary species always join the loners group.
        habitat: Main habitat.
        attack_points: Carnivore strength rating (unused for herbivores).
        hunger_rate: Hunger gained per turn (carnivores only).
        escape_points: Herbivore evasion rating (unused for carnivores).
    """

    kind: str
    animal_type: AnimalType
    biomes: frozenset[Biome]
    max_age: int
    weight: float
    reproductive_rate: int
    living_type: LivingType = LivingType.GROUP
    habitat: Habitat = Habitat.LAND
    attack_points: int = 0
    hunger_rate: int = 0
    escape_points: int = 0

    def __post_init__(self) -> None:
        if not self.kind:
            raise ValueError("SpeciesDef kind must be non-empty")
        if not self.biomes:
            raise ValueError(f"{self.kind}: biomes must be non-empty")
        if self.max_age <= 0:
            raise ValueError(f"{self.kind}: max_age must be > 0, got {self.max_age}")
        if self.weight <= 0:
            raise ValueError(f"{self.kind}: weight must be > 0, got {self.weight}")
        if self.reproductive_rate <= 0:
            raise ValueError(
                f"{self.kind}: reproductive_rate must be > 0, got {self.reproductive_rate}"
            )
        if self.animal_type is AnimalType.CARNIVORE and self.hunger_rate <= 0:
            raise ValueError(f"{self.kind}: carnivores need hunger_rate > 0")
        object.__setattr__(self, "biomes", frozenset(self.biomes))

    @property
    def solitary(self) -> bool:
        return self.living_type is LivingType.ALONE


def _key(kind: str) -> str:
    return kind.strip().lower().replace("_", " ")


class SpeciesRegistry:
    """Stores species definitions and creates animals with unique ids."""

    def __init__(self, ids: IdAllocator | None = None) -> None:
        self._definitions: dict[str, SpeciesDef] = {}
        self._ids = ids if ids is not None else IdAllocator()

    @property
    def ids(self) -> IdAllocator:
        return self._ids

    def define(self, species: SpeciesDef) -> None:
        """Register a species. Overwrites if kind exists."""
        self._definitions[_key(species.kind)] = species

    def get(self, kind: str) -> SpeciesDef:
        try:
            return self._definitions[_key(kind)]
        except KeyError:
            raise UnknownSpeciesError(kind) from None

    def has(self, kind: str) -> bool:
        return _key(kind) in self._definitions

    def remove(self, kind: str) -> None:
        if _key(kind) not in self._definitions:
            raise UnknownSpeciesError(kind)
        del self._definitions[_key(kind)]

    def defined_species(self) -> list[str]:
        return [d.kind for d in self._definitions.values()]

    def for_biome(self, biome: Biome) -> list[SpeciesDef]:
        return [d for d in self._definitions.values() if biome in d.biomes]

    def create(self, kind: str, group_name: str | None = None, age: int = 0) -> Animal:
        """Build a fresh animal of *kind*.

        Solitary species ignore *group_name* and join the loners group.
        Group species default to a group named after the species.
        """
        species = self.get(kind)
        if species.solitary:
            group_name, in_group = LONERS, False
        else:
            group_name, in_group = group_name or species.kind, True
        common = dict(
            id=self._ids.allocate(),
            kind=species.kind,
            max_age=species.max_age,
            weight=species.weight,
            reproductive_rate=species.reproductive_rate,
            biomes=species.biomes,
            habitat=species.habitat,
            living_type=species.living_type,
            current_age=age,
            in_group=in_group,
            group_name=group_name,
        )
        if species.animal_type is AnimalType.CARNIVORE:
            return Carnivore(
                attack_points=species.attack_points,
                hunger_rate=species.hunger_rate,
                **common,
            )
        return Herbivore(escape_points=species.escape_points, **common)

    def populate(
        self, ecosystem: Ecosystem, kind: str, group_name: str | None = None, count: int = 1
    ) -> list[Animal]:
        """Create *count* animals of *kind* and add them to *ecosystem*."""
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        created = [self.create(kind, group_name) for _ in range(count)]
        for animal in created:
            ecosystem.add_animal(animal)
        return created


_SAVANNA = frozenset({Biome.SAVANNA})
_EVERYWHERE = frozenset(Biome)


def _herbivore(kind: str, biomes: frozenset[Biome], max_age: int, weight: float,
               rate: int, living: LivingType, escape: int) -> SpeciesDef:
    return SpeciesDef(kind=kind, animal_type=AnimalType.HERBIVORE, biomes=biomes,
                      max_age=max_age, weight=weight, reproductive_rate=rate,
                      living_type=living, escape_points=escape)


def _carnivore(kind: str, biomes: frozenset[Biome], max_age: int, weight: float,
               rate: int, living: LivingType, attack: int, hunger: int) -> SpeciesDef:
    return SpeciesDef(kind=kind, animal_type=AnimalType.CARNIVORE, biomes=biomes,
                      max_age=max_age, weight=weight, reproductive_rate=rate,
                      living_type=living, attack_points=attack, hunger_rate=hunger)


ALONE, GROUP = LivingType.ALONE, LivingType.GROUP

PRESETS: tuple[SpeciesDef, ...] = (
    # Savanna
    _herbivore("Zebra", _SAVANNA, 50, 300, 10, GROUP, 80),
    _herbivore("Hare", _SAVANNA, 24, 5, 3, ALONE, 100),
    _herbivore("Gazelle", _SAVANNA, 25, 25, 5, GROUP, 80),
    _herbivore("Buffalo", _SAVANNA, 35, 800, 9, GROUP, 40),
    _carnivore("Lion", _SAVANNA, 30, 150, 6, GROUP, 110, 20),
    _carnivore("Cheetah", _SAVANNA, 30, 60, 5, ALONE, 110, 15),
    _carnivore("Tiger", _SAVANNA, 20, 200, 6, ALONE, 75, 18),
    _carnivore("Hyena", _SAVANNA, 24, 50, 5, GROUP, 80, 14),
    # Tundra
    _herbivore("Reindeer", frozenset({Biome.TUNDRA, Biome.DESERT}), 22, 180, 6, GROUP, 90),
    _herbivore("Lemming", frozenset({Biome.TUNDRA}), 24, 1, 2, ALONE, 100),
    _carnivore("Arctic Fox", frozenset({Biome.TUNDRA}), 20, 5, 4, ALONE, 95, 10),
    _carnivore("Snowy Owl", frozenset({Biome.TUNDRA, Biome.SAVANNA}), 18, 3, 3, ALONE, 90, 9),
    # Tropical forest
    _herbivore("Monkey", frozenset({Biome.TROPICAL_FOREST}), 28, 15, 5, GROUP, 85),
    _herbivore("Tapir", frozenset({Biome.TROPICAL_FOREST, Biome.SAVANNA}), 26, 250, 5, ALONE, 75),
    _carnivore("Jaguar", frozenset({Biome.TROPICAL_FOREST}), 20, 100, 5, ALONE, 85, 16),
    _carnivore("Ocelot", frozenset({Biome.TROPICAL_FOREST, Biome.TUNDRA}), 22, 10, 4, ALONE, 80, 12),
    # Desert
    _herbivore("Camel", frozenset({Biome.DESERT, Biome.SAVANNA}), 40, 600, 4, GROUP, 70),
    _herbivore("Jerboa", frozenset({Biome.DESERT}), 24, 2, 2, ALONE, 100),
    _carnivore("Fennec Fox", frozenset({Biome.DESERT, Biome.TUNDRA}), 24, 1, 3, ALONE, 90, 9),
    _carnivore("Caracal", frozenset({Biome.DESERT, Biome.SAVANNA}), 22, 15, 4, ALONE, 80, 12),
    # Everywhere
    _herbivore("Boar", _EVERYWHERE, 25, 100, 4, GROUP, 70),
    _carnivore("Wild Dog", _EVERYWHERE, 20, 20, 4, GROUP, 75, 13),
)


def default_registry(ids: IdAllocator | None = None) -> SpeciesRegistry:
    """Registry preloaded with every preset species."""
    registry = SpeciesRegistry(ids)
    for species in PRESETS:
        registry.define(species)
    return registry
