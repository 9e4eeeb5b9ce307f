"""Animal model - shared attributes plus carnivore and herbivore variants."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, ClassVar

from wildlife.config import STARVATION_THRESHOLD
from wildlife.types import LONERS, AnimalId, AnimalType, Biome, GroupKey, Habitat, LivingType


class IdAllocator:
    """Hands out monotonically increasing animal ids."""

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError(f"start must be >= 0, got {start}")
        self._next_id = start

    @property
    def next_id(self) -> AnimalId:
        return self._next_id

    def allocate(self) -> AnimalId:
        aid = self._next_id
        self._next_id += 1
        return aid


@dataclass(eq=False, kw_only=True)
class Animal:
    """Base record for every animal living in an ecosystem.

    Concrete variants set the class-level ``animal_type`` tag. Equality is
    identity: two animals with identical traits are still different animals.
    """

    animal_type: ClassVar[AnimalType]

    id: AnimalId
    kind: str
    max_age: int
    weight: float
    reproductive_rate: int
    biomes: frozenset[Biome] = frozenset()
    habitat: Habitat = Habitat.LAND
    living_type: LivingType = LivingType.ALONE
    current_age: int = 0
    alive: bool = True
    in_group: bool = False
    group_name: str = LONERS

    def __post_init__(self) -> None:
        if type(self) is Animal:
            raise TypeError("Animal is abstract; use Carnivore or Herbivore")
        if self.weight <= 0:
            raise ValueError(f"weight must be > 0, got {self.weight}")
        if self.max_age <= 0:
            raise ValueError(f"max_age must be > 0, got {self.max_age}")
        if self.reproductive_rate <= 0:
            raise ValueError(
                f"reproductive_rate must be > 0, got {self.reproductive_rate}"
            )
        if self.current_age < 0:
            raise ValueError(f"current_age must be >= 0, got {self.current_age}")
        self.biomes = frozenset(self.biomes)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id" and "id" in self.__dict__:
            raise AttributeError(f"Animal {self.id} id is immutable")
        super().__setattr__(name, value)

    @property
    def key(self) -> GroupKey:
        return GroupKey(self.animal_type, self.group_name)

    def grow_up(self) -> int:
        self.current_age += 1
        return self.current_age

    def die(self) -> None:
        self.alive = False

    def can_breed(self) -> bool:
        return self.current_age > 0 and self.current_age % self.reproductive_rate == 0

    def breed(self, ids: IdAllocator) -> Animal:
        return breed(self, ids.allocate())


@dataclass(eq=False, kw_only=True)
class Carnivore(Animal):
    animal_type: ClassVar[AnimalType] = AnimalType.CARNIVORE

    attack_points: int
    hunger_rate: int
    current_hunger: float = 0.0

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.hunger_rate < 0:
            raise ValueError(f"hunger_rate must be >= 0, got {self.hunger_rate}")
        if self.current_hunger < 0:
            raise ValueError(f"current_hunger must be >= 0, got {self.current_hunger}")

    def increase_hunger(self) -> float:
        self.current_hunger += self.hunger_rate
        return self.current_hunger

    def has_died_from_hunger(self, threshold: float = STARVATION_THRESHOLD) -> bool:
        """Flip ``alive`` off once hunger reaches *threshold*.

        Side-effecting predicate: a True result means the carnivore is now dead.
        """
        if self.current_hunger >= threshold:
            self.die()
            return True
        return False


@dataclass(eq=False, kw_only=True)
class Herbivore(Animal):
    animal_type: ClassVar[AnimalType] = AnimalType.HERBIVORE

    escape_points: int


def breed(parent: Animal, animal_id: AnimalId) -> Animal:
    """Return an age-0 clone of *parent* with a fresh id.

    The offspring is not inserted anywhere; that is the caller's job.
    """
    changes: dict[str, Any] = {"id": animal_id, "current_age": 0, "alive": True}
    if isinstance(parent, Carnivore):
        changes["current_hunger"] = 0.0
    return dataclasses.replace(parent, **changes)
