"""Ecosystem - grouped population storage, hunting and starvation."""

from __future__ import annotations

import logging
from typing import Iterator, Mapping, MutableSequence

from wildlife.animals import Animal, Carnivore, Herbivore
from wildlife.config import EcosystemConfig
from wildlife.feeding import feed_after_hunt
from wildlife.odds import attack_chance, is_successful
from wildlife.outcome import OutcomeSource, SeededOutcomeSource
from wildlife.types import (
    AnimalId,
    AnimalNotFoundError,
    AnimalType,
    Biome,
    GroupKey,
    IllegalAttackTargetError,
)

logger = logging.getLogger(__name__)

# Nested population storage: animal type -> group name -> members.
GroupMap = dict[AnimalType, dict[str, list[Animal]]]


class Ecosystem:
    """Owns every animal of one biome, organized into named groups.

    An animal type's outer entry appears on the first insertion of that type
    and is kept from then on, so a type whose last group was emptied reads as
    extinct rather than never started. Inner group entries are removed as
    soon as their list becomes empty.
    """

    def __init__(
        self,
        biome: Biome,
        outcomes: OutcomeSource | None = None,
        config: EcosystemConfig | None = None,
    ) -> None:
        self._biome = biome
        self._outcomes: OutcomeSource = outcomes if outcomes is not None else SeededOutcomeSource()
        self._config = config if config is not None else EcosystemConfig()
        self._groups: GroupMap = {}

    @property
    def biome(self) -> Biome:
        return self._biome

    @property
    def config(self) -> EcosystemConfig:
        return self._config

    @property
    def outcomes(self) -> OutcomeSource:
        return self._outcomes

    # -- Group storage --

    def _members(self, key: GroupKey) -> list[Animal] | None:
        groups = self._groups.get(key.animal_type)
        if groups is None:
            return None
        return groups.get(key.group_name)

    def _prune(self, key: GroupKey) -> None:
        members = self._members(key)
        if members is not None and not members:
            del self._groups[key.animal_type][key.group_name]
            logger.debug("Group %r of %s is empty and was removed",
                         key.group_name, key.animal_type.value)

    def _locate(self, animal_id: AnimalId) -> tuple[GroupKey, Animal]:
        for animal_type, groups in self._groups.items():
            for name, members in groups.items():
                for animal in members:
                    if animal.id == animal_id:
                        return GroupKey(animal_type, name), animal
        raise AnimalNotFoundError(animal_id)

    def _evict(self, key: GroupKey, animal_id: AnimalId) -> None:
        members = self._members(key)
        if members is None:
            return
        for i, animal in enumerate(members):
            if animal.id == animal_id:
                del members[i]
                break
        self._prune(key)

    def add_animal(self, animal: Animal) -> None:
        groups = self._groups.setdefault(animal.animal_type, {})
        groups.setdefault(animal.group_name, []).append(animal)

    def accepts(self, animal: Animal) -> bool:
        """True when *animal* can live in this ecosystem's biome."""
        return self._biome in animal.biomes

    def find_animal(self, animal_id: AnimalId) -> Animal:
        return self._locate(animal_id)[1]

    def remove_animal(self, animal_id: AnimalId) -> Animal:
        """Mark an animal dead and drop it from its group."""
        key, animal = self._locate(animal_id)
        animal.die()
        self._evict(key, animal_id)
        return animal

    def __contains__(self, animal_id: object) -> bool:
        try:
            self._locate(animal_id)  # type: ignore[arg-type]
        except AnimalNotFoundError:
            return False
        return True

    # -- Hunting --

    def attack(self, predator_id: AnimalId, victim_id: AnimalId) -> bool:
        """Resolve one hunt. Returns True when the victim was killed.

        Raises AnimalNotFoundError for an unknown id and
        IllegalAttackTargetError unless a live carnivore attacks a live
        herbivore. A failed hunt changes nothing but consumes one draw.
        """
        predator_key, predator = self._locate(predator_id)
        victim_key, victim = self._locate(victim_id)
        if not isinstance(predator, Carnivore):
            raise IllegalAttackTargetError(
                predator_id, victim_id,
                f"{predator.kind} #{predator_id} is not a carnivore and cannot attack",
            )
        if not isinstance(victim, Herbivore):
            raise IllegalAttackTargetError(
                predator_id, victim_id,
                f"{victim.kind} #{victim_id} is not a herbivore and cannot be hunted",
            )
        if not predator.alive or not victim.alive:
            raise IllegalAttackTargetError(
                predator_id, victim_id,
                f"Cannot attack: #{predator_id} or #{victim_id} is dead",
            )

        chance = attack_chance(predator, victim, self._config.herd_bonus)
        outcome = self._outcomes.draw()
        success = is_successful(chance, outcome)
        logger.debug("%s #%d vs %s #%d: chance %d, draw %d, %s",
                     predator.kind, predator_id, victim.kind, victim_id,
                     chance, outcome, "kill" if success else "escaped")
        if not success:
            return False

        pack = self._members(predator_key) if predator.in_group else None
        feed_after_hunt(predator, victim, pack or ())
        victim.die()
        self._evict(victim_key, victim_id)
        return True

    # -- Hunger --

    def increase_hunger(
        self, groups: Mapping[str, MutableSequence[Animal]] | None = None
    ) -> list[Carnivore]:
        """Starve or hunger every carnivore in *groups*.

        *groups* defaults to this ecosystem's carnivore groups. A carnivore
        whose hunger already reached the threshold dies and is removed from
        its list in place; every other carnivore grows hungrier. Returns the
        carnivores that starved.
        """
        if groups is None:
            groups = self._groups.get(AnimalType.CARNIVORE, {})
        threshold = self._config.starvation_threshold
        starved: list[Carnivore] = []
        for members in list(groups.values()):
            for animal in list(members):
                if not isinstance(animal, Carnivore):
                    continue
                if animal.has_died_from_hunger(threshold):
                    starved.append(animal)
                    if animal in members:
                        members.remove(animal)
                    self._evict(animal.key, animal.id)
                    logger.info("%s #%d starved (hunger %.1f)",
                                animal.kind, animal.id, animal.current_hunger)
                else:
                    animal.increase_hunger()
        return starved

    # -- Extinction --

    def extinct_animal_types(self) -> list[AnimalType]:
        extinct: list[AnimalType] = []
        for animal_type, groups in self._groups.items():
            if not any(a.alive for members in groups.values() for a in members):
                extinct.append(animal_type)
        return extinct

    def has_extinct_animal_type(self) -> bool:
        return bool(self.extinct_animal_types())

    # -- Queries --

    def grouped_animals(self) -> GroupMap:
        """Snapshot of the population: fresh containers, shared animals."""
        return {
            animal_type: {name: list(members) for name, members in groups.items()}
            for animal_type, groups in self._groups.items()
        }

    def group(self, animal_type: AnimalType, group_name: str) -> list[Animal]:
        members = self._members(GroupKey(animal_type, group_name))
        return list(members) if members is not None else []

    def group_names(self, animal_type: AnimalType) -> list[str]:
        return list(self._groups.get(animal_type, {}))

    def animals(self, animal_type: AnimalType | None = None) -> Iterator[Animal]:
        for atype, groups in list(self._groups.items()):
            if animal_type is not None and atype is not animal_type:
                continue
            for members in list(groups.values()):
                for animal in list(members):
                    if animal.alive:
                        yield animal

    def population(self, animal_type: AnimalType | None = None) -> int:
        return sum(1 for _ in self.animals(animal_type))
