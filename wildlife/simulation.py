"""Simulation - turn loop, lifecycle hooks and the default turn systems."""

from __future__ import annotations

import logging
import os
import random
from dataclasses import dataclass
from typing import Callable, Iterable

from wildlife.animals import IdAllocator
from wildlife.config import SimulationConfig
from wildlife.ecosystem import Ecosystem
from wildlife.events import EventLog
from wildlife.types import AnimalType

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TurnContext:
    turn_number: int
    random: random.Random
    request_stop: Callable[[], None]
    log: EventLog


System = Callable[[Ecosystem, TurnContext], None]
Hook = Callable[[Ecosystem, TurnContext], None]


def make_aging_system(old_age_deaths: bool = True) -> System:
    """Return a system that ages every live animal by one turn.

    With *old_age_deaths*, animals whose age reaches ``max_age`` die and
    leave their group the same turn.
    """

    def aging_system(ecosystem: Ecosystem, ctx: TurnContext) -> None:
        for animal in list(ecosystem.animals()):
            age = animal.grow_up()
            if old_age_deaths and age >= animal.max_age:
                ecosystem.remove_animal(animal.id)
                ctx.log.emit(ctx.turn_number, "old_age", animal_id=animal.id,
                             kind=animal.kind)
                logger.info("%s #%d died of old age at %d", animal.kind, animal.id, age)

    return aging_system


def make_breeding_system(ids: IdAllocator) -> System:
    """Return a system where every animal whose age is a multiple of its
    reproductive rate adds one offspring to its own group."""

    def breeding_system(ecosystem: Ecosystem, ctx: TurnContext) -> None:
        for parent in list(ecosystem.animals()):
            if not parent.can_breed():
                continue
            child = parent.breed(ids)
            ecosystem.add_animal(child)
            ctx.log.emit(ctx.turn_number, "born", animal_id=child.id,
                         parent_id=parent.id, kind=child.kind)
            logger.info("New %s %s #%d was born in %r", child.animal_type.value,
                        child.kind, child.id, child.group_name)

    return breeding_system


def make_hunger_system() -> System:
    def hunger_system(ecosystem: Ecosystem, ctx: TurnContext) -> None:
        for carnivore in ecosystem.increase_hunger():
            ctx.log.emit(ctx.turn_number, "starved", animal_id=carnivore.id,
                         kind=carnivore.kind)
    return hunger_system


def make_hunting_system() -> System:
    """Return a system giving each live carnivore one attack on a random herbivore."""

    def hunting_system(ecosystem: Ecosystem, ctx: TurnContext) -> None:
        for predator in list(ecosystem.animals(AnimalType.CARNIVORE)):
            prey = list(ecosystem.animals(AnimalType.HERBIVORE))
            if not prey:
                break
            victim = ctx.random.choice(prey)
            killed = ecosystem.attack(predator.id, victim.id)
            ctx.log.emit(ctx.turn_number, "hunt", predator_id=predator.id,
                         victim_id=victim.id, success=killed)
            if killed:
                ctx.log.emit(ctx.turn_number, "kill", predator_id=predator.id,
                             victim_id=victim.id, kind=victim.kind)
                logger.info("%s #%d killed %s #%d", predator.kind, predator.id,
                            victim.kind, victim.id)

    return hunting_system


def make_extinction_system() -> System:
    def extinction_system(ecosystem: Ecosystem, ctx: TurnContext) -> None:
        extinct = ecosystem.extinct_animal_types()
        if not extinct:
            return
        for animal_type in extinct:
            ctx.log.emit(ctx.turn_number, "extinct", animal_type=animal_type.value)
            logger.info("All %ss of %s are gone after turn %d", animal_type.value,
                        ecosystem.biome.value, ctx.turn_number)
        ctx.request_stop()
    return extinction_system


def default_systems(ids: IdAllocator, config: SimulationConfig) -> list[System]:
    """Aging, breeding, hunger, hunting, then the extinction check."""
    return [
        make_aging_system(config.old_age_deaths),
        make_breeding_system(ids),
        make_hunger_system(),
        make_hunting_system(),
        make_extinction_system(),
    ]


class Simulation:
    """Drives an ecosystem turn by turn through an ordered list of systems.

    ``systems=None`` installs :func:`default_systems`; pass an empty list to
    start bare and register systems with :meth:`add_system`. Passing *rng*
    shares an existing stream (for example the ecosystem's outcome source);
    *seed* is then only recorded.
    """

    def __init__(
        self,
        ecosystem: Ecosystem,
        ids: IdAllocator | None = None,
        seed: int | None = None,
        config: SimulationConfig | None = None,
        systems: Iterable[System] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._ecosystem = ecosystem
        self._config = config if config is not None else SimulationConfig()
        if ids is None:
            highest = max((a.id for a in ecosystem.animals()), default=-1)
            ids = IdAllocator(highest + 1)
        self._ids = ids
        self._log = EventLog(self._config.event_log_size)
        self._turn = 0
        self._start_hooks: list[Hook] = []
        self._stop_hooks: list[Hook] = []
        self._stop_requested = False

        if rng is None:
            if seed is None:
                seed = int.from_bytes(os.urandom(8))
            rng = random.Random(seed)
        self._seed = seed
        self._rng = rng

        if systems is None:
            systems = default_systems(ids, self._config)
        self._systems: list[System] = list(systems)

    @property
    def ecosystem(self) -> Ecosystem:
        return self._ecosystem

    @property
    def ids(self) -> IdAllocator:
        return self._ids

    @property
    def log(self) -> EventLog:
        return self._log

    @property
    def seed(self) -> int | None:
        return self._seed

    @property
    def random(self) -> random.Random:
        return self._rng

    @property
    def turn_number(self) -> int:
        return self._turn

    @property
    def stopped(self) -> bool:
        return self._stop_requested

    def add_system(self, system: System) -> None:
        self._systems.append(system)

    def on_start(self, hook: Hook) -> None:
        self._start_hooks.append(hook)

    def on_stop(self, hook: Hook) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def _context(self) -> TurnContext:
        return TurnContext(
            turn_number=self._turn,
            random=self._rng,
            request_stop=self._request_stop,
            log=self._log,
        )

    def _turn_once(self) -> None:
        self._turn += 1
        ctx = self._context()
        for system in self._systems:
            system(self._ecosystem, ctx)
            if self._stop_requested:
                break

    def step(self) -> None:
        self._stop_requested = False
        self._turn_once()

    def run(self, n: int) -> int:
        """Play up to *n* turns; returns how many were played."""
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        self._stop_requested = False
        for hook in self._start_hooks:
            hook(self._ecosystem, self._context())

        played = 0
        for _ in range(n):
            self._turn_once()
            played += 1
            if self._stop_requested:
                break

        for hook in self._stop_hooks:
            hook(self._ecosystem, self._context())
        return played

    def run_until_extinct(self, max_turns: int = 10_000) -> int:
        """Play until a system requests a stop or *max_turns* is reached."""
        return self.run(max_turns)
