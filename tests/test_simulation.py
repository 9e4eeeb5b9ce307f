"""Tests for the turn loop and the default turn systems."""
from __future__ import annotations

import random

import pytest
from wildlife import (
    AnimalType,
    Biome,
    Carnivore,
    Ecosystem,
    FixedOutcomeSource,
    Herbivore,
    IdAllocator,
    LivingType,
    SeededOutcomeSource,
    Simulation,
    SimulationConfig,
    TurnContext,
    default_registry,
)
from wildlife.simulation import (
    make_aging_system,
    make_breeding_system,
    make_extinction_system,
    make_hunger_system,
    make_hunting_system,
)


def cheetah(aid: int = 1, **overrides) -> Carnivore:
    fields = dict(id=aid, kind="Cheetah", max_age=30, weight=60, reproductive_rate=5,
                  biomes={Biome.SAVANNA}, current_age=10, attack_points=110,
                  hunger_rate=15)
    fields.update(overrides)
    return Carnivore(**fields)


def zebra(aid: int = 2, **overrides) -> Herbivore:
    fields = dict(id=aid, kind="Zebra", max_age=50, weight=300, reproductive_rate=10,
                  biomes={Biome.SAVANNA}, living_type=LivingType.GROUP,
                  current_age=10, in_group=True, group_name="herd", escape_points=80)
    fields.update(overrides)
    return Herbivore(**fields)


def bare(eco: Ecosystem, *systems, seed: int = 42) -> Simulation:
    return Simulation(eco, seed=seed, systems=list(systems))


def savanna_eco(*animals, draws: tuple[int, ...] = (100,)) -> Ecosystem:
    eco = Ecosystem(Biome.SAVANNA, FixedOutcomeSource(*draws))
    for a in animals:
        eco.add_animal(a)
    return eco


class TestTurnLoop:
    def test_systems_run_in_order_each_turn(self) -> None:
        calls: list[tuple[str, int]] = []

        def first(eco: Ecosystem, ctx: TurnContext) -> None:
            calls.append(("first", ctx.turn_number))

        def second(eco: Ecosystem, ctx: TurnContext) -> None:
            calls.append(("second", ctx.turn_number))

        sim = bare(savanna_eco(), first, second)
        assert sim.run(2) == 2
        assert calls == [("first", 1), ("second", 1), ("first", 2), ("second", 2)]
        assert sim.turn_number == 2

    def test_step_plays_one_turn(self) -> None:
        sim = bare(savanna_eco())
        sim.step()
        sim.step()
        assert sim.turn_number == 2

    def test_add_system(self) -> None:
        seen: list[int] = []
        sim = bare(savanna_eco())
        sim.add_system(lambda eco, ctx: seen.append(ctx.turn_number))
        sim.run(3)
        assert seen == [1, 2, 3]

    def test_negative_turns_raise(self) -> None:
        with pytest.raises(ValueError, match="n must be >= 0"):
            bare(savanna_eco()).run(-1)

    def test_zero_turns_still_fires_hooks(self) -> None:
        fired: list[str] = []
        sim = bare(savanna_eco())
        sim.on_start(lambda eco, ctx: fired.append("start"))
        sim.on_stop(lambda eco, ctx: fired.append("stop"))
        assert sim.run(0) == 0
        assert fired == ["start", "stop"]

    def test_hooks_see_turn_numbers(self) -> None:
        seen: list[tuple[str, int]] = []
        sim = bare(savanna_eco())
        sim.on_start(lambda eco, ctx: seen.append(("start", ctx.turn_number)))
        sim.on_stop(lambda eco, ctx: seen.append(("stop", ctx.turn_number)))
        sim.run(4)
        assert seen == [("start", 0), ("stop", 4)]

    def test_request_stop_ends_run_and_skips_later_systems(self) -> None:
        later: list[int] = []

        def stopper(eco: Ecosystem, ctx: TurnContext) -> None:
            if ctx.turn_number == 3:
                ctx.request_stop()

        sim = bare(savanna_eco(), stopper, lambda eco, ctx: later.append(ctx.turn_number))
        assert sim.run(10) == 3
        assert sim.stopped
        assert later == [1, 2]

    def test_context_is_frozen(self) -> None:
        captured: list[TurnContext] = []
        sim = bare(savanna_eco(), lambda eco, ctx: captured.append(ctx))
        sim.run(1)
        with pytest.raises(AttributeError):
            captured[0].turn_number = 99  # type: ignore[misc]

    def test_default_ids_continue_after_existing_animals(self) -> None:
        sim = Simulation(savanna_eco(cheetah(4), zebra(9)), seed=1)
        assert sim.ids.next_id == 10

    def test_explicit_seed_is_kept(self) -> None:
        assert bare(savanna_eco(), seed=1234).seed == 1234

    def test_shared_rng_is_used_for_turns(self) -> None:
        rng = random.Random(5)
        picks: list[int] = []
        sim = Simulation(savanna_eco(), seed=5, rng=rng,
                         systems=[lambda eco, ctx: picks.append(ctx.random.randint(0, 100))])
        assert sim.random is rng
        sim.run(3)
        expected = random.Random(5)
        assert picks == [expected.randint(0, 100) for _ in range(3)]


class TestAgingSystem:
    def test_ages_every_live_animal(self) -> None:
        c, z = cheetah(), zebra()
        sim = bare(savanna_eco(c, z), make_aging_system())
        sim.run(2)
        assert c.current_age == 12
        assert z.current_age == 12

    def test_old_age_removes_animal(self) -> None:
        z = zebra(current_age=49)
        eco = savanna_eco(z)
        sim = bare(eco, make_aging_system())
        sim.run(1)
        assert not z.alive
        assert eco.group_names(AnimalType.HERBIVORE) == []
        event = sim.log.last("old_age")
        assert event is not None
        assert event.data == {"animal_id": 2, "kind": "Zebra"}

    def test_old_age_deaths_can_be_disabled(self) -> None:
        z = zebra(current_age=49)
        eco = savanna_eco(z)
        sim = bare(eco, make_aging_system(old_age_deaths=False))
        sim.run(3)
        assert z.alive
        assert z.current_age == 52


class TestBreedingSystem:
    def test_offspring_joins_parent_group(self) -> None:
        parent = zebra(current_age=10)
        eco = savanna_eco(parent)
        ids = IdAllocator(100)
        sim = bare(eco, make_breeding_system(ids))
        sim.run(1)
        herd = eco.group(AnimalType.HERBIVORE, "herd")
        assert len(herd) == 2
        child = herd[1]
        assert child.id == 100
        assert child.current_age == 0
        assert child.kind == "Zebra"
        assert sim.log.last("born").data == {"animal_id": 100, "parent_id": 2,
                                             "kind": "Zebra"}

    def test_no_offspring_off_cycle(self) -> None:
        eco = savanna_eco(zebra(current_age=7))
        sim = bare(eco, make_breeding_system(IdAllocator(100)))
        sim.run(1)
        assert eco.population() == 1

    def test_newborn_does_not_breed_same_turn(self) -> None:
        eco = savanna_eco(zebra(current_age=10))
        sim = bare(eco, make_breeding_system(IdAllocator(100)))
        sim.run(1)
        assert eco.population() == 2

    def test_carnivore_offspring_is_not_hungry(self) -> None:
        parent = cheetah(current_age=10, current_hunger=60.0)
        eco = savanna_eco(parent)
        sim = bare(eco, make_breeding_system(IdAllocator(50)))
        sim.run(1)
        child = eco.find_animal(50)
        assert child.current_hunger == 0.0
        assert parent.current_hunger == 60.0


class TestHungerSystem:
    def test_starved_carnivores_are_logged(self) -> None:
        c = cheetah(current_hunger=100.0)
        eco = savanna_eco(c)
        sim = bare(eco, make_hunger_system())
        sim.run(1)
        assert not c.alive
        assert sim.log.counts() == {"starved": 1}

    def test_hunger_grows_each_turn(self) -> None:
        c = cheetah()
        sim = bare(savanna_eco(c), make_hunger_system())
        sim.run(3)
        assert c.current_hunger == 45.0


class TestHuntingSystem:
    def test_successful_hunt_is_logged_as_kill(self) -> None:
        c, z = cheetah(current_hunger=50.0), zebra()
        eco = savanna_eco(c, z, draws=(0,))
        sim = bare(eco, make_hunting_system())
        sim.run(1)
        assert not z.alive
        assert c.current_hunger == 0.0
        assert sim.log.last("hunt").data == {"predator_id": 1, "victim_id": 2,
                                             "success": True}
        assert sim.log.last("kill").data["kind"] == "Zebra"

    def test_failed_hunt_is_logged_without_kill(self) -> None:
        z = zebra()
        eco = savanna_eco(cheetah(), z, draws=(100,))
        sim = bare(eco, make_hunting_system())
        sim.run(1)
        assert z.alive
        assert sim.log.counts() == {"hunt": 1}

    def test_each_carnivore_attacks_once_per_turn(self) -> None:
        eco = savanna_eco(cheetah(1), cheetah(3), zebra(2), draws=(100,))
        sim = bare(eco, make_hunting_system())
        sim.run(1)
        assert eco.outcomes.draws == 2

    def test_stops_when_prey_runs_out(self) -> None:
        eco = savanna_eco(cheetah(1), cheetah(3), zebra(2), draws=(0,))
        sim = bare(eco, make_hunting_system())
        sim.run(1)
        assert eco.outcomes.draws == 1
        assert eco.population(AnimalType.HERBIVORE) == 0

    def test_no_prey_no_draws(self) -> None:
        eco = savanna_eco(cheetah())
        bare(eco, make_hunting_system()).run(5)
        assert eco.outcomes.draws == 0


class TestExtinctionSystem:
    def test_requests_stop_when_a_type_dies_out(self) -> None:
        c = cheetah()
        eco = savanna_eco(c, zebra())

        def kill_cheetah(ecosystem: Ecosystem, ctx: TurnContext) -> None:
            if ctx.turn_number == 2:
                ecosystem.remove_animal(c.id)

        sim = bare(eco, kill_cheetah, make_extinction_system())
        assert sim.run(10) == 2
        assert sim.log.last("extinct").data == {"animal_type": "carnivore"}

    def test_never_started_type_is_not_extinct(self) -> None:
        sim = bare(savanna_eco(zebra()), make_extinction_system())
        assert sim.run(5) == 5
        assert sim.log.counts() == {}


class TestDefaultSystems:
    def test_lone_starving_cheetah_ends_the_run(self) -> None:
        eco = savanna_eco(cheetah(current_age=0, current_hunger=99.0))
        sim = Simulation(eco, seed=7)
        assert sim.run_until_extinct(100) == 2
        assert sim.stopped
        assert sim.log.counts() == {"starved": 1, "extinct": 1}

    def test_same_seed_replays_identically(self) -> None:
        def build(seed: int) -> Simulation:
            registry = default_registry()
            eco = Ecosystem(Biome.SAVANNA, SeededOutcomeSource(seed))
            registry.populate(eco, "zebra", "herd", 10)
            registry.populate(eco, "gazelle", "gazelles", 6)
            registry.populate(eco, "hyena", "clan", 3)
            registry.populate(eco, "cheetah")
            return Simulation(eco, ids=registry.ids, seed=seed)

        a, b = build(2024), build(2024)
        a.run(40)
        b.run(40)
        assert a.log.query() == b.log.query()
        assert a.ecosystem.population() == b.ecosystem.population()

    def test_event_log_size_is_honored(self) -> None:
        registry = default_registry()
        eco = Ecosystem(Biome.SAVANNA, SeededOutcomeSource(5))
        registry.populate(eco, "hare", count=8)
        sim = Simulation(eco, ids=registry.ids, seed=5,
                         config=SimulationConfig(event_log_size=5))
        sim.run(30)
        assert len(sim.log) <= 5
