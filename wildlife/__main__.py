"""Headless wildlife run from the command line.

Run:
    python -m wildlife --biome savanna --seed 42 --turns 200 \
        --spawn zebra:herd=12 --spawn gazelle=8 --spawn hyena:clan=3 --spawn cheetah=1

Options:
    --biome          savanna | tundra | tropical_forest | desert (default: savanna)
    --seed           RNG seed (default: random)
    --turns          Maximum turns to play (default: 500)
    --spawn          KIND[:GROUP][=COUNT], repeatable
    --list-species   Print the species that can live in the biome and exit
    --verbose, -v    Log every hunt
"""
from __future__ import annotations

import argparse
import logging
import os
import random
import sys

from wildlife.ecosystem import Ecosystem
from wildlife.outcome import SeededOutcomeSource
from wildlife.simulation import Simulation
from wildlife.species import SpeciesRegistry, default_registry
from wildlife.types import AnimalType, Biome

logger = logging.getLogger("wildlife")


def parse_spawn(text: str) -> tuple[str, str | None, int]:
    """Split ``KIND[:GROUP][=COUNT]`` into its parts."""
    spec, _, count_text = text.partition("=")
    kind, _, group = spec.partition(":")
    if not kind.strip():
        raise argparse.ArgumentTypeError(f"missing species in {text!r}")
    try:
        count = int(count_text) if count_text else 1
    except ValueError:
        raise argparse.ArgumentTypeError(f"count must be an integer in {text!r}") from None
    if count < 1:
        raise argparse.ArgumentTypeError(f"count must be >= 1 in {text!r}")
    return kind.strip(), group.strip() or None, count


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wildlife", description="Predator/prey ecosystem simulation")
    parser.add_argument("--biome", choices=[b.value for b in Biome], default="savanna",
                        help="biome of the ecosystem (default: savanna)")
    parser.add_argument("--seed", "-s", type=int, default=None,
                        help="RNG seed (default: random)")
    parser.add_argument("--turns", "-n", type=int, default=500,
                        help="maximum turns to play (default: 500)")
    parser.add_argument("--spawn", type=parse_spawn, action="append", default=[],
                        metavar="KIND[:GROUP][=COUNT]",
                        help="add animals before the first turn (repeatable)")
    parser.add_argument("--list-species", action="store_true",
                        help="list species that can live in the biome and exit")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="log every hunt")
    return parser


def build_simulation(
    biome: Biome,
    spawns: list[tuple[str, str | None, int]],
    seed: int | None = None,
    registry: SpeciesRegistry | None = None,
) -> Simulation:
    """Populate a fresh ecosystem and wrap it in a default simulation.

    Attack outcomes and victim picks draw from one seeded stream.
    """
    if seed is None:
        seed = int.from_bytes(os.urandom(8))
    if registry is None:
        registry = default_registry()
    rng = random.Random(seed)
    ecosystem = Ecosystem(biome, SeededOutcomeSource(seed, rng=rng))
    for kind, group, count in spawns:
        registry.populate(ecosystem, kind, group, count)
    return Simulation(ecosystem, ids=registry.ids, seed=seed, rng=rng)


def _list_species(registry: SpeciesRegistry, biome: Biome) -> None:
    print(f"Species living in {biome.value}:")
    for species in sorted(registry.for_biome(biome), key=lambda s: s.kind):
        print(f"  {species.kind:<12} {species.animal_type.value:<10} "
              f"{species.living_type.value}")


def _summary(sim: Simulation, played: int) -> None:
    eco = sim.ecosystem
    print(f"Biome {eco.biome.value}, seed {sim.seed}: {played} turns played")
    for animal_type in AnimalType:
        names = eco.group_names(animal_type)
        print(f"  {animal_type.value:<10} {eco.population(animal_type):>5} alive "
              f"in {len(names)} group(s)")
    counts = sim.log.counts()
    print("  events: " + ", ".join(f"{k}={v}" for k, v in sorted(counts.items())))
    extinct = eco.extinct_animal_types()
    if extinct:
        print("  extinct: " + ", ".join(t.value for t in extinct))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    biome = Biome.parse(args.biome)
    registry = default_registry()
    if args.list_species:
        _list_species(registry, biome)
        return 0

    if args.turns < 0:
        parser.error("--turns must be >= 0")
    if not args.spawn:
        parser.error("nothing to simulate; add animals with --spawn")

    for kind, _, _ in args.spawn:
        if not registry.has(kind):
            logger.warning("Rejected --spawn %s: unknown species", kind)
            parser.error(f"unknown species {kind!r}; see --list-species")
        species = registry.get(kind)
        if biome not in species.biomes:
            logger.warning("Rejected --spawn %s: cannot live in %s", kind, biome.value)
            parser.error(f"{species.kind} cannot live in {biome.value}")

    sim = build_simulation(biome, args.spawn, args.seed, registry)
    played = sim.run_until_extinct(args.turns)
    _summary(sim, played)
    return 0


if __name__ == "__main__":
    sys.exit(main())
