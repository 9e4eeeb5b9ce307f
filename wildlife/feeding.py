"""Hunger relief after a successful hunt."""
from __future__ import annotations

import logging
import math
from typing import Iterable

from wildlife.animals import Animal, Carnivore, Herbivore

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> float:
    """Round to one decimal place, halves rounded up."""
    return math.floor(value * 10.0 + 0.5) / 10.0


def hunger_decrease(predator: Carnivore, victim: Herbivore) -> float:
    """Total hunger removed by eating *victim*, as percent of predator weight."""
    return victim.weight / predator.weight * 100


def relieve(carnivore: Carnivore, amount: float, rounded: bool = False) -> float:
    """Lower hunger by *amount*, clamping at zero. Returns the new hunger."""
    if amount > carnivore.current_hunger:
        carnivore.current_hunger = 0.0
    else:
        remaining = carnivore.current_hunger - amount
        carnivore.current_hunger = round_half_up(remaining) if rounded else remaining
    return carnivore.current_hunger


def feed_after_hunt(
    predator: Carnivore, victim: Herbivore, pack: Iterable[Animal] = ()
) -> None:
    """Distribute *victim* among *predator* and its pack.

    A solitary predator eats alone. A grouped predator splits the kill into
    ``len(pack) + 1`` shares: two for the attacker and one for every other
    living carnivore in *pack*.
    """
    if not predator.alive:
        return
    total = hunger_decrease(predator, victim)
    if not predator.in_group:
        relieve(predator, total)
        logger.debug("%s #%d ate alone, hunger now %.1f",
                     predator.kind, predator.id, predator.current_hunger)
        return

    members = list(pack)
    share = total / (len(members) + 1)
    relieve(predator, share * 2, rounded=True)
    for member in members:
        if member is predator or not isinstance(member, Carnivore) or not member.alive:
            continue
        relieve(member, share, rounded=True)
    logger.debug("%s #%d shared a %s with group %r (%d members, share %.1f)",
                 predator.kind, predator.id, victim.kind, predator.group_name,
                 len(members), share)
