"""Attack odds - age-scaled points and the success chance of a hunt."""

from __future__ import annotations

import math

from wildlife.animals import Animal, Carnivore, Herbivore
from wildlife.config import HERD_BONUS


def scaled_points(animal: Animal) -> int:
    """Age-normalized strength in [0, 100]; newborns score 100."""
    # Clamp only bites past max_age, i.e. with old_age_deaths=False.
    return max(0, 100 - (animal.current_age * 100 // animal.max_age))


def attack_points(predator: Carnivore) -> int:
    points = scaled_points(predator)
    if not predator.in_group:
        # Solitary hunters keep the odd remainder: 67 -> 34.
        points -= points // 2
    return points


def escape_points(victim: Herbivore, herd_bonus: float = HERD_BONUS) -> int:
    points = scaled_points(victim)
    if victim.in_group:
        points += math.ceil(points * herd_bonus)
    return points


def attack_chance(
    predator: Carnivore, victim: Herbivore, herd_bonus: float = HERD_BONUS
) -> int:
    """Percent chance in [0, 100] that *predator* brings down *victim*.

    A predator that is not strictly heavier than its victim has the chance
    scaled down by the weight ratio ``predator.weight / victim.weight``.
    """
    attack = attack_points(predator)
    escape = escape_points(victim, herd_bonus)
    total = attack + escape
    if total == 0:
        return 0
    chance = 100 * attack // total
    if predator.weight <= victim.weight:
        chance = math.floor(chance * predator.weight / victim.weight)
    return chance


def is_successful(chance: int, outcome: int) -> bool:
    return outcome <= chance
