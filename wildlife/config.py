"""Engine and simulation configuration dataclasses."""
from __future__ import annotations

from dataclasses import dataclass

STARVATION_THRESHOLD = 100.0
HERD_BONUS = 0.3


@dataclass(frozen=True)
class EcosystemConfig:
    """Immutable tuning for the ecosystem engine.

    Attributes:
        starvation_threshold: Hunger at or above which a carnivore starves.
        herd_bonus: Fraction of escape points added for herbivores in a group.
    """

    starvation_threshold: float = STARVATION_THRESHOLD
    herd_bonus: float = HERD_BONUS

    def __post_init__(self) -> None:
        if self.starvation_threshold <= 0:
            raise ValueError(
                f"starvation_threshold must be > 0, got {self.starvation_threshold}"
            )
        if self.herd_bonus < 0:
            raise ValueError(f"herd_bonus must be >= 0, got {self.herd_bonus}")


@dataclass(frozen=True)
class SimulationConfig:
    """Immutable tuning for the turn orchestrator.

    Attributes:
        old_age_deaths: Remove animals once their age reaches max_age.
        event_log_size: Maximum retained events (0 for unbounded).
    """

    old_age_deaths: bool = True
    event_log_size: int = 0

    def __post_init__(self) -> None:
        if self.event_log_size < 0:
            raise ValueError(f"event_log_size must be >= 0, got {self.event_log_size}")
