"""Dice pool configuration — the rule snapshot shared by simulator and analyzer."""

from __future__ import annotations

from dataclasses import dataclass

DICE_SIDES = 10
MIN_SUCCESS = 8  # 8, 9, 10 succeed
CHANCE_SUCCESS = 10  # chance die: only a 10 succeeds
WILLPOWER_DICE = 3
MIN_AGAIN = 5
MAX_AGAIN = 10


def clamp_pool_size(value: int) -> int:
    return max(0, value)


def clamp_again(value: int) -> int:
    return min(MAX_AGAIN, max(MIN_AGAIN, value))


@dataclass(frozen=True)
class RollConfiguration:
    """Immutable rule set for one roll.

    The engine does not validate these values. Callers clamp ``pool_size``
    to ``>= 0`` and ``again_threshold`` to ``[5, 10]`` before invoking it;
    an ``again_threshold`` of 1 or less with exploding on never stops
    chaining and is rejected by the simulator's draw cap.
    """

    pool_size: int = 8
    again_threshold: int = 10
    exploding_enabled: bool = True
    rote: bool = False

    @property
    def chance_die(self) -> bool:
        return self.pool_size == 0

    @property
    def exploding_active(self) -> bool:
        """Whether the "again" rule is consulted for this configuration."""
        return self.exploding_enabled and not self.chance_die


@dataclass(frozen=True)
class RollOutcome:
    """Result of the primary roll plus an optional willpower bonus.

    ``willpower_successes`` is already included in ``successes``.
    """

    successes: int = 0
    willpower_successes: int | None = None


@dataclass(frozen=True)
class AnalyticSummary:
    chance_percent: int
    expected_successes: float
