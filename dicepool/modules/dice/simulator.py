"""Stochastic dice pool simulator.

Each die is drawn from 1..10. A draw of 8 or more is a success; with the
"again" rule on, a successful draw at or above the again threshold adds a
bonus die, which can itself explode. Rote rerolls a failed original die once.
A pool of zero dice rolls a single chance die that only succeeds on a 10.
"""

from __future__ import annotations

import logging
import random
from typing import Protocol

from dicepool.infra.config import settings
from dicepool.modules.dice.pool import (
    CHANCE_SUCCESS,
    DICE_SIDES,
    MIN_SUCCESS,
    WILLPOWER_DICE,
    RollConfiguration,
)

logger = logging.getLogger("dicepool.simulator")


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


class ExplosionChainError(RuntimeError):
    """A single die kept exploding past the draw cap.

    Only reachable with an unclamped again threshold; it is an internal
    failure, never a roll result.
    """


def roll_die(rng: RandomSource | None = None) -> int:
    return (rng or random).randint(1, DICE_SIDES)


def roll_chance_die(rng: RandomSource | None = None) -> int:
    """Roll one chance die: 1 success on a 10, otherwise 0."""
    return 1 if roll_die(rng) == CHANCE_SUCCESS else 0


def roll_single_die(
    config: RollConfiguration,
    rng: RandomSource | None = None,
    max_draws: int | None = None,
) -> int:
    """Roll one die of the pool, including its rote reroll and explosion chain.

    Returns the number of successes the die produced.

    Raises:
        ExplosionChainError: If the chain needs more than ``max_draws`` draws.
    """
    if config.chance_die:
        return roll_chance_die(rng)

    limit = max_draws if max_draws is not None else settings.max_chain_draws
    draws = 1
    face = roll_die(rng)

    # Rote applies to the original die only, never to bonus dice
    if face < MIN_SUCCESS and config.rote:
        draws += 1
        face = roll_die(rng)

    successes = 0
    while face >= MIN_SUCCESS:
        successes += 1
        if not (config.exploding_active and face >= config.again_threshold):
            break
        if draws >= limit:
            logger.error(
                "Explosion chain exceeded %d draws (again_threshold=%d)",
                limit,
                config.again_threshold,
            )
            raise ExplosionChainError(
                f"Explosion chain exceeded {limit} draws "
                f"with again threshold {config.again_threshold}"
            )
        draws += 1
        face = roll_die(rng)
    return successes


def simulate_pool(
    pool_size: int,
    config: RollConfiguration,
    rng: RandomSource | None = None,
    max_draws: int | None = None,
) -> int:
    """Roll ``pool_size`` dice under ``config`` and count the successes.

    A pool size of zero rolls a single chance die.
    """
    if pool_size <= 0:
        return roll_chance_die(rng)
    return sum(
        roll_single_die(config, rng, max_draws) for _ in range(pool_size)
    )


def roll_pool(config: RollConfiguration, rng: RandomSource | None = None) -> int:
    """Primary roll: the configuration's own pool size."""
    successes = simulate_pool(config.pool_size, config, rng)
    logger.debug("Rolled %d dice: %d successes", config.pool_size, successes)
    return successes


def roll_willpower(config: RollConfiguration, rng: RandomSource | None = None) -> int:
    """Willpower bonus: always three dice, same rules as the primary roll."""
    successes = simulate_pool(WILLPOWER_DICE, config, rng)
    logger.debug("Willpower roll: %d successes", successes)
    return successes
