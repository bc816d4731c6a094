"""Closed-form pool statistics — chance of at least one success and expected successes.

Two models are used on purpose and kept apart:

* the expectation follows a per-die recurrence over the again and rote rules;
* the chance of success treats each die as an independent 30% attempt, and
  rote as a second attempt per die. The exploding probability is not part of
  the chance formula.
"""

from __future__ import annotations

import math

from dicepool.modules.dice.pool import (
    DICE_SIDES,
    MIN_SUCCESS,
    AnalyticSummary,
    RollConfiguration,
)

BASE_SUCCESS = (DICE_SIDES - MIN_SUCCESS + 1) / DICE_SIDES  # 0.3
BASE_FAILURE = 1 - BASE_SUCCESS  # 0.7
REROLL_FACES = MIN_SUCCESS - 1  # faces 1..7 fail and get the rote reroll

CHANCE_DIE_SUMMARY = AnalyticSummary(chance_percent=10, expected_successes=0.1)


def _round_half_up(value: float, digits: int = 0) -> float:
    scale = 10**digits
    return math.floor(value * scale + 0.5) / scale


def _finite_or_zero(value: float) -> float:
    return value if math.isfinite(value) else 0.0


def _expected_without_rote(config: RollConfiguration) -> float:
    if config.chance_die:
        return 1 / DICE_SIDES
    if config.again_threshold >= DICE_SIDES + 1 or not config.exploding_enabled:
        return 3 / DICE_SIDES
    if config.again_threshold == 1:
        return math.inf
    # Geometric series of chained bonus dice
    return 3 / (config.again_threshold - 1)


def expected_single(config: RollConfiguration) -> float:
    """Expected successes contributed by one die of the pool.

    With rote, the ten faces split into three bands: the reroll band (the
    seven failing faces, worth one more plain die), the again band (faces at
    or above the threshold, worth their success plus a bonus die) and the
    remaining "only" band (a plain success). The again band is sized from
    the threshold whether or not exploding is on.
    """
    single = _expected_without_rote(config)
    if config.chance_die or not config.rote:
        return single

    again_faces = DICE_SIDES - config.again_threshold + 1
    only_faces = DICE_SIDES - REROLL_FACES - again_faces
    return (
        single * REROLL_FACES + (1 + single) * again_faces + 1 * only_faces
    ) / DICE_SIDES


def chance_of_success(pool_size: int, rote: bool) -> float:
    """Probability of at least one success, rote counted as a second attempt."""
    attempts = 2 * pool_size if rote else pool_size
    return 1 - BASE_FAILURE**attempts


def analyze(pool_size: int, config: RollConfiguration) -> AnalyticSummary:
    """Summarize a pool of ``pool_size`` dice rolled under ``config``.

    A pool of zero is the chance die, reported as fixed constants.
    Non-finite intermediate values are reported as 0.
    """
    if pool_size == 0 or config.chance_die:
        return CHANCE_DIE_SUMMARY

    expected = _finite_or_zero(expected_single(config) * pool_size)
    chance = _finite_or_zero(chance_of_success(pool_size, config.rote))
    return AnalyticSummary(
        chance_percent=int(_round_half_up(chance * 100)),
        expected_successes=_round_half_up(expected, 1),
    )


def summarize(config: RollConfiguration) -> AnalyticSummary:
    return analyze(config.pool_size, config)
