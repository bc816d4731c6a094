"""Roller state — the user's settings, the current outcome, and the active preset."""

from __future__ import annotations

import logging
import random

from dicepool.infra.config import settings as app_settings
from dicepool.modules.dice.analyzer import summarize
from dicepool.modules.dice.pool import (
    AnalyticSummary,
    RollConfiguration,
    RollOutcome,
    clamp_again,
    clamp_pool_size,
)
from dicepool.modules.dice.simulator import RandomSource, roll_pool, roll_willpower

logger = logging.getLogger("dicepool.roller")


class DiceRoller:
    """Mutable roller settings feeding immutable snapshots to the engine.

    Inputs are clamped, never rejected. Dropping the pool to zero switches to
    the chance die and turns exploding off; raising it again restores the
    exploding preference the user had before.
    """

    def __init__(
        self,
        pool_size: int = 8,
        again_threshold: int = 10,
        exploding_enabled: bool = True,
        rote: bool = False,
        rng: RandomSource | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._pool_size = clamp_pool_size(pool_size)
        self._again_threshold = clamp_again(again_threshold)
        self._exploding_preference = exploding_enabled
        self._rote = rote
        self._outcome = RollOutcome()
        self._active_preset_id: str | None = None
        self._loaded_config: RollConfiguration | None = None

    # --- Settings ---

    @property
    def config(self) -> RollConfiguration:
        return RollConfiguration(
            pool_size=self._pool_size,
            again_threshold=self._again_threshold,
            exploding_enabled=self.exploding_enabled,
            rote=self._rote,
        )

    @property
    def exploding_enabled(self) -> bool:
        return self._exploding_preference and self._pool_size > 0

    def set_pool_size(self, value: int) -> None:
        self._pool_size = clamp_pool_size(value)
        self._sync_active_preset()

    def set_again_threshold(self, value: int) -> None:
        self._again_threshold = clamp_again(value)
        self._sync_active_preset()

    def set_exploding_enabled(self, value: bool) -> None:
        """Record the exploding preference; it stays off while on the chance die."""
        self._exploding_preference = value
        self._sync_active_preset()

    def set_rote(self, value: bool) -> None:
        self._rote = value
        self._sync_active_preset()

    def update(
        self,
        pool_size: int | None = None,
        again_threshold: int | None = None,
        exploding_enabled: bool | None = None,
        rote: bool | None = None,
    ) -> RollConfiguration:
        """Apply any provided settings, in the order the controls are laid out."""
        if pool_size is not None:
            self.set_pool_size(pool_size)
        if again_threshold is not None:
            self.set_again_threshold(again_threshold)
        if rote is not None:
            self.set_rote(rote)
        if exploding_enabled is not None:
            self.set_exploding_enabled(exploding_enabled)
        return self.config

    # --- Analysis ---

    @property
    def summary(self) -> AnalyticSummary:
        return summarize(self.config)

    # --- Rolling ---

    @property
    def outcome(self) -> RollOutcome:
        return self._outcome

    def roll(self) -> RollOutcome:
        """Roll the pool; replaces the outcome and drops any willpower bonus."""
        self._outcome = RollOutcome(successes=roll_pool(self.config, self._rng))
        return self._outcome

    def willpower(self) -> RollOutcome:
        """Roll the 3-die bonus and add it onto the current outcome."""
        bonus = roll_willpower(self.config, self._rng)
        self._outcome = RollOutcome(
            successes=self._outcome.successes + bonus,
            willpower_successes=bonus,
        )
        return self._outcome

    def clear(self) -> RollOutcome:
        self._outcome = RollOutcome()
        return self._outcome

    # --- Presets ---

    @property
    def active_preset_id(self) -> str | None:
        return self._active_preset_id

    def load_preset(
        self,
        preset_id: str,
        pool_size: int,
        again_threshold: int,
        rote: bool,
        exploding_enabled: bool,
    ) -> RollConfiguration:
        """Apply a stored configuration and mark the preset active."""
        self._active_preset_id = None
        self._loaded_config = None
        config = self.update(
            pool_size=pool_size,
            again_threshold=again_threshold,
            rote=rote,
            exploding_enabled=exploding_enabled,
        )
        self._active_preset_id = preset_id
        self._loaded_config = config
        logger.debug("Loaded preset %s: %s", preset_id, config)
        return config

    def forget_preset(self, preset_id: str) -> None:
        """Drop the active mark if it points at ``preset_id``."""
        if self._active_preset_id == preset_id:
            self._active_preset_id = None
            self._loaded_config = None

    def _sync_active_preset(self) -> None:
        # Once the settings diverge from the loaded preset it stays inactive
        if self._loaded_config is not None and self.config != self._loaded_config:
            self._active_preset_id = None
            self._loaded_config = None


def build_roller() -> DiceRoller:
    """Create a roller from the configured defaults."""
    rng = (
        random.Random(app_settings.random_seed)
        if app_settings.random_seed is not None
        else None
    )
    return DiceRoller(
        pool_size=app_settings.default_pool_size,
        again_threshold=app_settings.default_again_threshold,
        exploding_enabled=app_settings.default_exploding_enabled,
        rote=app_settings.default_rote,
        rng=rng,
    )


roller = build_roller()


def get_roller() -> DiceRoller:
    """FastAPI dependency returning the process-wide roller."""
    return roller
