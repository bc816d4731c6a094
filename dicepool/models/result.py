"""API response schemas — roller state, analytic summaries and presets."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from dicepool.modules.dice.pool import AnalyticSummary, RollConfiguration, RollOutcome


class RollSettingsResult(BaseModel):
    pool_size: int
    again_threshold: int
    exploding_enabled: bool
    rote: bool
    chance_die: bool

    @classmethod
    def from_config(cls, config: RollConfiguration) -> RollSettingsResult:
        return cls(
            pool_size=config.pool_size,
            again_threshold=config.again_threshold,
            exploding_enabled=config.exploding_enabled,
            rote=config.rote,
            chance_die=config.chance_die,
        )


class RollOutcomeResult(BaseModel):
    successes: int
    willpower_successes: int | None = None

    @classmethod
    def from_outcome(cls, outcome: RollOutcome) -> RollOutcomeResult:
        return cls(
            successes=outcome.successes,
            willpower_successes=outcome.willpower_successes,
        )


class AnalyticSummaryResult(BaseModel):
    chance_percent: int
    expected_successes: float

    @classmethod
    def from_summary(cls, summary: AnalyticSummary) -> AnalyticSummaryResult:
        return cls(
            chance_percent=summary.chance_percent,
            expected_successes=summary.expected_successes,
        )


class RollerStateResult(BaseModel):
    settings: RollSettingsResult
    outcome: RollOutcomeResult
    summary: AnalyticSummaryResult
    active_preset_id: str | None = None


class PresetResult(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    pool_size: int
    again_threshold: int
    rote: bool
    exploding_enabled: bool
    position: int
