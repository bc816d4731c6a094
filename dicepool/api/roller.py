"""Roller API — settings, rolls, willpower bonus and live analysis."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from dicepool.domain.roller import DiceRoller, get_roller
from dicepool.models.result import (
    AnalyticSummaryResult,
    RollerStateResult,
    RollOutcomeResult,
    RollSettingsResult,
)
from dicepool.modules.dice.analyzer import analyze
from dicepool.modules.dice.pool import RollConfiguration, clamp_again, clamp_pool_size

router = APIRouter(prefix="/api/roller", tags=["roller"])


# --- Request schemas ---

class UpdateSettingsRequest(BaseModel):
    pool_size: int | None = None
    again_threshold: int | None = None
    exploding_enabled: bool | None = None
    rote: bool | None = None


class AnalyzeRequest(BaseModel):
    pool_size: int
    again_threshold: int = 10
    exploding_enabled: bool = True
    rote: bool = False


def roller_state(roller: DiceRoller) -> RollerStateResult:
    return RollerStateResult(
        settings=RollSettingsResult.from_config(roller.config),
        outcome=RollOutcomeResult.from_outcome(roller.outcome),
        summary=AnalyticSummaryResult.from_summary(roller.summary),
        active_preset_id=roller.active_preset_id,
    )


# --- Endpoints ---

@router.get("")
async def get_state(
    roller: Annotated[DiceRoller, Depends(get_roller)],
) -> RollerStateResult:
    return roller_state(roller)


@router.patch("/settings")
async def update_settings(
    req: UpdateSettingsRequest,
    roller: Annotated[DiceRoller, Depends(get_roller)],
) -> RollerStateResult:
    roller.update(
        pool_size=req.pool_size,
        again_threshold=req.again_threshold,
        exploding_enabled=req.exploding_enabled,
        rote=req.rote,
    )
    return roller_state(roller)


@router.post("/roll")
async def roll(
    roller: Annotated[DiceRoller, Depends(get_roller)],
) -> RollerStateResult:
    roller.roll()
    return roller_state(roller)


@router.post("/willpower")
async def willpower(
    roller: Annotated[DiceRoller, Depends(get_roller)],
) -> RollerStateResult:
    roller.willpower()
    return roller_state(roller)


@router.post("/clear")
async def clear(
    roller: Annotated[DiceRoller, Depends(get_roller)],
) -> RollerStateResult:
    roller.clear()
    return roller_state(roller)


@router.post("/analyze")
async def analyze_config(req: AnalyzeRequest) -> AnalyticSummaryResult:
    """Analyze an arbitrary configuration without touching the roller."""
    config = RollConfiguration(
        pool_size=clamp_pool_size(req.pool_size),
        again_threshold=clamp_again(req.again_threshold),
        exploding_enabled=req.exploding_enabled,
        rote=req.rote,
    )
    return AnalyticSummaryResult.from_summary(analyze(config.pool_size, config))
