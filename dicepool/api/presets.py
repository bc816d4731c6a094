"""Presets API — stored roller configurations."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from dicepool.api.roller import roller_state
from dicepool.domain import presets as presets_mod
from dicepool.domain.roller import DiceRoller, get_roller
from dicepool.infra.db import get_db
from dicepool.models.result import PresetResult, RollerStateResult

router = APIRouter(prefix="/api/presets", tags=["presets"])


# --- Request schemas ---

class CreatePresetRequest(BaseModel):
    """Fields left out are taken from the roller's current settings."""

    name: str = Field(min_length=1, max_length=128)
    pool_size: int | None = Field(default=None, ge=0)
    again_threshold: int | None = Field(default=None, ge=5, le=10)
    rote: bool | None = None
    exploding_enabled: bool | None = None


class UpdatePresetRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=128)
    pool_size: int | None = Field(default=None, ge=0)
    again_threshold: int | None = Field(default=None, ge=5, le=10)
    rote: bool | None = None
    exploding_enabled: bool | None = None


class ReorderPresetsRequest(BaseModel):
    ids: list[str]


# --- Endpoints ---

@router.get("")
async def list_presets(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[PresetResult]:
    return [PresetResult.model_validate(p) for p in await presets_mod.list_presets(db)]


@router.post("")
async def create_preset(
    req: CreatePresetRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    roller: Annotated[DiceRoller, Depends(get_roller)],
) -> PresetResult:
    current = roller.config
    try:
        preset = await presets_mod.create_preset(
            db,
            name=req.name,
            pool_size=req.pool_size if req.pool_size is not None else current.pool_size,
            again_threshold=(
                req.again_threshold
                if req.again_threshold is not None
                else current.again_threshold
            ),
            rote=req.rote if req.rote is not None else current.rote,
            exploding_enabled=(
                req.exploding_enabled
                if req.exploding_enabled is not None
                else current.exploding_enabled
            ),
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return PresetResult.model_validate(preset)


@router.put("/order")
async def reorder_presets(
    req: ReorderPresetsRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[PresetResult]:
    try:
        presets = await presets_mod.reorder_presets(db, req.ids)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return [PresetResult.model_validate(p) for p in presets]


@router.get("/{preset_id}")
async def get_preset(
    preset_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PresetResult:
    preset = await presets_mod.get_preset(db, preset_id)
    if preset is None:
        raise HTTPException(status_code=404, detail="Preset not found")
    return PresetResult.model_validate(preset)


@router.patch("/{preset_id}")
async def update_preset(
    preset_id: str,
    req: UpdatePresetRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PresetResult:
    if await presets_mod.get_preset(db, preset_id) is None:
        raise HTTPException(status_code=404, detail="Preset not found")
    try:
        preset = await presets_mod.update_preset(
            db, preset_id, **req.model_dump(exclude_none=True)
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return PresetResult.model_validate(preset)


@router.delete("/{preset_id}")
async def delete_preset(
    preset_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    roller: Annotated[DiceRoller, Depends(get_roller)],
) -> dict:
    try:
        await presets_mod.delete_preset(db, preset_id)
    except ValueError:
        raise HTTPException(status_code=404, detail="Preset not found")
    roller.forget_preset(preset_id)
    return {"deleted": preset_id}


@router.post("/{preset_id}/load")
async def load_preset(
    preset_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    roller: Annotated[DiceRoller, Depends(get_roller)],
) -> RollerStateResult:
    preset = await presets_mod.get_preset(db, preset_id)
    if preset is None:
        raise HTTPException(status_code=404, detail="Preset not found")
    roller.load_preset(
        preset.id,
        pool_size=preset.pool_size,
        again_threshold=preset.again_threshold,
        rote=preset.rote,
        exploding_enabled=preset.exploding_enabled,
    )
    return roller_state(roller)
